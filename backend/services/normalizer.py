"""Coerce loosely shaped AI output into a complete CVRecord.

``normalize_cv`` never raises: every field is checked on its own and replaced
by its default when missing or of the wrong type, so one bad field never
costs the rest of the record.
"""

from collections.abc import Mapping
from typing import Any

from models.cv import (
    DEFAULT_JOB_TITLE,
    DEFAULT_LANGUAGES,
    DEFAULT_NAME,
    ContactInfo,
    CVHeader,
    CVRecord,
    Education,
    Experience,
    PersonalDetails,
)


def _obj(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _text(value: Any, default: str = "") -> str:
    """Stripped string, numbers stringified; anything else falls back to default."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return default
    return value.strip() or default


def _text_list(value: Any, default: list[str] | None = None) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return list(default or [])
    items = [_text(item) for item in value]
    return [item for item in items if item]


def normalize_experience(raw: Any) -> Experience:
    data = _obj(raw)
    return Experience(
        company=_text(data.get("company")),
        position=_text(data.get("position")),
        duration=_text(data.get("duration")),
        responsibilities=_text_list(data.get("responsibilities")),
    )


def normalize_education(raw: Any) -> Education:
    data = _obj(raw)
    return Education(
        institution=_text(data.get("institution")),
        degree=_text(data.get("degree")),
        field=_text(data.get("field")),
        year=_text(data.get("year")),
    )


def normalize_cv(raw: Any) -> CVRecord:
    """Build a schema-complete CVRecord from any parsed JSON value."""
    data = _obj(raw)
    header = _obj(data.get("header"))
    personal = _obj(data.get("personalDetails"))
    contact = _obj(personal.get("contactInfo"))

    experience = data.get("experience")
    education = data.get("education")

    return CVRecord(
        header=CVHeader(
            name=_text(header.get("name"), DEFAULT_NAME),
            job_title=_text(header.get("jobTitle"), DEFAULT_JOB_TITLE),
            photo_url=_text(header.get("photoUrl")),
        ),
        personal_details=PersonalDetails(
            nationality=_text(personal.get("nationality")),
            languages=_text_list(personal.get("languages"), DEFAULT_LANGUAGES) or list(DEFAULT_LANGUAGES),
            date_of_birth=_text(personal.get("dateOfBirth")),
            marital_status=_text(personal.get("maritalStatus")),
            contact_info=ContactInfo(
                email=_text(contact.get("email")),
                phone=_text(contact.get("phone")),
                address=_text(contact.get("address")),
            ),
        ),
        profile=_text(data.get("profile")),
        experience=[normalize_experience(e) for e in experience] if isinstance(experience, list) else [],
        education=[normalize_education(e) for e in education] if isinstance(education, list) else [],
        key_skills=_text_list(data.get("keySkills")),
        interests=_text_list(data.get("interests")),
    )
