"""Heuristic, non-AI CV parsing used when every provider has failed.

The output is schema-complete but low-confidence: it only knows what line
scanning and a few regexes can find.
"""

import logging
import re

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
from services.section_parser import (
    DATE_RANGE_RE,
    EMAIL_RE,
    PHONE_RE,
    YEAR_RE,
    extract_contact_info,
    parse_sections,
)

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "Professional with experience in various fields."
DEFAULT_SKILLS = ["Communication", "Problem Solving", "Teamwork"]
DEFAULT_INTERESTS = ["Professional Development", "Technology", "Innovation"]

BULLET_MARKERS = "•-–—►▪✓*○◆⚫→▸▹◇■□●"
# Hyphens are left out so "Problem-Solving" stays one skill
LIST_MARKERS = "•►▪✓*○◆⚫→▸▹◇■□●"
_BULLET_RE = re.compile(rf"^\s*(?:[{re.escape(BULLET_MARKERS)}]|\d{{1,2}}[.)])\s*")
_LIST_SPLIT_RE = re.compile(rf"[,;|\n{re.escape(LIST_MARKERS)}]")
# "Engineer | Acme", "Engineer, Acme", "Engineer at Acme", "Engineer - Acme"
_ROLE_SPLIT_RE = re.compile(r"\s*(?:\||,|\bat\b|\s[-–—]\s)\s*", re.IGNORECASE)

MAX_TITLE_LENGTH = 60
_INSTITUTION_RE = re.compile(r"\b(?:university|college|school|institute|academy|polytechnic)\b", re.IGNORECASE)


def _is_bullet(line: str) -> bool:
    return bool(_BULLET_RE.match(line))


def _strip_bullet(line: str) -> str:
    return _BULLET_RE.sub("", line, count=1).strip()


def _is_contact_line(line: str) -> bool:
    return bool(EMAIL_RE.search(line) or PHONE_RE.search(line))


def _split_pair(line: str) -> tuple[str, str]:
    parts = [p for p in _ROLE_SPLIT_RE.split(line, maxsplit=1) if p.strip()]
    if len(parts) == 2:
        return parts[0].strip(), parts[1].strip()
    return line.strip(), ""


def _split_list(text: str) -> list[str]:
    items = (item.strip() for item in _LIST_SPLIT_RE.split(text))
    return [item for item in items if item]


def _header_fields(header_text: str) -> tuple[str, str]:
    """Name is the first non-contact line; the next short one is the job title."""
    candidates = [
        line.strip() for line in header_text.split("\n")
        if line.strip() and not _is_contact_line(line)
    ]
    name = candidates[0] if candidates else DEFAULT_NAME
    job_title = DEFAULT_JOB_TITLE
    if len(candidates) > 1 and len(candidates[1]) <= MAX_TITLE_LENGTH:
        job_title = candidates[1]
    return name, job_title


def _parse_experience(section: str) -> list[Experience]:
    entries: list[Experience] = []
    current: Experience | None = None

    for raw_line in section.split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        if _is_bullet(line):
            if current is None:
                current = Experience()
                entries.append(current)
            text = _strip_bullet(line)
            if text:
                current.responsibilities.append(text)
            continue

        date_match = DATE_RANGE_RE.search(line)
        remainder = DATE_RANGE_RE.sub("", line).strip(" |,–—-")
        if date_match and not remainder:
            if current is not None and not current.duration:
                current.duration = date_match.group().strip()
            else:
                # Dates ahead of any role line open an entry of their own
                current = Experience(duration=date_match.group().strip())
                entries.append(current)
            continue

        position, company = _split_pair(remainder or line)
        current = Experience(
            position=position,
            company=company,
            duration=date_match.group().strip() if date_match else "",
        )
        entries.append(current)

    return entries


def _parse_education(section: str) -> list[Education]:
    entries: list[Education] = []
    for raw_line in section.split("\n"):
        line = _strip_bullet(raw_line) if _is_bullet(raw_line) else raw_line.strip()
        if not line:
            continue
        year_match = YEAR_RE.search(line)
        remainder = YEAR_RE.sub("", line).strip(" |,–—-")
        degree, institution = _split_pair(remainder)
        if not institution and _INSTITUTION_RE.search(degree):
            degree, institution = "", degree
        entries.append(Education(
            institution=institution,
            degree=degree,
            year=year_match.group() if year_match else "",
        ))
    return entries


def _minimal_record() -> CVRecord:
    return CVRecord(
        profile=DEFAULT_PROFILE,
        key_skills=list(DEFAULT_SKILLS),
        interests=list(DEFAULT_INTERESTS),
    )


def basic_parse(text: str) -> CVRecord:
    """Best-effort CVRecord from raw text. Never raises."""
    try:
        return _basic_parse(text or "")
    except Exception:
        logger.exception("Basic parsing failed, returning minimal record")
        return _minimal_record()


def _basic_parse(text: str) -> CVRecord:
    sections = parse_sections(text)
    contact = extract_contact_info(text)
    name, job_title = _header_fields(sections.get("header", ""))

    skills = _split_list(sections.get("skills", ""))
    languages = _split_list(sections.get("languages", ""))
    interests = _split_list(sections.get("interests", ""))
    profile = " ".join(
        line.strip() for line in sections.get("profile", "").split("\n") if line.strip()
    )

    return CVRecord(
        header=CVHeader(name=name, job_title=job_title),
        personal_details=PersonalDetails(
            languages=languages or list(DEFAULT_LANGUAGES),
            contact_info=ContactInfo(
                email=contact["email"] or "",
                phone=contact["phone"] or "",
            ),
        ),
        profile=profile or DEFAULT_PROFILE,
        experience=_parse_experience(sections.get("experience", "")),
        education=_parse_education(sections.get("education", "")),
        key_skills=skills or list(DEFAULT_SKILLS),
        interests=interests or list(DEFAULT_INTERESTS),
    )
