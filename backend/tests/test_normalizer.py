import pytest

from models.cv import CVRecord, Education, Experience
from services.normalizer import normalize_cv, normalize_education, normalize_experience


def _assert_complete(cv: CVRecord):
    """Every field is present with the right type; no list is ever None."""
    assert isinstance(cv.header.name, str) and cv.header.name
    assert isinstance(cv.header.job_title, str) and cv.header.job_title
    assert isinstance(cv.header.photo_url, str)
    pd = cv.personal_details
    for value in (pd.nationality, pd.date_of_birth, pd.marital_status,
                  pd.contact_info.email, pd.contact_info.phone, pd.contact_info.address,
                  cv.profile):
        assert isinstance(value, str)
    assert isinstance(pd.languages, list) and pd.languages
    for items in (cv.key_skills, cv.interests):
        assert isinstance(items, list)
        assert all(isinstance(i, str) for i in items)
    assert isinstance(cv.experience, list)
    assert isinstance(cv.education, list)
    for exp in cv.experience:
        assert isinstance(exp.responsibilities, list)
        assert all(isinstance(r, str) for r in exp.responsibilities)


@pytest.mark.parametrize("raw", [
    None,
    {},
    [],
    "not an object",
    42,
    {"header": None, "personalDetails": "oops", "experience": None, "education": {}},
    {"header": {"name": 123, "jobTitle": ["x"]}, "keySkills": "Python", "interests": 7},
    {"personalDetails": {"languages": None, "contactInfo": []}},
    {"experience": [None, "bad", 5, {"responsibilities": None}], "education": [[], {"year": 2019}]},
])
def test_totality(raw):
    _assert_complete(normalize_cv(raw))


def test_full_payload_passes_through(ai_payload):
    cv = normalize_cv(ai_payload)
    assert cv.header.name == "Jane Doe"
    assert cv.header.job_title == "senior project manager"
    assert cv.personal_details.languages == ["English", "French"]
    assert cv.personal_details.contact_info.email == "jane.doe@example.com"
    assert cv.experience[0].company == "Acme Construction"
    assert len(cv.experience[0].responsibilities) == 2
    assert cv.education[0].institution == "University of Leeds"
    assert cv.key_skills == ["Budgeting", "Stakeholder Management"]


def test_scalar_defaults():
    cv = normalize_cv({"header": {"name": "   ", "jobTitle": None}})
    assert cv.header.name == "Unknown Name"
    assert cv.header.job_title == "Professional"
    assert cv.header.photo_url == ""
    assert cv.profile == ""


def test_languages_default_to_english():
    assert normalize_cv({}).personal_details.languages == ["English"]
    assert normalize_cv({"personalDetails": {"languages": "bad"}}).personal_details.languages == ["bad"]
    assert normalize_cv({"personalDetails": {"languages": [None, ""]}}).personal_details.languages == ["English"]


def test_non_list_lists_become_empty():
    cv = normalize_cv({"keySkills": {"a": 1}, "interests": None, "experience": "x", "education": 3})
    assert cv.key_skills == []
    assert cv.interests == []
    assert cv.experience == []
    assert cv.education == []


def test_string_list_items_cleaned():
    cv = normalize_cv({"keySkills": ["  Go ", "", None, 3, {"x": 1}, True]})
    assert cv.key_skills == ["Go", "3"]


def test_malformed_entries_kept_with_defaults():
    cv = normalize_cv({"experience": [None, {"company": "Acme"}], "education": ["junk"]})
    assert cv.experience == [Experience(), Experience(company="Acme")]
    assert cv.education == [Education()]


def test_numbers_stringified():
    edu = normalize_education({"institution": "MIT", "year": 2019})
    assert edu.year == "2019"


def test_booleans_not_stringified():
    exp = normalize_experience({"company": True, "position": False})
    assert exp.company == ""
    assert exp.position == ""


def test_bare_string_responsibilities():
    exp = normalize_experience({"responsibilities": "Managed budgets"})
    assert exp.responsibilities == ["Managed budgets"]


def test_no_style_rules_applied():
    cv = normalize_cv({"profile": "I am responsible for things"})
    assert cv.profile == "I am responsible for things"
