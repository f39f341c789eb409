"""CV section segmentation and contact extraction."""

import re

# Section header patterns and their canonical names
SECTION_PATTERNS: dict[str, list[str]] = {
    "experience": [
        r"(?:work|professional|employment)\s*(?:experience|history)",
        r"experience",
        r"career\s*(?:history|path)",
        r"employment",
    ],
    "education": [
        r"education(?:al)?\s*(?:background|qualifications|history)?",
        r"academic\s*(?:background|qualifications)",
        r"qualifications",
    ],
    "skills": [
        r"(?:technical|core|key|professional)?\s*skills",
        r"(?:technical|core|key)?\s*(?:competencies|proficiencies|expertise)",
        r"technologies",
    ],
    "profile": [
        r"(?:professional|executive|career)?\s*(?:summary|profile)",
        r"(?:career|professional)?\s*objective",
        r"about\s*me",
    ],
    "languages": [
        r"languages?(?:\s*spoken)?",
    ],
    "interests": [
        r"(?:interests|hobbies)(?:\s*(?:&|and)\s*(?:interests|hobbies))?",
    ],
}

_HEADINGS: list[tuple[str, re.Pattern]] = [
    (name, re.compile(rf"^(?:{'|'.join(patterns)})\s*:?$", re.IGNORECASE))
    for name, patterns in SECTION_PATTERNS.items()
]

# Contact info patterns
EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_RE = re.compile(r"(?:\+\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")

# Date ranges: "Jan 2019 - Present", "2020 - 2023", "March 2018 – Nov 2022"
_MONTHS = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|"
    r"Jul(?:y)?|Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
DATE_RANGE_RE = re.compile(
    rf"(?:{_MONTHS}\.?\s*)?\d{{4}}"
    r"\s*(?:-|–|—|to)\s*"
    rf"(?:(?:{_MONTHS}\.?\s*)?\d{{4}}|[Pp]resent|[Cc]urrent)",
    re.IGNORECASE,
)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")


def section_heading(line: str) -> str | None:
    """Canonical section name if ``line`` is a heading on its own, else None."""
    candidate = line.strip()
    if not candidate:
        return None
    for name, pattern in _HEADINGS:
        if pattern.match(candidate):
            return name
    return None


def parse_sections(text: str) -> dict[str, str]:
    """Split CV text into named sections.

    Lines before the first heading land in ``header``. A heading that appears
    twice collects both blocks under the same name.
    """
    blocks: dict[str, list[str]] = {}
    current = "header"
    for line in text.split("\n"):
        name = section_heading(line)
        if name is None:
            blocks.setdefault(current, []).append(line)
        else:
            current = name
            blocks.setdefault(current, [])

    return {
        name: "\n".join(lines).strip()
        for name, lines in blocks.items()
        if lines
    }


def extract_contact_info(text: str) -> dict[str, str | None]:
    """Extract the first email address and phone number from CV text."""
    email_match = EMAIL_RE.search(text)
    phone_match = PHONE_RE.search(text)
    return {
        "email": email_match.group() if email_match else None,
        "phone": phone_match.group().strip() if phone_match else None,
    }
