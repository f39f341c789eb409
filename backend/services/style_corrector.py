"""Deterministic EHS house-style corrections for free-text CV fields."""

import re

from models.cv import CVRecord

# 1. Known misspellings (case-sensitive: "in principle" stays untouched)
LEXICAL_CORRECTIONS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\bPrinciple\b"), "Principal"),
    (re.compile(r"\bDiscrete\b"), "Discreet"),
]

# 2. First-person qualifiers -> impersonal form
PHRASE_REWRITES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\bI am responsible for\b", re.IGNORECASE), "Responsible for"),
    (re.compile(r"\bI am in charge of\b", re.IGNORECASE), "In charge of"),
    (re.compile(r"\bI have experience in\b", re.IGNORECASE), "Experienced in"),
]

# 3. Role nouns always start with a capital
ROLE_NOUNS = (
    "manager", "director", "engineer", "analyst", "consultant",
    "specialist", "coordinator", "assistant", "supervisor", "lead",
)
_ROLE_RE = re.compile(rf"\b(?:{'|'.join(ROLE_NOUNS)})\b", re.IGNORECASE)

# 4. Tone
_CASUAL_RE = re.compile(r"\b(?:awesome|amazing|cool|great|fantastic)\b", re.IGNORECASE)
_INTENSIFIER_RE = re.compile(r"\b(?:very|really|quite)\s+", re.IGNORECASE)

_SENTENCE_END_RE = re.compile(r"[.!?:;]\s*$")


def _at_sentence_start(text: str, pos: int) -> bool:
    before = text[:pos]
    return not before.strip() or bool(_SENTENCE_END_RE.search(before))


def _rewrite_phrase(replacement: str):
    def repl(match: re.Match) -> str:
        if _at_sentence_start(match.string, match.start()):
            return replacement
        return replacement[0].lower() + replacement[1:]
    return repl


def _keep_initial_case(replacement: str):
    def repl(match: re.Match) -> str:
        if match.group()[0].isupper():
            return replacement[0].upper() + replacement[1:]
        return replacement
    return repl


def _single_pass(text: str) -> str:
    for pattern, replacement in LEXICAL_CORRECTIONS:
        text = pattern.sub(replacement, text)
    for pattern, replacement in PHRASE_REWRITES:
        text = pattern.sub(_rewrite_phrase(replacement), text)
    text = _ROLE_RE.sub(lambda m: m.group().capitalize(), text)
    text = _CASUAL_RE.sub(_keep_initial_case("excellent"), text)
    text = _INTENSIFIER_RE.sub("", text).strip()
    if text:
        text = text[0].upper() + text[1:]
    return text


def apply_style_rules(text: str | None) -> str:
    """Apply the EHS style rules to ``text``.

    The pass is repeated until the text stops changing, so the result is a
    fixed point and applying the function twice changes nothing.
    """
    if not text:
        return ""

    # Every rule either shrinks the text or rewrites to a form no rule matches,
    # so the loop terminates. Nested first-person prefixes take one pass each.
    while True:
        updated = _single_pass(text)
        if updated == text:
            return text
        text = updated


def apply_style_to_record(record: CVRecord) -> CVRecord:
    """Copy of ``record`` with style rules applied to job title, profile and experience text.

    Names, contact details, dates, companies and institutions are left alone.
    """
    header = record.header.model_copy(update={"job_title": apply_style_rules(record.header.job_title)})
    experience = [
        exp.model_copy(update={
            "position": apply_style_rules(exp.position),
            "responsibilities": [apply_style_rules(r) for r in exp.responsibilities],
        })
        for exp in record.experience
    ]
    return record.model_copy(update={
        "header": header,
        "profile": apply_style_rules(record.profile),
        "experience": experience,
    })
