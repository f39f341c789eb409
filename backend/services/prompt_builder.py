"""Prompt templates sent to the AI providers."""

import json
from collections.abc import Mapping
from typing import Any

SYSTEM_PROMPT = (
    "You are an expert CV transformation specialist. Transform the given CV text "
    "according to EHS formatting standards. Return only valid JSON."
)

EHS_FORMATTING_RULES = """EHS FORMATTING REQUIREMENTS:
1. Typography: Use Palatino Linotype font throughout
2. Photo: Size to 4.7cm (convert landscape to portrait if needed)
3. Dates: Use first 3 letters only (Jan 2020, not January 2020)
4. Capitalization: Job titles always start with capital letters
5. Structure:
   - Header: Name, Job Title, Professional Photo
   - Personal Details: Nationality, Languages, DOB, Marital Status
   - Profile: Professional summary
   - Experience: Reverse chronological, bullet-pointed
   - Education: Consistent formatting
   - Key Skills: Bullet-pointed
   - Interests: Bullet-pointed

6. Content Cleanup:
   - Remove "I am responsible for" → "Responsible for"
   - Fix: "Principle" → "Principal", "Discrete" → "Discreet"
   - Remove: Age, Dependants
   - Convert paragraphs to bullet points
   - Ensure professional tone

7. File Naming: FirstName (Candidate BH No) Client CV"""

CV_JSON_TEMPLATE = """{
  "header": {
    "name": "string",
    "jobTitle": "string",
    "photoUrl": "string"
  },
  "personalDetails": {
    "nationality": "string",
    "languages": ["string"],
    "dateOfBirth": "string",
    "maritalStatus": "string",
    "contactInfo": {
      "email": "string",
      "phone": "string",
      "address": "string"
    }
  },
  "profile": "string",
  "experience": [
    {
      "company": "string",
      "position": "string",
      "duration": "string",
      "responsibilities": ["string"]
    }
  ],
  "education": [
    {
      "institution": "string",
      "degree": "string",
      "field": "string",
      "year": "string"
    }
  ],
  "keySkills": ["string"],
  "interests": ["string"]
}"""


def build_transform_prompt(text: str, preferences: Mapping[str, Any] | None = None) -> str:
    """Build the single prompt asking a provider to restructure CV text into JSON."""
    preferences_section = ""
    if preferences:
        preferences_section = (
            "\nADDITIONAL PREFERENCES (apply where they do not conflict with the rules above):\n"
            f"{json.dumps(dict(preferences), indent=2, sort_keys=True, default=str)}\n"
        )

    return f"""Transform the following CV text according to EHS formatting standards:

CV TEXT:
{text}

{EHS_FORMATTING_RULES}
{preferences_section}
Return the transformed data in this exact JSON structure:
{CV_JSON_TEMPLATE}

Ensure all text follows professional standards and EHS formatting rules."""
