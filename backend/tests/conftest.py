"""Shared test configuration, fake providers and sample data."""

import json

import pytest

from config import ProviderConfig
from models.cv import ProviderTag
from services.providers.base import ProviderAdapter


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: calls real AI provider APIs (needs API keys)"
    )


SAMPLE_AI_PAYLOAD = {
    "header": {"name": "Jane Doe", "jobTitle": "senior project manager", "photoUrl": ""},
    "personalDetails": {
        "nationality": "British",
        "languages": ["English", "French"],
        "dateOfBirth": "12 Mar 1988",
        "maritalStatus": "Married",
        "contactInfo": {
            "email": "jane.doe@example.com",
            "phone": "+44 20 7946 0958",
            "address": "London",
        },
    },
    "profile": "I have experience in delivering very large infrastructure projects.",
    "experience": [
        {
            "company": "Acme Construction",
            "position": "project manager",
            "duration": "Jan 2018 - Present",
            "responsibilities": [
                "I am responsible for managing the budget",
                "Led an amazing team of 12",
            ],
        }
    ],
    "education": [
        {
            "institution": "University of Leeds",
            "degree": "BEng",
            "field": "Civil Engineering",
            "year": "2010",
        }
    ],
    "keySkills": ["Budgeting", "Stakeholder Management"],
    "interests": ["Cycling"],
}


class FakeAdapter(ProviderAdapter):
    """Provider adapter that returns a canned reply or raises a canned error."""

    def __init__(
        self,
        tag: ProviderTag,
        display_name: str,
        *,
        configured: bool = True,
        response: str | None = None,
        error: Exception | None = None,
    ) -> None:
        super().__init__(ProviderConfig(
            name=tag.value,
            api_key="test-key" if configured else "",
            model="fake-model",
            temperature=0.3,
            max_output_tokens=100,
            timeout_s=1.0,
        ))
        self.tag = tag
        self.display_name = display_name
        self.response = response
        self.error = error
        self.prompts: list[str] = []

    def _create_client(self):
        return object()

    async def _complete(self, client, prompt: str) -> str | None:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def ai_payload() -> dict:
    return json.loads(json.dumps(SAMPLE_AI_PAYLOAD))


@pytest.fixture
def ai_response() -> str:
    """A realistic reply: chatter and a code fence around the JSON object."""
    return "Here is the transformed CV:\n```json\n" + json.dumps(SAMPLE_AI_PAYLOAD) + "\n```"


@pytest.fixture
def make_adapter():
    return FakeAdapter
