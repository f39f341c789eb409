"""Pull the JSON object out of a provider's free-text reply."""

import json
import logging
import re
from typing import Any

from services.errors import MalformedAIResponseError

logger = logging.getLogger(__name__)

# Greedy: first "{" to last "}", so markdown fences and chatter around it are ignored
_JSON_SPAN_RE = re.compile(r"\{[\s\S]*\}")


def parse_ai_response(response: str | None) -> dict[str, Any]:
    """Return the JSON object embedded in ``response``.

    Raises MalformedAIResponseError when no object can be decoded.
    """
    match = _JSON_SPAN_RE.search(response or "")
    if match is None:
        raise MalformedAIResponseError("No valid JSON found in response")

    try:
        parsed = json.loads(match.group())
    except json.JSONDecodeError as e:
        logger.error("Failed to parse AI response as JSON: %s", e)
        raise MalformedAIResponseError(f"Failed to parse AI response: {e}") from e

    if not isinstance(parsed, dict):
        raise MalformedAIResponseError("AI response JSON is not an object")
    return parsed
