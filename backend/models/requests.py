from typing import Any

from pydantic import Field

from models.cv import CamelModel


class TransformRequest(CamelModel):
    text: str = Field(..., max_length=100000, description="Plain text CV content")
    preferences: dict[str, Any] = {}


class UpdateCVRequest(CamelModel):
    # Any shape; edits go back through the normalizer
    transformed_data: dict[str, Any]
