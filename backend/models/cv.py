"""Canonical CV document shape shared by the pipeline, the store and the API.

Python attributes are snake_case; JSON uses the camelCase keys of the prompt
template (``jobTitle``, ``personalDetails``...).
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


DEFAULT_NAME = "Unknown Name"
DEFAULT_JOB_TITLE = "Professional"
DEFAULT_LANGUAGES = ["English"]


class CVHeader(CamelModel):
    name: str = DEFAULT_NAME
    job_title: str = DEFAULT_JOB_TITLE
    photo_url: str = ""


class ContactInfo(CamelModel):
    email: str = ""
    phone: str = ""
    address: str = ""


class PersonalDetails(CamelModel):
    nationality: str = ""
    languages: list[str] = Field(default_factory=lambda: list(DEFAULT_LANGUAGES))
    date_of_birth: str = ""
    marital_status: str = ""
    contact_info: ContactInfo = Field(default_factory=ContactInfo)


class Experience(CamelModel):
    company: str = ""
    position: str = ""
    duration: str = ""
    responsibilities: list[str] = []


class Education(CamelModel):
    institution: str = ""
    degree: str = ""
    field: str = ""
    year: str = ""


class CVRecord(CamelModel):
    """Structured CV. Every list field is always present, possibly empty."""
    header: CVHeader = Field(default_factory=CVHeader)
    personal_details: PersonalDetails = Field(default_factory=PersonalDetails)
    profile: str = ""
    experience: list[Experience] = []
    education: list[Education] = []
    key_skills: list[str] = []
    interests: list[str] = []


class ProviderTag(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    BASIC_PARSING = "basic-parsing"


# Fixed per tier, not computed from the output
CONFIDENCE_BY_PROVIDER: dict[ProviderTag, float] = {
    ProviderTag.OPENAI: 0.95,
    ProviderTag.ANTHROPIC: 0.90,
    ProviderTag.GOOGLE: 0.85,
    ProviderTag.BASIC_PARSING: 0.60,
}


class ProcessingMetadata(CamelModel):
    model_config = ConfigDict(frozen=True)

    provider_used: ProviderTag
    elapsed_ms: int = Field(ge=0)
    confidence_score: float = Field(ge=0.0, le=1.0)
    errors: tuple[str, ...] = ()


class TransformedCV(CVRecord):
    """A CVRecord together with how it was produced."""
    ai_processing_details: ProcessingMetadata


class FileType(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    XLSX = "xlsx"
    XLS = "xls"


class CVStatus(str, Enum):
    UPLOADED = "uploaded"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class CVDocument(CamelModel):
    """One uploaded file and everything derived from it."""
    id: str
    original_file_name: str
    original_file_type: FileType
    file_size: int = 0
    status: CVStatus = CVStatus.UPLOADED
    extracted_text: str = ""
    transformed_data: TransformedCV | None = None
    errors: list[str] = []
    uploaded_at: datetime
    processed_at: datetime | None = None
    processing_duration_ms: int | None = None
