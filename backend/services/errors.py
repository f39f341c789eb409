"""Exception types raised by the extraction and transformation pipeline."""


class CVPipelineError(Exception):
    """Base class for all pipeline errors."""


class ExtractionError(CVPipelineError):
    """Text could not be extracted from an uploaded file. Fatal to that upload."""


class UnsupportedFormatError(ExtractionError):
    def __init__(self, file_type: str) -> None:
        self.file_type = file_type
        super().__init__(f"Unsupported file type: {file_type or '(none)'}")


class EmptyContentError(ExtractionError):
    """The file parsed but contained no usable text (e.g. a scanned PDF)."""


class DocumentParseError(ExtractionError):
    """The file's reader rejected the buffer (corrupt or mislabelled file)."""


class ProviderError(CVPipelineError):
    """A single AI provider attempt failed. Recovered by the orchestrator."""


class ProviderCallError(ProviderError):
    """Network or API failure calling a provider, or an empty completion."""


class MalformedAIResponseError(ProviderError):
    """The provider answered but no JSON object could be parsed from it."""
