from models.cv import CamelModel, TransformedCV


class TransformResponse(CamelModel):
    success: bool = True
    transformed_data: TransformedCV
    processing_time_ms: int = 0
    message: str = "CV transformed successfully"


class ProviderStatus(CamelModel):
    available: bool = False
    model: str = ""
    capabilities: list[str] = []


class AIStatusResponse(CamelModel):
    providers: dict[str, ProviderStatus] = {}
    active_providers: list[str] = []


class DeleteResponse(CamelModel):
    message: str = "CV deleted successfully"
