import os
from dataclasses import dataclass

from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass(frozen=True)
class ProviderConfig:
    """Connection settings for one AI provider, resolved once at startup."""
    name: str
    api_key: str
    model: str
    temperature: float
    max_output_tokens: int
    timeout_s: float

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


class Settings(BaseSettings):
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    google_api_key: str = ""

    openai_model: str = "gpt-4o"
    anthropic_model: str = "claude-3-5-sonnet-latest"
    google_model: str = "gemini-2.5-flash"

    # Shared sampling settings: favour determinism, bound the output
    ai_temperature: float = 0.3
    ai_max_output_tokens: int = 4000
    ai_request_timeout_s: float = 120.0

    max_upload_size_mb: int = 10
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    def provider_configs(self) -> list[ProviderConfig]:
        """Provider settings in fallback order: openai, anthropic, google."""
        keys_and_models = [
            ("openai", self.openai_api_key, self.openai_model),
            ("anthropic", self.anthropic_api_key, self.anthropic_model),
            ("google", self.google_api_key, self.google_model),
        ]
        return [
            ProviderConfig(
                name=name,
                api_key=key,
                model=model,
                temperature=self.ai_temperature,
                max_output_tokens=self.ai_max_output_tokens,
                timeout_s=self.ai_request_timeout_s,
            )
            for name, key, model in keys_and_models
        ]


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
