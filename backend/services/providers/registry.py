"""Build provider adapters from configuration, in fallback order.

Vendor SDKs are imported only when their adapter is built.
"""

import logging

from config import ProviderConfig
from services.providers.base import ProviderAdapter

logger = logging.getLogger(__name__)

PROVIDER_ORDER = ("openai", "anthropic", "google")

CAPABILITIES: dict[str, list[str]] = {
    "openai": ["text-generation", "content-structuring", "language-enhancement"],
    "anthropic": ["content-analysis", "formatting", "professional-tone"],
    "google": ["text-processing", "content-optimization"],
}


def _create_adapter(config: ProviderConfig) -> ProviderAdapter:
    """Factory: create an adapter by provider name with deferred imports."""
    if config.name == "openai":
        from services.providers.openai_adapter import OpenAIAdapter
        return OpenAIAdapter(config)
    elif config.name == "anthropic":
        from services.providers.anthropic_adapter import AnthropicAdapter
        return AnthropicAdapter(config)
    elif config.name == "google":
        from services.providers.gemini_adapter import GeminiAdapter
        return GeminiAdapter(config)
    else:
        raise ValueError(f"Unknown provider: {config.name}")


def build_adapters(configs: list[ProviderConfig]) -> list[ProviderAdapter]:
    """One adapter per config, keeping the configs' order (the fallback order)."""
    adapters = [_create_adapter(c) for c in configs]
    for adapter in adapters:
        logger.info(
            "AI provider %s: %s",
            adapter.display_name,
            "configured" if adapter.is_configured else "not configured",
        )
    return adapters


def provider_status(configs: list[ProviderConfig]) -> dict:
    """Availability report: which providers have credentials, and their models."""
    providers = {
        c.name: {
            "available": c.is_configured,
            "model": c.model,
            "capabilities": CAPABILITIES.get(c.name, []),
        }
        for c in configs
    }
    return {
        "providers": providers,
        "active_providers": [name for name in PROVIDER_ORDER if providers.get(name, {}).get("available")],
    }
