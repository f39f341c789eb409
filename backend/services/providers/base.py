"""Abstract base class for the AI provider adapters."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any
import logging

from config import ProviderConfig
from models.cv import ProviderTag
from services import prompt_builder
from services.errors import ProviderCallError

logger = logging.getLogger(__name__)


class ProviderAdapter(ABC):
    """One external completion API.

    Subclasses must implement:
        - tag / display_name: identity used in processing metadata
        - _create_client(): build the vendor SDK client from the config
        - _complete(client, prompt): send one prompt and return the reply text

    No retries: a failure is handed back to the orchestrator, which moves on
    to the next provider.
    """

    tag: ProviderTag
    display_name: str = ""

    def __init__(self, config: ProviderConfig) -> None:
        self.config = config
        self._client: Any = None

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    @abstractmethod
    def _create_client(self) -> Any:
        """Build the SDK client. Called once, on first use."""

    @abstractmethod
    async def _complete(self, client: Any, prompt: str) -> str | None:
        """Send the prompt and return the raw reply text."""

    def get_client(self) -> Any:
        if self._client is None:
            logger.debug("Creating %s client (model=%s)", self.display_name, self.config.model)
            self._client = self._create_client()
        return self._client

    async def complete(self, prompt: str) -> str:
        try:
            text = await self._complete(self.get_client(), prompt)
        except ProviderCallError:
            raise
        except Exception as e:
            raise ProviderCallError(str(e) or type(e).__name__) from e

        if not text or not text.strip():
            raise ProviderCallError(f"{self.display_name} returned an empty response")
        logger.info("%s response received, length: %d", self.display_name, len(text))
        return text

    async def call_provider(self, text: str, preferences: Mapping[str, Any] | None = None) -> str:
        """Ask the provider to restructure CV text; returns its raw reply."""
        prompt = prompt_builder.build_transform_prompt(text, preferences)
        return await self.complete(prompt)
