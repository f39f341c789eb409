"""Anthropic messages API adapter (second provider)."""

from anthropic import AsyncAnthropic

from models.cv import ProviderTag
from services.prompt_builder import SYSTEM_PROMPT
from services.providers.base import ProviderAdapter


class AnthropicAdapter(ProviderAdapter):
    tag = ProviderTag.ANTHROPIC
    display_name = "Anthropic"

    def _create_client(self) -> AsyncAnthropic:
        return AsyncAnthropic(
            api_key=self.config.api_key,
            timeout=self.config.timeout_s,
            max_retries=0,
        )

    async def _complete(self, client: AsyncAnthropic, prompt: str) -> str | None:
        message = await client.messages.create(
            model=self.config.model,
            max_tokens=self.config.max_output_tokens,
            temperature=self.config.temperature,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
        return "".join(
            block.text for block in message.content if getattr(block, "type", "") == "text"
        )
