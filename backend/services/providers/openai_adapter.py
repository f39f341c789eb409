"""OpenAI chat completions adapter (first provider)."""

from openai import AsyncOpenAI

from models.cv import ProviderTag
from services.prompt_builder import SYSTEM_PROMPT
from services.providers.base import ProviderAdapter


class OpenAIAdapter(ProviderAdapter):
    tag = ProviderTag.OPENAI
    display_name = "OpenAI"

    def _create_client(self) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=self.config.api_key,
            timeout=self.config.timeout_s,
            max_retries=0,
        )

    async def _complete(self, client: AsyncOpenAI, prompt: str) -> str | None:
        completion = await client.chat.completions.create(
            model=self.config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self.config.temperature,
            max_tokens=self.config.max_output_tokens,
        )
        choice = completion.choices[0] if completion.choices else None
        if not choice or not choice.message:
            return None
        return choice.message.content
