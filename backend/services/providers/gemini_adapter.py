"""Google Gemini adapter (third provider)."""

from google import genai
from google.genai import types

from models.cv import ProviderTag
from services.prompt_builder import SYSTEM_PROMPT
from services.providers.base import ProviderAdapter


class GeminiAdapter(ProviderAdapter):
    tag = ProviderTag.GOOGLE
    display_name = "Google"

    def _create_client(self) -> genai.Client:
        return genai.Client(
            api_key=self.config.api_key,
            http_options=types.HttpOptions(timeout=int(self.config.timeout_s * 1000)),
        )

    async def _complete(self, client: genai.Client, prompt: str) -> str | None:
        response = await client.aio.models.generate_content(
            model=self.config.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=SYSTEM_PROMPT,
                temperature=self.config.temperature,
                max_output_tokens=self.config.max_output_tokens,
            ),
        )
        return response.text
