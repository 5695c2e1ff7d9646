"""OpenAI Responses API client for structured text generation."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from nutrigenius.services.insights import TextGenerationClient


@dataclass
class OpenAITextClient(TextGenerationClient):
    """Text-generation client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, timeout_seconds: float) -> "OpenAITextClient":
        """Create an OpenAI text client."""
        return cls(client=AsyncOpenAI(api_key=api_key, timeout=timeout_seconds))

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        system: str,
        schema: dict[str, object],
        temperature: float | None,
        max_output_tokens: int | None,
        store: bool,
    ) -> str:
        """Call OpenAI Responses API with structured outputs."""
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": system,
            "input": prompt,
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "nutrition_analysis",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if temperature is not None:
            request_payload["temperature"] = temperature
        if max_output_tokens is not None:
            request_payload["max_output_tokens"] = max_output_tokens

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
