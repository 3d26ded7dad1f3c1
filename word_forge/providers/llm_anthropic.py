from __future__ import annotations

import os

from word_forge.providers.base import LLMProvider


class AnthropicProvider(LLMProvider):
    def __init__(self, model: str = "claude-sonnet-4-20250514", timeout: float = 30.0):
        import anthropic
        self.client = anthropic.AsyncAnthropic(
            api_key=os.environ.get("ANTHROPIC_API_KEY", ""),
            timeout=timeout,
        )
        self.model = model

    async def generate(
        self,
        prompt: str,
        temperature: float = 0.7,
        system: str | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> str:
        kwargs: dict = {}
        if system:
            kwargs["system"] = system
        if top_p is not None:
            kwargs["top_p"] = top_p
        message = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens or 1024,
            temperature=temperature,
            messages=[{"role": "user", "content": prompt}],
            **kwargs,
        )
        return message.content[0].text

    def name(self) -> str:
        return f"anthropic/{self.model}"
