from __future__ import annotations

from word_forge.prompts import TRANSLATE_PROMPT
from word_forge.providers.base import LLMProvider, TranslationProvider


class LLMTranslationProvider(TranslationProvider):
    """Translate through the configured generative model."""

    def __init__(self, llm: LLMProvider):
        self.llm = llm

    async def translate(self, text: str, target_language: str) -> str:
        prompt = TRANSLATE_PROMPT.format(text=text, target_language=target_language)
        response = await self.llm.generate(prompt, temperature=0.2, max_tokens=200)
        return response.strip()

    def name(self) -> str:
        return f"llm/{self.llm.name()}"
