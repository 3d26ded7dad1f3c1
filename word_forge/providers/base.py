from __future__ import annotations

from abc import ABC, abstractmethod


class LLMProvider(ABC):
    @abstractmethod
    async def generate(
        self,
        prompt: str,
        temperature: float = 0.7,
        system: str | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> str:
        ...

    @abstractmethod
    def name(self) -> str:
        ...


class DictionaryProvider(ABC):
    @abstractmethod
    async def lookup(self, word: str) -> list[str] | None:
        """Return the word's definitions in dictionary order, or None if unknown."""
        ...

    @abstractmethod
    def name(self) -> str:
        ...


class TranslationProvider(ABC):
    @abstractmethod
    async def translate(self, text: str, target_language: str) -> str:
        ...

    @abstractmethod
    def name(self) -> str:
        ...
