"""Shared test fixtures."""
from __future__ import annotations

import pytest

from word_forge.guard import SingleFlightGuard
from word_forge.history import HistoryStore
from word_forge.pipeline import WordForge
from word_forge.validator import Validator


class FakeLLM:
    """Scripted LLM; an Exception in the script is raised instead of returned."""

    def __init__(self, responses=None):
        self._responses = responses or []
        self._call_count = 0
        self.prompts: list[str] = []
        self.calls: list[dict] = []

    async def generate(self, prompt, temperature=0.7, system=None, max_tokens=None, top_p=None):
        self.prompts.append(prompt)
        self.calls.append({
            "temperature": temperature,
            "system": system,
            "max_tokens": max_tokens,
            "top_p": top_p,
        })
        idx = min(self._call_count, len(self._responses) - 1)
        self._call_count += 1
        response = self._responses[idx]
        if isinstance(response, Exception):
            raise response
        return response

    def name(self) -> str:
        return "fake-llm"

    @property
    def call_count(self):
        return self._call_count


class FakeDictionary:
    """Dictionary backed by a plain dict; missing words look up as None."""

    def __init__(self, entries=None, error=None):
        self.entries = entries or {}
        self.error = error
        self.lookups: list[str] = []

    async def lookup(self, word):
        self.lookups.append(word)
        if self.error is not None:
            raise self.error
        return self.entries.get(word)

    def name(self) -> str:
        return "fake-dictionary"


class FakeTranslator:
    def __init__(self, prefix="es:", error=None):
        self.prefix = prefix
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def translate(self, text, target_language):
        self.calls.append((text, target_language))
        if self.error is not None:
            raise self.error
        return f"{self.prefix}{text}"

    def name(self) -> str:
        return "fake-translator"


DEFINITIONS = {
    "banana": ["a fruit", "a long curved fruit"],
    "bread": ["a baked food made of flour"],
    "apple": ["a round fruit"],
    "happy": ["feeling pleasure"],
    "joyful": ["full of joy"],
    "lexicon": ["the vocabulary of a language"],
}


@pytest.fixture
def fake_dictionary():
    return FakeDictionary(DEFINITIONS)


@pytest.fixture
def fake_translator():
    return FakeTranslator()


@pytest.fixture
def validator(fake_dictionary, fake_translator):
    return Validator(fake_dictionary, translator=fake_translator, target_language="es")


@pytest.fixture
def history():
    return HistoryStore(capacity=50)


@pytest.fixture
def make_forge(validator, history):
    """Build a WordForge around a FakeLLM scripted with *responses*."""

    def _make(responses, **kwargs):
        llm = FakeLLM(responses=responses)
        forge = WordForge(
            llm,
            kwargs.pop("validator", validator),
            history=kwargs.pop("history", history),
            guard=kwargs.pop("guard", SingleFlightGuard()),
            **kwargs,
        )
        return forge, llm

    return _make


QUESTION_RESPONSE = (
    "Word: happy, Options: [sad, joyful, angry, tired], Correct Answer: joyful"
)
