from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

TIERS = ("easy", "medium", "hard")

_NON_ALPHA = re.compile(r"[^a-zA-Z]")


def normalize_word(text: str) -> str:
    """Lower-case *text* and drop every non-alphabetic character."""
    return _NON_ALPHA.sub("", text.strip().lower())


@dataclass(frozen=True)
class Candidate:
    text: str
    options: list[str] = field(default_factory=list)
    correct_answer: str | None = None

    @property
    def headword(self) -> str:
        return normalize_word(self.text)


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    definition: str | None = None
    translated_definition: str | None = None
    reason: str | None = None  # log-only diagnostic

    def to_dict(self) -> dict:
        d: dict = {"valid": self.valid}
        if self.definition is not None:
            d["definition"] = self.definition
        if self.translated_definition is not None:
            d["translatedDefinition"] = self.translated_definition
        return d


@dataclass(frozen=True)
class ByStartingLetter:
    letter: str

    def __post_init__(self):
        letter = self.letter.strip() if isinstance(self.letter, str) else ""
        if len(letter) != 1 or not letter.isascii() or not letter.isalpha():
            raise ValueError(f"letter must be a single English letter (got {self.letter!r})")
        object.__setattr__(self, "letter", letter.lower())


@dataclass(frozen=True)
class ByTier:
    tier: str

    def __post_init__(self):
        tier = self.tier.strip().lower() if isinstance(self.tier, str) else ""
        if tier not in TIERS:
            raise ValueError(f"tier must be one of {', '.join(TIERS)} (got {self.tier!r})")
        object.__setattr__(self, "tier", tier)


@dataclass(frozen=True)
class ByTopic:
    topic: str

    def __post_init__(self):
        topic = self.topic.strip() if isinstance(self.topic, str) else ""
        if not topic:
            raise ValueError("topic must not be empty")
        object.__setattr__(self, "topic", topic)


GenerationRequest = Union[ByStartingLetter, ByTier, ByTopic]


@dataclass
class GenerationResult:
    word: str
    definition: str | None = None
    translated_definition: str | None = None
    options: list[str] = field(default_factory=list)
    correct_answer: str | None = None
    flavor: str = ""

    def to_dict(self) -> dict:
        d: dict = {"word": self.word}
        if self.options:
            d["options"] = list(self.options)
        if self.correct_answer is not None:
            d["correctAnswer"] = self.correct_answer
        if self.definition is not None:
            d["definition"] = self.definition
        if self.translated_definition is not None:
            d["translatedDefinition"] = self.translated_definition
        return d
