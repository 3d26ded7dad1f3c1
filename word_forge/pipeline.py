"""Generate, validate and deduplicate words and quiz items.

``RetryController`` runs the bounded loop for a single request;
``WordForge`` wires it to the shared history and single-flight guard and is
what the API and CLI call.
"""
from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from word_forge.errors import (
    DuplicateCandidate,
    GeneratorUnavailable,
    MalformedCandidate,
    RetriesExhausted,
    ValidationUnavailable,
)
from word_forge.generator import CandidateGenerator
from word_forge.guard import SingleFlightGuard
from word_forge.history import HistoryStore
from word_forge.models import (
    ByStartingLetter,
    ByTier,
    ByTopic,
    GenerationRequest,
    GenerationResult,
    ValidationResult,
)
from word_forge.prompts import FLAVORS, FlavorProfile

if TYPE_CHECKING:
    from word_forge.config import Settings
    from word_forge.providers.base import LLMProvider
    from word_forge.validator import Validator

_log = logging.getLogger("word_forge.pipeline")


class RetryController:
    def __init__(self, generator: CandidateGenerator, validator: Validator, history: HistoryStore):
        self.generator = generator
        self.validator = validator
        self.history = history

    async def run(
        self,
        request: GenerationRequest,
        profile: FlavorProfile,
        max_attempts: int | None = None,
    ) -> GenerationResult:
        limit = max_attempts if max_attempts is not None else profile.max_attempts
        attempts = 0
        while attempts < limit:
            attempts += 1
            _log.info("Generate %s (attempt %d/%d)", profile.name, attempts, limit)
            try:
                candidate = await self.generator.generate(request, profile, self.history.items())
            except (GeneratorUnavailable, MalformedCandidate) as e:
                _log.info("  %s: %s", type(e).__name__, e)
                continue

            headword = candidate.headword
            result = await self.validator.validate(headword, translate=profile.translate)
            if not result.valid:
                _log.info("  %r rejected: %s", headword, result.reason or "invalid")
                continue

            if not self.history.record(headword):
                _log.info("  %s", DuplicateCandidate(f"{headword!r} already generated"))
                continue

            _log.info("  %r accepted", headword)
            return GenerationResult(
                word=headword if profile.kind == "word" else candidate.text,
                definition=result.definition,
                translated_definition=result.translated_definition,
                options=list(candidate.options),
                correct_answer=candidate.correct_answer,
                flavor=profile.name,
            )

        _log.warning("Failed to generate %s after %d attempts", profile.name, attempts)
        raise RetriesExhausted(profile.name, attempts)


def _flavor_for(request: GenerationRequest, enriched: bool) -> FlavorProfile:
    if isinstance(request, ByStartingLetter):
        return FLAVORS["word_enriched" if enriched else "word"]
    if isinstance(request, ByTier):
        return FLAVORS[f"question_{request.tier}"]
    if isinstance(request, ByTopic):
        return FLAVORS["topic"]
    raise TypeError(f"Unknown generation request: {request!r}")


class WordForge:
    def __init__(
        self,
        llm: LLMProvider,
        validator: Validator,
        history: HistoryStore | None = None,
        guard: SingleFlightGuard | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings
        self.history = history if history is not None else HistoryStore(
            settings.history_capacity if settings else 50
        )
        self.guard = guard if guard is not None else SingleFlightGuard()
        self.validator = validator
        self.generator = CandidateGenerator(llm, timeout=settings.llm_timeout if settings else 30.0)
        self.controller = RetryController(self.generator, validator, self.history)

    def _max_attempts(self, profile: FlavorProfile) -> int:
        if self.settings is None:
            return profile.max_attempts
        group = profile.name.split("_")[0]
        return int(self.settings.max_attempts.get(group, profile.max_attempts))

    async def generate(self, request: GenerationRequest, enriched: bool = False) -> GenerationResult:
        profile = _flavor_for(request, enriched)
        max_attempts = self._max_attempts(profile)
        if profile.guarded:
            async with self.guard.hold():
                return await self.controller.run(request, profile, max_attempts)
        return await self.controller.run(request, profile, max_attempts)

    async def generate_word(self, letter: str, enriched: bool = False) -> GenerationResult:
        return await self.generate(ByStartingLetter(letter), enriched=enriched)

    async def generate_question(self, tier: str = "easy") -> GenerationResult:
        return await self.generate(ByTier(tier))

    async def generate_vocabulary(self, topic: str) -> GenerationResult:
        return await self.generate(ByTopic(topic))

    async def validate_word(self, word: str, translate: bool = False) -> ValidationResult:
        return await self.validator.validate(word, translate=translate)

    async def translate_word(self, word: str, target_language: str | None = None) -> str:
        translator = self.validator.translator
        if translator is None:
            raise ValidationUnavailable("no translation provider configured")
        # Phrases and accented words go to the translator as typed
        text = word.strip() if isinstance(word, str) else ""
        if not text:
            raise ValueError("No word provided")
        language = target_language or self.validator.target_language
        try:
            translation = await asyncio.wait_for(
                translator.translate(text, language), timeout=self.validator.timeout,
            )
        except Exception as e:
            raise ValidationUnavailable(f"translation of {text!r} failed: {e}") from e
        return translation.strip()
