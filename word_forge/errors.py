"""Error taxonomy for the generate, validate, deduplicate pipeline.

Only ``RetriesExhausted`` and ``PipelineBusy`` are meant to reach callers of
``WordForge``; the rest are recovered inside the retry loop.
"""
from __future__ import annotations


class WordForgeError(Exception):
    message = "Word generation error"


class GeneratorUnavailable(WordForgeError):
    message = "Error fetching next word from AI"


class MalformedCandidate(WordForgeError):
    message = "AI response could not be parsed"


class ValidationUnavailable(WordForgeError):
    message = "Dictionary or translation service unavailable"


class DuplicateCandidate(WordForgeError):
    message = "Word was already generated"


class RetriesExhausted(WordForgeError):
    message = "Failed to generate a unique word"

    def __init__(self, flavor: str, attempts: int):
        super().__init__(f"{flavor}: no valid unique candidate after {attempts} attempts")
        self.flavor = flavor
        self.attempts = attempts


GenerationFailed = RetriesExhausted


class PipelineBusy(WordForgeError):
    message = "Question generation already in progress, please retry"
