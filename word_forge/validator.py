"""Dictionary-backed validity check with optional translated definition."""
from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from word_forge.models import ValidationResult, normalize_word

if TYPE_CHECKING:
    from word_forge.providers.base import DictionaryProvider, TranslationProvider

_log = logging.getLogger("word_forge.validator")


class Validator:
    def __init__(
        self,
        dictionary: DictionaryProvider,
        translator: TranslationProvider | None = None,
        target_language: str = "es",
        timeout: float = 10.0,
    ):
        self.dictionary = dictionary
        self.translator = translator
        self.target_language = target_language
        self.timeout = timeout

    async def validate(self, word: str, translate: bool = False) -> ValidationResult:
        """Look *word* up and, if requested, translate its first definition.

        Never raises: lookup or translation failures come back as
        ``valid=False`` with no definitions.  Translation is only attempted
        once a definition exists.
        """
        word = normalize_word(word)
        if not word:
            return ValidationResult(valid=False, reason="empty word")

        try:
            definitions = await asyncio.wait_for(self.dictionary.lookup(word), timeout=self.timeout)
        except Exception as e:
            _log.info("Validation failed for %r: %s", word, str(e) or type(e).__name__)
            return ValidationResult(valid=False, reason="dictionary unavailable")

        if not definitions or not isinstance(definitions[0], str) or not definitions[0].strip():
            _log.info("Validation failed for %r: no definitions", word)
            return ValidationResult(valid=False, reason="not found")
        definition = definitions[0].strip()

        translated = None
        if translate and self.translator is not None:
            try:
                translated = await asyncio.wait_for(
                    self.translator.translate(definition, self.target_language),
                    timeout=self.timeout,
                )
            except Exception as e:
                _log.info("Translation failed for %r: %s", word, str(e) or type(e).__name__)
                return ValidationResult(valid=False, reason="translation unavailable")

        _log.info("Validated %r", word)
        return ValidationResult(valid=True, definition=definition, translated_definition=translated)
