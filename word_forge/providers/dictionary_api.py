from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from word_forge.errors import ValidationUnavailable
from word_forge.providers.base import DictionaryProvider

log = logging.getLogger("word_forge.dictionary")

DEFAULT_URL = "https://api.dictionaryapi.dev/api/v2/entries/en"


def extract_definitions(data) -> list[str]:
    """Flatten ``[entry].meanings[].definitions[].definition`` in order.

    Raises ``ValidationUnavailable`` when the payload is not shaped like a
    Free Dictionary API response.
    """
    if not isinstance(data, list):
        raise ValidationUnavailable(f"unexpected payload type {type(data).__name__}")
    definitions: list[str] = []
    try:
        for entry in data:
            for meaning in entry.get("meanings", []):
                for d in meaning.get("definitions", []):
                    text = d.get("definition")
                    if isinstance(text, str) and text.strip():
                        definitions.append(text.strip())
    except AttributeError as e:
        raise ValidationUnavailable(f"malformed dictionary entry: {e}") from e
    return definitions


class FreeDictionaryProvider(DictionaryProvider):
    def __init__(
        self,
        base_url: str = DEFAULT_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def lookup(self, word: str) -> list[str] | None:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            resp = await client.get(f"{self.base_url}/{quote(word)}")
        if resp.status_code == 404:
            log.info("Dictionary: %r not found", word)
            return None
        resp.raise_for_status()
        definitions = extract_definitions(resp.json())
        log.debug("Dictionary: %r has %d definitions", word, len(definitions))
        return definitions

    def name(self) -> str:
        return "dictionaryapi.dev"
