from __future__ import annotations

import os

import httpx

from word_forge.errors import ValidationUnavailable
from word_forge.providers.base import TranslationProvider


class LibreTranslateProvider(TranslationProvider):
    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.api_key = os.environ.get("LIBRETRANSLATE_API_KEY", "")
        self._transport = transport

    async def translate(self, text: str, target_language: str) -> str:
        body = {"q": text, "source": "en", "target": target_language, "format": "text"}
        if self.api_key:
            body["api_key"] = self.api_key
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            resp = await client.post(f"{self.base_url}/translate", json=body)
            resp.raise_for_status()
            data = resp.json()
        translated = data.get("translatedText") if isinstance(data, dict) else None
        if not isinstance(translated, str):
            raise ValidationUnavailable("translation response has no translatedText")
        return translated

    def name(self) -> str:
        return f"libretranslate/{self.base_url}"
