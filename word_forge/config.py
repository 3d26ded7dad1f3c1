from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "llm_provider": "openai",
    "llm_model": "gpt-3.5-turbo",
    "ollama_url": "http://localhost:11434",
    "dictionary_url": "https://api.dictionaryapi.dev/api/v2/entries/en",
    "translation_provider": "llm",
    "translation_url": "http://localhost:5000",
    "target_language": "es",
    "history_capacity": 50,
    "max_attempts": {"word": 3, "topic": 10, "question": 20},
    "llm_timeout": 30.0,
    "lookup_timeout": 10.0,
    "rate_limit_per_minute": 60,
    "cors_origins": ["*"],
}


@dataclass
class Settings:
    llm_provider: str = DEFAULTS["llm_provider"]
    llm_model: str = DEFAULTS["llm_model"]
    ollama_url: str = DEFAULTS["ollama_url"]
    dictionary_url: str = DEFAULTS["dictionary_url"]
    translation_provider: str = DEFAULTS["translation_provider"]  # llm | libretranslate | none
    translation_url: str = DEFAULTS["translation_url"]
    target_language: str = DEFAULTS["target_language"]
    history_capacity: int = DEFAULTS["history_capacity"]
    max_attempts: dict[str, int] = field(default_factory=lambda: dict(DEFAULTS["max_attempts"]))
    llm_timeout: float = DEFAULTS["llm_timeout"]
    lookup_timeout: float = DEFAULTS["lookup_timeout"]
    rate_limit_per_minute: int = DEFAULTS["rate_limit_per_minute"]
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULTS["cors_origins"]))

    def to_dict(self) -> dict:
        return {
            "llm_provider": self.llm_provider,
            "llm_model": self.llm_model,
            "ollama_url": self.ollama_url,
            "dictionary_url": self.dictionary_url,
            "translation_provider": self.translation_provider,
            "translation_url": self.translation_url,
            "target_language": self.target_language,
            "history_capacity": self.history_capacity,
            "max_attempts": dict(self.max_attempts),
            "llm_timeout": self.llm_timeout,
            "lookup_timeout": self.lookup_timeout,
            "rate_limit_per_minute": self.rate_limit_per_minute,
            "cors_origins": list(self.cors_origins),
        }


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        # Partial overrides keep the defaults for unnamed groups
        if "max_attempts" in filtered:
            filtered["max_attempts"] = {**DEFAULTS["max_attempts"], **filtered["max_attempts"]}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
