"""FastAPI application with all routes."""
from __future__ import annotations

import logging

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from word_forge.config import Settings, load_settings
from word_forge.errors import PipelineBusy, RetriesExhausted, ValidationUnavailable
from word_forge.history import HistoryStore
from word_forge.pipeline import WordForge
from word_forge.rate_limit import RateLimiter
from word_forge.validator import Validator

log = logging.getLogger("word_forge.api")

app = FastAPI(title="Word Forge")

# Global state (initialized in startup)
_settings: Settings | None = None
_forge: WordForge | None = None
_limiter: RateLimiter | None = None

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again after a minute"

EXHAUSTED_MESSAGES = {
    "word": "Error fetching next word from AI",
    "word_enriched": "Error fetching next word from AI",
    "topic": "Failed to generate a unique vocabulary word",
}


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


def get_forge() -> WordForge:
    assert _forge is not None
    return _forge


def _get_llm(s: Settings):
    if s.llm_provider == "openai":
        from word_forge.providers.llm_openai import OpenAIProvider
        return OpenAIProvider(model=s.llm_model, timeout=s.llm_timeout)
    elif s.llm_provider == "anthropic":
        from word_forge.providers.llm_anthropic import AnthropicProvider
        return AnthropicProvider(model=s.llm_model, timeout=s.llm_timeout)
    elif s.llm_provider == "ollama":
        from word_forge.providers.llm_ollama import OllamaProvider
        return OllamaProvider(base_url=s.ollama_url, model=s.llm_model, timeout=s.llm_timeout)
    raise ValueError(f"Unknown LLM provider: {s.llm_provider}")


def _get_translator(s: Settings, llm):
    if s.translation_provider == "llm":
        from word_forge.providers.translate_llm import LLMTranslationProvider
        return LLMTranslationProvider(llm)
    elif s.translation_provider == "libretranslate":
        from word_forge.providers.translate_libre import LibreTranslateProvider
        return LibreTranslateProvider(base_url=s.translation_url, timeout=s.lookup_timeout)
    elif s.translation_provider == "none":
        return None
    raise ValueError(f"Unknown translation provider: {s.translation_provider}")


def build_forge(s: Settings) -> WordForge:
    from word_forge.providers.dictionary_api import FreeDictionaryProvider

    llm = _get_llm(s)
    validator = Validator(
        FreeDictionaryProvider(base_url=s.dictionary_url, timeout=s.lookup_timeout),
        translator=_get_translator(s, llm),
        target_language=s.target_language,
        timeout=s.lookup_timeout,
    )
    return WordForge(llm, validator, history=HistoryStore(s.history_capacity), settings=s)


@app.on_event("startup")
async def startup():
    global _settings, _forge, _limiter
    if _forge is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()
    _forge = build_forge(_settings)
    _limiter = RateLimiter(limit=_settings.rate_limit_per_minute, window=60.0)
    log.info("Word Forge ready (%s)", _forge.generator.llm.name())


@app.middleware("http")
async def rate_limit(request: Request, call_next):
    if _limiter is not None and request.method != "OPTIONS":
        client = request.client.host if request.client else "unknown"
        if not _limiter.allow(client):
            return JSONResponse({"error": RATE_LIMIT_MESSAGE}, status_code=429)
    return await call_next(request)


# Added last so it wraps the rate limiter and 429s carry CORS headers too
app.add_middleware(
    CORSMiddleware,
    allow_origins=load_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error mapping ─────────────────────────────────────────────────────────

@app.exception_handler(ValueError)
async def _bad_request(request: Request, exc: ValueError):
    return JSONResponse({"error": str(exc)}, status_code=400)


@app.exception_handler(RetriesExhausted)
async def _exhausted(request: Request, exc: RetriesExhausted):
    if exc.flavor.startswith("question"):
        message = "Failed to generate a unique question"
    else:
        message = EXHAUSTED_MESSAGES.get(exc.flavor, exc.message)
    return JSONResponse({"error": message}, status_code=500)


@app.exception_handler(PipelineBusy)
async def _busy(request: Request, exc: PipelineBusy):
    return JSONResponse({"error": exc.message}, status_code=503)


@app.exception_handler(ValidationUnavailable)
async def _upstream(request: Request, exc: ValidationUnavailable):
    log.warning("Upstream failure on %s: %s", request.url.path, exc)
    return JSONResponse({"error": exc.message}, status_code=502)


@app.exception_handler(Exception)
async def _unexpected(request: Request, exc: Exception):
    log.error("Unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse({"error": "Internal error generating word"}, status_code=500)


async def _json_body(request: Request) -> dict:
    body = await request.json() if await request.body() else {}
    if not isinstance(body, dict):
        raise ValueError("request body must be a JSON object")
    return body


# ── API: Generation ───────────────────────────────────────────────────────

@app.post("/generate-word")
async def generate_word(request: Request):
    body = await _json_body(request)
    letter = body.get("lastLetter", body.get("letter", ""))
    result = await get_forge().generate_word(letter)
    return {"word": result.word}


@app.post("/generate-word/enriched")
async def generate_word_enriched(request: Request):
    body = await _json_body(request)
    letter = body.get("lastLetter", body.get("letter", ""))
    result = await get_forge().generate_word(letter, enriched=True)
    return result.to_dict()


@app.get("/generate-question")
async def generate_question(tier: str = "easy"):
    result = await get_forge().generate_question(tier)
    return {
        "word": result.word,
        "options": result.options,
        "correctAnswer": result.correct_answer,
    }


@app.post("/generate-vocabulary")
async def generate_vocabulary(request: Request):
    body = await _json_body(request)
    result = await get_forge().generate_vocabulary(body.get("topic", ""))
    return result.to_dict()


# ── API: Dictionary ───────────────────────────────────────────────────────

@app.post("/validate-word")
async def validate_word(request: Request):
    body = await _json_body(request)
    word = body.get("word", "")
    if not isinstance(word, str) or not word.strip():
        raise ValueError("No word provided")
    result = await get_forge().validate_word(word, translate=bool(body.get("translate", False)))
    return result.to_dict()


@app.post("/translate-word")
async def translate_word(request: Request):
    body = await _json_body(request)
    word = body.get("word", "")
    if not isinstance(word, str) or not word.strip():
        raise ValueError("No word provided")
    forge = get_forge()
    language = body.get("targetLanguage") or forge.validator.target_language
    translation = await forge.translate_word(word, language)
    return {"word": word.strip(), "translation": translation, "targetLanguage": language}


# ── API: Introspection ────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()


@app.get("/api/history")
async def api_history():
    history = get_forge().history
    words = history.items()
    return {"size": len(words), "capacity": history.capacity, "words": words}
