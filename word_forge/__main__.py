"""CLI entry point for word-forge.

Usage:
  python -m word_forge serve [--host HOST] [--port PORT]
  python -m word_forge word --letter L [--enriched]
  python -m word_forge question [--tier easy|medium|hard]
  python -m word_forge topic --topic TOPIC
  python -m word_forge validate WORD
  python -m word_forge translate WORD [--to LANG]
"""
from __future__ import annotations

import asyncio
import json
import sys

from word_forge.errors import PipelineBusy, RetriesExhausted, ValidationUnavailable

COMMANDS = ("serve", "word", "question", "topic", "validate", "translate")


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    command = args[0] if args else "serve"
    rest = args[1:]

    if command == "serve":
        _serve(rest)
        return 0
    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print("Commands: " + ", ".join(COMMANDS))
        return 1

    try:
        payload = asyncio.run(_run(command, rest))
    except (RetriesExhausted, PipelineBusy, ValidationUnavailable) as e:
        print(f"Error: {e.message} ({e})", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _positional(args: list[str]) -> str:
    if not args or args[0].startswith("--"):
        raise ValueError("missing WORD argument")
    return args[0]


async def _run(command: str, args: list[str]) -> dict:
    from word_forge.app import build_forge
    from word_forge.config import load_settings

    forge = build_forge(load_settings())
    if command == "word":
        result = await forge.generate_word(_parse_flag(args, "--letter", ""), enriched="--enriched" in args)
        return result.to_dict()
    if command == "question":
        result = await forge.generate_question(_parse_flag(args, "--tier", "easy"))
        return result.to_dict()
    if command == "topic":
        result = await forge.generate_vocabulary(_parse_flag(args, "--topic", ""))
        return result.to_dict()
    if command == "validate":
        result = await forge.validate_word(_positional(args), translate="--translate" in args)
        return result.to_dict()
    word = _positional(args)
    language = _parse_flag(args, "--to", forge.validator.target_language)
    return {"word": word, "translation": await forge.translate_word(word, language), "targetLanguage": language}


def _serve(args: list[str]):
    import uvicorn

    port = int(_parse_flag(args, "--port", "5000"))
    host = _parse_flag(args, "--host", "127.0.0.1")
    print(f"Starting Word Forge on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    uvicorn.run(
        "word_forge.app:app",
        host=host,
        port=port,
        reload=False,
        timeout_graceful_shutdown=5,
    )


if __name__ == "__main__":
    sys.exit(main())
