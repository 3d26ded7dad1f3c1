"""Turn a generation request into a parsed candidate via one LLM call."""
from __future__ import annotations

import asyncio
import logging
import re
from typing import TYPE_CHECKING

from word_forge.errors import GeneratorUnavailable, MalformedCandidate
from word_forge.models import ByStartingLetter, ByTier, ByTopic, Candidate, GenerationRequest
from word_forge.prompts import TIER_HINTS, FlavorProfile, format_exclusions

if TYPE_CHECKING:
    from word_forge.providers.base import LLMProvider

_log = logging.getLogger("word_forge.generator")

_WORD_RE = re.compile(r"Word:\s*([^\n,]+)")
_OPTIONS_RE = re.compile(r"Options:\s*(.+?)(?=,?\s*Correct Answer:|\]|\n|$)")
_ANSWER_RE = re.compile(r"Correct Answer:\s*([^\n,]+)")
_OPTION_LABEL_RE = re.compile(r"^[A-Da-d][).:]\s*")


def _clean_option(raw: str) -> str:
    option = raw.strip().strip("[]").strip().strip("\"'").strip()
    return _OPTION_LABEL_RE.sub("", option).strip().strip("\"'.")


def parse_word_response(text: str, letter: str | None = None) -> Candidate | MalformedCandidate:
    """Extract a single word from free text.

    Takes the first whitespace-delimited token and strips everything that is
    not a letter.  Never raises; returns a ``MalformedCandidate`` instead.
    """
    word = (text or "").strip().lower()
    if len(word) >= 2 and word[0] == word[-1] == '"':
        word = word[1:-1]
    tokens = word.split()
    word = re.sub(r"[^a-z]", "", tokens[0]) if tokens else ""
    if not word:
        return MalformedCandidate(f"no word in response: {text!r:.80}")
    if letter and not word.startswith(letter.lower()):
        return MalformedCandidate(f"{word!r} does not start with {letter!r}")
    return Candidate(text=word)


def parse_question_response(text: str) -> Candidate | MalformedCandidate:
    """Pull the labelled Word/Options/Correct Answer fields out of *text*."""
    text = text or ""
    word_m = _WORD_RE.search(text)
    options_m = _OPTIONS_RE.search(text)
    answer_m = _ANSWER_RE.search(text)
    missing = [
        label for label, m in (("Word", word_m), ("Options", options_m), ("Correct Answer", answer_m))
        if m is None
    ]
    if missing:
        return MalformedCandidate(f"missing fields: {', '.join(missing)}")

    word = word_m.group(1).strip().strip("[]\"'").strip()
    options = [_clean_option(o) for o in re.split(r",\s*", options_m.group(1))]
    options = [o for o in options if o]
    if len(options) != 4:
        return MalformedCandidate(f"options must be 4 (got {len(options)})")
    answer = _clean_option(answer_m.group(1))
    if answer.lower() not in (o.lower() for o in options):
        return MalformedCandidate(f"correct answer {answer!r} is not one of the options")
    if not word:
        return MalformedCandidate("empty word field")
    return Candidate(text=word, options=options, correct_answer=answer)


def build_prompt(request: GenerationRequest, profile: FlavorProfile, exclusions: list[str]) -> str:
    fields = {"exclusions": format_exclusions(exclusions)}
    if isinstance(request, ByStartingLetter):
        fields["letter"] = request.letter
    elif isinstance(request, ByTier):
        fields["tier_hint"] = TIER_HINTS[request.tier]
    elif isinstance(request, ByTopic):
        fields["topic"] = request.topic
    return profile.user_template.format(**fields).strip()


class CandidateGenerator:
    def __init__(self, llm: LLMProvider, timeout: float = 30.0):
        self.llm = llm
        self.timeout = timeout

    async def generate(
        self,
        request: GenerationRequest,
        profile: FlavorProfile,
        exclusions: list[str],
    ) -> Candidate:
        prompt = build_prompt(request, profile, exclusions)
        try:
            response = await asyncio.wait_for(
                self.llm.generate(
                    prompt,
                    temperature=profile.temperature,
                    system=profile.system_prompt,
                    max_tokens=profile.max_tokens,
                    top_p=profile.top_p,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise GeneratorUnavailable(f"LLM call timed out after {self.timeout}s") from e
        except Exception as e:
            raise GeneratorUnavailable(str(e)) from e
        _log.debug("Raw response: %.300s", response)

        if profile.kind == "question":
            parsed = parse_question_response(response)
        else:
            letter = request.letter if isinstance(request, ByStartingLetter) else None
            parsed = parse_word_response(response, letter)
        if isinstance(parsed, MalformedCandidate):
            raise parsed
        return parsed
