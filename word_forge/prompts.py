"""Prompt templates and the per-flavor generation table."""
from __future__ import annotations

from dataclasses import dataclass

WORD_SYSTEM_PROMPT = "You are a helpful assistant. Please provide a single English word."

WORD_PROMPT = """\
Give me a single English word that starts with the letter "{letter}".
{exclusions}"""

QUESTION_SYSTEM_PROMPT = "You are a helpful assistant."

QUESTION_PROMPT = """\
Give me a word and four options where one of the options is a synonym of the word. \
{tier_hint}
{exclusions}
Format it as: "Word: [word], Options: [option1, option2, option3, option4], \
Correct Answer: [correctOption]"
"""

TIER_HINTS = {
    "easy": "Use a common, everyday word that a beginner English learner would know.",
    "medium": "Use a moderately advanced word that an intermediate English learner is still learning.",
    "hard": "Use a rare, sophisticated word that challenges an advanced English learner.",
}

TOPIC_SYSTEM_PROMPT = "You are a vocabulary tutor. Reply with a single English word and nothing else."

TOPIC_PROMPT = """\
Give me one useful English vocabulary word related to the topic "{topic}".
{exclusions}"""

TRANSLATE_PROMPT = """\
Translate the following English text into the language with code "{target_language}". \
Reply with the translation only, no quotes or commentary.

{text}"""


def format_exclusions(words: list[str], limit: int = 50) -> str:
    if not words:
        return ""
    shown = ", ".join(words[-limit:])
    return f"Do not use any of these words: {shown}."


@dataclass(frozen=True)
class FlavorProfile:
    name: str
    kind: str  # word | question
    system_prompt: str
    user_template: str
    max_tokens: int
    temperature: float
    max_attempts: int
    top_p: float | None = None
    translate: bool = False
    guarded: bool = False


def _question(tier: str) -> FlavorProfile:
    return FlavorProfile(
        name=f"question_{tier}",
        kind="question",
        system_prompt=QUESTION_SYSTEM_PROMPT,
        user_template=QUESTION_PROMPT,
        max_tokens=100,
        temperature=0.7,
        max_attempts=20,
        guarded=True,
    )


FLAVORS: dict[str, FlavorProfile] = {
    "word": FlavorProfile(
        name="word",
        kind="word",
        system_prompt=WORD_SYSTEM_PROMPT,
        user_template=WORD_PROMPT,
        max_tokens=5,
        temperature=0.7,
        max_attempts=3,
    ),
    "word_enriched": FlavorProfile(
        name="word_enriched",
        kind="word",
        system_prompt=WORD_SYSTEM_PROMPT,
        user_template=WORD_PROMPT,
        max_tokens=5,
        temperature=0.7,
        max_attempts=3,
        translate=True,
    ),
    "question_easy": _question("easy"),
    "question_medium": _question("medium"),
    "question_hard": _question("hard"),
    "topic": FlavorProfile(
        name="topic",
        kind="word",
        system_prompt=TOPIC_SYSTEM_PROMPT,
        user_template=TOPIC_PROMPT,
        max_tokens=10,
        temperature=0.8,
        top_p=0.9,
        max_attempts=10,
        translate=True,
    ),
}
