"""Tests for response parsing and the candidate generator."""
from __future__ import annotations

import asyncio

import pytest

from conftest import QUESTION_RESPONSE, FakeLLM
from word_forge.errors import GeneratorUnavailable, MalformedCandidate
from word_forge.generator import (
    CandidateGenerator,
    build_prompt,
    parse_question_response,
    parse_word_response,
)
from word_forge.models import ByStartingLetter, ByTier, ByTopic, Candidate
from word_forge.prompts import FLAVORS


class TestParseWordResponse:
    def test_plain_word(self):
        c = parse_word_response("Banana")
        assert isinstance(c, Candidate)
        assert c.text == "banana"

    def test_quoted_word(self):
        assert parse_word_response('"banana"').text == "banana"

    def test_first_token_only(self):
        assert parse_word_response("banana is a fruit").text == "banana"

    def test_strips_punctuation(self):
        assert parse_word_response("  Banana.\n").text == "banana"

    def test_empty_is_malformed(self):
        assert isinstance(parse_word_response(""), MalformedCandidate)
        assert isinstance(parse_word_response("123 !!"), MalformedCandidate)

    def test_wrong_starting_letter_is_malformed(self):
        assert isinstance(parse_word_response("apple", letter="b"), MalformedCandidate)

    def test_starting_letter_is_case_insensitive(self):
        assert parse_word_response("Banana", letter="B").text == "banana"


class TestParseQuestionResponse:
    def test_valid(self):
        c = parse_question_response(QUESTION_RESPONSE)
        assert isinstance(c, Candidate)
        assert c.text == "happy"
        assert c.options == ["sad", "joyful", "angry", "tired"]
        assert c.correct_answer == "joyful"

    def test_lettered_options(self):
        text = "Word: Brave\nOptions: [A) timid, B) courageous, C) lazy, D) weak]\nCorrect Answer: B) courageous"
        c = parse_question_response(text)
        assert c.text == "Brave"
        assert c.options == ["timid", "courageous", "lazy", "weak"]
        assert c.correct_answer == "courageous"

    def test_unbracketed_options(self):
        c = parse_question_response("Word: happy, Options: sad, joyful, angry, tired, Correct Answer: joyful")
        assert isinstance(c, Candidate)
        assert c.options == ["sad", "joyful", "angry", "tired"]
        assert c.correct_answer == "joyful"

    def test_unbracketed_options_on_own_line(self):
        c = parse_question_response("Word: happy\nOptions: sad, joyful, angry, tired\nCorrect Answer: joyful")
        assert c.options == ["sad", "joyful", "angry", "tired"]

    def test_missing_options_is_malformed(self):
        result = parse_question_response("Word: happy, Correct Answer: joyful")
        assert isinstance(result, MalformedCandidate)
        assert "Options" in str(result)

    def test_three_options_is_malformed(self):
        text = "Word: happy, Options: [sad, joyful, angry], Correct Answer: joyful"
        assert isinstance(parse_question_response(text), MalformedCandidate)

    def test_answer_not_in_options_is_malformed(self):
        text = "Word: happy, Options: [sad, glad, angry, tired], Correct Answer: joyful"
        assert isinstance(parse_question_response(text), MalformedCandidate)

    def test_garbage_never_raises(self):
        for text in ("", "Word:", "Options: ]", None):
            assert isinstance(parse_question_response(text), MalformedCandidate)


class TestBuildPrompt:
    def test_letter_prompt(self):
        prompt = build_prompt(ByStartingLetter("b"), FLAVORS["word"], [])
        assert 'starts with the letter "b"' in prompt
        assert "Do not use" not in prompt

    def test_exclusions_listed(self):
        prompt = build_prompt(ByStartingLetter("b"), FLAVORS["word"], ["banana", "bread"])
        assert "banana, bread" in prompt

    def test_tier_hint(self):
        prompt = build_prompt(ByTier("hard"), FLAVORS["question_hard"], [])
        assert "advanced" in prompt
        assert "Correct Answer:" in prompt

    def test_topic_prompt(self):
        prompt = build_prompt(ByTopic("cooking"), FLAVORS["topic"], [])
        assert '"cooking"' in prompt


class TestCandidateGenerator:
    @pytest.mark.asyncio
    async def test_word_candidate(self):
        llm = FakeLLM(["Banana"])
        gen = CandidateGenerator(llm)
        c = await gen.generate(ByStartingLetter("b"), FLAVORS["word"], [])
        assert c.text == "banana"
        assert llm.calls[0]["max_tokens"] == 5
        assert llm.calls[0]["system"] == FLAVORS["word"].system_prompt

    @pytest.mark.asyncio
    async def test_question_candidate(self):
        gen = CandidateGenerator(FakeLLM([QUESTION_RESPONSE]))
        c = await gen.generate(ByTier("easy"), FLAVORS["question_easy"], [])
        assert c.correct_answer == "joyful"

    @pytest.mark.asyncio
    async def test_llm_error_is_unavailable(self):
        gen = CandidateGenerator(FakeLLM([ConnectionError("quota")]))
        with pytest.raises(GeneratorUnavailable):
            await gen.generate(ByStartingLetter("b"), FLAVORS["word"], [])

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self):
        class SlowLLM(FakeLLM):
            async def generate(self, prompt, **kwargs):
                await asyncio.sleep(1)
                return "banana"

        gen = CandidateGenerator(SlowLLM(), timeout=0.01)
        with pytest.raises(GeneratorUnavailable):
            await gen.generate(ByStartingLetter("b"), FLAVORS["word"], [])

    @pytest.mark.asyncio
    async def test_unparseable_is_malformed(self):
        gen = CandidateGenerator(FakeLLM(["no labels here"]))
        with pytest.raises(MalformedCandidate):
            await gen.generate(ByTier("easy"), FLAVORS["question_easy"], [])
