"""Tests for answer scoring."""

import pytest

from models import QuestionType, QuizQuestion, VocabularyEntry
from quiz import (
    check_meaning_answer,
    check_usage_answer,
    get_answer_explanation,
    score_answer,
    tokenize,
)


def make_question(question_type: QuestionType, correct_answer: str) -> QuizQuestion:
    return QuizQuestion(
        id="q1",
        entry=VocabularyEntry(user_id="u", word="word"),
        question_type=question_type,
        text="prompt",
        correct_answer=correct_answer,
    )


class TestTokenize:
    """Tests for tokenize."""

    def test_splits_on_commas_and_whitespace(self):
        assert tokenize("Cat, feline  animal") == ["cat", "feline", "animal"]

    def test_splits_on_ideographic_comma(self):
        assert tokenize("ねこ、ネコ") == ["ねこ", "ネコ"]

    def test_empty_text(self):
        assert tokenize("  ,  ") == []


class TestMeaningScoring:
    """Tests for lenient meaning matching."""

    @pytest.mark.parametrize(
        "answer",
        ["cat", "Feline", "a cat", "cats", "fel"],
    )
    def test_token_overlap_is_correct(self, answer):
        assert check_meaning_answer("cat, feline", answer)

    @pytest.mark.parametrize(
        "answer, expected",
        [
            ("わくわく", True),
            ("興奮した", True),
            ("悲しい", False),
        ],
    )
    def test_japanese_definition(self, answer, expected):
        question = make_question(QuestionType.MEANING, "興奮した、わくわくした")
        assert score_answer(question, answer) is expected

    def test_no_overlap_is_incorrect(self):
        assert not check_meaning_answer("cat, feline", "dog")

    def test_empty_canonical_answer_is_always_correct(self):
        assert check_meaning_answer("", "anything")
        assert check_meaning_answer(" , ", "anything")

    def test_placeholder_definition_accepts_overlap(self):
        """The placeholder shares tokens with many answers."""
        question = make_question(QuestionType.MEANING, "No definition available")
        assert score_answer(question, "no idea")


class TestUsageScoring:
    """Tests for exact usage matching."""

    def test_exact_match_ignoring_case_and_whitespace(self):
        assert check_usage_answer("Apple", "  apple ")

    def test_trailing_punctuation_on_target_is_ignored(self):
        assert check_usage_answer("wow!", "wow")

    def test_partial_answer_is_incorrect(self):
        assert not check_usage_answer("apple", "app")

    @pytest.mark.parametrize(
        "target, answer, expected",
        [
            ("run!", "Run", True),
            ("Run", "run!", False),
            ("run!", "ran", False),
        ],
    )
    def test_case_and_punctuation_together(self, target, answer, expected):
        assert check_usage_answer(target, answer) is expected

    def test_cjk_word(self):
        question = make_question(QuestionType.USAGE, "猫")
        assert score_answer(question, "猫")
        assert not score_answer(question, "犬")


class TestScoreAnswer:
    """Tests for score_answer dispatch."""

    @pytest.mark.parametrize("question_type", list(QuestionType))
    @pytest.mark.parametrize("answer", ["", "   ", "\n"])
    def test_blank_answers_are_incorrect(self, question_type, answer):
        question = make_question(question_type, "")
        assert not score_answer(question, answer)

    def test_meaning_dispatch(self):
        question = make_question(QuestionType.MEANING, "to run")
        assert score_answer(question, "running")

    def test_usage_dispatch(self):
        question = make_question(QuestionType.USAGE, "run")
        assert not score_answer(question, "running")


class TestExplanation:
    """Tests for get_answer_explanation."""

    def test_correct(self):
        question = make_question(QuestionType.USAGE, "run")
        assert get_answer_explanation(question, True) == (
            "Correct! Well done.\nCorrect answer: run"
        )

    def test_incorrect(self):
        question = make_question(QuestionType.USAGE, "run")
        assert get_answer_explanation(question, False) == "Correct answer: run"
