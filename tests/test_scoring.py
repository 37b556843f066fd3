"""Unit tests for answer normalization and score computation."""

import uuid

import pytest

from quizhub.services.errors import InvalidAnswers
from quizhub.services.scoring import (
    KeyedAnswers,
    NormalizedAnswer,
    PositionalAnswers,
    compute_score,
    normalize_answers,
    parse_answers,
    to_number,
)

Q1, Q2, Q3 = (uuid.uuid4() for _ in range(3))


class TestParseAnswers:
    def test_object_first_element_selects_keyed_shape(self):
        parsed = parse_answers([{"questionId": str(Q1), "selectedIndex": 2}])
        assert isinstance(parsed, KeyedAnswers)
        assert parsed.items[0].question_id == str(Q1)
        assert parsed.items[0].selected_index == 2

    def test_scalar_first_element_selects_positional_shape(self):
        parsed = parse_answers([1, None, "2"])
        assert isinstance(parsed, PositionalAnswers)
        assert parsed.values == (1, None, "2")

    def test_empty_list_is_positional(self):
        assert isinstance(parse_answers([]), PositionalAnswers)

    @pytest.mark.parametrize("raw", [None, 3, "0,1", {"questionId": "x"}])
    def test_non_list_is_rejected(self, raw):
        with pytest.raises(InvalidAnswers):
            parse_answers(raw)

    def test_entries_without_question_id_are_dropped(self):
        parsed = parse_answers([
            {"questionId": str(Q1), "selectedIndex": 0},
            {"selectedIndex": 1},
            {"questionId": None, "selectedIndex": 1},
            7,
        ])
        assert [a.question_id for a in parsed.items] == [str(Q1)]

    def test_legacy_field_priority(self):
        parsed = parse_answers([
            {"questionId": "a", "selectedIndex": 1, "answerIndex": 2, "correctIndex": 3},
            {"questionId": "b", "selectedIndex": None, "answerIndex": 2, "correctIndex": 3},
            {"questionId": "c", "correctIndex": 3},
            {"questionId": "d"},
        ])
        assert [a.selected_index for a in parsed.items] == [1, 2, 3, None]


class TestToNumber:
    @pytest.mark.parametrize(
        "value, expected",
        [(2, 2.0), (2.0, 2.0), ("2", 2.0), (" 3 ", 3.0), ("1.5", 1.5)],
    )
    def test_numeric_values(self, value, expected):
        assert to_number(value) == expected

    @pytest.mark.parametrize(
        "value",
        [None, "", "  ", "abc", True, False, [1], {"a": 1}, float("nan"), 10**400, "9" * 400],
    )
    def test_non_numeric_values(self, value):
        assert to_number(value) is None


class TestNormalizeAnswers:
    def test_positional_aligns_with_session_order(self):
        normalized = normalize_answers(PositionalAnswers(values=(0, "1")), [Q1, Q2, Q3])
        assert normalized == [
            NormalizedAnswer(question_id=str(Q1), selected_index=0.0),
            NormalizedAnswer(question_id=str(Q2), selected_index=1.0),
            NormalizedAnswer(question_id=str(Q3), selected_index=None),
        ]

    def test_positional_extra_values_are_ignored(self):
        normalized = normalize_answers(PositionalAnswers(values=(0, 1, 2, 3)), [Q1])
        assert len(normalized) == 1

    def test_keyed_ids_are_canonicalized(self):
        parsed = parse_answers([{"questionId": str(Q1).upper(), "selectedIndex": 1}])
        normalized = normalize_answers(parsed, [Q1])
        assert normalized[0].question_id == str(Q1)

    def test_keyed_duplicates_keep_first(self):
        parsed = parse_answers([
            {"questionId": str(Q1), "selectedIndex": 1},
            {"questionId": str(Q1), "selectedIndex": 2},
        ])
        normalized = normalize_answers(parsed, [Q1])
        assert normalized == [NormalizedAnswer(question_id=str(Q1), selected_index=1.0)]


class TestComputeScore:
    def test_three_of_four(self):
        correct = {"a": 0, "b": 1, "c": 2, "d": 3}
        answers = [
            NormalizedAnswer("a", 0.0),
            NormalizedAnswer("b", 1.0),
            NormalizedAnswer("c", 2.0),
            NormalizedAnswer("d", 0.0),
        ]
        result, verdicts = compute_score(answers, correct, total_questions=4)
        assert (result.score, result.correct_answers, result.total_questions) == (75, 3, 4)
        assert verdicts == [True, True, True, False]

    def test_out_of_session_answers_do_not_count(self):
        result, verdicts = compute_score(
            [NormalizedAnswer("a", 0.0), NormalizedAnswer("zzz", 0.0)],
            {"a": 0, "b": 1},
            total_questions=2,
        )
        assert result.correct_answers == 1
        assert result.score == 50
        assert verdicts == [True, False]

    def test_absent_index_never_matches_zero(self):
        result, _ = compute_score([NormalizedAnswer("a", None)], {"a": 0}, total_questions=1)
        assert result.correct_answers == 0

    def test_rounds_half_up(self):
        answers = [NormalizedAnswer("a", 0.0)]
        result, _ = compute_score(answers, {"a": 0}, total_questions=8)
        assert result.score == 13  # 12.5

    def test_zero_total_scores_zero(self):
        result, _ = compute_score([], {}, total_questions=0)
        assert result.score == 0
