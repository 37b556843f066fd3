"""Scoring engine: answer-shape normalization and deterministic scoring.

Clients submit answers in one of two wire shapes:

* keyed      ``[{"questionId": "...", "selectedIndex": 2}, ...]``
* positional ``[2, 0, 1, ...]`` aligned with the session's question order

The raw payload is resolved once into ``KeyedAnswers`` or
``PositionalAnswers``; everything downstream works on the resolved type.
"""

import logging
import math
import uuid
from dataclasses import dataclass
from typing import Any, Union

from quizhub.db.models import QuizSession, SessionStatusEnum
from quizhub.services.content_store import ContentStore
from quizhub.services.errors import AlreadySubmitted, InvalidAnswers

logger = logging.getLogger(__name__)

# Where a keyed answer may carry its selected option, highest priority first.
# The last two are legacy client field names; the first non-null value wins.
SELECTED_INDEX_FIELDS: tuple[str, ...] = ("selectedIndex", "answerIndex", "correctIndex")


@dataclass(frozen=True)
class KeyedAnswer:
    question_id: str
    selected_index: Any


@dataclass(frozen=True)
class KeyedAnswers:
    items: tuple[KeyedAnswer, ...]


@dataclass(frozen=True)
class PositionalAnswers:
    values: tuple[Any, ...]


SubmittedAnswers = Union[KeyedAnswers, PositionalAnswers]


@dataclass(frozen=True)
class NormalizedAnswer:
    question_id: str
    selected_index: float | None


@dataclass(frozen=True)
class ScoringResult:
    score: int
    correct_answers: int
    total_questions: int


def _selected_index(item: dict[str, Any]) -> Any:
    for field_name in SELECTED_INDEX_FIELDS:
        value = item.get(field_name)
        if value is not None:
            return value
    return None


def parse_answers(raw: Any) -> SubmittedAnswers:
    """Resolve the raw ``answers`` payload into one of the two answer shapes.

    The keyed shape is chosen when the first element is an object; elements
    without a ``questionId`` are dropped. Anything that is not a list is
    rejected with ``InvalidAnswers``.
    """
    if not isinstance(raw, (list, tuple)):
        raise InvalidAnswers("answers must be an array")

    if raw and isinstance(raw[0], dict):
        items = tuple(
            KeyedAnswer(question_id=str(item["questionId"]), selected_index=_selected_index(item))
            for item in raw
            if isinstance(item, dict) and item.get("questionId") is not None
        )
        return KeyedAnswers(items=items)
    return PositionalAnswers(values=tuple(raw))


def to_number(value: Any) -> float | None:
    """Coerce an answer value to a number; ``None`` when it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _canonical_id(value: str) -> str:
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return value


def normalize_answers(answers: SubmittedAnswers, question_ids: list[uuid.UUID]) -> list[NormalizedAnswer]:
    """Flatten either shape into ``(question_id, selected_index)`` pairs.

    Keyed answers keep only the first answer per question so a repeated id
    cannot be counted twice.
    """
    if isinstance(answers, PositionalAnswers):
        values = answers.values
        return [
            NormalizedAnswer(
                question_id=str(qid),
                selected_index=to_number(values[idx]) if idx < len(values) else None,
            )
            for idx, qid in enumerate(question_ids)
        ]
    if isinstance(answers, KeyedAnswers):
        seen: set[str] = set()
        normalized: list[NormalizedAnswer] = []
        for item in answers.items:
            question_id = _canonical_id(item.question_id)
            if question_id in seen:
                continue
            seen.add(question_id)
            normalized.append(
                NormalizedAnswer(question_id=question_id, selected_index=to_number(item.selected_index))
            )
        return normalized
    raise TypeError(f"Unsupported answer shape: {type(answers).__name__}")


def compute_score(
    answers: list[NormalizedAnswer],
    correct_index_by_id: dict[str, int],
    total_questions: int,
) -> tuple[ScoringResult, list[bool]]:
    """Count matches against *correct_index_by_id*; the denominator is always *total_questions*."""
    verdicts: list[bool] = []
    for answer in answers:
        correct_index = correct_index_by_id.get(answer.question_id)
        verdicts.append(
            correct_index is not None
            and answer.selected_index is not None
            and answer.selected_index == float(correct_index)
        )
    correct = sum(verdicts)
    # Percentage rounded half-up (12.5 → 13), in integer arithmetic
    score = 0 if total_questions == 0 else (correct * 200 + total_questions) // (2 * total_questions)
    return ScoringResult(score=score, correct_answers=correct, total_questions=total_questions), verdicts


@dataclass(frozen=True)
class ScoredSubmission:
    result: ScoringResult
    answers: list[NormalizedAnswer]
    verdicts: list[bool]


class ScoringEngine:
    def __init__(self, store: ContentStore) -> None:
        self._store = store

    def score(self, session: QuizSession, raw_answers: Any) -> ScoredSubmission:
        """Score *raw_answers* against an owner-checked *session*.

        Raises ``AlreadySubmitted`` for a closed session and ``InvalidAnswers``
        for a payload that is not a list. Has no side effects.
        """
        if session.status != SessionStatusEnum.CREATED:
            raise AlreadySubmitted("Quiz already submitted")
        answers = parse_answers(raw_answers)

        question_ids = session.question_ids
        questions = self._store.find_questions_by_ids(question_ids)
        correct_index_by_id = {str(q.id): q.correct_index for q in questions}

        normalized = normalize_answers(answers, question_ids)
        result, verdicts = compute_score(normalized, correct_index_by_id, len(question_ids))
        logger.debug(
            "Scored quiz %s: %d/%d (%d%%)",
            session.id, result.correct_answers, result.total_questions, result.score,
        )
        return ScoredSubmission(result=result, answers=normalized, verdicts=verdicts)
