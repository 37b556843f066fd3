"""Attempt recorder: append-only log of scored submissions."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quizhub.db.models import QuizAttempt, QuizAttemptAnswer, QuizSession
from quizhub.services.errors import StorageFailure
from quizhub.services.scoring import NormalizedAnswer, ScoringResult

logger = logging.getLogger(__name__)


class AttemptRecorder:
    def __init__(self, db: Session) -> None:
        self._db = db

    def record(
        self,
        session: QuizSession,
        result: ScoringResult,
        answers: list[NormalizedAnswer],
        verdicts: list[bool] | None = None,
    ) -> QuizAttempt:
        """Insert the attempt for *session*. Scope fields are copied, not re-derived."""
        verdicts = verdicts or [False] * len(answers)
        attempt = QuizAttempt(
            owner_id=session.owner_id,
            session_id=session.id,
            course_id=session.course_id,
            subject_id=session.subject_id,
            chapter_id=session.chapter_id,
            level=session.level,
            score=result.score,
            correct_answers=result.correct_answers,
            total_questions=result.total_questions,
        )
        attempt.answers = [
            QuizAttemptAnswer(
                position=idx,
                question_id=answer.question_id,
                selected_index=answer.selected_index,
                is_correct=is_correct,
            )
            for idx, (answer, is_correct) in enumerate(zip(answers, verdicts))
        ]
        try:
            self._db.add(attempt)
            self._db.commit()
            self._db.refresh(attempt)
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise StorageFailure("Failed to record quiz attempt") from exc
        return attempt
