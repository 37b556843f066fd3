"""Quiz submission: owner check, scoring, one-shot status flip, attempt recording."""

import logging
import uuid
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from quizhub.db.models import QuizAttempt
from quizhub.services.attempts import AttemptRecorder
from quizhub.services.content_store import ContentStore
from quizhub.services.errors import QuizError, StorageFailure
from quizhub.services.scoring import ScoringEngine, ScoringResult
from quizhub.services.sessions import QuizSessionManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionOutcome:
    quiz_id: uuid.UUID
    attempt: QuizAttempt
    result: ScoringResult


class QuizSubmissionService:
    def __init__(self, db: Session) -> None:
        store = ContentStore(db)
        self.sessions = QuizSessionManager(db, store)
        self.engine = ScoringEngine(store)
        self.recorder = AttemptRecorder(db)

    def submit(self, quiz_id: uuid.UUID, owner_id: str, raw_answers: Any) -> SubmissionOutcome:
        """Score and close a quiz session exactly once.

        The status flip is committed before the attempt is written. If
        recording then fails the session stays SUBMITTED and the failure is
        surfaced as ``StorageFailure``; only the recording step needs
        reconciliation.
        """
        try:
            session = self.sessions.get(quiz_id, owner_id)
            scored = self.engine.score(session, raw_answers)
            self.sessions.mark_submitted(session)
        except QuizError as exc:
            logger.warning("Rejected submission of quiz %s by %s: %s", quiz_id, owner_id, exc.message)
            raise

        try:
            attempt = self.recorder.record(session, scored.result, scored.answers, scored.verdicts)
        except StorageFailure:
            logger.error(
                "Quiz %s is SUBMITTED but its attempt was not recorded (owner=%s, score=%d); "
                "needs reconciliation",
                quiz_id, owner_id, scored.result.score,
            )
            raise

        logger.info(
            "Quiz %s submitted by %s: %d/%d correct, score %d",
            quiz_id, owner_id, scored.result.correct_answers,
            scored.result.total_questions, scored.result.score,
        )
        return SubmissionOutcome(quiz_id=quiz_id, attempt=attempt, result=scored.result)
