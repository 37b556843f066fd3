"""Quiz session manager: creation, owner-checked access and the one-shot status flip."""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from quizhub.db.models import Question, QuizSession, QuizSessionQuestion, SessionStatusEnum
from quizhub.services.content_store import ContentStore
from quizhub.services.errors import AlreadySubmitted, Forbidden, NotFound, StorageFailure
from quizhub.services.scope import QuizScope

logger = logging.getLogger(__name__)


class QuizSessionManager:
    def __init__(self, db: Session, store: ContentStore | None = None) -> None:
        self._db = db
        self._store = store or ContentStore(db)

    def create(self, owner_id: str, scope: QuizScope, question_ids: list[uuid.UUID]) -> QuizSession:
        """Persist a new CREATED session with *question_ids* in the given order."""
        if not question_ids:
            raise ValueError("A quiz session needs at least one question")

        session = QuizSession(
            owner_id=owner_id,
            course_id=scope.course_id,
            subject_id=scope.subject_id,
            chapter_id=scope.chapter_id,
            level=scope.level,
            status=SessionStatusEnum.CREATED,
        )
        session.session_questions = [
            QuizSessionQuestion(question_id=qid, position=idx)
            for idx, qid in enumerate(question_ids)
        ]
        try:
            self._db.add(session)
            self._db.commit()
            self._db.refresh(session)
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.error("Failed to create quiz session for %s: %s", owner_id, exc)
            raise StorageFailure("Failed to create quiz session") from exc

        logger.info(
            "Created quiz session %s (level=%s, questions=%d) for %s",
            session.id, session.level.value, len(question_ids), owner_id,
        )
        return session

    def get(self, session_id: uuid.UUID, requesting_owner_id: str) -> QuizSession:
        """Load a session, enforcing that *requesting_owner_id* owns it."""
        try:
            session = self._db.scalars(
                select(QuizSession)
                .where(QuizSession.id == session_id)
                .options(selectinload(QuizSession.session_questions))
            ).first()
        except SQLAlchemyError as exc:
            raise StorageFailure("Failed to load quiz session") from exc

        if session is None:
            raise NotFound("Quiz not found")
        if str(session.owner_id) != str(requesting_owner_id):
            logger.warning(
                "Owner mismatch on quiz %s: requested by %s", session_id, requesting_owner_id
            )
            raise Forbidden("Forbidden")
        return session

    def list_for_owner(self, owner_id: str) -> list[QuizSession]:
        """Owner's sessions, newest first."""
        try:
            return list(
                self._db.scalars(
                    select(QuizSession)
                    .where(QuizSession.owner_id == owner_id)
                    .order_by(QuizSession.created_at.desc())
                )
            )
        except SQLAlchemyError as exc:
            raise StorageFailure("Failed to list quiz sessions") from exc

    def ordered_questions(self, session: QuizSession) -> list[Question]:
        """Session questions in canonical order; ids missing from the catalog are skipped."""
        by_id = {q.id: q for q in self._store.find_questions_by_ids(session.question_ids)}
        return [by_id[qid] for qid in session.question_ids if qid in by_id]

    def mark_submitted(self, session: QuizSession) -> datetime:
        """Flip CREATED → SUBMITTED as a single conditional update.

        Zero affected rows means another submission won the race, which is
        reported as ``AlreadySubmitted``. On storage errors the transaction
        is rolled back and the session stays CREATED.
        """
        session_id = session.id
        submitted_at = datetime.now(timezone.utc)
        stmt = (
            update(QuizSession)
            .where(
                QuizSession.id == session_id,
                QuizSession.status == SessionStatusEnum.CREATED,
            )
            .values(status=SessionStatusEnum.SUBMITTED, submitted_at=submitted_at)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self._db.execute(stmt)
            if result.rowcount == 0:
                self._db.rollback()
                raise AlreadySubmitted("Quiz already submitted")
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.error("Status flip failed for quiz %s: %s", session_id, exc)
            raise StorageFailure("Failed to submit quiz; it can be retried") from exc

        return submitted_at
