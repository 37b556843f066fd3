"""Read-only access to the content catalog (courses, subjects, chapters, questions)."""

import logging
import uuid
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql.expression import func

from quizhub.db.models import Chapter, Course, Question, Subject
from quizhub.services.errors import StorageFailure
from quizhub.services.scope import QuizScope

logger = logging.getLogger(__name__)


class ContentStore:
    """Thin query layer over the catalog tables. Never writes."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def _scope_filters(self, scope: QuizScope) -> list:
        filters = [Question.is_active.is_(True)]
        if scope.course_id is not None:
            filters.append(Question.course_id == scope.course_id)
        if scope.subject_id is not None:
            filters.append(Question.subject_id == scope.subject_id)
        if scope.chapter_id is not None:
            filters.append(Question.chapter_id == scope.chapter_id)
        return filters

    def find_questions_by_scope(self, scope: QuizScope) -> list[Question]:
        """All active questions matching every supplied scope id."""
        try:
            return list(self._db.scalars(select(Question).where(*self._scope_filters(scope))))
        except SQLAlchemyError as exc:
            logger.error("Question lookup by scope failed: %s", exc)
            raise StorageFailure("Content store unavailable") from exc

    def sample_question_ids(self, scope: QuizScope, size: int) -> list[uuid.UUID]:
        """Uniform random draw (without replacement) of up to *size* active ids."""
        stmt = (
            select(Question.id)
            .where(*self._scope_filters(scope))
            .order_by(func.random())
            .limit(size)
        )
        try:
            return list(self._db.scalars(stmt))
        except SQLAlchemyError as exc:
            logger.error("Question sampling failed: %s", exc)
            raise StorageFailure("Content store unavailable") from exc

    def find_questions_by_ids(self, ids: Iterable[uuid.UUID]) -> list[Question]:
        """Bulk fetch; the result order is whatever the database returns."""
        ids = list(ids)
        if not ids:
            return []
        try:
            return list(self._db.scalars(select(Question).where(Question.id.in_(ids))))
        except SQLAlchemyError as exc:
            logger.error("Question lookup by ids failed: %s", exc)
            raise StorageFailure("Content store unavailable") from exc

    def find_titles(
        self,
        course_ids: Iterable[uuid.UUID] = (),
        subject_ids: Iterable[uuid.UUID] = (),
        chapter_ids: Iterable[uuid.UUID] = (),
    ) -> dict[uuid.UUID, str]:
        """Map course/subject/chapter ids to their titles for listings."""
        titles: dict[uuid.UUID, str] = {}
        try:
            for model, ids in ((Course, course_ids), (Subject, subject_ids), (Chapter, chapter_ids)):
                wanted = {i for i in ids if i is not None}
                if not wanted:
                    continue
                rows = self._db.execute(select(model.id, model.title).where(model.id.in_(wanted)))
                titles.update({row.id: row.title for row in rows})
        except SQLAlchemyError as exc:
            logger.error("Title lookup failed: %s", exc)
            raise StorageFailure("Content store unavailable") from exc
        return titles
