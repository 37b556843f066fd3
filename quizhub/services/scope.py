"""Quiz scope: which part of the Course → Subject → Chapter tree a quiz covers."""

import uuid
from dataclasses import dataclass

from quizhub.db.models import ScopeLevelEnum
from quizhub.services.errors import InvalidScope

# Narrowest supplied identifier wins. Changing this order would re-categorize
# historical sessions, so it is the single place the rule lives.
LEVEL_PRECEDENCE: tuple[tuple[str, ScopeLevelEnum], ...] = (
    ("chapter_id", ScopeLevelEnum.CHAPTER),
    ("subject_id", ScopeLevelEnum.SUBJECT),
    ("course_id", ScopeLevelEnum.COURSE),
)


@dataclass(frozen=True)
class QuizScope:
    course_id: uuid.UUID | None = None
    subject_id: uuid.UUID | None = None
    chapter_id: uuid.UUID | None = None

    @property
    def is_empty(self) -> bool:
        return self.course_id is None and self.subject_id is None and self.chapter_id is None

    @property
    def level(self) -> ScopeLevelEnum:
        for field_name, level in LEVEL_PRECEDENCE:
            if getattr(self, field_name) is not None:
                return level
        raise InvalidScope("Provide courseId or subjectId or chapterId")


def _parse_id(raw: str | None, name: str) -> uuid.UUID | None:
    if raw is None or not raw.strip():
        return None
    try:
        return uuid.UUID(raw.strip())
    except ValueError:
        raise InvalidScope(f"Invalid {name}", details={name: raw}) from None


def parse_scope(
    course_id: str | None = None,
    subject_id: str | None = None,
    chapter_id: str | None = None,
) -> QuizScope:
    """Build a scope from raw query values.

    Raises ``InvalidScope`` when nothing is supplied or a value is not a
    well-formed identifier.
    """
    scope = QuizScope(
        course_id=_parse_id(course_id, "courseId"),
        subject_id=_parse_id(subject_id, "subjectId"),
        chapter_id=_parse_id(chapter_id, "chapterId"),
    )
    if scope.is_empty:
        raise InvalidScope("Provide courseId or subjectId or chapterId")
    return scope
