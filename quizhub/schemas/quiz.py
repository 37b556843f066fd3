"""Quiz schemas.

Field names are snake_case in Python and camelCase on the wire.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True, "from_attributes": True}


class ScopeLevel(str, Enum):
    COURSE = "COURSE"
    SUBJECT = "SUBJECT"
    CHAPTER = "CHAPTER"


class SessionStatus(str, Enum):
    CREATED = "CREATED"
    SUBMITTED = "SUBMITTED"


class QuestionRead(BaseModel):
    """Single question as shown to a student; it never carries the answer."""

    id: uuid.UUID
    question: str
    options: list[str]
    difficulty: str
    course_id: uuid.UUID | None = None
    subject_id: uuid.UUID | None = None
    chapter_id: uuid.UUID | None = None

    model_config = _CAMEL


class ScopeRef(BaseModel):
    """Course / subject / chapter reference with its title."""

    id: uuid.UUID
    title: str | None = None

    model_config = _CAMEL


class QuizGenerated(BaseModel):
    """Body of GET /api/quizzes/generate."""

    quiz_id: uuid.UUID
    level: ScopeLevel
    course_id: uuid.UUID | None = None
    subject_id: uuid.UUID | None = None
    chapter_id: uuid.UUID | None = None
    total_questions: int
    questions: list[QuestionRead]

    model_config = _CAMEL


class QuizQuestionsRead(BaseModel):
    """Body of GET /api/quizzes/{quiz_id}/questions."""

    quiz_id: uuid.UUID
    level: ScopeLevel
    course: ScopeRef | None = None
    subject: ScopeRef | None = None
    chapter: ScopeRef | None = None
    total_questions: int
    questions: list[QuestionRead]

    model_config = _CAMEL


class QuizSessionSummary(BaseModel):
    """One row of GET /api/quizzes."""

    id: uuid.UUID
    level: ScopeLevel
    status: SessionStatus
    course_id: uuid.UUID | None = None
    subject_id: uuid.UUID | None = None
    chapter_id: uuid.UUID | None = None
    course_title: str | None = None
    subject_title: str | None = None
    chapter_title: str | None = None
    created_at: datetime
    submitted_at: datetime | None = None

    model_config = _CAMEL


class QuizSubmit(BaseModel):
    """POST /api/quizzes/submit.

    ``answers`` is either a list of ``{questionId, selectedIndex}`` objects or
    a flat list of indices in question order; its shape is checked by the
    scoring engine, not here.
    """

    quiz_id: uuid.UUID = Field(alias="quizId")
    answers: Any = None

    model_config = {"populate_by_name": True}


class QuizSubmitResult(BaseModel):
    """Score returned after a successful submission."""

    quiz_id: uuid.UUID
    attempt_id: uuid.UUID
    score: int
    total_questions: int
    correct_answers: int

    model_config = _CAMEL
