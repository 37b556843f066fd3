"""Pydantic schemas: re‑exported for convenience."""

from quizhub.schemas.common import DataResponse, ErrorResponse, ListResponse  # noqa: F401
from quizhub.schemas.quiz import (  # noqa: F401
    QuestionRead,
    QuizGenerated,
    QuizQuestionsRead,
    QuizSessionSummary,
    QuizSubmit,
    QuizSubmitResult,
    ScopeLevel,
    ScopeRef,
    SessionStatus,
)
