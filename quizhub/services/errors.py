"""Domain errors raised by the quiz core.

Each error knows the HTTP status it maps to; ``quizhub.main`` renders them
with the shared ``ErrorResponse`` envelope.
"""

from typing import Any, Optional


class QuizError(Exception):
    status_code: int = 400
    error_code: str = "quiz_error"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidScope(QuizError):
    status_code = 400
    error_code = "invalid_scope"


class InvalidAnswers(QuizError):
    status_code = 400
    error_code = "invalid_answers"


class EmptyPool(QuizError):
    """No active questions for the requested scope."""

    status_code = 404
    error_code = "empty_pool"


class NotFound(QuizError):
    status_code = 404
    error_code = "not_found"


class Forbidden(QuizError):
    status_code = 403
    error_code = "forbidden"


class AlreadySubmitted(QuizError):
    status_code = 409
    error_code = "already_submitted"


class StorageFailure(QuizError):
    status_code = 503
    error_code = "storage_failure"
