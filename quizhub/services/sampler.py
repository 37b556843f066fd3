"""Question sampler: draws the question set for a new quiz session."""

import logging
import re
import uuid

from quizhub.services.content_store import ContentStore
from quizhub.services.errors import EmptyPool
from quizhub.services.scope import QuizScope

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 200

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_limit(raw: str | int | None, default: int = DEFAULT_LIMIT, maximum: int = MAX_LIMIT) -> int:
    """Turn the raw ``limit`` query value into a sample size in ``[1, maximum]``.

    The integer prefix of the value is used ("12abc" → 12). Missing,
    non-numeric and zero values fall back to *default*.
    """
    value = 0
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    elif isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        if match:
            value = int(match.group(1))
    if value == 0:
        value = default
    return max(1, min(value, maximum))


class QuestionSampler:
    def __init__(self, store: ContentStore) -> None:
        self._store = store

    def sample(self, scope: QuizScope, count: int) -> list[uuid.UUID]:
        """Return ``min(count, pool size)`` distinct active question ids.

        Raises ``EmptyPool`` when no active question matches *scope*.
        """
        question_ids = self._store.sample_question_ids(scope, count)
        if not question_ids:
            logger.info("No active questions for scope %s", scope)
            raise EmptyPool("No questions found for the selected scope")
        return question_ids
