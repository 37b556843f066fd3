"""Quiz session routes.

Flow:
  1. GET  /api/quizzes/generate            → sample questions, create a session
  2. GET  /api/quizzes/{quiz_id}/questions → questions of a session, in order
  3. POST /api/quizzes/submit              → score once, record the attempt
  4. GET  /api/quizzes                     → caller's sessions, newest first

Correct answers never leave the server before submission.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from quizhub.api.deps import get_current_identity
from quizhub.core.security import Identity
from quizhub.db.models import Question, QuizSession
from quizhub.db.session import get_db
from quizhub.schemas.common import DataResponse, ListResponse
from quizhub.schemas.quiz import (
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
from quizhub.services.content_store import ContentStore
from quizhub.services.rate_limiter import require_generate_rate_limit
from quizhub.services.sampler import QuestionSampler, parse_limit
from quizhub.services.scope import parse_scope
from quizhub.services.sessions import QuizSessionManager
from quizhub.services.submission import QuizSubmissionService

logger = logging.getLogger(__name__)
router = APIRouter()


# ── Helpers ───────────────────────────────────────────────────────────────────


def _question_read(q: Question) -> QuestionRead:
    return QuestionRead(
        id=q.id,
        question=q.question,
        options=list(q.options or []),
        difficulty=q.difficulty.value,
        course_id=q.course_id,
        subject_id=q.subject_id,
        chapter_id=q.chapter_id,
    )


def _scope_ref(scope_id: uuid.UUID | None, titles: dict[uuid.UUID, str]) -> ScopeRef | None:
    if scope_id is None:
        return None
    return ScopeRef(id=scope_id, title=titles.get(scope_id))


def _session_titles(store: ContentStore, sessions: list[QuizSession]) -> dict[uuid.UUID, str]:
    return store.find_titles(
        course_ids=[s.course_id for s in sessions],
        subject_ids=[s.subject_id for s in sessions],
        chapter_ids=[s.chapter_id for s in sessions],
    )


# ── Endpoints ─────────────────────────────────────────────────────────────────


@router.get("", response_model=ListResponse[QuizSessionSummary])
def list_my_quizzes(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """List the caller's quiz sessions, newest first."""
    store = ContentStore(db)
    sessions = QuizSessionManager(db, store).list_for_owner(identity.owner_id)
    titles = _session_titles(store, sessions)

    summaries = [
        QuizSessionSummary(
            id=s.id,
            level=ScopeLevel(s.level.value),
            status=SessionStatus(s.status.value),
            course_id=s.course_id,
            subject_id=s.subject_id,
            chapter_id=s.chapter_id,
            course_title=titles.get(s.course_id) if s.course_id else None,
            subject_title=titles.get(s.subject_id) if s.subject_id else None,
            chapter_title=titles.get(s.chapter_id) if s.chapter_id else None,
            created_at=s.created_at,
            submitted_at=s.submitted_at,
        )
        for s in sessions
    ]
    return ListResponse(
        message="Quizzes retrieved successfully", count=len(summaries), data=summaries
    )


@router.get(
    "/generate",
    response_model=DataResponse[QuizGenerated],
    status_code=status.HTTP_201_CREATED,
)
def generate_quiz(
    request: Request,
    course_id: str | None = Query(None, alias="courseId"),
    subject_id: str | None = Query(None, alias="subjectId"),
    chapter_id: str | None = Query(None, alias="chapterId"),
    limit: str | None = Query(None, description="Number of questions (1-200, default 20)"),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
    _rl=Depends(require_generate_rate_limit),
):
    """Sample questions for a course, subject or chapter and open a quiz session."""
    settings = request.app.state.settings
    scope = parse_scope(course_id, subject_id, chapter_id)
    size = parse_limit(limit, default=settings.QUIZ_DEFAULT_LIMIT, maximum=settings.QUIZ_MAX_LIMIT)

    store = ContentStore(db)
    question_ids = QuestionSampler(store).sample(scope, size)
    manager = QuizSessionManager(db, store)
    session = manager.create(identity.owner_id, scope, question_ids)
    questions = manager.ordered_questions(session)

    return DataResponse(
        message="Quiz generated successfully",
        data=QuizGenerated(
            quiz_id=session.id,
            level=ScopeLevel(session.level.value),
            course_id=session.course_id,
            subject_id=session.subject_id,
            chapter_id=session.chapter_id,
            total_questions=len(session.question_ids),
            questions=[_question_read(q) for q in questions],
        ),
    )


@router.get("/{quiz_id}/questions", response_model=DataResponse[QuizQuestionsRead])
def get_quiz_questions(
    quiz_id: uuid.UUID,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Return the questions of one of the caller's sessions in their original order."""
    store = ContentStore(db)
    manager = QuizSessionManager(db, store)
    session = manager.get(quiz_id, identity.owner_id)
    questions = manager.ordered_questions(session)
    titles = _session_titles(store, [session])

    return DataResponse(
        message="Quiz questions retrieved successfully",
        data=QuizQuestionsRead(
            quiz_id=session.id,
            level=ScopeLevel(session.level.value),
            course=_scope_ref(session.course_id, titles),
            subject=_scope_ref(session.subject_id, titles),
            chapter=_scope_ref(session.chapter_id, titles),
            total_questions=len(questions),
            questions=[_question_read(q) for q in questions],
        ),
    )


@router.post("/submit", response_model=DataResponse[QuizSubmitResult])
def submit_quiz(
    body: QuizSubmit,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Score the answers of a quiz session. Each session can be submitted once."""
    outcome = QuizSubmissionService(db).submit(body.quiz_id, identity.owner_id, body.answers)
    return DataResponse(
        message="Quiz submitted successfully",
        data=QuizSubmitResult(
            quiz_id=outcome.quiz_id,
            attempt_id=outcome.attempt.id,
            score=outcome.result.score,
            total_questions=outcome.result.total_questions,
            correct_answers=outcome.result.correct_answers,
        ),
    )
