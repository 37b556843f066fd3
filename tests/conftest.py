"""Shared pytest fixtures for backend tests."""

import uuid
from dataclasses import dataclass, field
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from quizhub.config import Settings
from quizhub.core.security import create_access_token
from quizhub.db import models  # noqa: F401  (registers tables)
from quizhub.db.models import Chapter, Course, DifficultyEnum, Question, Subject
from quizhub.db.session import Base, get_db
from quizhub.main import create_app

TEST_SECRET = "test-secret-key"

# Use an in-memory SQLite database for testing with static pool
SQLALCHEMY_TEST_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,  # Use StaticPool to keep connection alive
    echo=False,
)
TestSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

# Create all tables once at startup
Base.metadata.create_all(bind=engine)

test_settings = Settings(
    DATABASE_URL=SQLALCHEMY_TEST_URL,
    SECRET_KEY=TEST_SECRET,
    RATE_LIMIT_GENERATE_RPM=0,
    ALLOWED_HOSTS=["*"],
)
app = create_app(test_settings)


@pytest.fixture(scope="function")
def db():
    """Get a fresh DB session for each test."""
    session = TestSession()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def client(db: Session):
    """FastAPI test client with overridden DB dependency."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ── Helpers ────────────────────────────────────────────────────────────────────


def make_token(owner_id: str, role: str = "user") -> str:
    return create_access_token(
        {"sub": owner_id, "role": role},
        secret_key=TEST_SECRET,
        expires_delta=timedelta(minutes=test_settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def auth_headers(owner_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(owner_id)}"}


def new_owner() -> str:
    return f"user-{uuid.uuid4().hex[:12]}"


@dataclass
class Catalog:
    course: Course
    subject: Subject
    chapter: Chapter
    questions: list[Question] = field(default_factory=list)


def seed_catalog(
    db: Session,
    n_questions: int = 5,
    inactive: int = 0,
    course: Course | None = None,
    subject: Subject | None = None,
) -> Catalog:
    """Insert a course → subject → chapter branch with *n_questions* active MCQs.

    Question ``i`` has ``correct_index == i % 4``. *inactive* extra questions
    are added with ``is_active=False``.
    """
    if course is None:
        course = Course(title=f"Course {uuid.uuid4().hex[:6]}")
        db.add(course)
        db.flush()
    if subject is None:
        subject = Subject(course_id=course.id, title=f"Subject {uuid.uuid4().hex[:6]}")
        db.add(subject)
        db.flush()
    chapter = Chapter(subject_id=subject.id, title=f"Chapter {uuid.uuid4().hex[:6]}")
    db.add(chapter)
    db.flush()

    questions = []
    for i in range(n_questions + inactive):
        q = Question(
            course_id=course.id,
            subject_id=subject.id,
            chapter_id=chapter.id,
            question=f"Question {i + 1}?",
            options=["A", "B", "C", "D"],
            correct_index=i % 4,
            explanation=f"Because {i % 4}",
            difficulty=DifficultyEnum.MEDIUM,
            is_active=i < n_questions,
        )
        db.add(q)
        questions.append(q)
    db.commit()
    for q in questions:
        db.refresh(q)
    return Catalog(course=course, subject=subject, chapter=chapter, questions=questions[:n_questions])
