"""Initial migration - content catalog and quiz session tables

Revision ID: 0_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '0_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ── Create enums ──────────────────────────────────────────────────
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE difficulty_enum AS ENUM ('EASY', 'MEDIUM', 'HARD');
        EXCEPTION WHEN duplicate_object THEN null;
        END $$;
    """)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE scope_level_enum AS ENUM ('COURSE', 'SUBJECT', 'CHAPTER');
        EXCEPTION WHEN duplicate_object THEN null;
        END $$;
    """)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE session_status_enum AS ENUM ('CREATED', 'SUBMITTED');
        EXCEPTION WHEN duplicate_object THEN null;
        END $$;
    """)

    level_enum = postgresql.ENUM('COURSE', 'SUBJECT', 'CHAPTER', name='scope_level_enum', create_type=False)

    # ── content catalog ───────────────────────────────────────────────
    op.create_table(
        'courses',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'subjects',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('course_id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_subjects_course_id', 'subjects', ['course_id'])
    op.create_table(
        'chapters',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('subject_id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['subject_id'], ['subjects.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_chapters_subject_id', 'chapters', ['subject_id'])
    op.create_table(
        'questions',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('course_id', sa.UUID(), nullable=False),
        sa.Column('subject_id', sa.UUID(), nullable=False),
        sa.Column('chapter_id', sa.UUID(), nullable=False),
        sa.Column('question', sa.Text(), nullable=False),
        sa.Column('options', sa.JSON(), nullable=False),
        sa.Column('correct_index', sa.Integer(), nullable=False),
        sa.Column('explanation', sa.Text(), nullable=False, server_default=''),
        sa.Column('difficulty', postgresql.ENUM('EASY', 'MEDIUM', 'HARD', name='difficulty_enum', create_type=False), nullable=False, server_default='MEDIUM'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id']),
        sa.ForeignKeyConstraint(['subject_id'], ['subjects.id']),
        sa.ForeignKeyConstraint(['chapter_id'], ['chapters.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_questions_course_id', 'questions', ['course_id'])
    op.create_index('ix_questions_subject_id', 'questions', ['subject_id'])
    op.create_index('ix_questions_chapter_id', 'questions', ['chapter_id'])
    op.create_index('ix_questions_is_active', 'questions', ['is_active'])

    # ── quiz sessions ─────────────────────────────────────────────────
    op.create_table(
        'quiz_sessions',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('owner_id', sa.Text(), nullable=False),
        sa.Column('course_id', sa.UUID(), nullable=True),
        sa.Column('subject_id', sa.UUID(), nullable=True),
        sa.Column('chapter_id', sa.UUID(), nullable=True),
        sa.Column('level', level_enum, nullable=False),
        sa.Column('status', postgresql.ENUM('CREATED', 'SUBMITTED', name='session_status_enum', create_type=False), nullable=False, server_default='CREATED'),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id']),
        sa.ForeignKeyConstraint(['subject_id'], ['subjects.id']),
        sa.ForeignKeyConstraint(['chapter_id'], ['chapters.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_quiz_sessions_owner_id', 'quiz_sessions', ['owner_id'])
    op.create_index('ix_quiz_sessions_created_at', 'quiz_sessions', ['created_at'])
    op.create_table(
        'quiz_session_questions',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('session_id', sa.UUID(), nullable=False),
        sa.Column('question_id', sa.UUID(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['session_id'], ['quiz_sessions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['question_id'], ['questions.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('session_id', 'position', name='uq_session_question_position'),
    )
    op.create_index('ix_quiz_session_questions_session_id', 'quiz_session_questions', ['session_id'])

    # ── attempts ──────────────────────────────────────────────────────
    op.create_table(
        'quiz_attempts',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('owner_id', sa.Text(), nullable=False),
        sa.Column('session_id', sa.UUID(), nullable=False),
        sa.Column('course_id', sa.UUID(), nullable=True),
        sa.Column('subject_id', sa.UUID(), nullable=True),
        sa.Column('chapter_id', sa.UUID(), nullable=True),
        sa.Column('level', level_enum, nullable=False),
        sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('correct_answers', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_questions', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('attempted_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['session_id'], ['quiz_sessions.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('session_id', name='uq_quiz_attempt_session'),
    )
    op.create_index('ix_quiz_attempts_owner_id', 'quiz_attempts', ['owner_id'])
    op.create_table(
        'quiz_attempt_answers',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('attempt_id', sa.UUID(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Text(), nullable=False),
        sa.Column('selected_index', sa.Float(), nullable=True),
        sa.Column('is_correct', sa.Boolean(), nullable=False, server_default='false'),
        sa.ForeignKeyConstraint(['attempt_id'], ['quiz_attempts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_quiz_attempt_answers_attempt_id', 'quiz_attempt_answers', ['attempt_id'])


def downgrade() -> None:
    op.drop_table('quiz_attempt_answers')
    op.drop_table('quiz_attempts')
    op.drop_table('quiz_session_questions')
    op.drop_table('quiz_sessions')
    op.drop_table('questions')
    op.drop_table('chapters')
    op.drop_table('subjects')
    op.drop_table('courses')

    sa.Enum(name='session_status_enum').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='scope_level_enum').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='difficulty_enum').drop(op.get_bind(), checkfirst=True)
