"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse

from quizhub import __version__
from quizhub.api import health_router, quizzes_router
from quizhub.config import Settings, settings as default_settings
from quizhub.core.security import TokenVerifier
from quizhub.db import session as db_session
from quizhub.schemas.common import ErrorResponse
from quizhub.services.errors import QuizError
from quizhub.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 quizhub backend starting…")
    yield
    logger.info("✅ quizhub backend shut down")


async def quiz_error_handler(request: Request, exc: QuizError) -> JSONResponse:
    body = ErrorResponse(error_code=exc.error_code, message=exc.message, details=exc.details)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; *settings* is the only configuration source."""
    settings = settings or default_settings

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s  %(name)-25s  %(levelname)-8s  %(message)s",
    )
    db_session.configure(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

    app = FastAPI(
        title="quizhub API",
        description="Quiz generation and scoring for the Course → Subject → Chapter catalog",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.token_verifier = TokenVerifier(settings.SECRET_KEY, settings.ALGORITHM)
    app.state.rate_limiter = RateLimiter(
        settings.REDIS_URL,
        rpm=settings.RATE_LIMIT_GENERATE_RPM,
        burst=settings.RATE_LIMIT_GENERATE_BURST,
    )

    # ── Middleware ─────────────────────────────────────────────────────────────

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

    app.add_exception_handler(QuizError, quiz_error_handler)

    # ── Routers ───────────────────────────────────────────────────────────────

    app.include_router(health_router, tags=["Health"])
    app.include_router(quizzes_router, prefix="/api/quizzes", tags=["Quiz"])

    @app.get("/")
    async def root():
        return {
            "name": "quizhub API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()
