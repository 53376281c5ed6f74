from fastapi import FastAPI, Request
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import os
from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from app.core.logging_config import setup_logging
from app.core.settings import settings
from app.core.spiritual_gifts_map import QUESTION_ITEMS, TIER_QUESTIONS
from app.middleware.logging import LoggingMiddleware
from app.config import init_firebase
from app.routes import health, spiritual_gifts, spiritual_gifts_drafts
from app.exceptions import (
    UnauthorizedException, ForbiddenException,
    NotFoundException, ValidationException, ConflictException
)

logger = setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("=" * 50)
    logger.info("Spiritual Gifts Assessment API starting up")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"CORS origins: {settings.cors_origins}")
    logger.info(f"Question bank: {len(QUESTION_ITEMS)} items, tiers " + ", ".join(f"{t.value}={len(q)}" for t, q in TIER_QUESTIONS.items()))
    logger.info(f"SQL Debug: {'enabled' if settings.sql_debug else 'disabled'}")
    logger.info("=" * 50)
    yield
    logger.info("Spiritual Gifts Assessment API shutting down")

app = FastAPI(
    title="Spiritual Gifts Assessment API",
    description="Spiritual gifts assessment scoring and profile service",
    version="1.0.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

# Last added = first executed
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_origins != ["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["*"],
)

# Initialize Firebase (skip in test environment)
if os.getenv("ENV") != "test":
    init_firebase()

app.include_router(health.router, prefix="/health", tags=["Health"])
app.include_router(spiritual_gifts_drafts.router)
app.include_router(spiritual_gifts.router)


def _error_response(request: Request, status_code: int, detail, level: str = "warning") -> JSONResponse:
    correlation_id = getattr(request.state, 'correlation_id', 'unknown')
    getattr(logger, level)(f"[{correlation_id}] {status_code} on {request.url.path}: {detail}")
    return JSONResponse(status_code=status_code, content={"detail": detail, "correlation_id": correlation_id})

@app.exception_handler(UnauthorizedException)
async def unauthorized_exception_handler(request: Request, exc: UnauthorizedException):
    return _error_response(request, 401, exc.detail)

@app.exception_handler(ForbiddenException)
async def forbidden_exception_handler(request: Request, exc: ForbiddenException):
    return _error_response(request, 403, exc.detail)

@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    return _error_response(request, 400, exc.detail)

@app.exception_handler(NotFoundException)
async def not_found_exception_handler(request: Request, exc: NotFoundException):
    return _error_response(request, 404, exc.detail)

@app.exception_handler(ConflictException)
async def conflict_exception_handler(request: Request, exc: ConflictException):
    return _error_response(request, 409, exc.detail)

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    correlation_id = getattr(request.state, 'correlation_id', 'unknown')
    logger.error(f"[{correlation_id}] Unhandled exception on {request.url.path}: {str(exc)}", exc_info=True)
    content = {"detail": "Internal server error", "correlation_id": correlation_id}
    if settings.is_development:
        content.update(error=str(exc), type=type(exc).__name__)
    return JSONResponse(status_code=500, content=content)

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Spiritual Gifts Assessment API",
        "version": "1.0.0",
        "environment": settings.environment,
        "docs_url": "/docs" if settings.is_development else None,
        "health_check": "/health",
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_level="info" if settings.is_development else "warning"
    )
