"""
Health check and monitoring endpoints.
"""
import time
import logging
from fastapi import APIRouter
from app.db import check_database_health
from app.core.settings import settings
from app.core.spiritual_gifts_map import QUESTION_ITEMS, TIER_QUESTIONS

logger = logging.getLogger("app.health")
router = APIRouter()

@router.get("")
async def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "environment": settings.environment,
        "version": "1.0.0",
        "question_bank": {
            "items": len(QUESTION_ITEMS),
            "tiers": {tier.value: len(items) for tier, items in TIER_QUESTIONS.items()},
        },
    }

@router.get("/ready")
async def readiness_check():
    """Kubernetes-style readiness probe."""
    db_health = await check_database_health()
    if db_health["status"] != "healthy":
        logger.error(f"Readiness check failed: {db_health['database']}")
        return {"status": "not_ready", "reason": "database_unavailable"}
    return {"status": "ready"}

@router.get("/live")
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"status": "alive", "timestamp": time.time()}
