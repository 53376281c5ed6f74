"""Audit logging helper functions for key domain events.

Standard JSON-ish single-line logs so they are easy to index.
"""
from __future__ import annotations
import logging
from datetime import datetime, UTC
from typing import Optional, Any

_logger = logging.getLogger("app.audit")


def _emit(event: str, user_id: Optional[str] = None, **data: Any):
    payload = {"ts": datetime.now(UTC).isoformat(), "event": event}
    if user_id:
        payload["user_id"] = user_id
    payload.update(data)
    parts = [f"{k}={repr(v)}" for k, v in payload.items()]
    _logger.info("AUDIT " + " ".join(parts))

# Public convenience wrappers

def log_assessment_submit(user_id: str, assessment_id: str, tier: str, profile_label: str, answered: int):
    _emit("assessment.submit", user_id=user_id, assessment_id=assessment_id, tier=tier, profile_label=profile_label, answered=answered)

def log_assessment_view(user_id: str, assessment_id: str, actor_role: str, viewed_user_id: str):
    _emit("assessment.view", user_id=user_id, assessment_id=assessment_id, actor_role=actor_role, target_user_id=viewed_user_id)

def log_draft_transition(user_id: str, draft_id: str, action: str, status: str, page: int):
    _emit("draft.transition", user_id=user_id, draft_id=draft_id, action=action, status=status, page=page)
