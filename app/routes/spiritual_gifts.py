from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from dataclasses import asdict
from datetime import datetime
from typing import Optional
import base64
import json
import logging

from app.db import get_db
from app.models.assessment import Assessment
from app.models.user import User
from app.schemas.spiritual_gifts import (
    GiftScore,
    HistoryPage,
    QuestionItem,
    QuestionsResponse,
    ScorePreview,
    SpiritualGiftsResult,
    SpiritualGiftsSubmission,
    SpiritualProfile,
)
from app.core.settings import settings
from app.core.spiritual_gifts_map import AssessmentTier, questions_for_tier
from app.services.auth import get_current_user, require_admin_or_church_admin
from app.services.audit import log_assessment_view
from app.services.spiritual_gifts_records import record_assessment, serialize_assessment
from app.services.spiritual_gifts_scoring import InvalidInput, score_assessment
from app.exceptions import NotFoundException, ValidationException

logger = logging.getLogger("app.spiritual_gifts")

router = APIRouter(prefix="/assessments/spiritual-gifts", tags=["spiritual-gifts"])

QUESTION_BANK_VERSION = 1


def _role_value(user) -> str:
    return getattr(user.role, "value", str(user.role))


@router.get("/questions", response_model=QuestionsResponse, summary="Fetch ordered spiritual gifts questions for a tier")
def get_spiritual_gifts_questions(tier: AssessmentTier = AssessmentTier.quick, current_user: User = Depends(get_current_user)):
    """Return the tier's question items in canonical order."""
    items = [QuestionItem(id=q.id, gift=q.gift, prompt=q.prompt) for q in questions_for_tier(tier)]
    return QuestionsResponse(
        version=QUESTION_BANK_VERSION,
        tier=tier,
        count=len(items),
        page_size=settings.assessment_page_size,
        items=items,
    )


@router.post("/score", response_model=ScorePreview, summary="Score answers without saving")
def preview_spiritual_gifts(payload: SpiritualGiftsSubmission, current_user: User = Depends(get_current_user)):
    try:
        result = score_assessment(questions_for_tier(payload.tier), payload.answers)
    except InvalidInput as exc:
        raise ValidationException(str(exc))
    return ScorePreview(
        tier=payload.tier,
        answered_count=result.answered_count,
        profile=SpiritualProfile(**asdict(result.profile)),
        gift_scores=[GiftScore(**asdict(g)) for g in result.gift_scores],
    )


@router.post("/submit", response_model=SpiritualGiftsResult)
def submit_spiritual_gifts(payload: SpiritualGiftsSubmission, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    try:
        result = score_assessment(questions_for_tier(payload.tier), payload.answers)
    except InvalidInput as exc:
        raise ValidationException(str(exc))
    assessment = record_assessment(db, current_user, payload.tier.value, payload.answers, result)
    return serialize_assessment(assessment)


@router.get("/latest", response_model=SpiritualGiftsResult)
def latest_spiritual_gifts(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    assessment = (
        db.query(Assessment)
        .filter(Assessment.user_id == current_user.id)
        .order_by(Assessment.created_at.desc(), Assessment.id.desc())
        .first()
    )
    if not assessment:
        raise NotFoundException("No spiritual gifts assessment found")
    log_assessment_view(current_user.id, assessment.id, _role_value(current_user), current_user.id)
    return serialize_assessment(assessment)


def _encode_cursor(created_at: datetime, assessment_id: str) -> str:
    payload = {"ts": created_at.isoformat(), "id": assessment_id}
    return base64.urlsafe_b64encode(json.dumps(payload).encode()).decode()

def _decode_cursor(cursor: str) -> tuple[datetime, str]:
    try:
        raw = base64.urlsafe_b64decode(cursor.encode()).decode()
        data = json.loads(raw)
        return datetime.fromisoformat(data["ts"]), data["id"]
    except (ValueError, KeyError, TypeError):
        raise ValidationException("Invalid cursor")


@router.get("/history", response_model=HistoryPage)
def history_spiritual_gifts(limit: int = 20, cursor: Optional[str] = None, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    if limit <= 0 or limit > 100:
        raise ValidationException("limit must be between 1 and 100")
    base_query = db.query(Assessment).filter(Assessment.user_id == current_user.id)
    if cursor:
        ts, aid = _decode_cursor(cursor)
        # created_at descending; fetch records strictly older than cursor tuple
        base_query = base_query.filter(
            (Assessment.created_at < ts) | ((Assessment.created_at == ts) & (Assessment.id < aid))
        )
    rows = (
        base_query.order_by(Assessment.created_at.desc(), Assessment.id.desc())
        .limit(limit + 1)
        .all()
    )
    has_more = len(rows) > limit
    rows = rows[:limit]
    next_cursor = _encode_cursor(rows[-1].created_at, rows[-1].id) if has_more and rows else None
    return HistoryPage(results=[serialize_assessment(a) for a in rows], next_cursor=next_cursor)


@router.get("/{user_id}/latest", response_model=SpiritualGiftsResult, summary="Admin: latest spiritual gifts profile for a member")
def admin_latest_spiritual_gifts(user_id: str, db: Session = Depends(get_db), current_user: User = Depends(require_admin_or_church_admin)):
    assessment = (
        db.query(Assessment)
        .filter(Assessment.user_id == user_id)
        .order_by(Assessment.created_at.desc(), Assessment.id.desc())
        .first()
    )
    if not assessment:
        raise NotFoundException("No spiritual gifts assessment found for user")
    log_assessment_view(current_user.id, assessment.id, _role_value(current_user), user_id)
    return serialize_assessment(assessment)
