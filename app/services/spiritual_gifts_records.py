"""Persistence helpers for scored spiritual gifts assessments."""
from __future__ import annotations
import logging
import uuid
from dataclasses import asdict
from typing import Dict, Optional

from sqlalchemy.orm import Session

from app.models.assessment import Assessment
from app.models.user import User
from app.schemas.spiritual_gifts import GiftScore, SpiritualGiftsResult, SpiritualProfile
from app.services.audit import log_assessment_submit
from app.services.spiritual_gifts_scoring import AssessmentScore

logger = logging.getLogger("app.spiritual_gifts")


def record_assessment(db: Session, user: User, tier: str, answers: Dict[str, Optional[int]], result: AssessmentScore) -> Assessment:
    """Store a scored attempt and copy its profile onto the user record."""
    profile = result.profile.to_dict()
    assessment = Assessment(
        id=str(uuid.uuid4()),
        user_id=user.id,
        tier=tier,
        answers={k: v for k, v in answers.items() if v is not None},
        profile=profile,
        gift_scores=[GiftScore(**asdict(g)).model_dump(by_alias=True) for g in result.gift_scores],
    )
    db.add(assessment)
    # The caller's user may be bound to another session; update the row in this one
    db.get(User, user.id).spiritual_profile = profile
    db.commit()
    db.refresh(assessment)
    log_assessment_submit(user.id, assessment.id, tier, profile["profileLabel"], result.answered_count)
    return assessment


def serialize_assessment(assessment: Assessment) -> SpiritualGiftsResult:
    return SpiritualGiftsResult(
        id=assessment.id,
        user_id=assessment.user_id,
        tier=assessment.tier,
        created_at=assessment.created_at,
        profile=SpiritualProfile.model_validate(assessment.profile or {}),
        gift_scores=[GiftScore.model_validate(g) for g in (assessment.gift_scores or [])],
    )
