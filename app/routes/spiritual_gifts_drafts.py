from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging
import uuid

from app.db import get_db
from app.models.assessment import Assessment
from app.models.assessment_draft import AssessmentDraft
from app.models.user import User
from app.schemas.spiritual_gifts import (
    DraftAnswers,
    DraftCreate,
    DraftOut,
    QuestionItem,
    SpiritualGiftsResult,
)
from app.core.settings import settings
from app.core.spiritual_gifts_map import AssessmentTier, questions_for_tier
from app.services.assessment_progress import AssessmentProgress, InvalidTransition, ProgressState
from app.services.auth import get_current_user
from app.services.audit import log_draft_transition
from app.services.spiritual_gifts_records import record_assessment, serialize_assessment
from app.services.spiritual_gifts_scoring import InvalidInput
from app.exceptions import ConflictException, NotFoundException, ValidationException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assessments/spiritual-gifts/drafts", tags=["spiritual-gifts"])


def _load_draft(db: Session, draft_id: str, user: User) -> AssessmentDraft:
    draft = db.query(AssessmentDraft).filter(AssessmentDraft.id == draft_id, AssessmentDraft.user_id == user.id).first()
    if not draft:
        raise NotFoundException("Draft not found")
    return draft

def _progress(draft: AssessmentDraft) -> AssessmentProgress:
    return AssessmentProgress(
        questions_for_tier(draft.tier),
        page_size=settings.assessment_page_size,
        answers=draft.answers,
        state=draft.status,
        page=draft.page,
    )

def _store(db: Session, draft: AssessmentDraft, progress: AssessmentProgress, action: str, user: User) -> None:
    # Reassign so the JSON column is flagged dirty
    draft.answers = dict(progress.answers)
    draft.page = progress.page
    draft.status = progress.state.value
    db.commit()
    db.refresh(draft)
    log_draft_transition(user.id, draft.id, action, draft.status, draft.page)

def _to_out(draft: AssessmentDraft, progress: AssessmentProgress) -> DraftOut:
    return DraftOut(
        id=draft.id,
        tier=draft.tier,
        status=progress.state.value,
        page=progress.page,
        page_count=progress.page_count,
        answers=progress.answers,
        questions=[QuestionItem(id=q.id, gift=q.gift, prompt=q.prompt) for q in progress.current_page_questions],
        assessment_id=draft.assessment_id,
    )

def _apply(db: Session, draft: AssessmentDraft, user: User, action: str, step) -> DraftOut:
    progress = _progress(draft)
    try:
        step(progress)
    except InvalidTransition as exc:
        raise ConflictException(str(exc))
    except InvalidInput as exc:
        raise ValidationException(str(exc))
    _store(db, draft, progress, action, user)
    return _to_out(draft, progress)


@router.post("", response_model=DraftOut, status_code=201, summary="Start a paginated assessment attempt")
def create_draft(body: DraftCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    prefill = {}
    if body.deepen:
        if body.tier != AssessmentTier.expanded:
            raise ValidationException("deepen is only available for the expanded assessment")
        quick = (
            db.query(Assessment)
            .filter(Assessment.user_id == current_user.id, Assessment.tier == AssessmentTier.quick.value)
            .order_by(Assessment.created_at.desc(), Assessment.id.desc())
            .first()
        )
        if not quick:
            raise NotFoundException("No quick assessment to deepen")
        prefill = dict(quick.answers or {})
    draft = AssessmentDraft(
        id=str(uuid.uuid4()),
        user_id=current_user.id,
        tier=body.tier.value,
        answers=prefill,
        page=0,
        status=ProgressState.not_started.value,
    )
    db.add(draft)
    progress = _progress(draft)
    progress.start()
    _store(db, draft, progress, "start", current_user)
    logger.info(f"Draft {draft.id} started (tier={draft.tier}, prefilled={len(prefill)})")
    return _to_out(draft, progress)


@router.get("/{draft_id}", response_model=DraftOut)
def get_draft(draft_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    draft = _load_draft(db, draft_id, current_user)
    return _to_out(draft, _progress(draft))


@router.put("/{draft_id}/answers", response_model=DraftOut)
def save_draft_answers(draft_id: str, body: DraftAnswers, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    draft = _load_draft(db, draft_id, current_user)
    return _apply(db, draft, current_user, "answer", lambda p: p.record_answers(body.answers))


@router.post("/{draft_id}/advance", response_model=DraftOut)
def advance_draft(draft_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    draft = _load_draft(db, draft_id, current_user)
    return _apply(db, draft, current_user, "advance", lambda p: p.advance())


@router.post("/{draft_id}/back", response_model=DraftOut)
def draft_go_back(draft_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    draft = _load_draft(db, draft_id, current_user)
    return _apply(db, draft, current_user, "back", lambda p: p.go_back())


@router.post("/{draft_id}/submit", response_model=SpiritualGiftsResult, summary="Submit and score a completed draft")
def submit_draft(draft_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    draft = _load_draft(db, draft_id, current_user)
    progress = _progress(draft)
    try:
        progress.submit()
        result = progress.score()
    except InvalidTransition as exc:
        raise ConflictException(str(exc))
    except InvalidInput as exc:
        raise ValidationException(str(exc))
    scored_ids = {q.id for q in progress.questions}
    answers = {k: v for k, v in progress.answers.items() if k in scored_ids}
    assessment = record_assessment(db, current_user, draft.tier, answers, result)
    draft.assessment_id = assessment.id
    _store(db, draft, progress, "submit", current_user)
    return serialize_assessment(assessment)
