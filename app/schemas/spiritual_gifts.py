from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional
from datetime import datetime

from app.core.spiritual_gifts_map import AssessmentTier


class CamelModel(BaseModel):
    """Emits camelCase keys; accepts camelCase or snake_case input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class QuestionItem(CamelModel):
    id: str
    gift: str
    prompt: str

class QuestionsResponse(CamelModel):
    version: int
    tier: AssessmentTier
    count: int
    page_size: int
    items: List[QuestionItem]

class SpiritualGiftsSubmission(CamelModel):
    tier: AssessmentTier = AssessmentTier.quick
    answers: Dict[str, Optional[StrictInt]]

class GiftScore(CamelModel):
    gift: str
    total_score: int
    question_count: int
    average_score: float

class SpiritualProfile(CamelModel):
    top_gifts: List[str]
    profile_label: str
    profile_description: str
    serving_style: str
    average_score: float
    engagement_level: str

class ScorePreview(CamelModel):
    tier: AssessmentTier
    answered_count: int
    profile: SpiritualProfile
    gift_scores: List[GiftScore]

class SpiritualGiftsResult(CamelModel):
    id: str
    user_id: str
    tier: AssessmentTier
    created_at: datetime
    profile: SpiritualProfile
    gift_scores: List[GiftScore]

class HistoryPage(CamelModel):
    results: List[SpiritualGiftsResult]
    next_cursor: Optional[str] = None

class DraftCreate(CamelModel):
    tier: AssessmentTier = AssessmentTier.quick
    deepen: bool = Field(False, description="Prefill an expanded draft with answers from the latest quick assessment")

class DraftAnswers(CamelModel):
    answers: Dict[str, StrictInt]

class DraftOut(CamelModel):
    id: str
    tier: AssessmentTier
    status: str
    page: int
    page_count: int
    answers: Dict[str, int]
    questions: List[QuestionItem]
    assessment_id: Optional[str] = None
