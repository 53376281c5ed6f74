"""Spiritual Gifts scoring logic.

Single source of truth for turning a Likert response set (question id ->
1..5) into a ranked gift profile. Every caller (preview endpoint, submission,
draft flow) goes through ``score_assessment``; nothing else re-implements the
arithmetic.

Unanswered questions are excluded: a question whose response is absent or
``None`` counts toward neither its gift's total nor its question count, and
does not enter the overall average.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Mapping, Optional, Sequence

from app.core.spiritual_gifts_map import SpiritualGiftQuestion
from app.core.spiritual_profiles import classify

logger = logging.getLogger("app.scoring")

MIN_RESPONSE = 1
MAX_RESPONSE = 5
TOP_GIFT_COUNT = 3


class InvalidInput(ValueError):
    """Raised when a question/response set cannot be scored."""


@dataclass(frozen=True)
class GiftScore:
    gift: str
    total_score: int
    question_count: int
    average_score: float


@dataclass(frozen=True)
class SpiritualProfile:
    top_gifts: List[str]
    profile_label: str
    profile_description: str
    serving_style: str
    average_score: float
    engagement_level: str

    def to_dict(self) -> Dict:
        return {
            "topGifts": list(self.top_gifts),
            "profileLabel": self.profile_label,
            "profileDescription": self.profile_description,
            "servingStyle": self.serving_style,
            "averageScore": self.average_score,
            "engagementLevel": self.engagement_level,
        }


@dataclass(frozen=True)
class AssessmentScore:
    profile: SpiritualProfile
    gift_scores: List[GiftScore] = field(default_factory=list)
    overall_average: float = 0.0
    answered_count: int = 0


def _gift_name(gift) -> str:
    return gift.value if hasattr(gift, "value") else str(gift)


def round_half_up(value: float, places: int = 1) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _is_valid_response(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and MIN_RESPONSE <= value <= MAX_RESPONSE


def validate_answers(questions: Sequence[SpiritualGiftQuestion], answers: Mapping[str, Optional[int]]) -> List[str]:
    """Return list of validation error messages (empty if valid).

    Missing answers are not errors; they are excluded at scoring time.
    """
    errors: List[str] = []
    seen = set()
    duplicates = set()
    for question in questions:
        if question.id in seen:
            duplicates.add(question.id)
        seen.add(question.id)
    if duplicates:
        errors.append(f"Duplicate question ids: {', '.join(sorted(duplicates))}")
    unexpected = sorted(k for k in answers.keys() if k not in seen)
    if unexpected:
        errors.append(f"Unexpected items: {', '.join(unexpected)}")
    out_of_range = sorted(
        k for k, v in answers.items()
        if k in seen and v is not None and not _is_valid_response(v)
    )
    if out_of_range:
        errors.append(f"Out-of-range ({MIN_RESPONSE}-{MAX_RESPONSE}) values: {', '.join(out_of_range)}")
    return errors


def score_assessment(questions: Sequence[SpiritualGiftQuestion], responses: Mapping[str, Optional[int]]) -> AssessmentScore:
    """Compute per-gift scores, top gifts and the profile classification.

    Raises ``InvalidInput`` for an empty question set, a response set with no
    answers, or any validation error reported by ``validate_answers``.
    """
    if not questions:
        raise InvalidInput("no questions provided")
    if not any(v is not None for v in responses.values()):
        raise InvalidInput("no responses provided")
    errors = validate_answers(questions, responses)
    if errors:
        raise InvalidInput("; ".join(errors))

    # Per-gift totals, keyed in first-appearance order
    totals: Dict[str, List[int]] = {}
    answered: List[int] = []
    for question in questions:
        gift = _gift_name(question.gift)
        bucket = totals.setdefault(gift, [0, 0])
        value = responses.get(question.id)
        if value is None:
            continue
        bucket[0] += value
        bucket[1] += 1
        answered.append(value)

    gift_scores = [
        GiftScore(gift=gift, total_score=total, question_count=count, average_score=total / count)
        for gift, (total, count) in totals.items()
        if count > 0
    ]
    # sorted() is stable, so equal averages keep first-appearance order
    ranked = sorted(gift_scores, key=lambda g: -g.average_score)
    top_gifts = [g.gift for g in ranked[:TOP_GIFT_COUNT]]

    overall_average = sum(answered) / len(answered)
    tier = classify(overall_average)
    profile = SpiritualProfile(
        top_gifts=top_gifts,
        profile_label=tier.label,
        profile_description=tier.description,
        serving_style=tier.serving_style,
        average_score=round_half_up(overall_average),
        engagement_level=tier.engagement_level.value,
    )
    logger.debug(
        "Scored %d/%d answers across %d gifts -> %s (%.3f)",
        len(answered), len(questions), len(gift_scores), tier.label, overall_average,
    )
    return AssessmentScore(
        profile=profile,
        gift_scores=gift_scores,
        overall_average=overall_average,
        answered_count=len(answered),
    )


def calculate_profile(questions: Sequence[SpiritualGiftQuestion], responses: Mapping[str, Optional[int]]) -> SpiritualProfile:
    return score_assessment(questions, responses).profile


__all__ = [
    "InvalidInput",
    "GiftScore",
    "SpiritualProfile",
    "AssessmentScore",
    "validate_answers",
    "score_assessment",
    "calculate_profile",
    "round_half_up",
]
