"""Profile classification table for spiritual gifts results.

Tiers are evaluated in descending ``min_average`` order against the unrounded
overall average; the first tier whose threshold is met wins.
"""
from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import List


class EngagementLevel(str, enum.Enum):
    high = "High"
    moderate = "Moderate"
    supportive = "Supportive"


@dataclass(frozen=True)
class ProfileTier:
    min_average: float
    label: str
    engagement_level: EngagementLevel
    description: str
    serving_style: str


PROFILE_TIERS: List[ProfileTier] = [
    ProfileTier(
        4.5,
        "Kingdom Champion",
        EngagementLevel.high,
        "You show strong, consistent passion across your gifts and are ready to carry significant ministry responsibility.",
        "Leads from the front, taking on visible roles and rallying others to serve.",
    ),
    ProfileTier(
        4.0,
        "Faithful Servant",
        EngagementLevel.high,
        "You serve with steady commitment and clear strengths that others can depend on.",
        "Takes ownership of ongoing ministry work and follows through reliably.",
    ),
    ProfileTier(
        3.5,
        "Growing Disciple",
        EngagementLevel.high,
        "Your gifts are emerging and growing; focused opportunities will help them flourish.",
        "Serves hands-on alongside a team while developing stronger gifts.",
    ),
    ProfileTier(
        2.5,
        "Willing Helper",
        EngagementLevel.moderate,
        "You are open to serving and bring a willing heart to wherever help is needed.",
        "Supports existing ministries in practical, well-defined tasks.",
    ),
    ProfileTier(
        float("-inf"),
        "Humble Servant",
        EngagementLevel.supportive,
        "You are at the start of discovering your gifts; small steps of service will reveal where you thrive.",
        "Serves behind the scenes in low-pressure roles while exploring new areas.",
    ),
]


def classify(overall_average: float) -> ProfileTier:
    """Return the first tier whose threshold the overall average meets."""
    for tier in PROFILE_TIERS:
        if overall_average >= tier.min_average:
            return tier
    return PROFILE_TIERS[-1]  # NaN never meets a threshold


__all__ = ["EngagementLevel", "ProfileTier", "PROFILE_TIERS", "classify"]
