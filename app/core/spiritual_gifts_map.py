"""Canonical Spiritual Gifts question bank.

This module centralizes the QUESTION_ITEMS (id, gift, prompt) and the tier
question sets so the API, the progress flow and the scorer share a single
authoritative source.

Validation helpers ensure integrity (120 total items, 12 gifts * 10 each,
full coverage, no duplicates). Importing this module will raise if invariants
break.
"""
from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import Dict, List


class Gift(str, enum.Enum):
    leadership = "Leadership"
    teaching = "Teaching"
    mercy = "Mercy"
    administration = "Administration"
    evangelism = "Evangelism"
    service = "Service"
    encouragement = "Encouragement"
    giving = "Giving"
    hospitality = "Hospitality"
    faith = "Faith"
    wisdom = "Wisdom"
    intercession = "Intercession"


class AssessmentTier(str, enum.Enum):
    quick = "quick"
    expanded = "expanded"


@dataclass(frozen=True)
class SpiritualGiftQuestion:
    id: str
    gift: str
    prompt: str = ""


QUESTIONS_PER_GIFT = 10
QUICK_QUESTIONS_PER_GIFT = 2

# Statements grouped by gift, in canonical order.
_STATEMENTS: Dict[Gift, List[str]] = {
    Gift.leadership: [
        "I enjoy organizing people and resources to accomplish goals.",
        "Others naturally look to me for direction during group activities.",
        "I am comfortable making decisions that affect other people.",
        "I can see the big picture when others get caught up in details.",
        "People often ask me to take charge of projects or activities.",
        "I am willing to take responsibility when things go wrong.",
        "I enjoy motivating others to reach their potential.",
        "I can delegate tasks effectively to team members.",
        "I am comfortable with the authority that comes with leadership.",
        "I have a vision for how things could be improved in my community.",
    ],
    Gift.teaching: [
        "I enjoy explaining biblical concepts to others.",
        "People tell me I make complex ideas easy to understand.",
        "I spend time studying to ensure I understand Scripture correctly.",
        "I enjoy preparing lessons or presentations.",
        "I get excited when I see others learn something new.",
        "I am comfortable speaking in front of groups.",
        "I enjoy answering questions about faith and the Bible.",
        "I like to research topics thoroughly before sharing them.",
        "I feel fulfilled when I help others grow in their understanding.",
        "I am patient with people who learn at different speeds.",
    ],
    Gift.mercy: [
        "I am deeply moved by the suffering of others.",
        "I am drawn to help people who are hurting emotionally.",
        "I can sense when someone is sad even if they don't say anything.",
        "I prefer to help people one-on-one rather than in groups.",
        "I am a good listener when people need to talk.",
        "I often cry when I see others in pain.",
        "I am patient with people who are struggling.",
        "I feel called to comfort those who are grieving.",
        "I am gentle in my approach to helping others.",
        "I remember people's personal struggles and check on them.",
    ],
    Gift.administration: [
        "I enjoy organizing events and making sure details are covered.",
        "I am good at creating systems that help things run smoothly.",
        "I like to make lists and check things off as they are completed.",
        "I am comfortable managing budgets and keeping track of expenses.",
        "I enjoy coordinating schedules and logistics for others.",
        "I am detail-oriented and notice when things are out of place.",
        "I like to plan ahead and prepare for potential problems.",
        "I am good at keeping records and maintaining files.",
        "I enjoy creating order out of chaos.",
        "I am efficient at managing time and resources.",
    ],
    Gift.evangelism: [
        "I enjoy sharing my faith with people who don't know Jesus.",
        "I look for opportunities to tell others about God's love.",
        "I am comfortable talking to strangers about spiritual matters.",
        "I feel burdened for people who don't have a relationship with God.",
        "I enjoy inviting people to church or Christian events.",
        "I can easily relate to people from different backgrounds.",
        "I am not embarrassed to be identified as a Christian.",
        "I enjoy reading books about how to share my faith effectively.",
        "I get excited when I hear about people coming to faith.",
        "I am persistent but respectful when sharing the gospel.",
    ],
    Gift.service: [
        "I enjoy doing practical tasks that help others.",
        "I am happy to work behind the scenes without recognition.",
        "I notice when things need to be done and am willing to do them.",
        "I find joy in meeting the physical needs of others.",
        "I am good with my hands and enjoy practical projects.",
        "I am willing to do jobs that others might consider unimportant.",
        "I enjoy setting up for events and cleaning up afterwards.",
        "I like to help in ways that free others to use their gifts.",
        "I am dependable when people ask for my help.",
        "I feel fulfilled when I can make someone's day easier.",
    ],
    Gift.encouragement: [
        "I enjoy motivating others to grow in their faith.",
        "I can see potential in people and help them develop it.",
        "I am good at giving advice that helps people make positive changes.",
        "I enjoy mentoring and discipling other believers.",
        "I can help people see solutions to their problems.",
        "I am optimistic and help others see the bright side of situations.",
        "I enjoy coaching others to reach their goals.",
        "I am comfortable challenging people to take the next step.",
        "I can help people apply biblical principles to their daily lives.",
        "I enjoy seeing others succeed and reach their potential.",
    ],
    Gift.giving: [
        "I enjoy giving generously to support God's work.",
        "I look for opportunities to meet financial needs I become aware of.",
        "I am careful with money so I can give more to others.",
        "I get more joy from giving than from receiving.",
        "I prefer to give anonymously without recognition.",
        "I research organizations to make sure my gifts are used wisely.",
        "I am willing to sacrifice personal comforts to give more.",
        "I feel led to give to specific needs or ministries.",
        "I encourage others to be generous with their resources.",
        "I see my possessions as belonging to God, not to me.",
    ],
    Gift.hospitality: [
        "I enjoy having people in my home.",
        "I like to make visitors feel welcome and comfortable.",
        "I am good at creating a warm, inviting atmosphere.",
        "I enjoy cooking for others and serving meals.",
        "I notice when someone is alone and try to include them.",
        "I like to connect people with others who have similar interests.",
        "I am comfortable entertaining people I don't know well.",
        "I enjoy planning social gatherings for my friends.",
        "I like to make sure everyone feels included in group activities.",
        "I am naturally hospitable and enjoy serving others.",
    ],
    Gift.faith: [
        "I believe God can do miraculous things in response to prayer.",
        "I am willing to step out in faith when others hesitate.",
        "I trust God to provide even when circumstances look impossible.",
        "I enjoy praying for big, seemingly impossible requests.",
        "I encourage others to trust God in difficult situations.",
        "I am willing to take risks when I believe God is leading.",
        "I have seen God answer prayers in remarkable ways.",
        "I believe God's promises even when I can't see how they'll be fulfilled.",
        "I am not easily discouraged by setbacks or obstacles.",
        "I inspire others to have greater faith in God's power.",
    ],
    Gift.wisdom: [
        "People often come to me for advice about important decisions.",
        "I can usually see the best course of action in complex situations.",
        "I am good at discerning people's true motives.",
        "I can often see the long-term consequences of decisions.",
        "I enjoy helping people think through difficult problems.",
        "I have insight into how biblical principles apply to modern situations.",
        "I can usually tell when someone is not being completely honest.",
        "I am good at mediating conflicts between people.",
        "I can see connections between seemingly unrelated things.",
        "I often have a sense of what God wants in a particular situation.",
    ],
    Gift.intercession: [
        "I enjoy spending extended time in prayer.",
        "I often feel led to pray for specific people or situations.",
        "I enjoy praying with others more than praying alone.",
        "I keep prayer lists and pray for people regularly.",
        "I feel called to pray for church leaders and ministries.",
        "I enjoy participating in prayer meetings and prayer groups.",
        "I often wake up with someone on my heart to pray for.",
        "I believe prayer is one of the most important ministries.",
        "I enjoy learning about different methods and types of prayer.",
        "I have seen God work in powerful ways through prayer.",
    ],
}


def _build_items() -> List[SpiritualGiftQuestion]:
    items: List[SpiritualGiftQuestion] = []
    for gift, statements in _STATEMENTS.items():
        for prompt in statements:
            items.append(SpiritualGiftQuestion(id=f"Q{len(items) + 1:03d}", gift=gift.value, prompt=prompt))
    return items


QUESTION_ITEMS: List[SpiritualGiftQuestion] = _build_items()

# Derived lookups
QUESTIONS_BY_ID: Dict[str, SpiritualGiftQuestion] = {q.id: q for q in QUESTION_ITEMS}
GIFT_TO_IDS: Dict[str, List[str]] = {}
for _q in QUESTION_ITEMS:
    GIFT_TO_IDS.setdefault(_q.gift, []).append(_q.id)

# Quick tier: first statements of every gift, canonical order preserved
_QUICK_IDS = {qid for ids in GIFT_TO_IDS.values() for qid in ids[:QUICK_QUESTIONS_PER_GIFT]}

TIER_QUESTIONS: Dict[AssessmentTier, List[SpiritualGiftQuestion]] = {
    AssessmentTier.quick: [q for q in QUESTION_ITEMS if q.id in _QUICK_IDS],
    AssessmentTier.expanded: list(QUESTION_ITEMS),
}


def questions_for_tier(tier: AssessmentTier | str) -> List[SpiritualGiftQuestion]:
    """Return the ordered question list for a tier (raises ValueError on unknown tier)."""
    return list(TIER_QUESTIONS[AssessmentTier(tier)])


def _validate_integrity() -> None:
    expected = len(Gift) * QUESTIONS_PER_GIFT
    ids = [q.id for q in QUESTION_ITEMS]
    if len(ids) != expected:
        raise ValueError(f"Expected {expected} items, found {len(ids)}")
    if len(set(ids)) != len(ids):
        raise ValueError("Duplicate question ids detected")
    known = {g.value for g in Gift}
    unknown = {q.gift for q in QUESTION_ITEMS} - known
    if unknown:
        raise ValueError(f"Questions reference unknown gifts: {unknown}")
    # Each gift exactly QUESTIONS_PER_GIFT
    bad = {g: len(lst) for g, lst in GIFT_TO_IDS.items() if len(lst) != QUESTIONS_PER_GIFT}
    if bad or set(GIFT_TO_IDS) != known:
        raise ValueError(f"Gifts without exactly {QUESTIONS_PER_GIFT} questions: {bad or known - set(GIFT_TO_IDS)}")
    quick = TIER_QUESTIONS[AssessmentTier.quick]
    if len(quick) != len(Gift) * QUICK_QUESTIONS_PER_GIFT:
        raise ValueError(f"Quick tier has {len(quick)} questions")


_validate_integrity()

__all__ = [
    "Gift",
    "AssessmentTier",
    "SpiritualGiftQuestion",
    "QUESTION_ITEMS",
    "QUESTIONS_BY_ID",
    "GIFT_TO_IDS",
    "TIER_QUESTIONS",
    "questions_for_tier",
]
