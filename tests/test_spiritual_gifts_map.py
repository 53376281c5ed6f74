import pytest
from app.core.spiritual_gifts_map import (
    AssessmentTier,
    Gift,
    GIFT_TO_IDS,
    QUESTION_ITEMS,
    QUESTIONS_BY_ID,
    questions_for_tier,
)


def test_bank_covers_every_gift_ten_times():
    assert len(QUESTION_ITEMS) == 120
    assert set(GIFT_TO_IDS) == {g.value for g in Gift}
    assert all(len(ids) == 10 for ids in GIFT_TO_IDS.values())


def test_ids_are_sequential_and_unique():
    assert QUESTION_ITEMS[0].id == "Q001"
    assert QUESTION_ITEMS[-1].id == "Q120"
    assert len(QUESTIONS_BY_ID) == 120


def test_quick_tier_is_ordered_subset_of_expanded():
    quick = questions_for_tier(AssessmentTier.quick)
    expanded = questions_for_tier("expanded")
    assert len(quick) == 24
    assert len(expanded) == 120
    expanded_ids = [q.id for q in expanded]
    positions = [expanded_ids.index(q.id) for q in quick]
    assert positions == sorted(positions)
    # two statements per gift
    counts = {}
    for q in quick:
        counts[q.gift] = counts.get(q.gift, 0) + 1
    assert set(counts.values()) == {2}


def test_questions_for_tier_returns_copy():
    quick = questions_for_tier(AssessmentTier.quick)
    quick.clear()
    assert len(questions_for_tier(AssessmentTier.quick)) == 24


def test_unknown_tier_rejected():
    with pytest.raises(ValueError):
        questions_for_tier("deluxe")
