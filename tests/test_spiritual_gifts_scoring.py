import pytest
from app.core.spiritual_gifts_map import Gift, SpiritualGiftQuestion, AssessmentTier, questions_for_tier
from app.core.spiritual_profiles import classify
from app.services.spiritual_gifts_scoring import (
    InvalidInput,
    calculate_profile,
    round_half_up,
    score_assessment,
    validate_answers,
)


def _questions(*gifts_and_counts):
    """Build questions: ("Leadership", 3), ("Teaching", 2) -> L1 L2 L3 T1 T2."""
    items = []
    for gift, count in gifts_and_counts:
        for i in range(count):
            items.append(SpiritualGiftQuestion(id=f"{gift[:3].upper()}{i + 1}", gift=gift))
    return items


FIVE_GIFTS = ["Leadership", "Teaching", "Mercy", "Service", "Giving"]


def test_deterministic_output():
    questions = _questions(("Leadership", 3), ("Mercy", 3))
    responses = {"LEA1": 5, "LEA2": 3, "LEA3": 4, "MER1": 2, "MER2": 5, "MER3": 1}
    first = calculate_profile(questions, responses)
    second = calculate_profile(questions, responses)
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_top_gifts_bounded_by_answered_gifts():
    questions = _questions(("Leadership", 2), ("Teaching", 2), ("Mercy", 2))
    # Mercy has no answers and is dropped from ranking
    profile = calculate_profile(questions, {"LEA1": 4, "TEA2": 3})
    assert profile.top_gifts == ["Leadership", "Teaching"]

    all_answered = {q.id: 3 for q in _questions(*[(g, 1) for g in FIVE_GIFTS])}
    profile = calculate_profile(_questions(*[(g, 1) for g in FIVE_GIFTS]), all_answered)
    assert len(profile.top_gifts) == 3


def test_ranking_by_average_with_stable_ties():
    questions = _questions(("Leadership", 2), ("Teaching", 2), ("Mercy", 2), ("Service", 2))
    responses = {
        "LEA1": 3, "LEA2": 3,   # 3.0
        "TEA1": 5, "TEA2": 5,   # 5.0
        "MER1": 4, "MER2": 4,   # 4.0
        "SER1": 5, "SER2": 5,   # 5.0, ties with Teaching which appears first
    }
    profile = calculate_profile(questions, responses)
    assert profile.top_gifts == ["Teaching", "Service", "Mercy"]


def test_gift_average_uses_answered_count_not_total():
    questions = _questions(("Leadership", 2), ("Teaching", 4))
    result = score_assessment(questions, {"LEA1": 4, "LEA2": 4, "TEA1": 5, "TEA2": 3, "TEA3": 4, "TEA4": 4})
    by_gift = {g.gift: g for g in result.gift_scores}
    assert by_gift["Leadership"].average_score == 4.0
    assert by_gift["Teaching"].total_score == 16
    assert by_gift["Teaching"].question_count == 4
    assert by_gift["Teaching"].average_score == 4.0
    # stable tie: Leadership appears first
    assert result.profile.top_gifts == ["Leadership", "Teaching"]


@pytest.mark.parametrize(
    "average,label,engagement",
    [
        (5.0, "Kingdom Champion", "High"),
        (4.5, "Kingdom Champion", "High"),
        (4.4999, "Faithful Servant", "High"),
        (4.0, "Faithful Servant", "High"),
        (3.9999, "Growing Disciple", "High"),
        (3.5, "Growing Disciple", "High"),
        (3.4999, "Willing Helper", "Moderate"),
        (2.5, "Willing Helper", "Moderate"),
        (2.4999, "Humble Servant", "Supportive"),
        (1.0, "Humble Servant", "Supportive"),
    ],
)
def test_classification_thresholds(average, label, engagement):
    tier = classify(average)
    assert tier.label == label
    assert tier.engagement_level.value == engagement


@pytest.mark.parametrize(
    "values,label,engagement",
    [
        ([5, 4], "Kingdom Champion", "High"),      # 4.5
        ([4, 4], "Faithful Servant", "High"),      # 4.0
        ([4, 3], "Growing Disciple", "High"),      # 3.5
        ([3, 2], "Willing Helper", "Moderate"),    # 2.5
        ([2, 2, 3, 2], "Humble Servant", "Supportive"),  # 2.25
    ],
)
def test_overall_average_drives_label(values, label, engagement):
    questions = [SpiritualGiftQuestion(id=f"Q{i}", gift="Faith") for i in range(len(values))]
    profile = calculate_profile(questions, {f"Q{i}": v for i, v in enumerate(values)})
    assert profile.profile_label == label
    assert profile.engagement_level == engagement


def test_overall_average_is_flat_mean_not_mean_of_gift_averages():
    # Leadership: 1 answer of 5 -> 5.0; Teaching: 3 answers of 2 -> 2.0
    # mean of gift averages would be 3.5; flat mean is 11/4 = 2.75
    questions = _questions(("Leadership", 1), ("Teaching", 3))
    result = score_assessment(questions, {"LEA1": 5, "TEA1": 2, "TEA2": 2, "TEA3": 2})
    assert result.overall_average == 2.75
    assert result.profile.average_score == 2.8
    assert result.profile.profile_label == "Willing Helper"


def test_single_question_profile():
    questions = [SpiritualGiftQuestion(id="Q1", gift="Wisdom")]
    profile = calculate_profile(questions, {"Q1": 5})
    assert profile.top_gifts == ["Wisdom"]
    assert profile.average_score == 5.0
    assert profile.profile_label == "Kingdom Champion"


def test_empty_questions_rejected():
    with pytest.raises(InvalidInput, match="no questions provided"):
        calculate_profile([], {"Q1": 3})


def test_empty_responses_rejected():
    with pytest.raises(InvalidInput, match="no responses provided"):
        calculate_profile(_questions(("Mercy", 3)), {})


def test_all_none_responses_rejected():
    with pytest.raises(InvalidInput, match="no responses provided"):
        calculate_profile(_questions(("Mercy", 2)), {"MER1": None, "MER2": None})


def test_fifteen_questions_all_fours():
    questions = _questions(*[(g, 3) for g in FIVE_GIFTS])
    assert len(questions) == 15
    result = score_assessment(questions, {q.id: 4 for q in questions})
    assert [g.average_score for g in result.gift_scores] == [4.0] * 5
    assert result.overall_average == 4.0
    assert result.profile.profile_label == "Faithful Servant"
    assert result.profile.average_score == 4.0
    assert result.profile.top_gifts == ["Leadership", "Teaching", "Mercy"]


def test_unanswered_questions_are_excluded():
    questions = _questions(("Leadership", 3), ("Teaching", 3))
    responses = {"LEA1": 5, "TEA1": 3, "TEA2": 3, "TEA3": 3}
    result = score_assessment(questions, responses)
    leadership = next(g for g in result.gift_scores if g.gift == "Leadership")
    assert leadership.question_count == 1
    assert leadership.average_score == 5.0
    assert result.profile.top_gifts[0] == "Leadership"
    assert result.answered_count == 4
    assert result.overall_average == 3.5


def test_none_value_counts_as_unanswered():
    questions = _questions(("Leadership", 2))
    result = score_assessment(questions, {"LEA1": 4, "LEA2": None})
    assert result.gift_scores[0].question_count == 1
    assert result.profile.average_score == 4.0


def test_average_rounds_half_up():
    questions = [SpiritualGiftQuestion(id=f"Q{i}", gift="Giving") for i in range(4)]
    profile = calculate_profile(questions, {"Q0": 4, "Q1": 4, "Q2": 4, "Q3": 5})
    # 4.25 -> 4.3 (banker's rounding would give 4.2)
    assert profile.average_score == 4.3
    assert round_half_up(2.45) == 2.5
    assert round_half_up(14 / 3) == 4.7


def test_gift_enum_members_accepted():
    questions = [
        SpiritualGiftQuestion(id="A", gift=Gift.hospitality),
        SpiritualGiftQuestion(id="B", gift=Gift.faith),
    ]
    profile = calculate_profile(questions, {"A": 2, "B": 4})
    assert profile.top_gifts == ["Faith", "Hospitality"]


@pytest.mark.parametrize("value", [0, 6, True, 3.5, "4"])
def test_out_of_range_values_rejected(value):
    questions = _questions(("Mercy", 2))
    with pytest.raises(InvalidInput, match="Out-of-range"):
        calculate_profile(questions, {"MER1": 3, "MER2": value})


def test_unknown_question_ids_rejected():
    with pytest.raises(InvalidInput, match="Unexpected items: ZZZ"):
        calculate_profile(_questions(("Mercy", 1)), {"MER1": 3, "ZZZ": 4})


def test_duplicate_question_ids_rejected():
    questions = [SpiritualGiftQuestion(id="Q1", gift="Mercy"), SpiritualGiftQuestion(id="Q1", gift="Faith")]
    with pytest.raises(InvalidInput, match="Duplicate question ids: Q1"):
        calculate_profile(questions, {"Q1": 3})


def test_validate_answers_reports_without_raising():
    questions = _questions(("Mercy", 2))
    assert validate_answers(questions, {"MER1": 3}) == []
    errors = validate_answers(questions, {"MER1": 9, "NOPE": 1})
    assert any("Unexpected items" in e for e in errors)
    assert any("Out-of-range" in e for e in errors)


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        calculate_profile([], {})


def test_expanded_bank_all_threes():
    questions = questions_for_tier(AssessmentTier.expanded)
    result = score_assessment(questions, {q.id: 3 for q in questions})
    assert len(result.gift_scores) == 12
    assert result.profile.profile_label == "Willing Helper"
    assert result.profile.engagement_level == "Moderate"
    assert result.profile.top_gifts == ["Leadership", "Teaching", "Mercy"]


def test_profile_dict_uses_client_field_names():
    profile = calculate_profile([SpiritualGiftQuestion(id="Q1", gift="Faith")], {"Q1": 1})
    assert profile.to_dict() == {
        "topGifts": ["Faith"],
        "profileLabel": "Humble Servant",
        "profileDescription": profile.profile_description,
        "servingStyle": profile.serving_style,
        "averageScore": 1.0,
        "engagementLevel": "Supportive",
    }
    assert profile.profile_description and profile.serving_style
