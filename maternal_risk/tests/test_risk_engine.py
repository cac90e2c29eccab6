from datetime import datetime, timezone
import itertools
import pytest
from maternal_risk.data_model import BloodPressure, RiskIndicator, LEVEL_RANK
from maternal_risk.risk_engine import assess_risk, assess_latest, overall_level, sort_history_desc

FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def levels(assessment):
    return {i.condition: i.level for i in assessment.indicators}


def test_scenario_all_ones_empty_history(make_check_in):
    current = make_check_in(week=12, mood=1, sleep_quality=1, fatigue=1, headache=1, swelling=1, dizziness=1)
    assessment = assess_risk(current, [], now=FIXED_NOW)

    depression = assessment.indicator_for("depression")
    assert depression.confidence == 50
    assert depression.level == "high"
    assert levels(assessment) == {
        "preeclampsia": "low",
        "gestational_diabetes": "low",
        "depression": "high",
    }
    assert assessment.overall_level == "high"
    assert assessment.week == 12


def test_scenario_persistent_swelling_with_high_bp(make_check_in):
    week1 = make_check_in(week=1, swelling=4)
    week2 = make_check_in(week=2, swelling=4, blood_pressure=BloodPressure(145, 95))
    assessment = assess_risk(week2, [week1], now=FIXED_NOW)

    preeclampsia = assessment.indicator_for("preeclampsia")
    assert preeclampsia.confidence == 60
    assert preeclampsia.level == "high"
    assert preeclampsia.triggers == ["Elevated blood pressure reading", "Persistent swelling noticed"]
    assert any(a.type == "doctor_alert" and a.priority == "high" for a in assessment.system_actions)


def test_scenario_mid_range_single_check_in(make_check_in):
    # mood + sleep = 6 would trip the combo rule; keep them at 3/4
    assessment = assess_risk(make_check_in(week=10, sleep_quality=4), [], now=FIXED_NOW)
    assert set(levels(assessment).values()) == {"low"}
    assert assessment.overall_level == "low"
    assert assessment.system_actions == []


def test_all_threes_trip_only_the_mood_sleep_combo(make_check_in):
    assessment = assess_risk(make_check_in(week=10), [], now=FIXED_NOW)
    depression = assessment.indicator_for("depression")
    assert depression.triggers == ["Both mood and sleep affected"]
    assert depression.level == "low"
    assert assessment.overall_level == "low"
    assert assessment.system_actions == []


def test_indicators_in_fixed_order(make_check_in):
    assessment = assess_risk(make_check_in(), [])
    assert [i.condition for i in assessment.indicators] == ["preeclampsia", "gestational_diabetes", "depression"]


@pytest.mark.parametrize("combo", list(itertools.product(["low", "moderate", "high"], repeat=3)))
def test_overall_level_is_max(combo):
    indicators = [RiskIndicator(condition=c, level=l, confidence=0)
                  for c, l in zip(["preeclampsia", "gestational_diabetes", "depression"], combo)]
    assert overall_level(indicators) == max(combo, key=LEVEL_RANK.__getitem__)


def test_overall_level_of_nothing_is_low():
    assert overall_level([]) == "low"


def test_assess_risk_is_idempotent(make_check_in):
    current = make_check_in(week=22, mood=2, fatigue=4, blood_sugar=150, blood_pressure=BloodPressure(138, 88))
    history = [make_check_in(week=21, fatigue=4, mood=2), make_check_in(week=20)]

    first = assess_risk(current, history, now=FIXED_NOW)
    second = assess_risk(current, history, now=FIXED_NOW)
    assert first == second
    assert first.timestamp == FIXED_NOW.isoformat()


def test_history_is_sorted_before_scoring(make_check_in):
    current = make_check_in(week=22, mood=2, sleep_quality=5)
    # the low-mood week 21 must be treated as the most recent entry
    history = [make_check_in(week=15, mood=5), make_check_in(week=21, mood=1), make_check_in(week=18, mood=5)]

    assessment = assess_risk(current, history, now=FIXED_NOW)
    assert "Low mood persisting for multiple weeks" in assessment.indicator_for("depression").triggers
    assert [c.week for c in history] == [15, 21, 18]


def test_sort_history_desc(make_check_in):
    ordered = sort_history_desc([make_check_in(week=w) for w in (3, 9, 1, 5)])
    assert [c.week for c in ordered] == [9, 5, 3, 1]


def test_assess_latest_picks_highest_week(make_check_in):
    check_ins = [make_check_in(week=14), make_check_in(week=18, mood=1, sleep_quality=1), make_check_in(week=16)]
    assessment = assess_latest(check_ins, now=FIXED_NOW)
    assert assessment.week == 18
    assert assessment.overall_level == "high"
    assert assess_latest([]) is None


def test_timestamp_defaults_to_utc_now(make_check_in):
    assessment = assess_risk(make_check_in(), [])
    parsed = datetime.fromisoformat(assessment.timestamp)
    assert parsed.tzinfo is not None
