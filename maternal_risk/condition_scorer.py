# condition_scorer.py

from typing import Callable, List, NamedTuple, Optional, Sequence

from maternal_risk.data_model import (
    LOW,
    MODERATE,
    HIGH,
    PREECLAMPSIA,
    GESTATIONAL_DIABETES,
    DEPRESSION,
    BloodPressure,
    RiskIndicator,
    WeeklyCheckIn,
)
from maternal_risk.explanation_utils import build_explanation, build_recommendation

# Risk thresholds
BP_HIGH_SYSTOLIC = 140
BP_HIGH_DIASTOLIC = 90
BP_RISE_THRESHOLD = 10  # mmHg
BLOOD_SUGAR_HIGH = 140  # mg/dL
SYMPTOM_HIGH_THRESHOLD = 4
MOOD_LOW_THRESHOLD = 2
LOW_SLEEP_THRESHOLD = 2
HEADACHE_DIZZINESS_COMBO = 7
MOOD_SLEEP_COMBO = 6
WEEKS_FOR_TREND = 2

# Score → level cutoffs
HIGH_SCORE = 50
MODERATE_SCORE = 25
MAX_CONFIDENCE = 100

CheckInPredicate = Callable[[WeeklyCheckIn], bool]
RulePredicate = Callable[[WeeklyCheckIn, Sequence[WeeklyCheckIn]], bool]


class Rule(NamedTuple):
    predicate: RulePredicate
    points: int
    trigger: str


# --- Shared helpers ---

def count_recent_matching(
    current: WeeklyCheckIn,
    history: Sequence[WeeklyCheckIn],
    predicate: CheckInPredicate,
    window_size: int = WEEKS_FOR_TREND,
) -> int:
    """
    Count check-ins matching `predicate` in the sliding window
    [current, *history[:window_size - 1]]. History is most-recent-first.
    """
    window = [current, *history[:window_size - 1]]
    return sum(1 for check_in in window if predicate(check_in))


def persists(predicate: CheckInPredicate, window_size: int = WEEKS_FOR_TREND) -> RulePredicate:
    """Rule predicate: `predicate` holds for every week of the trend window."""
    def rule(current: WeeklyCheckIn, history: Sequence[WeeklyCheckIn]) -> bool:
        return count_recent_matching(current, history, predicate, window_size) >= window_size
    return rule


def baseline_blood_pressure(history: Sequence[WeeklyCheckIn]) -> Optional[BloodPressure]:
    return next((h.blood_pressure for h in history if h.blood_pressure is not None), None)


def level_for_score(score: int) -> str:
    if score >= HIGH_SCORE:
        return HIGH
    if score >= MODERATE_SCORE:
        return MODERATE
    return LOW


def evaluate_rules(
    condition: str,
    rules: Sequence[Rule],
    current: WeeklyCheckIn,
    history: Sequence[WeeklyCheckIn],
) -> RiskIndicator:
    """
    Run an ordered rule table. Every rule that fires adds its points and
    appends its trigger; rules are independent of each other.
    """
    triggers: List[str] = []
    risk_score = 0

    for rule in rules:
        if rule.predicate(current, history):
            triggers.append(rule.trigger)
            risk_score += rule.points

    level = level_for_score(risk_score)
    return RiskIndicator(
        condition=condition,
        level=level,
        confidence=min(risk_score, MAX_CONFIDENCE),
        triggers=triggers,
        explanation=build_explanation(condition, level),
        recommendation=build_recommendation(condition, level),
    )


# --- Preeclampsia pattern ---

def _bp_elevated(current, history):
    bp = current.blood_pressure
    return bp is not None and (bp.systolic >= BP_HIGH_SYSTOLIC or bp.diastolic >= BP_HIGH_DIASTOLIC)


def _bp_rising(current, history):
    bp = current.blood_pressure
    if bp is None:
        return False
    baseline = baseline_blood_pressure(history)
    if baseline is None:
        return False
    return (
        bp.systolic - baseline.systolic >= BP_RISE_THRESHOLD
        or bp.diastolic - baseline.diastolic >= BP_RISE_THRESHOLD
    )


def _headache_with_dizziness(current, history):
    return current.headache + current.dizziness >= HEADACHE_DIZZINESS_COMBO


PREECLAMPSIA_RULES = (
    Rule(_bp_elevated, 40, "Elevated blood pressure reading"),
    Rule(_bp_rising, 25, "Blood pressure showing upward trend"),
    Rule(persists(lambda c: c.swelling >= SYMPTOM_HIGH_THRESHOLD), 20, "Persistent swelling noticed"),
    Rule(_headache_with_dizziness, 15, "Headache and dizziness occurring together"),
)


# --- Gestational diabetes pattern ---

def _sugar_high(current, history):
    return current.blood_sugar is not None and current.blood_sugar >= BLOOD_SUGAR_HIGH


def _activity_down_fatigue_up(current, history):
    if not history:
        return False
    previous = history[0]
    if current.activity_level is None or previous.activity_level is None:
        return False
    return current.activity_level < previous.activity_level and current.fatigue > previous.fatigue


DIABETES_RULES = (
    Rule(_sugar_high, 40, "Blood sugar reading above typical range"),
    Rule(persists(lambda c: c.fatigue >= SYMPTOM_HIGH_THRESHOLD), 25, "Persistent fatigue over multiple weeks"),
    Rule(_activity_down_fatigue_up, 20, "Activity decreasing while fatigue increasing"),
)


# --- Depression pattern ---

def _is_low_mood(check_in: WeeklyCheckIn) -> bool:
    return check_in.mood <= MOOD_LOW_THRESHOLD


def _sleep_declining(current, history):
    return (
        bool(history)
        and current.sleep_quality < history[0].sleep_quality
        and current.sleep_quality <= LOW_SLEEP_THRESHOLD
    )


def _mood_and_sleep_low(current, history):
    return current.mood + current.sleep_quality <= MOOD_SLEEP_COMBO


DEPRESSION_RULES = (
    Rule(lambda current, history: _is_low_mood(current), 30, "Mood reported as low"),
    Rule(persists(_is_low_mood), 30, "Low mood persisting for multiple weeks"),
    Rule(_sleep_declining, 20, "Sleep quality declining"),
    Rule(_mood_and_sleep_low, 20, "Both mood and sleep affected"),
)


# --- Public scorers ---

def assess_preeclampsia_risk(current: WeeklyCheckIn, history: Sequence[WeeklyCheckIn]) -> RiskIndicator:
    return evaluate_rules(PREECLAMPSIA, PREECLAMPSIA_RULES, current, history)


def assess_diabetes_risk(current: WeeklyCheckIn, history: Sequence[WeeklyCheckIn]) -> RiskIndicator:
    return evaluate_rules(GESTATIONAL_DIABETES, DIABETES_RULES, current, history)


def assess_depression_risk(current: WeeklyCheckIn, history: Sequence[WeeklyCheckIn]) -> RiskIndicator:
    return evaluate_rules(DEPRESSION, DEPRESSION_RULES, current, history)


# Scorers in indicator order
CONDITION_SCORERS = (
    assess_preeclampsia_risk,
    assess_diabetes_risk,
    assess_depression_risk,
)
