# trajectory.py

from datetime import datetime
from typing import Iterable, List, Optional

from maternal_risk.data_model import (
    LOW,
    PREECLAMPSIA,
    GESTATIONAL_DIABETES,
    DEPRESSION,
    RiskAssessment,
    RiskTrajectoryPoint,
    WeeklyCheckIn,
)
from maternal_risk.risk_engine import assess_risk


def _level_of(assessment: RiskAssessment, condition: str) -> str:
    indicator = assessment.indicator_for(condition)
    return indicator.level if indicator else LOW


def build_risk_trajectory(
    check_ins: Iterable[WeeklyCheckIn],
    now: Optional[datetime] = None,
) -> List[RiskTrajectoryPoint]:
    """
    Replay the assessment over a whole history, one point per check-in in
    ascending week order. Each point only sees check-ins before it.
    """
    ordered = sorted(check_ins, key=lambda c: c.week)
    trajectory: List[RiskTrajectoryPoint] = []

    for i, current in enumerate(ordered):
        assessment = assess_risk(current, ordered[:i], now=now)
        trajectory.append(RiskTrajectoryPoint(
            week=current.week,
            date=current.date,
            overall_level=assessment.overall_level,
            preeclampsia_level=_level_of(assessment, PREECLAMPSIA),
            diabetes_level=_level_of(assessment, GESTATIONAL_DIABETES),
            depression_level=_level_of(assessment, DEPRESSION),
        ))

    return trajectory


def upsert_check_in(check_ins: Iterable[WeeklyCheckIn], check_in: WeeklyCheckIn) -> List[WeeklyCheckIn]:
    """
    New history list where `check_in` replaces any earlier entry for the
    same week. The input list is left untouched.
    """
    return [c for c in check_ins if c.week != check_in.week] + [check_in]
