# serialization.py

from dataclasses import asdict
from typing import List

from maternal_risk.data_model import (
    RiskAssessment,
    RiskIndicator,
    RiskTrajectoryPoint,
    SystemAction,
    WeeklyCheckIn,
)


def check_in_to_dict(check_in: WeeklyCheckIn) -> dict:
    return asdict(check_in)


def indicator_to_dict(indicator: RiskIndicator) -> dict:
    return asdict(indicator)


def action_to_dict(action: SystemAction) -> dict:
    return asdict(action)


def assessment_to_dict(assessment: RiskAssessment) -> dict:
    return {
        "overall_level": assessment.overall_level,
        "timestamp": assessment.timestamp,
        "week": assessment.week,
        "indicators": [indicator_to_dict(i) for i in assessment.indicators],
        "system_actions": [action_to_dict(a) for a in assessment.system_actions],
    }


def trajectory_to_list(points: List[RiskTrajectoryPoint]) -> List[dict]:
    return [asdict(p) for p in points]
