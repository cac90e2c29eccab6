# maternal_risk/risk_engine.py
from __future__ import annotations
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence
import logging

from maternal_risk.data_model import (
    LOW,
    LEVEL_RANK,
    RiskAssessment,
    RiskIndicator,
    WeeklyCheckIn,
)
from maternal_risk.condition_scorer import CONDITION_SCORERS
from maternal_risk.system_actions import determine_system_actions

logger = logging.getLogger(__name__)


def sort_history_desc(history: Iterable[WeeklyCheckIn]) -> List[WeeklyCheckIn]:
    """Most recent week first, the order every scorer expects."""
    return sorted(history, key=lambda c: c.week, reverse=True)


def overall_level(indicators: Sequence[RiskIndicator]) -> str:
    """Highest indicator level under low < moderate < high."""
    if not indicators:
        return LOW
    return max((i.level for i in indicators), key=LEVEL_RANK.__getitem__)


def assess_risk(
    current: WeeklyCheckIn,
    history: Optional[Iterable[WeeklyCheckIn]] = None,
    now: Optional[datetime] = None,
) -> RiskAssessment:
    """
    Full risk assessment for one check-in against prior check-ins.
    History may arrive in any order; it is copied and sorted descending by
    week here so the scorers can treat history[0] as the previous week.
    """
    sorted_history = sort_history_desc(history or [])

    indicators = [scorer(current, sorted_history) for scorer in CONDITION_SCORERS]
    level = overall_level(indicators)
    actions = determine_system_actions(indicators)

    timestamp = (now or datetime.now(timezone.utc)).isoformat()

    logger.debug(
        "Assessed week %s against %d prior check-ins: overall=%s %s",
        current.week,
        len(sorted_history),
        level,
        {i.condition: (i.level, i.confidence) for i in indicators},
    )

    return RiskAssessment(
        overall_level=level,
        timestamp=timestamp,
        week=current.week,
        indicators=indicators,
        system_actions=actions,
    )


def assess_latest(
    check_ins: Iterable[WeeklyCheckIn],
    now: Optional[datetime] = None,
) -> Optional[RiskAssessment]:
    """Assess the most recent check-in against everything before it."""
    ordered = sort_history_desc(check_ins)
    if not ordered:
        return None
    return assess_risk(ordered[0], ordered[1:], now=now)
