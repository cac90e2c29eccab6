# doctor_summary.py

from datetime import date
from typing import Iterable, List, Optional

from maternal_risk.data_model import LOW, RiskAssessment, WeeklyCheckIn
from maternal_risk.explanation_utils import DISCLAIMER, format_condition_name
from maternal_risk.risk_engine import sort_history_desc

RECENT_CHECK_IN_LIMIT = 4


def _format_number(value) -> str:
    # 142.0 -> "142", 142.5 -> "142.5"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def generate_doctor_summary(
    assessment: RiskAssessment,
    check_ins: Iterable[WeeklyCheckIn],
    generated_on: Optional[date] = None,
) -> str:
    """
    Plain-text, doctor-ready summary of an assessment and the most recent
    check-ins. Check-ins may arrive in any order; the four highest weeks are
    listed, most recent first.
    """
    generated_on = generated_on or date.today()

    lines: List[str] = [
        "📋 MATERNAL HEALTH SUMMARY",
        f"Week: {assessment.week}",
        f"Generated: {generated_on.isoformat()}",
        "",
        f"⚠️ {DISCLAIMER}",
        "",
        "RISK INDICATORS:",
    ]

    for indicator in assessment.indicators:
        if indicator.level == LOW:
            continue
        lines.append(f"• {format_condition_name(indicator.condition)}: {indicator.level.upper()}")
        lines.extend(f"  - {trigger}" for trigger in indicator.triggers)

    lines.append("")
    lines.append("RECENT CHECK-IN DATA:")

    for c in sort_history_desc(check_ins)[:RECENT_CHECK_IN_LIMIT]:
        lines.append(f"Week {c.week}:")
        lines.append(f"  Mood: {c.mood}/5, Sleep: {c.sleep_quality}/5, Fatigue: {c.fatigue}/5")
        if c.blood_pressure:
            lines.append(f"  BP: {c.blood_pressure.systolic}/{c.blood_pressure.diastolic}")
        if c.blood_sugar:
            lines.append(f"  Blood Sugar: {_format_number(c.blood_sugar)} mg/dL")

    return "\n".join(lines)
