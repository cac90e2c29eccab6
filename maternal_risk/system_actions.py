# system_actions.py

from typing import List, Optional, Sequence

from maternal_risk.data_model import (
    LOW,
    MODERATE,
    HIGH,
    PREECLAMPSIA,
    GESTATIONAL_DIABETES,
    DEPRESSION,
    RiskIndicator,
    SystemAction,
)

CHAT_TONES = {
    LOW: "encouraging",
    MODERATE: "supportive",
    HIGH: "compassionate",
}


def _find(indicators: Sequence[RiskIndicator], condition: str) -> Optional[RiskIndicator]:
    return next((i for i in indicators if i.condition == condition), None)


def _priority_for(indicator: RiskIndicator) -> str:
    return "high" if indicator.level == HIGH else "medium"


def determine_system_actions(indicators: Sequence[RiskIndicator]) -> List[SystemAction]:
    """
    Map indicator levels to the downstream actions the product should take.
    Order is significant and duplicates of the same type are kept.
    """
    actions: List[SystemAction] = []

    any_high = any(i.level == HIGH for i in indicators)
    any_moderate = any(i.level == MODERATE for i in indicators)

    # Chat tone adjustment
    if any_high:
        actions.append(SystemAction(
            type="chat_tone",
            description="Chatbot will use more compassionate, supportive tone",
            priority="high",
        ))
    elif any_moderate:
        actions.append(SystemAction(
            type="chat_tone",
            description="Chatbot will check in more gently",
            priority="medium",
        ))

    # Nutrition adjustments
    diabetes = _find(indicators, GESTATIONAL_DIABETES)
    if diabetes and diabetes.level != LOW:
        actions.append(SystemAction(
            type="nutrition_adjust",
            description="Nutrition suggestions prioritizing blood sugar balance",
            priority=_priority_for(diabetes),
        ))

    preeclampsia = _find(indicators, PREECLAMPSIA)
    if preeclampsia and preeclampsia.level != LOW:
        actions.append(SystemAction(
            type="nutrition_adjust",
            description="Nutrition suggestions focusing on blood pressure support",
            priority=_priority_for(preeclampsia),
        ))

    # Community suggestions
    depression = _find(indicators, DEPRESSION)
    if depression and depression.level != LOW:
        actions.append(SystemAction(
            type="community_suggest",
            description="Showing mental health support groups and similar journeys",
            priority=_priority_for(depression),
        ))

    if any_high:
        actions.append(SystemAction(
            type="doctor_alert",
            description="Doctor-ready summary available for your next visit",
            priority="high",
        ))

    return actions


def determine_chat_tone(level: str) -> str:
    """Chat persona to use for a given overall level."""
    return CHAT_TONES[level]
