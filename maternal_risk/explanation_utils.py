# explanation_utils.py

from types import MappingProxyType
from typing import Mapping

from maternal_risk.data_model import (
    LOW,
    MODERATE,
    HIGH,
    PREECLAMPSIA,
    GESTATIONAL_DIABETES,
    DEPRESSION,
)

DISCLAIMER = "Based on general health guidance. Not a medical diagnosis."


def _frozen(table: dict) -> Mapping:
    return MappingProxyType({key: MappingProxyType(value) for key, value in table.items()})


# Condition → level → plain-language explanation
EXPLANATIONS: Mapping[str, Mapping[str, str]] = _frozen({
    PREECLAMPSIA: {
        LOW: "Blood pressure and related symptoms are stable.",
        MODERATE: "Some changes in blood pressure or swelling patterns noticed. Worth monitoring.",
        HIGH: "Multiple indicators suggest closer attention needed. Consider speaking with your doctor.",
    },
    GESTATIONAL_DIABETES: {
        LOW: "Energy levels and blood sugar patterns look stable.",
        MODERATE: "Some fatigue patterns noticed. Nutrition and activity adjustments may help.",
        HIGH: "Multiple energy-related indicators flagged. A glucose check may be helpful.",
    },
    DEPRESSION: {
        LOW: "Emotional wellbeing appears stable.",
        MODERATE: "Some mood or sleep changes noticed. This is common during pregnancy.",
        HIGH: "We notice you may be going through a difficult time. Support is available.",
    },
})

# Condition → level → what to do next
RECOMMENDATIONS: Mapping[str, Mapping[str, str]] = _frozen({
    PREECLAMPSIA: {
        LOW: "Keep up with your regular check-ins!",
        MODERATE: "Continue monitoring and log your symptoms regularly.",
        HIGH: "We recommend discussing these patterns with your healthcare provider soon.",
    },
    GESTATIONAL_DIABETES: {
        LOW: "Your energy balance looks good!",
        MODERATE: "Focus on balanced meals and gentle activity. We'll adjust your nutrition suggestions.",
        HIGH: "Consider discussing a glucose tolerance test with your doctor.",
    },
    DEPRESSION: {
        LOW: "Keep nurturing your emotional wellbeing!",
        MODERATE: "Our chatbot is here if you want to talk. Community support is also available.",
        HIGH: (
            "You're not alone. Consider speaking with someone who can help. "
            "We'll connect you with support resources."
        ),
    },
})

# Level → presentation metadata (warm, pregnancy-friendly palette)
RISK_LEVEL_DISPLAY: Mapping[str, Mapping[str, str]] = _frozen({
    LOW: {
        "label": "All signals stable",
        "color": "text-[#2d6a4f]",
        "bg_color": "bg-[#d4f5e6]",
        "border_color": "border-[#a8e6cf]",
        "icon": "🌿",
        "message": "Everything looks good. Keep up with your regular check-ins!",
    },
    MODERATE: {
        "label": "Some changes noticed",
        "color": "text-[#9c6644]",
        "bg_color": "bg-[#ffe8d9]",
        "border_color": "border-[#ffd3b6]",
        "icon": "🌸",
        "message": "We noticed some changes worth monitoring. We're adjusting your support.",
    },
    HIGH: {
        "label": "Support recommended",
        "color": "text-[#a4494a]",
        "bg_color": "bg-[#ffd4d1]",
        "border_color": "border-[#ffaaa5]",
        "icon": "💜",
        "message": "We recommend connecting with your healthcare provider. You're not alone.",
    },
})


def build_explanation(condition: str, level: str) -> str:
    return EXPLANATIONS[condition][level]


def build_recommendation(condition: str, level: str) -> str:
    return RECOMMENDATIONS[condition][level]


def get_risk_level_display(level: str) -> Mapping[str, str]:
    """
    Look up label, message, icon and colour classes for a risk level.
    Raises ValueError for anything other than low/moderate/high.
    """
    try:
        return RISK_LEVEL_DISPLAY[level]
    except KeyError:
        raise ValueError(f"Unknown risk level: {level!r}")


def format_condition_name(condition: str) -> str:
    """'gestational_diabetes' -> 'GESTATIONAL DIABETES'"""
    return condition.replace("_", " ").upper()
