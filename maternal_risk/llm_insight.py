# maternal_risk/llm_insight.py
from __future__ import annotations
from dataclasses import replace
from typing import Any, Dict, List, Optional
import os, logging

from openai import OpenAI
from maternal_risk.data_model import LOW, MODERATE, RiskAssessment, SystemAction

logger = logging.getLogger("uvicorn.error")

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_MAX_TOKENS = 300

FALLBACK_INSIGHT = (
    "You're doing great. Monitor your symptoms and stay hydrated. "
    "Establishing a routine can help manage stress levels during this phase."
)

ENRICHABLE_ACTIONS = ("nutrition_adjust", "community_suggest")

INSIGHT_SYSTEM_PROMPT = (
    "You are a warm, supportive maternal wellness companion. "
    "You help pregnant women understand their health check-in results in a calm, reassuring way. "
    "You are NOT a doctor. Never diagnose. Always encourage professional consultation for concerns. "
    "Be brief (3-4 sentences max), warm, and actionable. "
    'End with a reminder: "This is general guidance, not medical advice."'
)

ACTION_SYSTEM_PROMPT = (
    "You are a supportive maternal wellness companion writing one short, practical tip "
    "for a pregnant woman's app card. Two sentences at most. Never diagnose or prescribe."
)


class InsightError(Exception):
    pass


def _status_phrase(level: str) -> str:
    if level == LOW:
        return "stable"
    if level == MODERATE:
        return "some changes noticed"
    return "needs attention"


def _triggers_text(assessment: RiskAssessment) -> str:
    return ". ".join(
        f"{i.condition.replace('_', ' ')}: {', '.join(i.triggers)}"
        for i in assessment.indicators
        if i.triggers
    )


def build_insight_messages(assessment: RiskAssessment) -> List[Dict[str, str]]:
    triggers_text = _triggers_text(assessment)
    noticed = f"What we noticed: {triggers_text}" if triggers_text else "No specific concerns flagged."
    user_prompt = (
        f"A pregnant woman at week {assessment.week} just completed her weekly check-in.\n"
        f"Overall status: {_status_phrase(assessment.overall_level)}.\n"
        f"{noticed}\n\n"
        "Give her a personalized, warm insight about what this means and one gentle suggestion "
        "for this week. Be encouraging but honest."
    )
    return [
        {"role": "system", "content": INSIGHT_SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt},
    ]


def build_action_messages(action_type: str, description: str, week: int) -> List[Dict[str, str]]:
    if action_type == "nutrition_adjust":
        ask = f"Suggest one pregnancy-safe food idea for week {week} that supports: {description}."
    else:
        ask = f"Suggest one gentle way to find emotional support at week {week}. Context: {description}."
    return [
        {"role": "system", "content": ACTION_SYSTEM_PROMPT},
        {"role": "user", "content": ask},
    ]


def _complete(messages: List[Dict[str, str]], model: Optional[str] = None, temperature: float = 0.7) -> str:
    """Single chat completion. Raises InsightError on any client failure or empty reply."""
    model = model or os.getenv("RISK_INSIGHT_MODEL", DEFAULT_MODEL)
    logger.info("[RISK INSIGHT] prompt sent to %s: %s", model, messages[-1]["content"])

    try:
        max_tokens = int(os.getenv("RISK_INSIGHT_MAX_TOKENS", DEFAULT_MAX_TOKENS))
        client = OpenAI()
        resp = client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        content = resp.choices[0].message.content
    except Exception as e:
        raise InsightError(f"LLM call failed: {e}") from e

    if not content or not content.strip():
        raise InsightError("No response from AI")
    return content.strip()


def _configured() -> bool:
    return bool(os.getenv("OPENAI_API_KEY"))


def generate_risk_insight(assessment: RiskAssessment, model: Optional[str] = None) -> Dict[str, Any]:
    """
    Free-text, supportive reading of an assessment. Supplementary only:
    never feeds back into levels, confidence or triggers.
    Returns {"success": bool, "message"|"error": str}.
    """
    if not _configured():
        return {"success": False, "error": "AI service not configured."}

    try:
        message = _complete(build_insight_messages(assessment), model=model)
    except InsightError as e:
        logger.warning(f"AI insight error, using fallback: {e}")
        return {"success": True, "message": FALLBACK_INSIGHT}

    return {"success": True, "message": message}


def generate_action_content(action_type: str, description: str, week: int,
                            model: Optional[str] = None) -> Dict[str, Any]:
    if not _configured():
        return {"success": False, "error": "AI service not configured."}

    try:
        message = _complete(build_action_messages(action_type, description, week), model=model)
    except InsightError as e:
        logger.error(f"Failed to generate AI content for {action_type}: {e}")
        return {"success": False, "error": "Could not generate content. Please try again."}

    return {"success": True, "message": message}


def enrich_actions_with_ai(assessment: RiskAssessment, model: Optional[str] = None) -> RiskAssessment:
    """
    Copy of `assessment` whose nutrition/community actions carry ai_content
    where the add-on produced some. The input assessment is not modified.
    """
    enriched: List[SystemAction] = []
    for action in assessment.system_actions:
        if action.type in ENRICHABLE_ACTIONS:
            response = generate_action_content(action.type, action.description, assessment.week, model=model)
            if response.get("success") and response.get("message"):
                action = replace(action, ai_content=response["message"])
        enriched.append(action)

    return replace(assessment, system_actions=enriched)
