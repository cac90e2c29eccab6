import pytest
from unittest.mock import patch, MagicMock
from maternal_risk.data_model import BloodPressure
from maternal_risk.risk_engine import assess_risk
from maternal_risk.llm_insight import (
    FALLBACK_INSIGHT,
    build_insight_messages,
    enrich_actions_with_ai,
    generate_action_content,
    generate_risk_insight,
)


def completion(text):
    resp = MagicMock()
    resp.choices = [MagicMock()]
    resp.choices[0].message.content = text
    return resp


@pytest.fixture
def high_assessment(make_check_in):
    week1 = make_check_in(week=1, swelling=4)
    week2 = make_check_in(week=2, swelling=4, mood=2, blood_pressure=BloodPressure(145, 95))
    return assess_risk(week2, [week1])


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.delenv("RISK_INSIGHT_MODEL", raising=False)


def test_prompt_lists_triggers(high_assessment):
    messages = build_insight_messages(high_assessment)
    assert messages[0]["role"] == "system"
    user = messages[1]["content"]
    assert "week 2" in user
    assert "Overall status: needs attention." in user
    assert "preeclampsia: Elevated blood pressure reading, Persistent swelling noticed" in user
    assert "depression: Mood reported as low" in user


def test_prompt_without_triggers(make_check_in):
    assessment = assess_risk(make_check_in(sleep_quality=4), [])
    user = build_insight_messages(assessment)[1]["content"]
    assert "Overall status: stable." in user
    assert "No specific concerns flagged." in user


def test_not_configured(monkeypatch, high_assessment):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with patch("maternal_risk.llm_insight.OpenAI") as mock_openai:
        result = generate_risk_insight(high_assessment)
    assert result == {"success": False, "error": "AI service not configured."}
    mock_openai.assert_not_called()


@patch("maternal_risk.llm_insight.OpenAI")
def test_insight_success(mock_openai, api_key, high_assessment):
    client = mock_openai.return_value
    client.chat.completions.create.return_value = completion("  Take it easy this week.  ")

    result = generate_risk_insight(high_assessment)

    assert result == {"success": True, "message": "Take it easy this week."}
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["max_tokens"] == 300


@patch("maternal_risk.llm_insight.OpenAI")
def test_insight_model_from_env(mock_openai, api_key, monkeypatch, high_assessment):
    monkeypatch.setenv("RISK_INSIGHT_MODEL", "gpt-4o")
    mock_openai.return_value.chat.completions.create.return_value = completion("ok")
    generate_risk_insight(high_assessment)
    assert mock_openai.return_value.chat.completions.create.call_args.kwargs["model"] == "gpt-4o"


@patch("maternal_risk.llm_insight.OpenAI")
def test_insight_falls_back_on_api_error(mock_openai, api_key, high_assessment):
    mock_openai.return_value.chat.completions.create.side_effect = RuntimeError("rate limited")
    assert generate_risk_insight(high_assessment) == {"success": True, "message": FALLBACK_INSIGHT}


@patch("maternal_risk.llm_insight.OpenAI")
def test_insight_falls_back_on_bad_max_tokens(mock_openai, api_key, monkeypatch, high_assessment):
    monkeypatch.setenv("RISK_INSIGHT_MAX_TOKENS", "lots")
    assert generate_risk_insight(high_assessment) == {"success": True, "message": FALLBACK_INSIGHT}
    mock_openai.return_value.chat.completions.create.assert_not_called()


@patch("maternal_risk.llm_insight.OpenAI")
def test_insight_falls_back_on_empty_reply(mock_openai, api_key, high_assessment):
    mock_openai.return_value.chat.completions.create.return_value = completion("")
    assert generate_risk_insight(high_assessment)["message"] == FALLBACK_INSIGHT


@patch("maternal_risk.llm_insight.OpenAI")
def test_action_content_error(mock_openai, api_key):
    mock_openai.return_value.chat.completions.create.side_effect = RuntimeError("boom")
    result = generate_action_content("nutrition_adjust", "blood pressure support", 22)
    assert result["success"] is False


@patch("maternal_risk.llm_insight.OpenAI")
def test_enrich_only_touches_nutrition_and_community(mock_openai, api_key, high_assessment):
    mock_openai.return_value.chat.completions.create.return_value = completion("Try a handful of walnuts.")

    enriched = enrich_actions_with_ai(high_assessment)

    by_type = {a.type: a for a in enriched.system_actions}
    assert by_type["nutrition_adjust"].ai_content == "Try a handful of walnuts."
    assert by_type["community_suggest"].ai_content == "Try a handful of walnuts."
    assert by_type["chat_tone"].ai_content is None
    assert by_type["doctor_alert"].ai_content is None
    # deterministic values untouched
    assert enriched.indicators == high_assessment.indicators
    assert enriched.overall_level == high_assessment.overall_level
    assert all(a.ai_content is None for a in high_assessment.system_actions)


@patch("maternal_risk.llm_insight.OpenAI")
def test_enrich_leaves_actions_alone_on_failure(mock_openai, api_key, high_assessment):
    mock_openai.return_value.chat.completions.create.side_effect = RuntimeError("down")
    enriched = enrich_actions_with_ai(high_assessment)
    assert enriched.system_actions == high_assessment.system_actions
