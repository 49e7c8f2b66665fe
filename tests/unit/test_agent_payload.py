import pytest

from hireagent.agents.agent_schema import AgentRecommendation
from hireagent.agents.score_evaluator_service import extract_json_object, parse_agent_payload
from hireagent.core.errors import InvalidAgentResponse


def _payload(**overrides):
    base = {
        "score": 8,
        "strengths": ["Strong Shopify background"],
        "concerns": ["Limited hazmat exposure"],
        "analysis": "Capable with the core tools.",
        "recommendation": "HIRE",
    }
    base.update(overrides)
    return base


def test_valid_payload_parses() -> None:
    r = parse_agent_payload("Technical Skills Agent", _payload())
    assert r.agent_name == "Technical Skills Agent"
    assert r.score == 8
    assert r.recommendation is AgentRecommendation.HIRE
    assert r.strengths == ["Strong Shopify background"]


def test_integral_float_and_loose_recommendation_are_accepted() -> None:
    r = parse_agent_payload("A", _payload(score=7.0, recommendation=" consider "))
    assert r.score == 7
    assert r.recommendation is AgentRecommendation.CONSIDER


def test_missing_findings_default_to_empty() -> None:
    payload = _payload()
    del payload["strengths"]
    del payload["concerns"]
    r = parse_agent_payload("A", payload)
    assert r.strengths == [] and r.concerns == []


@pytest.mark.parametrize(
    "overrides",
    [
        {"score": 0},
        {"score": 11},
        {"score": 7.5},
        {"score": True},
        {"score": "high"},
        {"analysis": "   "},
        {"recommendation": "MAYBE"},
        {"strengths": "Good communicator"},
        {"concerns": [1, 2]},
        {"score": "8"},
        {"strengths": None},
        {"concerns": ["", "  "]},
    ],
)
def test_contract_violations_are_rejected(overrides) -> None:
    with pytest.raises(InvalidAgentResponse):
        parse_agent_payload("A", _payload(**overrides))


@pytest.mark.parametrize("field", ["score", "analysis", "recommendation"])
def test_missing_required_field_is_rejected(field) -> None:
    payload = _payload()
    del payload[field]
    with pytest.raises(InvalidAgentResponse) as exc:
        parse_agent_payload("A", payload)
    assert field in str(exc.value)


def test_non_object_payload_is_rejected() -> None:
    with pytest.raises(InvalidAgentResponse):
        parse_agent_payload("A", ["not", "an", "object"])


def test_result_is_immutable() -> None:
    r = parse_agent_payload("A", _payload())
    with pytest.raises(Exception):
        r.score = 3


def test_extract_json_from_fenced_reply() -> None:
    reply = 'Here you go:\n```json\n{"score": 6, "analysis": "ok", "recommendation": "CONSIDER"}\n```'
    assert extract_json_object(reply) == {"score": 6, "analysis": "ok", "recommendation": "CONSIDER"}


def test_extract_json_returns_none_for_prose() -> None:
    assert extract_json_object("I cannot evaluate this candidate.") is None
    assert extract_json_object("{not json}") is None
    assert extract_json_object("") is None


def test_risk_flag_comes_from_caller_not_payload() -> None:
    plain = parse_agent_payload("A", _payload(risk_focused=True))
    assert plain.risk_focused is False
    risk = parse_agent_payload("Risk Assessment Agent", _payload(), risk_focused=True)
    assert risk.risk_focused is True


def test_findings_are_trimmed() -> None:
    r = parse_agent_payload("A", _payload(strengths=["  Reliable  "]))
    assert r.strengths == ["Reliable"]
