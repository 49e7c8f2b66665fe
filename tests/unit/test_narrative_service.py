import asyncio

from hireagent.agents.agent_schema import AgentResult
from hireagent.agents.narrative_service import NarrativeSynthesizer, fallback_summary
from hireagent.agents.recommendation_aggregator import RecommendationAggregator
from hireagent.core.errors import ProviderError
from conftest import SUMMARY_KEY, Delayed, FakeProvider


RESULTS = [
    AgentResult(agent_name="Technical Skills Agent", score=8, analysis="Strong tools.", recommendation="HIRE"),
    AgentResult(agent_name="Risk Assessment Agent", score=7, analysis="Stable history.", recommendation="HIRE"),
    AgentResult(agent_name="Experience Evaluator Agent", score=8, analysis="Relevant roles.", recommendation="HIRE"),
]


def _aggregate(results=RESULTS):
    return RecommendationAggregator().aggregate(results)


def test_generated_summary_is_returned(application) -> None:
    provider = FakeProvider({SUMMARY_KEY: "  John Doe is a strong fit for the role.  "})
    text = asyncio.run(NarrativeSynthesizer(provider).executive_summary(application, _aggregate(), RESULTS))
    assert text == "John Doe is a strong fit for the role."
    system_seen = provider.calls[0]
    assert SUMMARY_KEY in system_seen


def test_provider_error_falls_back(application) -> None:
    provider = FakeProvider({SUMMARY_KEY: ProviderError("HTTP 429", status_code=429)})
    agg = _aggregate()
    text = asyncio.run(NarrativeSynthesizer(provider).executive_summary(application, agg, RESULTS))
    assert text == fallback_summary("John Doe", agg)
    assert "7.7/10" in text
    assert "HIRE recommendation at high confidence" in text


def test_timeout_and_empty_reply_fall_back(application) -> None:
    agg = _aggregate()
    slow = NarrativeSynthesizer(FakeProvider({SUMMARY_KEY: Delayed(1.0, "late")}), timeout_seconds=0.05)
    assert asyncio.run(slow.executive_summary(application, agg, RESULTS)) == fallback_summary("John Doe", agg)

    blank = NarrativeSynthesizer(FakeProvider({SUMMARY_KEY: "   "}))
    assert asyncio.run(blank.executive_summary(application, agg, RESULTS)) == fallback_summary("John Doe", agg)


def test_no_results_skips_the_provider(application) -> None:
    provider = FakeProvider({SUMMARY_KEY: "should not be used"})
    agg = _aggregate([])
    text = asyncio.run(NarrativeSynthesizer(provider).executive_summary(application, agg, []))
    assert provider.calls == []
    assert text == "Automated analysis for John Doe is unavailable. Manual review required."
