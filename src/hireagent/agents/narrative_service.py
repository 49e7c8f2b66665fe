from __future__ import annotations

import asyncio
import logging
from typing import List, Sequence

from hireagent.agents.agent_schema import AgentResult, AggregateResult
from hireagent.core.application import ApplicationRecord
from hireagent.core.errors import ProviderError
from hireagent.tools.llm_tools import ChatMessage, ChatProvider


log = logging.getLogger("hireagent.narrative")


def fallback_summary(candidate_name: str, aggregate: AggregateResult) -> str:
    """Algorithmic 1-2 sentence summary used whenever generation is unavailable."""
    name = candidate_name or "The candidate"
    label = aggregate.final_recommendation.value.replace("_", " ")
    if aggregate.agent_count == 0:
        return f"Automated analysis for {name} is unavailable. Manual review required."
    return (
        f"{name} received an overall panel score of {aggregate.overall_score:.1f}/10 "
        f"from {aggregate.agent_count} evaluator(s), with a {label} recommendation "
        f"at {aggregate.confidence_level.value.lower()} confidence."
    )


class NarrativeSynthesizer:
    """
    Description: Executive summary for the reviewer notification.
    Input: ApplicationRecord (for the name) + AggregateResult + panel results
    Output: non-empty summary text, generated or fallback
    """

    def __init__(
        self,
        provider: ChatProvider,
        *,
        timeout_seconds: float = 30.0,
        temperature: float = 0.3,
        max_tokens: int = 200,
        position_title: str = "Customer Service Specialist",
    ) -> None:
        self.provider = provider
        self.timeout_seconds = float(timeout_seconds)
        self.temperature = float(temperature)
        self.max_tokens = int(max_tokens)
        self.position_title = position_title

    def _messages(self, candidate_name: str, aggregate: AggregateResult, results: Sequence[AgentResult]) -> List[ChatMessage]:
        analyses = "\n".join(f"{r.agent_name} ({r.score}/10, {r.recommendation.value}): {r.analysis}" for r in results)
        prompt = (
            "Generate a concise executive summary for a hiring decision based on these agent analyses.\n\n"
            f"CANDIDATE: {candidate_name}\n"
            f"POSITION: {self.position_title}\n"
            f"PANEL RECOMMENDATION: {aggregate.final_recommendation.value} "
            f"(score {aggregate.overall_score}/10, confidence {aggregate.confidence_level.value})\n\n"
            f"AGENT ANALYSES:\n{analyses}\n\n"
            "Write a professional 2-3 sentence executive summary that captures the hiring recommendation "
            "and its main reasons. Focus on business impact and fit. Plain text only."
        )
        return [
            ChatMessage(
                role="system",
                content="You are an executive hiring consultant. Provide clear, concise summaries for business leaders.",
            ),
            ChatMessage(role="user", content=prompt),
        ]

    async def executive_summary(
        self,
        record: ApplicationRecord,
        aggregate: AggregateResult,
        results: Sequence[AgentResult],
    ) -> str:
        name = record.candidate_name
        if not results:
            return fallback_summary(name, aggregate)

        try:
            text = await asyncio.wait_for(
                self.provider.complete(
                    self._messages(name, aggregate, results),
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            log.warning("Executive summary timed out after %.1fs; using fallback", self.timeout_seconds)
            return fallback_summary(name, aggregate)
        except ProviderError as e:
            log.warning("Executive summary provider error: %s; using fallback", e)
            return fallback_summary(name, aggregate)
        except Exception:
            log.exception("Executive summary failed; using fallback")
            return fallback_summary(name, aggregate)

        text = (text or "").strip()
        if not text:
            log.warning("Executive summary came back empty; using fallback")
            return fallback_summary(name, aggregate)
        return text
