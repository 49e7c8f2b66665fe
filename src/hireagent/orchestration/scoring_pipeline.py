"""
ScoringPipeline - the single entry point the application-submission workflow calls.

    START -> PANEL_RUNNING -> AGGREGATING -> SYNTHESIZING -> DONE(success)

Individual agents fail open inside the orchestrator. At this boundary the
contract is fail-fast: any unexpected exception (or the overall timeout)
ends the run as DONE(failure) with safe defaults, never a half-filled success.
A panel that produced no results at all is reported as analysis unavailable
rather than as a genuine REJECT.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence, Union

from langsmith import traceable

from hireagent.agents.agent_orchestrator import AgentOrchestrator, PanelOutcome
from hireagent.agents.agent_schema import ConfidenceLevel, FinalRecommendation, ScoringResult
from hireagent.agents.narrative_service import NarrativeSynthesizer
from hireagent.agents.panel import DEFAULT_PANEL, AgentSpec
from hireagent.agents.recommendation_aggregator import RecommendationAggregator
from hireagent.agents.score_evaluator_service import ScoreEvaluator
from hireagent.config import Settings, get_settings
from hireagent.core.application import ApplicationRecord
from hireagent.core.state import ScoringRunState
from hireagent.tools.llm_tools import ChatProvider, build_provider


log = logging.getLogger("hireagent.pipeline")

UNAVAILABLE_SUMMARY = "AI analysis unavailable - manual review required."
NO_RESULTS_ERROR = "no agent analyses available"
DISABLED_ERROR = "AI scoring disabled"
MANUAL_REVIEW_STEPS: List[str] = [
    "Conduct manual review of application",
    "Interview candidate if qualifications meet requirements",
]
FAILURE_SUMMARY = "Analysis failed due to technical error. Manual review required."
FAILURE_RISK = "Unable to assess risk due to analysis failure."
FAILURE_STEPS: List[str] = ["Retry analysis or conduct manual review"]


class ScoringPipeline:
    """
    Description: Wires orchestrator, aggregator and synthesizer into one call.
    Input: ApplicationRecord + application id (logging/correlation only)
    Output: ScoringResult discriminated on `success`
    """

    def __init__(
        self,
        orchestrator: AgentOrchestrator,
        aggregator: RecommendationAggregator,
        synthesizer: NarrativeSynthesizer,
        *,
        ai_scoring_enabled: bool = True,
        pipeline_timeout_seconds: float = 120.0,
    ) -> None:
        self.orchestrator = orchestrator
        self.aggregator = aggregator
        self.synthesizer = synthesizer
        self.ai_scoring_enabled = bool(ai_scoring_enabled)
        self.pipeline_timeout_seconds = float(pipeline_timeout_seconds)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        provider: Optional[ChatProvider] = None,
        panel: Sequence[AgentSpec] = DEFAULT_PANEL,
    ) -> "ScoringPipeline":
        s = settings or get_settings()
        provider = provider or build_provider(s)
        evaluator = ScoreEvaluator(
            provider,
            timeout_seconds=s.AGENT_TIMEOUT_SECONDS,
            temperature=s.AGENT_TEMPERATURE,
            max_tokens=s.AGENT_MAX_TOKENS,
        )
        synthesizer = NarrativeSynthesizer(
            provider,
            timeout_seconds=s.AGENT_TIMEOUT_SECONDS,
            temperature=s.SUMMARY_TEMPERATURE,
            max_tokens=s.SUMMARY_MAX_TOKENS,
            position_title=s.POSITION_TITLE,
        )
        return cls(
            AgentOrchestrator(evaluator, panel),
            RecommendationAggregator(),
            synthesizer,
            ai_scoring_enabled=s.AI_SCORING_ENABLED,
            pipeline_timeout_seconds=s.PIPELINE_TIMEOUT_SECONDS,
        )

    @traceable(name="scoring_pipeline.score")
    async def score(self, record: ApplicationRecord, application_id: Union[int, str]) -> ScoringResult:
        run = ScoringRunState(application_id=str(application_id))
        run.enter("START")
        log.info("Scoring application %s", run.application_id)

        if not self.ai_scoring_enabled:
            log.info("AI scoring disabled; application %s needs manual review", run.application_id)
            run.fail(DISABLED_ERROR)
            return self._unavailable(run, [], DISABLED_ERROR)

        try:
            return await asyncio.wait_for(self._run(record, run), timeout=self.pipeline_timeout_seconds)
        except asyncio.TimeoutError:
            msg = f"scoring timed out after {self.pipeline_timeout_seconds:.0f}s"
            log.error("Application %s: %s", run.application_id, msg)
            run.fail(msg)
            return self._failure(run, msg)
        except Exception as e:
            log.exception("Scoring failed for application %s", run.application_id)
            msg = str(e) or e.__class__.__name__
            run.fail(msg)
            return self._failure(run, msg)

    def score_sync(self, record: ApplicationRecord, application_id: Union[int, str]) -> ScoringResult:
        """Blocking wrapper for callers without an event loop."""
        return asyncio.run(self.score(record, application_id))

    async def _run(self, record: ApplicationRecord, run: ScoringRunState) -> ScoringResult:
        run.finish()
        run.enter("PANEL_RUNNING")
        panel: PanelOutcome = await self.orchestrator.run(record, application_id=run.application_id)
        if panel.total_failure:
            log.warning("Application %s: every panel agent failed", run.application_id)
            run.fail(NO_RESULTS_ERROR)
            return self._unavailable(run, panel.failed_agents, NO_RESULTS_ERROR)
        run.finish(f"{len(panel.results)} result(s)")

        run.enter("AGGREGATING")
        aggregate = self.aggregator.aggregate(panel.results)
        run.finish(f"{aggregate.final_recommendation.value} {aggregate.overall_score}")

        run.enter("SYNTHESIZING")
        summary = await self.synthesizer.executive_summary(record, aggregate, panel.results)

        run.done()
        log.info(
            "Application %s scored %.1f -> %s (%s confidence, %d agents)",
            run.application_id,
            aggregate.overall_score,
            aggregate.final_recommendation.value,
            aggregate.confidence_level.value,
            aggregate.agent_count,
        )
        return ScoringResult(
            success=True,
            application_id=run.application_id,
            analysis_available=True,
            overall_score=aggregate.overall_score,
            final_recommendation=aggregate.final_recommendation,
            confidence_level=aggregate.confidence_level,
            key_decision_factors=list(aggregate.key_decision_factors),
            risk_assessment=aggregate.risk_assessment,
            next_steps=list(aggregate.next_steps),
            executive_summary=summary,
            agent_analyses=list(panel.results),
            failed_agents=list(panel.failed_agents),
            trace=list(run.steps),
        )

    def _unavailable(self, run: ScoringRunState, failed_agents: List[str], error: str) -> ScoringResult:
        aggregate = self.aggregator.aggregate([])
        return ScoringResult(
            success=False,
            application_id=run.application_id,
            analysis_available=False,
            overall_score=aggregate.overall_score,
            final_recommendation=aggregate.final_recommendation,
            confidence_level=aggregate.confidence_level,
            key_decision_factors=["Manual review required"],
            risk_assessment="No automated risk assessment available.",
            next_steps=list(MANUAL_REVIEW_STEPS),
            executive_summary=UNAVAILABLE_SUMMARY,
            failed_agents=list(failed_agents),
            trace=list(run.steps),
            error=error,
        )

    @staticmethod
    def _failure(run: ScoringRunState, error: str) -> ScoringResult:
        return ScoringResult(
            success=False,
            application_id=run.application_id,
            analysis_available=False,
            overall_score=0.0,
            final_recommendation=FinalRecommendation.REJECT,
            confidence_level=ConfidenceLevel.LOW,
            key_decision_factors=[],
            risk_assessment=FAILURE_RISK,
            next_steps=list(FAILURE_STEPS),
            executive_summary=FAILURE_SUMMARY,
            trace=list(run.steps),
            error=error,
        )
