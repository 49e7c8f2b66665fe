"""
Recommendation aggregator: panel verdicts -> one hiring recommendation.

Everything here is deterministic and side-effect free. An empty panel is a
legal input and yields score 0 / REJECT / LOW with agent_count=0, which is how
callers tell "panel could not run" apart from a unanimous reject.
"""

from __future__ import annotations

import math
import statistics
from typing import Dict, List, Sequence

from hireagent.agents.agent_schema import (
    AgentRecommendation,
    AgentResult,
    AggregateResult,
    ConfidenceLevel,
    FinalRecommendation,
)


MIN_RESULTS_FOR_CONFIDENCE = 3
HIGH_CONFIDENCE_MAX_STDEV = 1.5
MEDIUM_CONFIDENCE_MAX_STDEV = 2.5
MAX_DECISION_FACTORS = 6
VOTE_MAJORITY = 0.6

STRENGTH_TAG = "+"
CONCERN_TAG = "⚠"

NEXT_STEPS: Dict[FinalRecommendation, List[str]] = {
    FinalRecommendation.STRONG_HIRE: [
        "Schedule immediate phone interview",
        "Prepare competitive offer package",
        "Check references proactively",
    ],
    FinalRecommendation.HIRE: [
        "Schedule standard interview process",
        "Verify key technical skills mentioned",
        "Conduct reference checks",
    ],
    FinalRecommendation.CONSIDER: [
        "Schedule extended interview to address concerns",
        "Consider skills assessment or trial period",
        "Compare against other candidates",
    ],
    FinalRecommendation.WEAK_CANDIDATE: [
        "Consider only if no better candidates available",
        "Structure interview around specific concerns",
        "Plan additional training if hired",
    ],
    FinalRecommendation.REJECT: [
        "Send polite rejection letter",
        "Keep application on file for future openings",
        "Focus on stronger candidates",
    ],
}


def calculate_overall_score(results: Sequence[AgentResult]) -> float:
    """Mean panel score, rounded half-up to one decimal; 0 for an empty panel."""
    if not results:
        return 0.0
    total = sum(r.score for r in results)
    return math.floor(total * 10 / len(results) + 0.5) / 10


def _votes(results: Sequence[AgentResult], kind: AgentRecommendation) -> int:
    return sum(1 for r in results if r.recommendation == kind)


def determine_final_recommendation(results: Sequence[AgentResult], overall_score: float) -> FinalRecommendation:
    hire = _votes(results, AgentRecommendation.HIRE)
    consider = _votes(results, AgentRecommendation.CONSIDER)
    reject = _votes(results, AgentRecommendation.REJECT)
    total = len(results)

    if overall_score >= 8 and hire >= total * VOTE_MAJORITY:
        return FinalRecommendation.STRONG_HIRE
    if overall_score >= 7 and hire > reject:
        return FinalRecommendation.HIRE
    if overall_score >= 5 and consider > 0:
        return FinalRecommendation.CONSIDER
    if overall_score >= 4 and reject < total * VOTE_MAJORITY:
        return FinalRecommendation.WEAK_CANDIDATE
    return FinalRecommendation.REJECT


def calculate_confidence_level(results: Sequence[AgentResult]) -> ConfidenceLevel:
    """Agreement, not magnitude: population stdev of the scores."""
    if len(results) < MIN_RESULTS_FOR_CONFIDENCE:
        return ConfidenceLevel.LOW
    stdev = statistics.pstdev([r.score for r in results])
    if stdev <= HIGH_CONFIDENCE_MAX_STDEV:
        return ConfidenceLevel.HIGH
    if stdev <= MEDIUM_CONFIDENCE_MAX_STDEV:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def extract_key_decision_factors(results: Sequence[AgentResult]) -> List[str]:
    factors: List[str] = []
    for r in results:
        if r.strengths:
            factors.append(f"{STRENGTH_TAG} {r.strengths[0]} ({r.agent_name})")
        if r.concerns:
            factors.append(f"{CONCERN_TAG} {r.concerns[0]} ({r.agent_name})")
    return factors[:MAX_DECISION_FACTORS]


def synthesize_risk_assessment(results: Sequence[AgentResult]) -> str:
    for r in results:
        if r.risk_focused:
            return r.analysis

    concerns = [c for r in results for c in r.concerns]
    if not concerns:
        return "Low risk candidate: no significant concerns identified."
    return f"Moderate risk: key concerns include {' and '.join(concerns[:2])}."


def next_steps_for(recommendation: FinalRecommendation) -> List[str]:
    return list(NEXT_STEPS[recommendation])


class RecommendationAggregator:
    """
    Description: Combines panel results into an AggregateResult.
    Input: 0..N AgentResult (panel order)
    Output: AggregateResult; never raises for well-formed input
    """

    def aggregate(self, results: Sequence[AgentResult]) -> AggregateResult:
        overall = calculate_overall_score(results)
        final = determine_final_recommendation(results, overall)
        return AggregateResult(
            overall_score=overall,
            final_recommendation=final,
            confidence_level=calculate_confidence_level(results),
            key_decision_factors=extract_key_decision_factors(results),
            risk_assessment=synthesize_risk_assessment(results),
            next_steps=next_steps_for(final),
            agent_count=len(results),
        )
