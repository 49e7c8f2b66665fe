from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hireagent.core.state import StepTrace


class AgentRecommendation(str, Enum):
    HIRE = "HIRE"
    CONSIDER = "CONSIDER"
    REJECT = "REJECT"


class FinalRecommendation(str, Enum):
    STRONG_HIRE = "STRONG_HIRE"
    HIRE = "HIRE"
    CONSIDER = "CONSIDER"
    WEAK_CANDIDATE = "WEAK_CANDIDATE"
    REJECT = "REJECT"


class ConfidenceLevel(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


# rank used when comparing confidence levels
CONFIDENCE_RANK = {ConfidenceLevel.LOW: 0, ConfidenceLevel.MEDIUM: 1, ConfidenceLevel.HIGH: 2}


class AgentResult(BaseModel):
    """
    Description: One panel member's verdict on an application.
    Input: validated provider JSON + agent name
    Output: immutable result, discarded after aggregation
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    agent_name: str = Field(min_length=1)
    score: int = Field(ge=1, le=10)
    strengths: List[str] = Field(default_factory=list)
    concerns: List[str] = Field(default_factory=list)
    analysis: str = Field(min_length=1)
    recommendation: AgentRecommendation
    # set from the panel definition, never from the payload
    risk_focused: bool = False

    @field_validator("score", mode="before")
    @classmethod
    def _integral_score(cls, v):
        # bool is an int subclass; "true" and "8" are not scores
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("score must be a JSON number")
        if isinstance(v, float) and not v.is_integer():
            raise ValueError("score must be a whole number")
        return int(v)

    @field_validator("strengths", "concerns", mode="before")
    @classmethod
    def _findings(cls, v):
        if not isinstance(v, list):
            raise ValueError("findings must be a list")
        out = []
        for item in v:
            if not isinstance(item, str):
                raise ValueError("findings must be strings")
            if not item.strip():
                raise ValueError("findings must not be blank")
            out.append(item.strip())
        return out

    @field_validator("analysis", mode="before")
    @classmethod
    def _analysis(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("recommendation", mode="before")
    @classmethod
    def _recommendation(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


class AggregateResult(BaseModel):
    """
    Description: Panel verdicts combined into one recommendation.
    Input: 0..N AgentResult
    Output: score, recommendation, confidence and supporting text
    """

    model_config = ConfigDict(frozen=True)

    overall_score: float
    final_recommendation: FinalRecommendation
    confidence_level: ConfidenceLevel
    key_decision_factors: List[str] = Field(default_factory=list, max_length=6)
    risk_assessment: str
    next_steps: List[str] = Field(default_factory=list)
    agent_count: int = 0


class ScoringResult(BaseModel):
    """
    Description: Public result of ScoringPipeline.score; callers only branch on `success`.
    Input: aggregate + narrative, or failure defaults
    Output: shape-stable payload for the notification renderer
    """

    success: bool
    application_id: str
    analysis_available: bool
    overall_score: float = 0.0
    final_recommendation: FinalRecommendation = FinalRecommendation.REJECT
    confidence_level: ConfidenceLevel = ConfidenceLevel.LOW
    key_decision_factors: List[str] = Field(default_factory=list)
    risk_assessment: str = ""
    next_steps: List[str] = Field(default_factory=list)
    executive_summary: str = ""
    agent_analyses: List[AgentResult] = Field(default_factory=list)
    failed_agents: List[str] = Field(default_factory=list)
    trace: List[StepTrace] = Field(default_factory=list)
    error: Optional[str] = None
