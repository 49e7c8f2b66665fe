from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from pydantic import BaseModel, Field

from hireagent.agents.agent_schema import ScoringResult
from hireagent.config import Settings, get_settings
from hireagent.core.application import ApplicationRecord


log = logging.getLogger("hireagent.report")

_templates_dir = Path(__file__).parent / "templates"
_jinja_env = Environment(
    loader=FileSystemLoader(str(_templates_dir)),
    autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=False),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)

RECOMMENDATION_COLORS = {
    "STRONG_HIRE": "#059669",
    "HIRE": "#0891b2",
    "CONSIDER": "#d97706",
    "WEAK_CANDIDATE": "#dc2626",
    "REJECT": "#7f1d1d",
}
VOTE_COLORS = {"HIRE": "#059669", "CONSIDER": "#d97706", "REJECT": "#dc2626"}


def _label(value: str) -> str:
    return value.replace("_", " ")


def _score_color(score: float) -> str:
    if score >= 8:
        return "#059669"
    if score >= 6:
        return "#0891b2"
    if score >= 4:
        return "#d97706"
    return "#dc2626"


_jinja_env.filters["label"] = _label
_jinja_env.filters["score_color"] = _score_color
_jinja_env.filters["recommendation_color"] = lambda v: RECOMMENDATION_COLORS.get(v, "#6b7280")
_jinja_env.filters["vote_color"] = lambda v: VOTE_COLORS.get(v, "#6b7280")


class ReviewerNotification(BaseModel):
    """Email payload handed to the mail transport; this module never sends it."""

    to: List[str]
    cc: List[str] = Field(default_factory=list)
    subject: str
    html_body: str
    text_body: str


def _context(result: ScoringResult) -> dict:
    return {
        "r": result,
        "recommendation": result.final_recommendation.value,
        "confidence": result.confidence_level.value,
        "agents": [
            {
                "name": a.agent_name,
                "score": a.score,
                "recommendation": a.recommendation.value,
                "analysis": a.analysis,
                "strengths": a.strengths,
                "concerns": a.concerns,
            }
            for a in result.agent_analyses
        ],
    }


def render_analysis_html(result: ScoringResult) -> str:
    """HTML recommendation block; plain manual-review notice when analysis is unavailable."""
    return _jinja_env.get_template("analysis_block.html").render(**_context(result))


def render_analysis_text(result: ScoringResult) -> str:
    return _jinja_env.get_template("analysis_block.txt").render(**_context(result)).strip() + "\n"


def build_reviewer_notification(
    record: ApplicationRecord,
    result: ScoringResult,
    *,
    settings: Optional[Settings] = None,
) -> ReviewerNotification:
    """
    Description: Hiring-manager notification for a submitted application.
    Input: ApplicationRecord + ScoringResult
    Output: ReviewerNotification (subject, recipients, bodies)
    """
    s = settings or get_settings()
    name = record.candidate_name
    subject = f"New Employee Application - {name} (Application #{result.application_id})"
    html_body = _jinja_env.get_template("reviewer_email.html").render(
        company=s.COMPANY_NAME,
        position=s.POSITION_TITLE,
        candidate=name,
        personal=record.personal_info,
        application_id=result.application_id,
        analysis_html=render_analysis_html(result),
    )
    text_body = (
        f"New application for {s.POSITION_TITLE}: {name} (#{result.application_id})\n\n"
        + render_analysis_text(result)
    )
    log.debug("Built reviewer notification for application %s", result.application_id)
    return ReviewerNotification(
        to=[s.REVIEWER_EMAIL],
        cc=[s.REVIEWER_CC_EMAIL] if s.REVIEWER_CC_EMAIL else [],
        subject=subject,
        html_body=html_body,
        text_body=text_body,
    )
