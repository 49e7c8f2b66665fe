"""
The fixed evaluator panel.

Each AgentSpec names a perspective, the criteria it weighs and which
application sections it reads. Sections overlap; the risk agent,
for instance, reads work history and eligibility alongside the profile.
"""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict


class AgentSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    specialty: str
    focus_areas: Tuple[str, ...]
    sections: Tuple[str, ...]
    guidance: str = ""
    score_hint: str = "1-10, where 10 is strongest"
    is_risk_focused: bool = False


TECHNICAL_SKILLS = AgentSpec(
    name="Technical Skills Agent",
    specialty="Technical Skills Assessment Specialist",
    focus_areas=(
        "Software proficiency (TMS, Shopify, Amazon Seller Central, Excel, Canva)",
        "Learning ability and adaptability",
        "Technical problem-solving approach",
        "Digital literacy and tool adoption",
        "Process optimization mindset",
    ),
    sections=("profile", "skills", "scenarios", "work"),
    guidance="Be critical but fair. Score 7-10 for strong technical candidates, 4-6 for adequate, 1-3 for weak.",
)

CULTURAL_FIT = AgentSpec(
    name="Cultural Fit Agent",
    specialty="Cultural Fit Assessment Specialist",
    focus_areas=(
        "Customer-first mentality",
        "Safety and compliance focus",
        "Continuous learning mindset",
        "Team collaboration",
        "Professional communication",
        "Attention to detail",
    ),
    sections=("profile", "scenarios"),
    guidance="Score on cultural alignment and the soft skills the answers actually demonstrate.",
)

EXPERIENCE = AgentSpec(
    name="Experience Evaluator Agent",
    specialty="Experience Evaluation Specialist",
    focus_areas=(
        "Relevant customer service experience",
        "Industry experience (B2B, chemicals, or related)",
        "Career progression and growth",
        "Job stability and commitment",
        "Transferable skills",
        "Educational background relevance",
    ),
    sections=("profile", "work", "education", "references"),
    guidance="Weigh experience quality over quantity. Look for growth patterns and relevance.",
)

RISK = AgentSpec(
    name="Risk Assessment Agent",
    specialty="Hiring Risk Assessment Specialist",
    focus_areas=(
        "Job hopping patterns",
        "Gaps in employment",
        "Over- or under-qualification",
        "Inconsistencies across the application",
        "Potential compliance issues",
        "Compensation expectations versus role level",
        "Geographic or logistics concerns",
    ),
    sections=("profile", "work", "education", "references", "eligibility"),
    guidance="Identify issues that could affect job performance or retention.",
    score_hint="1-10, where 10 is lowest risk and 1 is highest risk",
    is_risk_focused=True,
)

INDUSTRY_FIT = AgentSpec(
    name="Industry Fit Agent",
    specialty="Chemical Industry Specialist",
    focus_areas=(
        "Hazmat and chemical handling awareness",
        "Regulatory compliance mindset",
        "B2B relationship management",
        "Safety consciousness",
        "Complex order management capability",
        "Logistics and freight understanding",
    ),
    sections=("profile", "work", "scenarios", "eligibility"),
    guidance="Focus on chemical-industry requirements and B2B customer service nuances.",
)

DEFAULT_PANEL: Tuple[AgentSpec, ...] = (TECHNICAL_SKILLS, CULTURAL_FIT, EXPERIENCE, RISK, INDUSTRY_FIT)
