"""
Applicant data as submitted by the intake form, plus the deterministic text
projection the scoring agents read.

The form posts camelCase JSON; models accept both the camelCase aliases and
the snake_case attribute names.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


NOT_PROVIDED = "Not provided"

SECTION_ORDER: Tuple[str, ...] = (
    "profile",
    "work",
    "education",
    "skills",
    "scenarios",
    "references",
    "eligibility",
)


class _FormModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class PersonalInfo(_FormModel):
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    available_start_date: Optional[str] = None
    hours_available: Optional[str] = None
    shift_preference: Optional[str] = None
    has_transportation: bool = False
    desired_salary: Optional[str] = None
    compensation_type: Optional[str] = None


class WorkExperience(_FormModel):
    company_name: str
    job_title: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False
    responsibilities: Optional[str] = None
    reason_for_leaving: Optional[str] = None


class Education(_FormModel):
    institution_name: str
    degree_type: Optional[str] = None
    field_of_study: Optional[str] = None
    graduation_date: Optional[str] = None
    gpa: Optional[str] = None
    is_completed: bool = True


class Reference(_FormModel):
    name: str
    relationship: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    years_known: Optional[int] = None


class RoleAssessment(_FormModel):
    # platform experience
    tms_my_carrier_experience: Optional[str] = None
    shopify_experience: Optional[str] = None
    amazon_seller_central_experience: Optional[str] = None
    excel_proficiency: Optional[str] = None
    canva_experience: Optional[str] = None

    # free-text answers
    learning_under_pressure: Optional[str] = None
    conflicting_information: Optional[str] = None
    work_motivation: Optional[str] = None
    delayed_shipment_scenario: Optional[str] = None
    restricted_chemical_scenario: Optional[str] = None
    hazmat_freight_scenario: Optional[str] = None
    customer_quote_scenario: Optional[str] = None
    software_learning_experience: Optional[str] = None
    stress_management: Optional[str] = None
    automation_ideas: Optional[str] = None
    data_analysis_approach: Optional[str] = None
    ideal_work_environment: Optional[str] = None
    b2b_loyalty_factor: Optional[str] = None
    customer_service_motivation: List[str] = Field(default_factory=list)


class Eligibility(_FormModel):
    eligible_to_work: bool = False
    requires_sponsorship: bool = False
    consent_to_background_check: bool = False
    consent_to_drug_test: bool = False
    has_hazmat_experience: bool = False
    has_forklift_certification: bool = False
    has_chemical_handling_experience: bool = False
    willing_to_obtain_certifications: bool = False


class ApplicationRecord(_FormModel):
    """
    Description: Validated applicant submission consumed read-only by the scoring panel.
    Input: intake form JSON
    Output: typed record
    """

    job_posting_id: Optional[int] = None
    personal_info: PersonalInfo
    role_assessment: RoleAssessment = Field(default_factory=RoleAssessment)
    eligibility: Eligibility = Field(default_factory=Eligibility)
    work_experience: List[WorkExperience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    references: List[Reference] = Field(default_factory=list)
    additional_info: Optional[str] = None

    @property
    def candidate_name(self) -> str:
        p = self.personal_info
        return f"{p.first_name} {p.last_name}".strip()


_PLATFORM_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("tms_my_carrier_experience", "TMS MyCarrier"),
    ("shopify_experience", "Shopify"),
    ("amazon_seller_central_experience", "Amazon Seller Central"),
    ("excel_proficiency", "Excel"),
    ("canva_experience", "Canva"),
)

_SCENARIO_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("learning_under_pressure", "Learning Under Pressure"),
    ("conflicting_information", "Handling Conflicting Information"),
    ("work_motivation", "Work Motivation"),
    ("delayed_shipment_scenario", "Delayed Shipment Scenario"),
    ("restricted_chemical_scenario", "Restricted Chemical Scenario"),
    ("hazmat_freight_scenario", "Hazmat Freight Scenario"),
    ("customer_quote_scenario", "Customer Quote Scenario"),
    ("software_learning_experience", "Software Learning Experience"),
    ("stress_management", "Stress Management"),
    ("automation_ideas", "Automation Ideas"),
    ("data_analysis_approach", "Data Analysis Approach"),
    ("ideal_work_environment", "Ideal Work Environment"),
    ("b2b_loyalty_factor", "B2B Loyalty Factor"),
)


def _val(value: Optional[object]) -> str:
    if value is None:
        return NOT_PROVIDED
    text = str(value).strip()
    return text or NOT_PROVIDED


def _yn(flag: bool) -> str:
    return "Yes" if flag else "No"


def _profile(r: ApplicationRecord) -> List[str]:
    p = r.personal_info
    return [
        "CANDIDATE PROFILE:",
        f"Name: {r.candidate_name}",
        f"Location: {_val(p.city)}, {_val(p.state)}",
        f"Available Start Date: {_val(p.available_start_date)}",
        f"Hours Available: {_val(p.hours_available)}",
        f"Shift Preference: {_val(p.shift_preference)}",
        f"Has Transportation: {_yn(p.has_transportation)}",
        f"Desired Compensation: {_val(p.desired_salary)} ({_val(p.compensation_type)})",
    ]


def _work(r: ApplicationRecord) -> List[str]:
    lines = ["WORK EXPERIENCE:"]
    if not r.work_experience:
        lines.append("None listed")
        return lines
    for i, w in enumerate(r.work_experience, start=1):
        end = "Present" if w.is_current else _val(w.end_date)
        lines.append(f"{i}. {w.job_title} at {w.company_name}")
        lines.append(f"   Duration: {_val(w.start_date)} - {end}")
        lines.append(f"   Responsibilities: {_val(w.responsibilities)}")
        lines.append(f"   Reason for Leaving: {_val(w.reason_for_leaving)}")
    return lines


def _education(r: ApplicationRecord) -> List[str]:
    lines = ["EDUCATION:"]
    if not r.education:
        lines.append("None listed")
        return lines
    for i, e in enumerate(r.education, start=1):
        lines.append(f"{i}. {_val(e.degree_type)} in {_val(e.field_of_study)}")
        lines.append(f"   Institution: {e.institution_name}")
        lines.append(f"   Graduation: {_val(e.graduation_date)}")
        lines.append(f"   Completed: {_yn(e.is_completed)}")
        lines.append(f"   GPA: {_val(e.gpa)}")
    return lines


def _skills(r: ApplicationRecord) -> List[str]:
    ra = r.role_assessment
    lines = ["TECHNICAL SKILLS:"]
    for attr, label in _PLATFORM_FIELDS:
        lines.append(f"{label}: {_val(getattr(ra, attr))}")
    return lines


def _scenarios(r: ApplicationRecord) -> List[str]:
    ra = r.role_assessment
    lines = ["SCENARIO RESPONSES:"]
    for attr, label in _SCENARIO_FIELDS:
        lines.append(f"{label}: {_val(getattr(ra, attr))}")
    motivation = ", ".join(m.strip() for m in ra.customer_service_motivation if m.strip())
    lines.append(f"Customer Service Motivation: {_val(motivation)}")
    lines.append(f"Additional Information: {_val(r.additional_info)}")
    return lines


def _references(r: ApplicationRecord) -> List[str]:
    lines = ["REFERENCES:"]
    if not r.references:
        lines.append("None listed")
        return lines
    for i, ref in enumerate(r.references, start=1):
        lines.append(f"{i}. {ref.name} - {_val(ref.relationship)}")
        lines.append(f"   Company: {_val(ref.company)}")
        lines.append(f"   Years Known: {_val(ref.years_known)}")
    return lines


def _eligibility(r: ApplicationRecord) -> List[str]:
    el = r.eligibility
    return [
        "ELIGIBILITY & COMPLIANCE:",
        f"Eligible to Work: {_yn(el.eligible_to_work)}",
        f"Requires Sponsorship: {_yn(el.requires_sponsorship)}",
        f"Background Check Consent: {_yn(el.consent_to_background_check)}",
        f"Drug Test Consent: {_yn(el.consent_to_drug_test)}",
        f"Hazmat Experience: {_yn(el.has_hazmat_experience)}",
        f"Forklift Certification: {_yn(el.has_forklift_certification)}",
        f"Chemical Handling Experience: {_yn(el.has_chemical_handling_experience)}",
        f"Willing to Obtain Certifications: {_yn(el.willing_to_obtain_certifications)}",
    ]


_RENDERERS = {
    "profile": _profile,
    "work": _work,
    "education": _education,
    "skills": _skills,
    "scenarios": _scenarios,
    "references": _references,
    "eligibility": _eligibility,
}


def _normalize_sections(sections: Optional[Iterable[str]]) -> Sequence[str]:
    if sections is None:
        return SECTION_ORDER
    wanted = set(sections)
    unknown = wanted - set(SECTION_ORDER)
    if unknown:
        raise ValueError(f"unknown application sections: {sorted(unknown)}")
    return [s for s in SECTION_ORDER if s in wanted]


def render_application_text(record: ApplicationRecord, sections: Optional[Iterable[str]] = None) -> str:
    """
    Render the record (or a subset of its sections) as plain text.

    Sections always come out in SECTION_ORDER regardless of how the subset
    was passed, so two agents asking for the same fields see identical text.
    Contact details (email, phone) are never rendered.
    """
    blocks = ["\n".join(_RENDERERS[name](record)) for name in _normalize_sections(sections)]
    return "\n\n".join(blocks)
