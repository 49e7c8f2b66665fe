import pytest

from hireagent.core.application import ApplicationRecord, render_application_text
from conftest import SAMPLE_APPLICATION


def test_camel_case_form_payload_loads(application) -> None:
    assert application.candidate_name == "John Doe"
    assert application.work_experience[0].company_name == "ABC Chemical Corp"
    assert application.role_assessment.customer_service_motivation == [
        "Building long-term relationships",
        "Solving complex problems",
    ]
    assert application.eligibility.has_forklift_certification is True


def test_rendering_is_deterministic(application) -> None:
    again = ApplicationRecord.model_validate(SAMPLE_APPLICATION)
    assert render_application_text(application) == render_application_text(again)


def test_full_rendering_covers_every_section_in_order(application) -> None:
    text = render_application_text(application)
    headers = [
        "CANDIDATE PROFILE:",
        "WORK EXPERIENCE:",
        "EDUCATION:",
        "TECHNICAL SKILLS:",
        "SCENARIO RESPONSES:",
        "REFERENCES:",
        "ELIGIBILITY & COMPLIANCE:",
    ]
    positions = [text.index(h) for h in headers]
    assert positions == sorted(positions)
    assert "Chemical Technician at ABC Chemical Corp" in text
    assert "Canva: Not provided" in text
    assert "Forklift Certification: Yes" in text
    assert "Hazmat Experience: No" in text


def test_section_subset_keeps_canonical_order(application) -> None:
    text = render_application_text(application, ["eligibility", "profile"])
    assert text.startswith("CANDIDATE PROFILE:")
    assert "ELIGIBILITY & COMPLIANCE:" in text
    assert "WORK EXPERIENCE:" not in text
    assert text == render_application_text(application, ("profile", "eligibility"))


def test_contact_details_are_not_rendered(application) -> None:
    text = render_application_text(application)
    assert "john.doe@email.com" not in text
    assert "555-123-4567" not in text


def test_unknown_section_is_rejected(application) -> None:
    with pytest.raises(ValueError):
        render_application_text(application, ["profile", "salary_history"])


def test_empty_lists_render_placeholder() -> None:
    record = ApplicationRecord.model_validate({"personalInfo": {"firstName": "Ana", "lastName": "Ruiz"}})
    text = render_application_text(record, ["work", "references"])
    assert text.count("None listed") == 2
