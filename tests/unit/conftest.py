from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List, Sequence

import pytest

from hireagent.core.application import ApplicationRecord
from hireagent.core.errors import ProviderError
from hireagent.tools.llm_tools import ChatMessage


SUMMARY_KEY = "executive hiring consultant"


class Delayed:
    def __init__(self, seconds: float, reply: Any) -> None:
        self.seconds = seconds
        self.reply = reply


class FakeProvider:
    """ChatProvider double keyed on a substring of the system message."""

    def __init__(self, replies: Dict[str, Any]) -> None:
        self.replies = replies
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float = 0.2,
        max_tokens: int = 800,
        json_mode: bool = False,
    ) -> str:
        system = messages[0].content
        self.calls.append(system)
        reply: Any = None
        for key, value in self.replies.items():
            if key in system:
                reply = value
                break
        if reply is None:
            raise ProviderError("no scripted reply")

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if isinstance(reply, Delayed):
                await asyncio.sleep(reply.seconds)
                reply = reply.reply
            else:
                await asyncio.sleep(0)
        finally:
            self.in_flight -= 1

        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, dict):
            return json.dumps(reply)
        return str(reply)


def agent_reply(score: int, recommendation: str = "HIRE", strengths=None, concerns=None, analysis: str = "Solid.") -> Dict[str, Any]:
    return {
        "score": score,
        "strengths": strengths if strengths is not None else ["Clear communicator"],
        "concerns": concerns if concerns is not None else [],
        "analysis": analysis,
        "recommendation": recommendation,
    }


SAMPLE_APPLICATION: Dict[str, Any] = {
    "jobPostingId": 1,
    "personalInfo": {
        "firstName": "John",
        "lastName": "Doe",
        "email": "john.doe@email.com",
        "phone": "555-123-4567",
        "city": "New York",
        "state": "NY",
        "availableStartDate": "2024-03-01",
        "hoursAvailable": "full-time",
        "shiftPreference": "day",
        "hasTransportation": True,
        "desiredSalary": "75000",
        "compensationType": "salary",
    },
    "roleAssessment": {
        "tmsMyCarrierExperience": "intermediate",
        "shopifyExperience": "Two years running order processing on Shopify.",
        "amazonSellerCentralExperience": "intermediate",
        "excelProficiency": "intermediate",
        "canvaExperience": "",
        "learningUnderPressure": "I break tasks into small steps and take notes.",
        "delayedShipmentScenario": "Call the carrier, then the customer, and follow up until resolved.",
        "hazmatFreightScenario": "Hazmat fees cover DOT compliance and special handling.",
        "customerServiceMotivation": ["Building long-term relationships", "Solving complex problems"],
        "b2bLoyaltyFactor": "reliability",
    },
    "eligibility": {
        "eligibleToWork": True,
        "consentToBackgroundCheck": True,
        "hasForkliftCertification": True,
        "willingToObtainCertifications": True,
    },
    "workExperience": [
        {
            "companyName": "ABC Chemical Corp",
            "jobTitle": "Chemical Technician",
            "startDate": "2020-06",
            "endDate": "2023-12",
            "isCurrent": False,
            "responsibilities": "Handled chemical inventory and quality control.",
            "reasonForLeaving": "Seeking growth opportunities",
        }
    ],
    "education": [
        {
            "institutionName": "State University of New York",
            "degreeType": "Bachelor",
            "fieldOfStudy": "Chemistry",
            "graduationDate": "2018-05",
            "gpa": "3.5",
        }
    ],
    "references": [
        {"name": "Robert Smith", "relationship": "Former Supervisor", "company": "ABC Chemical Corp", "phone": "555-333-4444", "yearsKnown": 3}
    ],
    "additionalInfo": "Excited to join the team.",
}


@pytest.fixture
def application() -> ApplicationRecord:
    return ApplicationRecord.model_validate(SAMPLE_APPLICATION)


@pytest.fixture
def application_json(tmp_path) -> str:
    p = tmp_path / "application_1042.json"
    p.write_text(json.dumps(SAMPLE_APPLICATION), encoding="utf-8")
    return str(p)
