from __future__ import annotations

from typing import Optional


class HireAgentError(Exception):
    """Base class for scoring pipeline errors."""


class ProviderError(HireAgentError):
    """Scoring provider call failed (missing key, transport, HTTP status, malformed body)."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidAgentResponse(HireAgentError):
    """Agent payload did not satisfy the AgentResult contract."""

    def __init__(self, agent_name: str, reason: str) -> None:
        super().__init__(f"{agent_name}: {reason}")
        self.agent_name = agent_name
        self.reason = reason
