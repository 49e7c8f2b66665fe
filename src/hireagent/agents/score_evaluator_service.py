from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from hireagent.agents.agent_schema import AgentResult
from hireagent.agents.panel import AgentSpec
from hireagent.core.errors import InvalidAgentResponse, ProviderError
from hireagent.tools.llm_tools import ChatMessage, ChatProvider


log = logging.getLogger("hireagent.evaluator")

_JSON_OBJECT = re.compile(r"\{.*\}", flags=re.S)


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Pull the outermost JSON object out of a reply, fenced or bare."""
    if not text:
        return None
    m = _JSON_OBJECT.search(text)
    if not m:
        return None
    try:
        data = json.loads(m.group(0))
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def parse_agent_payload(agent_name: str, payload: Any, *, risk_focused: bool = False) -> AgentResult:
    """
    Description: Strict parse of one agent's JSON into an AgentResult.
    Input: agent name, panel risk flag + decoded provider JSON
    Output: AgentResult, or InvalidAgentResponse on any contract violation
    """
    if not isinstance(payload, dict):
        raise InvalidAgentResponse(agent_name, "payload is not a JSON object")
    missing = [k for k in ("score", "analysis", "recommendation") if k not in payload]
    if missing:
        raise InvalidAgentResponse(agent_name, f"missing fields: {', '.join(missing)}")
    try:
        return AgentResult.model_validate({**payload, "agent_name": agent_name, "risk_focused": risk_focused})
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise InvalidAgentResponse(agent_name, f"invalid fields: {', '.join(fields)}") from e


def build_agent_messages(spec: AgentSpec, application_text: str) -> List[ChatMessage]:
    focus = "\n".join(f"- {f}" for f in spec.focus_areas)
    prompt = (
        f"You are a {spec.specialty}. Evaluate this candidate from your specialty only.\n\n"
        f"FOCUS AREAS:\n{focus}\n\n"
        f"APPLICATION DATA:\n{application_text}\n\n"
        "Respond in this exact JSON format:\n"
        "{\n"
        f'  "score": <integer {spec.score_hint}>,\n'
        '  "strengths": ["strength1", "strength2"],\n'
        '  "concerns": ["concern1", "concern2"],\n'
        '  "analysis": "2-3 sentence assessment",\n'
        '  "recommendation": "HIRE|CONSIDER|REJECT"\n'
        "}\n\n"
        f"{spec.guidance}"
    ).strip()
    return [
        ChatMessage(
            role="system",
            content=f"You are an expert {spec.specialty}. Always respond with valid JSON only. No additional text or formatting.",
        ),
        ChatMessage(role="user", content=prompt),
    ]


class ScoreEvaluator:
    """
    Description: Runs one panel perspective against rendered application text.
    Input: AgentSpec + application text
    Output: AgentResult, or None when the call or its payload fails
    """

    def __init__(
        self,
        provider: ChatProvider,
        *,
        timeout_seconds: float = 30.0,
        temperature: float = 0.2,
        max_tokens: int = 800,
    ) -> None:
        self.provider = provider
        self.timeout_seconds = float(timeout_seconds)
        self.temperature = float(temperature)
        self.max_tokens = int(max_tokens)

    async def evaluate(self, spec: AgentSpec, application_text: str) -> Optional[AgentResult]:
        messages = build_agent_messages(spec, application_text)
        try:
            reply = await asyncio.wait_for(
                self.provider.complete(
                    messages,
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                    json_mode=True,
                ),
                timeout=self.timeout_seconds,
            )
            payload = extract_json_object(reply)
            if payload is None:
                raise InvalidAgentResponse(spec.name, "reply contained no JSON object")
            result = parse_agent_payload(spec.name, payload, risk_focused=spec.is_risk_focused)
        except asyncio.TimeoutError:
            log.warning("%s timed out after %.1fs", spec.name, self.timeout_seconds)
            return None
        except ProviderError as e:
            log.warning("%s provider error: %s", spec.name, e)
            return None
        except InvalidAgentResponse as e:
            log.warning("%s returned an invalid payload: %s", spec.name, e.reason)
            return None
        except Exception:
            log.exception("%s failed unexpectedly", spec.name)
            return None

        log.debug("%s scored %d (%s)", spec.name, result.score, result.recommendation.value)
        return result
