from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from hireagent.agents.agent_schema import AgentResult
from hireagent.agents.panel import DEFAULT_PANEL, AgentSpec
from hireagent.agents.score_evaluator_service import ScoreEvaluator
from hireagent.core.application import ApplicationRecord, render_application_text


log = logging.getLogger("hireagent.panel")


@dataclass
class PanelOutcome:
    results: List[AgentResult] = field(default_factory=list)
    failed_agents: List[str] = field(default_factory=list)

    @property
    def total_failure(self) -> bool:
        return not self.results


class AgentOrchestrator:
    """
    Canonical method: run(record) -> PanelOutcome

    Every panel member is dispatched at once against the same record; the
    orchestrator waits for all of them and keeps whichever succeeded, in
    panel order. No retries happen here.
    """

    def __init__(self, evaluator: ScoreEvaluator, panel: Sequence[AgentSpec] = DEFAULT_PANEL) -> None:
        if not panel:
            raise ValueError("panel must contain at least one agent")
        self.evaluator = evaluator
        self.panel: Tuple[AgentSpec, ...] = tuple(panel)

    async def run(self, record: ApplicationRecord, *, application_id: str = "-") -> PanelOutcome:
        # render once per distinct section set; agents sharing a projection see identical text
        texts: Dict[Tuple[str, ...], str] = {}
        for spec in self.panel:
            if spec.sections not in texts:
                texts[spec.sections] = render_application_text(record, spec.sections)

        log.info("Panel starting for application %s: %d agents", application_id, len(self.panel))

        tasks = [self.evaluator.evaluate(spec, texts[spec.sections]) for spec in self.panel]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        outcome = PanelOutcome()
        for spec, res in zip(self.panel, outcomes):
            if isinstance(res, BaseException):
                if isinstance(res, asyncio.CancelledError):
                    raise res
                log.warning("Agent %s raised for application %s: %s", spec.name, application_id, res)
                outcome.failed_agents.append(spec.name)
                continue
            if res is None:
                outcome.failed_agents.append(spec.name)
                continue
            outcome.results.append(res)

        log.info(
            "Panel finished for application %s: %d/%d agents returned results",
            application_id, len(outcome.results), len(self.panel),
        )
        if outcome.failed_agents:
            log.info("Agents without result: %s", ", ".join(outcome.failed_agents))
        return outcome
