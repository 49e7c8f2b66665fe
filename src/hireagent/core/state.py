from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


def utc_now_iso() -> str:
    """Return current UTC timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()


StageId = Literal["START", "PANEL_RUNNING", "AGGREGATING", "SYNTHESIZING", "DONE"]


class StepTrace(BaseModel):
    """Description: One stage of a scoring run.
    Input: pipeline stage transitions
    Output: list of step traces on the result
    """

    stage: StageId
    status: Literal["running", "ok", "error"] = "running"
    started_at_utc: str = Field(default_factory=utc_now_iso)
    finished_at_utc: Optional[str] = None
    message: Optional[str] = None


class ScoringRunState(BaseModel):
    """Description: Per-invocation stage tracker for ScoringPipeline.
    Input: application_id
    Output: ordered steps; nothing is persisted between applications
    """

    application_id: str
    stage: StageId = "START"
    steps: List[StepTrace] = Field(default_factory=list)

    def enter(self, stage: StageId, message: Optional[str] = None) -> StepTrace:
        step = StepTrace(stage=stage, message=message)
        self.stage = stage
        self.steps.append(step)
        return step

    def finish(self, message: Optional[str] = None) -> None:
        if self.steps and self.steps[-1].status == "running":
            self.steps[-1].status = "ok"
            self.steps[-1].finished_at_utc = utc_now_iso()
            if message:
                self.steps[-1].message = message

    def fail(self, message: str) -> None:
        if self.steps and self.steps[-1].status == "running":
            self.steps[-1].status = "error"
            self.steps[-1].finished_at_utc = utc_now_iso()
            self.steps[-1].message = message
        self.enter("DONE", message=message)
        self.steps[-1].status = "error"
        self.steps[-1].finished_at_utc = utc_now_iso()

    def done(self) -> None:
        self.finish()
        self.enter("DONE")
        self.finish()
