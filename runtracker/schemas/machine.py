from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from runtracker.domain.machine import MachineState, MachineStatus, ResumeIntent


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ──────────────────────────────────────────────
# Machine record (wire format, camelCase)
# ──────────────────────────────────────────────

class MachineRecord(_CamelModel):
    id: str = Field(..., min_length=1, max_length=50)
    display_id: str = Field(..., max_length=50)
    status: MachineStatus = Field(default=MachineStatus.PAUSED)
    start_time: Optional[int] = Field(default=None, ge=0)
    accumulated_time: int = Field(default=0, ge=0)
    target_time: int = Field(..., gt=0)
    was_running_before_outage: Optional[bool] = Field(default=None)

    @model_validator(mode="after")
    def check_session_start(self) -> "MachineRecord":
        running = self.status == MachineStatus.RUNNING
        if running and self.start_time is None:
            raise ValueError(f"Machine '{self.id}' is RUNNING but has no startTime.")
        if not running and self.start_time is not None:
            raise ValueError(f"Machine '{self.id}' is {self.status.value} but has a startTime.")
        return self

    @classmethod
    def from_state(cls, state: MachineState) -> "MachineRecord":
        return cls(
            id=state.id,
            display_id=state.display_id,
            status=state.status,
            start_time=state.start_time,
            accumulated_time=state.accumulated_time,
            target_time=state.target_time,
            was_running_before_outage=state.resume_intent == ResumeIntent.PENDING_RESUME,
        )

    def to_state(self) -> MachineState:
        intent = ResumeIntent.PENDING_RESUME if self.was_running_before_outage else ResumeIntent.NONE
        return MachineState(
            id=self.id,
            display_id=self.display_id,
            status=self.status,
            start_time=self.start_time,
            accumulated_time=self.accumulated_time,
            target_time=self.target_time,
            resume_intent=intent,
        )


# ──────────────────────────────────────────────
# Request / response envelopes
# ──────────────────────────────────────────────

class MachineListResponse(BaseModel):
    machines: List[MachineRecord]


class MachineSyncRequest(BaseModel):
    machines: List[MachineRecord]


class MachineSyncResponse(BaseModel):
    message: str
    synced: int
