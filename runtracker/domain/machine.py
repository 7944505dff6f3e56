import enum as py_enum
import time
from dataclasses import dataclass, replace
from typing import List, Optional

TARGET_TIME_HOURS = 80
TARGET_TIME_MS = TARGET_TIME_HOURS * 60 * 60 * 1000
DEFAULT_FLEET_SIZE = 50


class MachineStatus(str, py_enum.Enum):
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    # Display-only; never written by the control operations.
    COMPLETED = "COMPLETED"


class ResumeIntent(str, py_enum.Enum):
    NONE = "None"
    PENDING_RESUME = "PendingResume"


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class MachineState:
    """
    One tracked machine.

    `accumulated_time` holds the milliseconds worked before the current
    session; the running session is `now - start_time` and only exists
    while `status` is RUNNING.
    """

    id: str
    display_id: str
    status: MachineStatus = MachineStatus.PAUSED
    start_time: Optional[int] = None
    accumulated_time: int = 0
    target_time: int = TARGET_TIME_MS
    resume_intent: ResumeIntent = ResumeIntent.NONE

    @property
    def is_running(self) -> bool:
        return self.status == MachineStatus.RUNNING

    @property
    def reached_target(self) -> bool:
        return self.accumulated_time >= self.target_time

    def session_elapsed(self, now: int) -> int:
        """Milliseconds of the open session; a clock behind `start_time` counts as 0."""
        if self.status != MachineStatus.RUNNING or self.start_time is None:
            return 0
        return max(now - self.start_time, 0)

    def frozen_at(self, now: int) -> "MachineState":
        """Fold the running session into `accumulated_time` and pause."""
        return replace(
            self,
            status=MachineStatus.PAUSED,
            start_time=None,
            accumulated_time=self.accumulated_time + self.session_elapsed(now),
        )

    def started_at(self, now: int) -> "MachineState":
        return replace(self, status=MachineStatus.RUNNING, start_time=now)


def seed_fleet(count: int = DEFAULT_FLEET_SIZE, target_time: int = TARGET_TIME_MS) -> List[MachineState]:
    """Fresh fleet `MAC-01 .. MAC-<count>`, all paused at zero."""
    fleet = []
    for number in range(1, count + 1):
        display_id = str(number).zfill(2)
        fleet.append(
            MachineState(
                id=f"MAC-{display_id}",
                display_id=display_id,
                target_time=target_time,
            )
        )
    return fleet
