from dataclasses import dataclass
from typing import Optional

from runtracker.domain.machine import MachineState, MachineStatus


@dataclass(frozen=True)
class MachineProgress:
    machine_id: str
    display_status: MachineStatus
    current_total: int
    progress_percent: float
    is_completed: bool
    estimated_completion_time: Optional[int]


def current_total(machine: MachineState, now: int) -> int:
    return machine.accumulated_time + machine.session_elapsed(now)


def compute_progress(machine: MachineState, now: int) -> MachineProgress:
    """
    Derive the display figures for one machine at wall-clock `now` (ms).

    The estimated completion time is an absolute timestamp and only exists
    for a running machine that has not reached its target yet.
    """
    total = current_total(machine, now)
    if machine.target_time > 0:
        percent = min(total / machine.target_time * 100, 100.0)
    else:
        percent = 100.0
    completed = total >= machine.target_time

    ect = None
    if machine.status == MachineStatus.RUNNING and not completed:
        ect = now + (machine.target_time - total)

    return MachineProgress(
        machine_id=machine.id,
        display_status=MachineStatus.COMPLETED if completed else machine.status,
        current_total=total,
        progress_percent=percent,
        is_completed=completed,
        estimated_completion_time=ect,
    )


def format_duration(ms: int) -> str:
    """HH:MM:SS; hours keep counting past 24."""
    total_seconds = max(ms, 0) // 1000
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
