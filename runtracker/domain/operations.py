"""
Control operations over the machine collection.

Every operation is a pure function `(machines, ..., now) -> new tuple`; the
input sequence is never mutated. A machine at or over its target is never
moved into RUNNING; only a reset brings it back under target.
"""

from dataclasses import replace
from typing import Callable, Iterable, Sequence, Tuple

from runtracker.domain.machine import MachineState, MachineStatus, ResumeIntent

Fleet = Tuple[MachineState, ...]


def _map(machines: Sequence[MachineState], fn: Callable[[MachineState], MachineState]) -> Fleet:
    return tuple(fn(m) for m in machines)


def _can_start(machine: MachineState) -> bool:
    return machine.status == MachineStatus.PAUSED and not machine.reached_target


def _pause(machine: MachineState, now: int) -> MachineState:
    return replace(machine.frozen_at(now), resume_intent=ResumeIntent.NONE)


def _start(machine: MachineState, now: int) -> MachineState:
    return replace(machine.started_at(now), resume_intent=ResumeIntent.NONE)


def _reset(machine: MachineState) -> MachineState:
    return replace(
        machine,
        status=MachineStatus.PAUSED,
        start_time=None,
        accumulated_time=0,
        resume_intent=ResumeIntent.NONE,
    )


# ──────────────────────────────────────────────
# Single machine
# ──────────────────────────────────────────────

def toggle(machines: Sequence[MachineState], machine_id: str, now: int) -> Fleet:
    def apply(m: MachineState) -> MachineState:
        if m.id != machine_id:
            return m
        if m.status == MachineStatus.RUNNING:
            return _pause(m, now)
        if _can_start(m):
            return _start(m, now)
        return m

    return _map(machines, apply)


def reset(machines: Sequence[MachineState], machine_id: str) -> Fleet:
    return _map(machines, lambda m: _reset(m) if m.id == machine_id else m)


# ──────────────────────────────────────────────
# Whole fleet
# ──────────────────────────────────────────────

def reset_all(machines: Sequence[MachineState]) -> Fleet:
    return _map(machines, _reset)


def global_power_outage(machines: Sequence[MachineState], now: int) -> Fleet:
    """
    Freeze every running machine and remember it for `global_resume`.
    Machines that were not running get their resume intent cleared so an
    older outage can never leak into this one.
    """

    def apply(m: MachineState) -> MachineState:
        if m.status == MachineStatus.RUNNING:
            return replace(m.frozen_at(now), resume_intent=ResumeIntent.PENDING_RESUME)
        return replace(m, resume_intent=ResumeIntent.NONE)

    return _map(machines, apply)


def global_resume(machines: Sequence[MachineState], now: int) -> Fleet:
    def apply(m: MachineState) -> MachineState:
        if m.resume_intent == ResumeIntent.PENDING_RESUME and _can_start(m):
            return _start(m, now)
        return m

    return _map(machines, apply)


def toggle_multiple(
    machines: Sequence[MachineState],
    ids: Iterable[str],
    target_status: MachineStatus,
    now: int,
) -> Fleet:
    target_status = MachineStatus(target_status)
    if target_status not in (MachineStatus.RUNNING, MachineStatus.PAUSED):
        raise ValueError(f"Batch toggle target must be RUNNING or PAUSED, got {target_status.value}.")

    selected = set(ids)

    def apply(m: MachineState) -> MachineState:
        if m.id not in selected:
            return m
        if target_status == MachineStatus.RUNNING and _can_start(m):
            return _start(m, now)
        if target_status == MachineStatus.PAUSED and m.status == MachineStatus.RUNNING:
            return _pause(m, now)
        return m

    return _map(machines, apply)
