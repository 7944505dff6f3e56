from runtracker.domain.accounting import compute_progress, current_total, format_duration
from runtracker.domain.machine import TARGET_TIME_MS, MachineState, MachineStatus

HOUR = 3_600_000


def test_paused_total_is_accumulated_time():
    machine = MachineState(id="MAC-01", display_id="01", accumulated_time=5 * HOUR)
    assert current_total(machine, now=999 * HOUR) == 5 * HOUR


def test_running_total_adds_open_session():
    machine = MachineState(
        id="MAC-01", display_id="01", status=MachineStatus.RUNNING, start_time=10 * HOUR, accumulated_time=HOUR
    )
    progress = compute_progress(machine, now=12 * HOUR)
    assert progress.current_total == 3 * HOUR
    assert progress.progress_percent == 3 * HOUR / TARGET_TIME_MS * 100
    assert progress.is_completed is False
    assert progress.display_status == MachineStatus.RUNNING


def test_estimated_completion_is_absolute_timestamp():
    machine = MachineState(
        id="MAC-01", display_id="01", status=MachineStatus.RUNNING, start_time=0, accumulated_time=70 * HOUR
    )
    progress = compute_progress(machine, now=5 * HOUR)
    # 75h done, 5h left
    assert progress.estimated_completion_time == 10 * HOUR


def test_no_estimate_while_paused():
    machine = MachineState(id="MAC-01", display_id="01", accumulated_time=HOUR)
    assert compute_progress(machine, now=HOUR).estimated_completion_time is None


def test_completion_caps_progress_and_hides_estimate():
    machine = MachineState(
        id="MAC-01", display_id="01", status=MachineStatus.RUNNING, start_time=0, accumulated_time=TARGET_TIME_MS
    )
    progress = compute_progress(machine, now=2 * HOUR)
    assert progress.is_completed is True
    assert progress.progress_percent == 100.0
    assert progress.estimated_completion_time is None
    assert progress.display_status == MachineStatus.COMPLETED


def test_exactly_at_target_is_completed():
    machine = MachineState(id="MAC-01", display_id="01", accumulated_time=TARGET_TIME_MS)
    progress = compute_progress(machine, now=0)
    assert progress.is_completed is True
    assert progress.display_status == MachineStatus.COMPLETED


def test_format_duration():
    assert format_duration(0) == "00:00:00"
    assert format_duration(3_723_999) == "01:02:03"
    assert format_duration(TARGET_TIME_MS) == "80:00:00"


def test_clock_behind_start_time_counts_as_zero_session():
    from runtracker.domain import operations

    machine = MachineState(
        id="MAC-01", display_id="01", status=MachineStatus.RUNNING, start_time=10_000, accumulated_time=1_000
    )
    progress = compute_progress(machine, now=0)
    assert progress.current_total == 1_000
    assert progress.progress_percent >= 0
    assert progress.estimated_completion_time == TARGET_TIME_MS - 1_000

    frozen = operations.toggle((machine,), "MAC-01", now=0)[0]
    assert frozen.accumulated_time == progress.current_total
