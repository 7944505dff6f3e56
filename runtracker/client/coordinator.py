import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from runtracker.client.scheduler import IntervalTicker
from runtracker.client.sync_client import MachineSyncClient
from runtracker.core.config import get_settings
from runtracker.domain import operations
from runtracker.domain.accounting import MachineProgress, compute_progress
from runtracker.domain.machine import MachineState, MachineStatus, now_ms, seed_fleet

logger = logging.getLogger(__name__)

ProgressListener = Callable[[List[MachineProgress]], None]


@dataclass
class FleetState:
    """The in-memory machine collection; only the coordinator replaces it."""
    machines: Tuple[MachineState, ...] = ()
    loaded: bool = False


@dataclass(frozen=True)
class FleetSummary:
    running: int = 0
    paused: int = 0
    completed: int = 0
    total: int = 0


@dataclass
class _Tickers:
    sync: Optional[IntervalTicker] = None
    display: Optional[IntervalTicker] = None
    pending: Set[asyncio.Task] = field(default_factory=set)


class FleetCoordinator:
    """
    Single owner of the machine collection for one client.

    Control operations and timer ticks run on one event loop and never
    interleave; the only suspension points are the HTTP calls of the sync
    client. Every mutation schedules a sync of the full collection without
    waiting for it.
    """

    def __init__(
        self,
        sync_client: MachineSyncClient,
        clock: Callable[[], int] = now_ms,
        fleet_size: Optional[int] = None,
        target_time: Optional[int] = None,
    ):
        settings = get_settings()
        self._sync_client = sync_client
        self._clock = clock
        self._fleet_size = settings.FLEET_SIZE if fleet_size is None else fleet_size
        self._target_time = settings.target_time_ms if target_time is None else target_time
        self._state = FleetState()
        self._tickers = _Tickers()
        self._listeners: List[ProgressListener] = []

    @property
    def machines(self) -> Tuple[MachineState, ...]:
        return self._state.machines

    @property
    def loaded(self) -> bool:
        return self._state.loaded

    # ──────────────────────────────────────────────
    # Bootstrap
    # ──────────────────────────────────────────────

    async def bootstrap(self) -> Tuple[MachineState, ...]:
        stored = await self._sync_client.fetch_machines()
        if stored is None:
            logger.error("Could not load machines; continuing with a local fleet")
            self._replace(seed_fleet(self._fleet_size, self._target_time), sync=False)
        elif stored:
            self._replace(stored, sync=False)
        else:
            logger.info("Store is empty; seeding %d machines", self._fleet_size)
            self._replace(seed_fleet(self._fleet_size, self._target_time), sync=True)

        self._state.loaded = True
        return self.machines

    # ──────────────────────────────────────────────
    # Control operations
    # ──────────────────────────────────────────────

    def toggle(self, machine_id: str) -> Tuple[MachineState, ...]:
        return self._replace(operations.toggle(self.machines, machine_id, self._clock()))

    def reset(self, machine_id: str) -> Tuple[MachineState, ...]:
        return self._replace(operations.reset(self.machines, machine_id))

    def reset_all(self) -> Tuple[MachineState, ...]:
        return self._replace(operations.reset_all(self.machines))

    def global_power_outage(self) -> Tuple[MachineState, ...]:
        return self._replace(operations.global_power_outage(self.machines, self._clock()))

    def global_resume(self) -> Tuple[MachineState, ...]:
        return self._replace(operations.global_resume(self.machines, self._clock()))

    def toggle_multiple(self, ids: Iterable[str], target_status: MachineStatus) -> Tuple[MachineState, ...]:
        return self._replace(
            operations.toggle_multiple(self.machines, ids, target_status, self._clock())
        )

    def _replace(self, machines: Iterable[MachineState], sync: bool = True) -> Tuple[MachineState, ...]:
        self._state.machines = tuple(machines)
        if sync:
            self.schedule_sync()
        self._notify()
        return self._state.machines

    # ──────────────────────────────────────────────
    # Sync
    # ──────────────────────────────────────────────

    async def sync_now(self) -> bool:
        if not self._state.machines:
            return False
        # Snapshot at trigger time; later mutations go out with the next sync.
        return await self._sync_client.push_machines(self._state.machines)

    def schedule_sync(self) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self.sync_now())
        self._tickers.pending.add(task)
        task.add_done_callback(self._tickers.pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for syncs that are still in flight."""
        if self._tickers.pending:
            await asyncio.gather(*self._tickers.pending, return_exceptions=True)

    # ──────────────────────────────────────────────
    # Display
    # ──────────────────────────────────────────────

    def add_listener(self, listener: ProgressListener) -> None:
        self._listeners.append(listener)

    def snapshot(self) -> List[MachineProgress]:
        now = self._clock()
        return [compute_progress(m, now) for m in self._state.machines]

    def progress_of(self, machine_id: str) -> Optional[MachineProgress]:
        for machine in self._state.machines:
            if machine.id == machine_id:
                return compute_progress(machine, self._clock())
        return None

    def fleet_summary(self) -> FleetSummary:
        counts: Dict[MachineStatus, int] = {status: 0 for status in MachineStatus}
        for progress in self.snapshot():
            counts[progress.display_status] += 1
        return FleetSummary(
            running=counts[MachineStatus.RUNNING],
            paused=counts[MachineStatus.PAUSED],
            completed=counts[MachineStatus.COMPLETED],
            total=len(self._state.machines),
        )

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Progress listener failed")

    def _on_display_tick(self) -> None:
        # Paused machines do not change between ticks.
        if any(m.is_running for m in self._state.machines):
            self._notify()

    # ──────────────────────────────────────────────
    # Lifecycle
    # ──────────────────────────────────────────────

    def start(
        self,
        sync_interval: Optional[float] = None,
        display_interval: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        if self._tickers.sync is None:
            self._tickers.sync = IntervalTicker(
                settings.SYNC_INTERVAL_SECONDS if sync_interval is None else sync_interval,
                name="periodic machine sync",
            )
            self._tickers.sync.subscribe(self.sync_now)
        if self._tickers.display is None:
            self._tickers.display = IntervalTicker(
                settings.DISPLAY_TICK_SECONDS if display_interval is None else display_interval,
                name="display tick",
            )
            self._tickers.display.subscribe(self._on_display_tick)

        self._tickers.sync.start()
        self._tickers.display.start()

    async def stop(self) -> None:
        for ticker in (self._tickers.sync, self._tickers.display):
            if ticker is not None:
                await ticker.stop()
        await self.drain()
