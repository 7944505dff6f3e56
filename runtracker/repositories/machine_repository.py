from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from runtracker.models.machine import Machine
from runtracker.schemas.machine import MachineRecord


class MachineRepository:
    """
    All DB access for machine rows.
    Transaction boundaries are owned by the caller.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    # ──────────────────────────────────────────────
    # Queries
    # ──────────────────────────────────────────────

    async def list_all(self) -> List[Machine]:
        result = await self._session.execute(select(Machine).order_by(Machine.id))
        return list(result.scalars().all())

    # ──────────────────────────────────────────────
    # Mutations
    # ──────────────────────────────────────────────

    async def upsert(self, record: MachineRecord) -> Machine:
        """
        Insert by primary key, or overwrite the run state of an existing row.
        `display_id` and `target_time` of an existing row are left alone.
        """
        machine = await self._session.get(Machine, record.id)
        if machine is None:
            machine = Machine(
                id=record.id,
                display_id=record.display_id,
                target_time=record.target_time,
            )
            self._session.add(machine)

        machine.status = record.status
        machine.start_time = record.start_time
        machine.accumulated_time = record.accumulated_time
        machine.was_running_before_outage = bool(record.was_running_before_outage)
        return machine

    async def upsert_many(self, records: Sequence[MachineRecord]) -> int:
        for record in records:
            await self.upsert(record)
        await self._session.flush()
        return len(records)

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()
