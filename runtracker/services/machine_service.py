import logging

from sqlalchemy.exc import SQLAlchemyError

from runtracker.core.exceptions import MachineSyncFailedError
from runtracker.repositories.machine_repository import MachineRepository
from runtracker.schemas.machine import (
    MachineListResponse,
    MachineRecord,
    MachineSyncRequest,
    MachineSyncResponse,
)

logger = logging.getLogger(__name__)


class MachineService:
    """
    Read-all and all-or-nothing bulk upsert of machine rows.
    Repository injected — never instantiated here.
    """

    def __init__(self, repository: MachineRepository):
        self._repo = repository

    async def list_machines(self) -> MachineListResponse:
        machines = await self._repo.list_all()
        return MachineListResponse(
            machines=[MachineRecord.model_validate(m) for m in machines],
        )

    async def sync_machines(self, payload: MachineSyncRequest) -> MachineSyncResponse:
        try:
            synced = await self._repo.upsert_many(payload.machines)
            await self._repo.commit()
        except SQLAlchemyError:
            await self._repo.rollback()
            logger.exception("Machine sync transaction failed; %d rows rolled back", len(payload.machines))
            raise MachineSyncFailedError()

        logger.debug("Synced %d machines", synced)
        return MachineSyncResponse(message="Synced successfully", synced=synced)
