from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from runtracker.core.database import get_db_session
from runtracker.repositories.machine_repository import MachineRepository
from runtracker.schemas.machine import (
    MachineListResponse,
    MachineSyncRequest,
    MachineSyncResponse,
)
from runtracker.services.machine_service import MachineService

router = APIRouter(prefix="/machines", tags=["Machines"])


# ──────────────────────────────────────────────
# Dependency factory — keeps endpoints clean
# ──────────────────────────────────────────────

def get_machine_service(
    session: AsyncSession = Depends(get_db_session),
) -> MachineService:
    return MachineService(repository=MachineRepository(session))


ServiceDep = Annotated[MachineService, Depends(get_machine_service)]


# ──────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────

@router.get(
    "",
    response_model=MachineListResponse,
    summary="List every machine record",
)
async def list_machines(service: ServiceDep):
    return await service.list_machines()


@router.post(
    "/sync",
    response_model=MachineSyncResponse,
    summary="Bulk upsert the full machine collection in one transaction",
)
async def sync_machines(
    payload: MachineSyncRequest,
    service: ServiceDep,
):
    return await service.sync_machines(payload)
