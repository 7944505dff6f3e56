from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from runtracker.core.database import get_db_session
from runtracker.repositories.user_repository import UserRepository
from runtracker.schemas.auth import LoginRequest, LoginResponse
from runtracker.services.auth_service import AuthService

router = APIRouter(tags=["Auth"])


def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
) -> AuthService:
    return AuthService(repository=UserRepository(session))


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Check a username/password pair",
)
async def login(payload: LoginRequest, service: AuthServiceDep):
    return await service.login(payload)
