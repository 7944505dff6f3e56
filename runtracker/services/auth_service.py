import logging
from typing import Optional

from runtracker.core.exceptions import CredentialsRequiredError, InvalidCredentialsError
from runtracker.core.security import hash_password, verify_password
from runtracker.models.user import User
from runtracker.repositories.user_repository import UserRepository
from runtracker.schemas.auth import LoginRequest, LoginResponse

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, repository: UserRepository):
        self._repo = repository

    async def verify_credentials(self, username: str, password: str) -> Optional[User]:
        user = await self._repo.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    async def login(self, payload: LoginRequest) -> LoginResponse:
        if not payload.username or not payload.password:
            raise CredentialsRequiredError()

        user = await self.verify_credentials(payload.username, payload.password)
        if user is None:
            logger.info("Rejected login for '%s'", payload.username)
            raise InvalidCredentialsError()

        return LoginResponse(message="Login success", user_id=user.id, username=user.username)

    async def ensure_user(self, username: str, password: str) -> bool:
        """Create the account if the username is free. Returns True when created."""
        if await self._repo.get_by_username(username) is not None:
            return False
        await self._repo.create(username, hash_password(password))
        logger.info("Seeded user '%s'", username)
        return True
