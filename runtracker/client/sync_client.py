"""
HTTP client for the persistence API.
------------------------------------
Pushes and pulls the whole machine collection. Every call is best-effort:
network and HTTP failures are logged and recorded on the client, never
raised into the caller's event loop.
"""

import logging
from typing import List, Optional, Sequence

import httpx
from pydantic import ValidationError

from runtracker.core.config import get_settings
from runtracker.domain.machine import MachineState
from runtracker.schemas.machine import MachineListResponse, MachineRecord, MachineSyncRequest

logger = logging.getLogger(__name__)


class MachineSyncClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        settings = get_settings()
        self._base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout or settings.API_TIMEOUT_SECONDS,
        )

        self.last_error: Optional[str] = None
        self.is_logged_in = False

    async def __aenter__(self) -> "MachineSyncClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    def _record_failure(self, message: str) -> None:
        self.last_error = message
        logger.warning(message)

    # ──────────────────────────────────────────────
    # Machines
    # ──────────────────────────────────────────────

    async def fetch_machines(self) -> Optional[List[MachineState]]:
        """All stored machines, or None when the store could not be read."""
        try:
            resp = await self._http.get("/api/machines")
            resp.raise_for_status()
            body = MachineListResponse.model_validate(resp.json())
        except (httpx.HTTPError, ValueError, ValidationError) as exc:
            self._record_failure(f"Failed to load machines: {exc}")
            return None

        self.last_error = None
        return [record.to_state() for record in body.machines]

    async def push_machines(self, machines: Sequence[MachineState]) -> bool:
        payload = MachineSyncRequest(machines=[MachineRecord.from_state(m) for m in machines])
        try:
            resp = await self._http.post(
                "/api/machines/sync",
                json=payload.model_dump(mode="json", by_alias=True),
            )
        except httpx.HTTPError as exc:
            self._record_failure(f"Failed to sync machines: {exc}")
            return False

        if resp.is_error:
            self._record_failure(f"Sync failed response: {resp.status_code} - {resp.text}")
            return False

        self.last_error = None
        return True

    # ──────────────────────────────────────────────
    # Session
    # ──────────────────────────────────────────────

    async def login(self, username: str, password: str) -> bool:
        """Sets the client-local logged-in flag; there is no server session."""
        try:
            resp = await self._http.post("/api/login", json={"username": username, "password": password})
        except httpx.HTTPError as exc:
            self._record_failure(f"Login request failed: {exc}")
            return False

        self.is_logged_in = resp.status_code == httpx.codes.OK
        if not self.is_logged_in:
            logger.info("Login rejected for '%s' (%s)", username, resp.status_code)
        return self.is_logged_in

    def logout(self) -> None:
        self.is_logged_in = False
