"""
HTTP client for the tank collection (/api/v1/tanks).

This is the only place the catalog talks to the remote store. Requests are
made with `requests` on a worker thread so that awaiting one only suspends
the calling coroutine, not the event loop driving the UI.
"""

import asyncio
import logging
from typing import Any, List, Optional, Protocol

import requests

from hydro_habitat.core.config import settings
from hydro_habitat.schemas.tank import Tank, TankCreate, TankUpdate

logger = logging.getLogger(__name__)

TANKS_PATH = "/api/v1/tanks"


class TankStoreError(Exception):
    """
    A store operation failed.

    `detail` is the structured error text the store sent back, when there was
    one; transport failures (connection refused, timeouts) have none.
    """

    def __init__(self, message: str, detail: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.status_code = status_code

    @property
    def user_detail(self) -> str:
        return self.detail or self.message


class TankStore(Protocol):
    """The four operations the catalog controller needs from a store."""

    async def list_tanks(self) -> List[Tank]:
        ...

    async def create_tank(self, payload: TankCreate) -> Tank:
        ...

    async def update_tank(self, tank_id: str, payload: TankUpdate) -> Tank:
        ...

    async def delete_tank(self, tank_id: str) -> None:
        ...


def _error_detail(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        detail = payload.get("detail") or payload.get("error")
        if isinstance(detail, str):
            return detail
    return None


class TankStoreClient:
    """requests-backed TankStore."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def _call_api(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{path}"
        kwargs = {"timeout": self.timeout}
        if payload is not None:
            kwargs["json"] = payload

        try:
            resp = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise TankStoreError(str(e)) from e

        if not 200 <= resp.status_code < 300:
            try:
                body = resp.json()
            except ValueError:
                body = None
            detail = _error_detail(body)
            logger.warning(f"{method} {url} -> HTTP {resp.status_code}: {detail or resp.text}")
            raise TankStoreError(
                f"Request failed with status code {resp.status_code}",
                detail=detail,
                status_code=resp.status_code,
            )

        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise TankStoreError(f"Invalid JSON in response from {url}", status_code=resp.status_code) from e

    async def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        return await asyncio.to_thread(self._call_api, method, path, payload)

    @staticmethod
    def _parse_tank(data: Any) -> Tank:
        try:
            return Tank.model_validate(data)
        except ValueError as e:
            raise TankStoreError(f"Unexpected tank payload: {e}") from e

    async def list_tanks(self) -> List[Tank]:
        data = await self._request("GET", TANKS_PATH)
        try:
            return [Tank.model_validate(item) for item in data or []]
        except (TypeError, ValueError) as e:
            raise TankStoreError(f"Unexpected tank list payload: {e}") from e

    async def create_tank(self, payload: TankCreate) -> Tank:
        data = await self._request("POST", TANKS_PATH, payload.model_dump(mode="json"))
        return self._parse_tank(data)

    async def update_tank(self, tank_id: str, payload: TankUpdate) -> Tank:
        data = await self._request("PUT", f"{TANKS_PATH}/{tank_id}", payload.model_dump(mode="json"))
        return self._parse_tank(data)

    async def delete_tank(self, tank_id: str) -> None:
        await self._request("DELETE", f"{TANKS_PATH}/{tank_id}")
