from __future__ import annotations

import logging
from typing import Any

import httpx
import pydantic

from billed.errors import NetworkError, RequestTimeoutError, ServerError, ValidationError
from billed.models.bill import Bill, CreateResult, UpdateResult, parse_update_result
from billed.models.file import SelectedFile
from billed.session import TOKEN_KEY, KeyValueSession
from billed.stores.base import RemoteBillStore

logger = logging.getLogger(__name__)


class HttpBillStore(RemoteBillStore):
    """Store backed by the Billed REST API."""

    def __init__(
        self,
        base_url: str,
        session: KeyValueSession | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    def _headers(self) -> dict[str, str]:
        token = self.session.get_item(TOKEN_KEY) if self.session is not None else None
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = await self.client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(f"{method} {path} timed out") from exc
        except httpx.TransportError as exc:
            raise NetworkError(f"{method} {path} failed: {exc}") from exc
        if resp.status_code >= 400:
            logger.warning("%s %s -> %d", method, path, resp.status_code)
            raise ServerError(resp.status_code, f"Erreur {resp.status_code}")
        logger.debug("%s %s -> %d", method, path, resp.status_code)
        return resp

    async def list(self, email: str | None = None) -> list[Bill]:
        params = {"email": email} if email is not None else None
        resp = await self._request("GET", "/bills", params=params)
        try:
            return [Bill.model_validate(raw) for raw in resp.json()]
        except (pydantic.ValidationError, TypeError, ValueError) as exc:
            logger.warning("GET /bills returned a malformed bill list: %s", exc)
            raise ServerError(resp.status_code, "Malformed bill list") from exc

    async def create(self, file: SelectedFile, email: str) -> CreateResult:
        resp = await self._request(
            "POST",
            "/bills",
            files={"file": (file.name, file.data, file.mime_type)},
            data={"email": email},
        )
        result = CreateResult.model_validate(resp.json())
        logger.info("Uploaded %s, key=%s", file.name, result.key)
        return result

    async def update(self, bill: Bill, selector: str | None = None) -> UpdateResult:
        key = selector or bill.id
        if not key:
            raise ValidationError("id", "Cannot update a bill without an id")
        resp = await self._request("PATCH", f"/bills/{key}", json=bill.to_payload())
        payload = resp.json() if resp.content.strip() else None
        return parse_update_result(payload)

    async def aclose(self) -> None:
        await self.client.aclose()
