from __future__ import annotations

import asyncio
import logging

from billed.errors import ServerError
from billed.models.bill import Bill, CreateResult, FullUpdate, UpdateResult
from billed.models.file import SelectedFile
from billed.stores.base import RemoteBillStore
from billed.stores.fixtures import FIXTURE_BILLS

logger = logging.getLogger(__name__)


class MemoryBillStore(RemoteBillStore):
    """In-process store, seeded with fixture bills.

    ``fail_with`` maps an operation name (``"list"``, ``"create"``,
    ``"update"``) to the exception that operation raises, and ``latency``
    delays every call, so failures and timeouts can be reproduced.
    """

    def __init__(
        self,
        bills: list[Bill] | None = None,
        base_url: str = "https://localhost/receipts",
        latency: float = 0.0,
    ) -> None:
        if bills is None:
            bills = [Bill.model_validate(raw) for raw in FIXTURE_BILLS]
        self.bills: dict[str, Bill] = {b.id: b for b in bills if b.id}
        self.files: dict[str, bytes] = {}
        self.owners: dict[str, str] = {}
        self.base_url = base_url.rstrip("/")
        self.latency = latency
        self.fail_with: dict[str, BaseException] = {}

    async def _enter(self, operation: str) -> None:
        if self.latency:
            await asyncio.sleep(self.latency)
        exc = self.fail_with.get(operation)
        if exc is not None:
            logger.debug("Injected failure for %s: %r", operation, exc)
            raise exc

    async def list(self, email: str | None = None) -> list[Bill]:
        await self._enter("list")
        result = [
            b.model_copy(deep=True) for b in self.bills.values() if email is None or b.employee_email == email
        ]
        logger.debug("Listed %d bills for email=%s", len(result), email)
        return result

    async def create(self, file: SelectedFile, email: str) -> CreateResult:
        await self._enter("create")
        from ulid import ULID

        key = str(ULID())
        self.files[key] = file.data
        self.owners[key] = email
        file_url = f"{self.base_url}/{key}/{file.name}"
        logger.info("Stored receipt %s (%d bytes) for %s", file.name, len(file.data), email)
        return CreateResult(file_url=file_url, key=key)

    async def update(self, bill: Bill, selector: str | None = None) -> UpdateResult:
        await self._enter("update")
        key = selector or bill.id
        if key is None or (key not in self.owners and key not in self.bills):
            raise ServerError(404, f"Bill {key} not found")
        stored = bill.model_copy(update={"id": key}, deep=True)
        self.bills[key] = stored
        logger.info("Bill %s saved with status=%s", key, stored.status.value)
        return FullUpdate(bill=stored.model_copy(deep=True))
