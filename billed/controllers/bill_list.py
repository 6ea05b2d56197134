from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable

from pydantic import BaseModel, ConfigDict

from billed.constants import ROUTES_PATH, format_date, format_status
from billed.errors import ValidationError, classify_error
from billed.models.bill import Bill
from billed.models.user import UserSession
from billed.settings import settings
from billed.stores.base import RemoteBillStore
from billed.viewer import ReceiptViewer

logger = logging.getLogger(__name__)


class BillRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str | None
    type: str
    name: str
    date: str
    amount: float
    status: str
    file_url: str | None = None
    file_name: str | None = None

    @classmethod
    def from_bill(cls, bill: Bill) -> BillRow:
        return cls(
            id=bill.id,
            type=bill.type.value,
            name=bill.name,
            date=format_date(bill.date),
            amount=bill.amount,
            status=format_status(bill.status),
            file_url=bill.file_url,
            file_name=bill.file_name,
        )


class BillListSnapshot(BaseModel):
    """Bills in display order, most recent first."""

    model_config = ConfigDict(frozen=True)

    bills: tuple[Bill, ...] = ()
    rows: tuple[BillRow, ...] = ()

    @classmethod
    def build(cls, bills: Iterable[Bill]) -> BillListSnapshot:
        # Plain string comparison on the raw date; stable for equal dates.
        ordered = tuple(sorted(bills, key=lambda b: b.date, reverse=True))
        return cls(bills=ordered, rows=tuple(BillRow.from_bill(b) for b in ordered))

    @property
    def dates(self) -> list[str]:
        return [b.date for b in self.bills]

    def get(self, bill_id: str) -> Bill | None:
        for bill in self.bills:
            if bill.id == bill_id:
                return bill
        return None

    def __len__(self) -> int:
        return len(self.bills)


class BillListController:
    def __init__(
        self,
        store: RemoteBillStore,
        user: UserSession,
        on_navigate: Callable[[str], None],
        viewer: ReceiptViewer,
        list_timeout: float | None = None,
    ) -> None:
        self.store = store
        self.user = user
        self.on_navigate = on_navigate
        self.viewer = viewer
        self.list_timeout = settings.list_timeout if list_timeout is None else list_timeout
        self.snapshot = BillListSnapshot()

    async def load_and_render(self) -> BillListSnapshot:
        scope = self.user.list_scope
        try:
            bills = await asyncio.wait_for(self.store.list(email=scope), timeout=self.list_timeout)
        except Exception as exc:
            error = classify_error(exc)
            logger.warning("Loading bills for %s failed: %s", scope or "all users", error)
            if error is exc:
                raise
            raise error from exc

        snapshot = BillListSnapshot.build(bills)
        self.snapshot = snapshot
        logger.debug("Loaded %d bills for %s", len(snapshot), scope or "all users")
        return snapshot

    def handle_view_receipt(self, bill_id: str) -> Bill:
        bill = self.snapshot.get(bill_id)
        if bill is None:
            raise KeyError(f"Bill not found: {bill_id}")
        if bill.file_url is None:
            raise ValidationError("file", f"Bill {bill_id} has no receipt attached")
        logger.debug("Showing receipt of bill %s", bill_id)
        self.viewer.show(bill.file_url, bill.file_name)
        return bill

    def handle_create_new(self) -> None:
        self.on_navigate(ROUTES_PATH["NewBill"])
