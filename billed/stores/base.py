from __future__ import annotations

from abc import ABC, abstractmethod

from billed.models.bill import Bill, CreateResult, UpdateResult
from billed.models.file import SelectedFile


class RemoteBillStore(ABC):
    """Persistence collaborator for bills.

    Implementations raise ``NetworkError`` for transport failures and
    ``ServerError`` when the backend answers with a failure status.
    """

    @abstractmethod
    async def list(self, email: str | None = None) -> list[Bill]:
        """List bills, scoped to ``email`` unless it is ``None``."""
        ...

    @abstractmethod
    async def create(self, file: SelectedFile, email: str) -> CreateResult:
        """Upload the receipt file and register a new bill owned by ``email``."""
        ...

    @abstractmethod
    async def update(self, bill: Bill, selector: str | None = None) -> UpdateResult:
        """Persist ``bill`` under the record identified by ``selector``."""
        ...

    async def aclose(self) -> None:
        """Release network resources held by the store."""
        return None
