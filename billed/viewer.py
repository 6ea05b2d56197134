from abc import ABC, abstractmethod


class ReceiptViewer(ABC):
    """Read-only preview of a bill's attached receipt."""

    @abstractmethod
    def show(self, file_url: str, file_name: str | None = None) -> None: ...
