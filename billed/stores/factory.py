import logging

from billed.session import KeyValueSession
from billed.settings import settings
from billed.stores.base import RemoteBillStore

logger = logging.getLogger(__name__)


def get_store(session: KeyValueSession | None = None) -> RemoteBillStore:
    backend = settings.store_backend

    if backend == "memory":
        from billed.stores.memory import MemoryBillStore

        logger.info("Using bill store: memory")
        return MemoryBillStore()

    if backend == "http":
        from billed.stores.http import HttpBillStore

        logger.info("Using bill store: http url=%s", settings.api_url)
        return HttpBillStore(settings.api_url, session=session)

    raise ValueError(f"Unsupported store backend: {backend}")
