import asyncio

from billed.cli.app import main_menu
from billed.logging import configure_logging
from billed.session import FileSession
from billed.settings import settings
from billed.stores.factory import get_store


async def run() -> None:
    session = FileSession(settings.session_path)
    store = get_store(session)
    try:
        await main_menu(session, store)
    finally:
        await store.aclose()


def main() -> None:
    configure_logging()
    asyncio.run(run())


if __name__ == "__main__":
    main()
