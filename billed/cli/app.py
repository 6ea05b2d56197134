from __future__ import annotations

import logging

import questionary
from rich.console import Console

from billed.cli.bill_menu import ConsoleReceiptViewer, list_bills_menu, new_bill_menu
from billed.constants import ROUTES_PATH
from billed.controllers.bill_list import BillListController
from billed.controllers.bill_submission import BillSubmissionController
from billed.models.user import UserSession, UserType
from billed.session import USER_KEY, KeyValueSession, SessionError, load_user, save_user
from billed.stores.base import RemoteBillStore

console = Console()
logger = logging.getLogger(__name__)

MY_BILLS = "Mes notes de frais"
NEW_BILL = "Nouvelle note de frais"
LOGOUT = "Se déconnecter"
QUIT = "Quitter"


class Navigator:
    """Keeps the current route; controllers call it to move between views."""

    def __init__(self, route: str = ROUTES_PATH["Bills"]) -> None:
        self.route = route

    def __call__(self, route: str) -> None:
        logger.debug("Navigating to %s", route)
        self.route = route


async def login_menu(session: KeyValueSession) -> UserSession | None:
    console.print()
    console.print("[bold]Billed[/bold]", style="cyan")
    email = await questionary.text("E-mail :").ask_async()
    if not email:
        return None
    role = await questionary.select("Profil :", choices=[t.value for t in UserType]).ask_async()
    if role is None:
        return None
    user = UserSession(type=UserType(role), email=email)
    save_user(session, user)
    return user


def _build_controllers(
    store: RemoteBillStore, user: UserSession, navigator: Navigator
) -> tuple[BillListController, BillSubmissionController]:
    return (
        BillListController(store, user, navigator, viewer=ConsoleReceiptViewer()),
        BillSubmissionController(store, user, navigator),
    )


async def main_menu(session: KeyValueSession, store: RemoteBillStore) -> None:
    try:
        user = load_user(session)
    except SessionError:
        user = await login_menu(session)
        if user is None:
            console.print("[bold]À bientôt ![/bold]")
            return

    navigator = Navigator()
    list_controller, submission_controller = _build_controllers(store, user, navigator)
    console.print(f"Connecté en tant que [bold]{user.email}[/bold] ({user.type.value})")

    while True:
        if navigator.route == ROUTES_PATH["NewBill"]:
            await new_bill_menu(submission_controller)
            navigator(ROUTES_PATH["Bills"])
            continue

        choice = await questionary.select(
            "Menu principal",
            choices=[MY_BILLS, NEW_BILL, LOGOUT, QUIT],
        ).ask_async()

        if choice is None or choice == QUIT:
            console.print("[bold]À bientôt ![/bold]")
            break
        elif choice == MY_BILLS:
            await list_bills_menu(list_controller)
        elif choice == NEW_BILL:
            list_controller.handle_create_new()
        elif choice == LOGOUT:
            session.remove_item(USER_KEY)
            navigator(ROUTES_PATH["Login"])
            console.print("[bold]Déconnecté.[/bold]")
            break
