from __future__ import annotations

import mimetypes
from pathlib import Path

import questionary
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from billed.controllers.bill_list import BillListController, BillListSnapshot
from billed.controllers.bill_submission import BillSubmissionController
from billed.errors import BillError, ServerError, ValidationError
from billed.models.bill import BillType
from billed.models.file import SelectedFile
from billed.viewer import ReceiptViewer

console = Console()

BACK = "Retour"
NEW_BILL = "Nouvelle note de frais"

FIELD_LABELS = {
    "file": "Justificatif",
    "type": "Type de dépense",
    "name": "Nom de la dépense",
    "date": "Date",
    "amount": "Montant TTC",
    "pct": "TVA (%)",
    "vat": "TVA (montant)",
}


class ConsoleReceiptViewer(ReceiptViewer):
    def show(self, file_url: str, file_name: str | None = None) -> None:
        console.print(Panel(file_url, title=file_name or "Justificatif", expand=False))


def describe_error(error: BillError) -> str:
    if isinstance(error, ServerError):
        return f"Erreur {error.code}"
    if isinstance(error, ValidationError):
        return f"Champ invalide : {FIELD_LABELS.get(error.field, error.field)}"
    return f"{error.kind.value}: {error.message}"


def read_file(path: str) -> SelectedFile:
    """Load a local file, guessing its MIME type from the name."""
    file_path = Path(path).expanduser()
    mime_type, _ = mimetypes.guess_type(file_path.name)
    return SelectedFile(name=file_path.name, mime_type=mime_type or "", data=file_path.read_bytes())


def _render_table(snapshot: BillListSnapshot) -> None:
    table = Table()
    table.add_column("Type")
    table.add_column("Nom")
    table.add_column("Date")
    table.add_column("Montant", justify="right")
    table.add_column("Statut", justify="center")
    for row in snapshot.rows:
        table.add_row(row.type, row.name, row.date, f"{row.amount:g} €", row.status)
    console.print(table)


async def list_bills_menu(controller: BillListController) -> None:
    try:
        snapshot = await controller.load_and_render()
    except BillError as exc:
        console.print(f"[red]{describe_error(exc)}[/red]")
        return

    console.print()
    console.print("[bold]Mes notes de frais[/bold]", style="cyan")
    if not snapshot.bills:
        console.print("[yellow]Aucune note de frais.[/yellow]")
    else:
        _render_table(snapshot)

    while True:
        choices = [f"{row.id} - {row.name} ({row.date})" for row in snapshot.rows if row.file_url]
        choice = await questionary.select("Voir un justificatif :", choices=[*choices, NEW_BILL, BACK]).ask_async()
        if choice is None or choice == BACK:
            return
        if choice == NEW_BILL:
            controller.handle_create_new()
            return
        bill_id = choice.split(" - ", 1)[0]
        try:
            controller.handle_view_receipt(bill_id)
        except (KeyError, BillError) as exc:
            console.print(f"[red]{exc}[/red]")


async def _ask_file(controller: BillSubmissionController) -> bool:
    while True:
        path = await questionary.path("Justificatif (jpg, jpeg, png, webp) :").ask_async()
        if not path:
            return False
        try:
            selected = read_file(path)
        except OSError as exc:
            console.print(f"[red]Fichier illisible : {exc}[/red]")
            continue
        try:
            await controller.select_file(selected)
        except BillError as exc:
            console.print(f"[red]{describe_error(exc)}[/red]")
            continue
        console.print(f"  [green]Justificatif envoyé : {selected.name}[/green]")
        return True


async def _ask_form() -> dict[str, str] | None:
    bill_type = await questionary.select("Type de dépense :", choices=[t.value for t in BillType]).ask_async()
    if bill_type is None:
        return None
    name = await questionary.text("Nom de la dépense :").ask_async()
    date = await questionary.text("Date (AAAA-MM-JJ) :").ask_async()
    amount = await questionary.text("Montant TTC :").ask_async()
    vat = await questionary.text("TVA (montant, optionnel) :").ask_async()
    pct = await questionary.text("TVA (%) :", default="20").ask_async()
    commentary = await questionary.text("Commentaire (optionnel) :").ask_async()
    return {
        "type": bill_type,
        "name": name or "",
        "date": date or "",
        "amount": amount or "",
        "vat": vat or "",
        "pct": pct or "",
        "commentary": commentary or "",
    }


async def new_bill_menu(controller: BillSubmissionController) -> bool:
    """Walk through a new bill; returns True once it is submitted."""
    console.print()
    console.print("[bold]Envoyer une note de frais[/bold]", style="cyan")
    controller.mount()

    if not await _ask_file(controller):
        controller.discard()
        console.print("[yellow]Opération annulée.[/yellow]")
        return False

    while True:
        fields = await _ask_form()
        if fields is None:
            controller.discard()
            console.print("[yellow]Opération annulée.[/yellow]")
            return False
        try:
            await controller.submit(fields)
        except BillError as exc:
            console.print(f"[red]{describe_error(exc)}[/red]")
            retry = await questionary.confirm("Réessayer ?", default=True).ask_async()
            if not retry:
                controller.discard()
                return False
            continue
        console.print("[green bold]Note de frais envoyée ![/green bold]")
        return True
