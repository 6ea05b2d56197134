from datetime import date

from billed.models.bill import BillStatus

ROUTES_PATH = {
    "Login": "/",
    "Bills": "#employee/bills",
    "NewBill": "#employee/bill/new",
    "Dashboard": "#admin/dashboard",
}

# Three-letter French month abbreviations, as shown in the bill list.
MONTHS_FR = {
    1: "Jan",
    2: "Fév",
    3: "Mar",
    4: "Avr",
    5: "Mai",
    6: "Jui",
    7: "Jui",
    8: "Aoû",
    9: "Sep",
    10: "Oct",
    11: "Nov",
    12: "Déc",
}

STATUS_LABELS = {
    BillStatus.PENDING: "En attente",
    BillStatus.ACCEPTED: "Accepté",
    BillStatus.REFUSED: "Refusé",
}


def format_date(raw: str) -> str:
    """Format an ISO date for display: '2004-04-04' -> '4 Avr. 04'.

    Values that are not ISO dates are returned unchanged.
    """
    try:
        parsed = date.fromisoformat(raw)
    except (TypeError, ValueError):
        return raw or ""
    return f"{parsed.day} {MONTHS_FR[parsed.month]}. {parsed.year % 100:02d}"


def format_status(status: BillStatus) -> str:
    return STATUS_LABELS.get(status, str(status.value))
