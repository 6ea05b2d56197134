import pytest

from billed.constants import ROUTES_PATH, format_date, format_status
from billed.models.bill import BillStatus


class TestFormatDate:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("2004-04-04", "4 Avr. 04"),
            ("2021-01-14", "14 Jan. 21"),
            ("2002-02-02", "2 Fév. 02"),
            ("2003-08-30", "30 Aoû. 03"),
            ("2000-12-25", "25 Déc. 00"),
        ],
    )
    def test_formats_iso_dates(self, raw, expected):
        assert format_date(raw) == expected

    def test_invalid_date_returned_unchanged(self):
        assert format_date("not a date") == "not a date"
        assert format_date("2021-02-30") == "2021-02-30"

    def test_empty(self):
        assert format_date("") == ""


class TestFormatStatus:
    def test_labels(self):
        assert format_status(BillStatus.PENDING) == "En attente"
        assert format_status(BillStatus.ACCEPTED) == "Accepté"
        assert format_status(BillStatus.REFUSED) == "Refusé"


class TestRoutes:
    def test_routes(self):
        assert ROUTES_PATH["Bills"] == "#employee/bills"
        assert ROUTES_PATH["NewBill"] == "#employee/bill/new"
