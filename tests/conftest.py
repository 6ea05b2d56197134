"""Root conftest: sample users, bills, files and a mocked bill store."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from billed.models.bill import Bill, BillStatus, BillType
from billed.models.file import SelectedFile
from billed.models.user import UserSession, UserType
from billed.stores.base import RemoteBillStore


def _sample_bill(**overrides) -> Bill:
    defaults = dict(
        id="47qAXb6fIm2zOKkLzMro",
        employee_email="employee@test.com",
        type=BillType.HOTEL,
        name="Séminaire",
        amount=400,
        date="2004-04-04",
        vat=80,
        pct=20,
        commentary="séminaire billed",
        file_url="https://localhost/receipts/facture.jpg",
        file_name="facture.jpg",
        status=BillStatus.PENDING,
    )
    defaults.update(overrides)
    return Bill(**defaults)


@pytest.fixture()
def sample_bill():
    return _sample_bill


@pytest.fixture()
def employee() -> UserSession:
    return UserSession(type=UserType.EMPLOYEE, email="employee@test.com")


@pytest.fixture()
def admin() -> UserSession:
    return UserSession(type=UserType.ADMIN, email="admin@test.com")


@pytest.fixture()
def png_file() -> SelectedFile:
    return SelectedFile(name="test.png", mime_type="image/png", data=b"\x89PNG-img")


@pytest.fixture()
def pdf_file() -> SelectedFile:
    return SelectedFile(name="test.pdf", mime_type="application/pdf", data=b"%PDF-1.4")


@pytest.fixture()
def mock_store() -> MagicMock:
    store = MagicMock(spec=RemoteBillStore)
    store.list = AsyncMock(return_value=[])
    store.create = AsyncMock()
    store.update = AsyncMock()
    store.aclose = AsyncMock()
    return store


@pytest.fixture()
def navigate() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def valid_form() -> dict[str, str]:
    return {
        "type": "Transports",
        "name": "Vol Paris Montréal",
        "date": "2021-01-04",
        "amount": "348",
        "vat": "70",
        "pct": "20",
        "commentary": "Déplacement client",
    }
