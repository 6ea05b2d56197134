import asyncio

import pytest

from billed.errors import NetworkError, ServerError
from billed.models.bill import BillStatus, FullUpdate
from billed.stores.fixtures import FIXTURE_BILLS
from billed.stores.memory import MemoryBillStore


class TestMemoryBillStore:
    def test_seeded_with_fixtures(self):
        store = MemoryBillStore()
        bills = asyncio.run(store.list())
        assert len(bills) == len(FIXTURE_BILLS)

    def test_list_scoped_by_email(self, sample_bill):
        store = MemoryBillStore(
            bills=[sample_bill(id="1"), sample_bill(id="2", employee_email="other@test.com")]
        )
        bills = asyncio.run(store.list(email="other@test.com"))
        assert [b.id for b in bills] == ["2"]

    def test_list_returns_copies(self, sample_bill):
        store = MemoryBillStore(bills=[sample_bill(id="1")])
        bills = asyncio.run(store.list())
        bills[0].name = "changed"
        assert store.bills["1"].name != "changed"

    def test_create_stores_file(self, png_file):
        store = MemoryBillStore(bills=[], base_url="https://x/")
        result = asyncio.run(store.create(png_file, "employee@test.com"))
        assert result.key in store.files
        assert store.files[result.key] == png_file.data
        assert result.file_url == f"https://x/{result.key}/test.png"
        assert store.owners[result.key] == "employee@test.com"

    def test_update_created_record(self, png_file, sample_bill):
        store = MemoryBillStore(bills=[])

        async def scenario():
            created = await store.create(png_file, "employee@test.com")
            bill = sample_bill(id=None, file_url=created.file_url, file_name="test.png")
            result = await store.update(bill, selector=created.key)
            return created, result, await store.list(email="employee@test.com")

        created, result, listed = asyncio.run(scenario())

        assert isinstance(result, FullUpdate)
        assert result.bill.id == created.key
        assert result.bill.status == BillStatus.PENDING
        assert [b.id for b in listed] == [created.key]

    def test_update_unknown_record(self, sample_bill):
        store = MemoryBillStore(bills=[])
        with pytest.raises(ServerError) as exc_info:
            asyncio.run(store.update(sample_bill(id="nope")))
        assert exc_info.value.code == 404

    def test_injected_failure(self):
        store = MemoryBillStore()
        store.fail_with["list"] = NetworkError("down")
        with pytest.raises(NetworkError):
            asyncio.run(store.list())

    def test_latency(self):
        store = MemoryBillStore(latency=0.5)

        async def scenario():
            return await asyncio.wait_for(store.list(), timeout=0.01)

        with pytest.raises(asyncio.TimeoutError):
            asyncio.run(scenario())
