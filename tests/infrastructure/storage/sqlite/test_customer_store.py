"""Tests for SQLiteCustomerStore."""

import pytest

from repairshop.core.entities import Customer
from repairshop.core.exceptions import CustomerNotFoundError, DatabaseError
from repairshop.infrastructure.storage.sqlite import SQLiteCustomerStore, get_transaction


class TestCustomerStore:
    async def test_create_and_get(self, db):
        store = SQLiteCustomerStore()
        created = await store.create_customer(Customer(name="Bob", address="1 High St"))

        loaded = await store.get_customer(created.id)

        assert loaded.name == "Bob"
        assert loaded.address == "1 High St"
        assert loaded.phone is None

    async def test_list_newest_first(self, db):
        store = SQLiteCustomerStore()
        first = await store.create_customer(Customer(name="First"))
        second = await store.create_customer(Customer(name="Second"))

        customers = await store.list_customers()

        assert [c.id for c in customers] == [second.id, first.id]

    async def test_update(self, seeded):
        store = SQLiteCustomerStore()
        customer = await store.get_customer(seeded.customer_id)
        customer.phone = "555-0111"

        updated = await store.update_customer(customer)

        assert updated.phone == "555-0111"

    async def test_update_missing(self, db):
        with pytest.raises(CustomerNotFoundError):
            await SQLiteCustomerStore().update_customer(Customer(id=77, name="Nobody"))

    async def test_get_missing(self, db):
        assert await SQLiteCustomerStore().get_customer(77) is None

    async def test_empty_timestamp_is_reported_not_replaced(self, db):
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "INSERT INTO customers (name, created_at) VALUES ('Ghost', '')"
            )
            customer_id = cursor.lastrowid

        with pytest.raises(DatabaseError, match="timestamp column is empty"):
            await SQLiteCustomerStore().get_customer(customer_id)
