"""Tests for the in-memory store and the adapters built on it."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from transport_orders.domain.errors import LocationError, OrderNotFoundError, StorageError
from transport_orders.domain.models import (
    CargoDescription,
    LocationDescription,
    OrderFilter,
    OrderStatus,
    OrderUpdate,
)
from transport_orders.domain.views import ORDER_STATUS, ORDER_SUMMARY

OWNER_ID = 7
HOME = LocationDescription(home=True, city="Riga", street="Brivibas")


class TestInMemoryLocationResolver:
    def test_identical_descriptions_share_id(self, resolver):
        first = resolver.resolve(HOME)
        second = resolver.resolve(LocationDescription(home=True, city="Riga", street="Brivibas"))

        assert first == second

    def test_home_flag_is_part_of_identity(self, resolver, store):
        home_id = resolver.resolve(HOME)
        office_id = resolver.resolve(LocationDescription(home=False, city="Riga", street="Brivibas"))

        assert home_id != office_id
        assert store.count("locations") == 2
        assert store.count("cities") == 1
        assert store.count("streets") == 1

    def test_concurrent_resolution_creates_one_location(self, resolver, store):
        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(resolver.resolve, [HOME] * 32))

        assert len(set(ids)) == 1
        assert store.count("locations") == 1

    @pytest.mark.parametrize(
        "description",
        [
            LocationDescription(home=True, city="", street="Brivibas"),
            LocationDescription(home=True, city="Riga", street="   "),
        ],
    )
    def test_blank_names_are_rejected(self, resolver, store, description):
        with pytest.raises(LocationError) as info:
            resolver.resolve(description)

        assert info.value.description == description
        assert store.count("locations") == 0


class TestInMemoryCargoRegistrar:
    def test_unknown_order_is_rejected(self, registrar, store):
        with pytest.raises(StorageError) as info:
            registrar.register(1, CargoDescription(weight=1))

        assert info.value.table == "cargos"
        assert store.count("cargos") == 0

    def test_registers_against_order(self, registrar, storage, resolver):
        location_id = resolver.resolve(HOME)
        order = storage.insert(OWNER_ID, location_id, location_id)

        cargo_id = registrar.register(order.id, CargoDescription(size="XL", description="sofa"))

        [cargo] = registrar.list_for_order(order.id)
        assert cargo.id == cargo_id
        assert cargo.size == "XL"
        assert cargo.description == "sofa"


class TestInMemoryOrderStorage:
    @pytest.fixture
    def location_id(self, resolver):
        return resolver.resolve(HOME)

    def test_insert_sets_pending_and_timestamps(self, storage, location_id):
        order = storage.insert(OWNER_ID, location_id, location_id)

        assert order.status is OrderStatus.PENDING
        assert order.created_at == order.updated_at

    def test_insert_rejects_unknown_owner(self, storage, location_id, store):
        with pytest.raises(StorageError):
            storage.insert(404, location_id, location_id)

        assert store.count("orders") == 0

    def test_insert_rejects_unknown_location(self, storage, location_id):
        with pytest.raises(StorageError):
            storage.insert(OWNER_ID, location_id, 999)

    def test_find_many_applies_filter_and_projection(self, storage, location_id):
        first = storage.insert(OWNER_ID, location_id, location_id)
        second = storage.insert(OWNER_ID, location_id, location_id)
        storage.update(second.id, OrderUpdate(status=OrderStatus.APPROVED))

        pending = storage.find_many(OrderFilter(status=OrderStatus.PENDING), ORDER_SUMMARY)
        statuses = storage.find_many(OrderFilter(owner_id=OWNER_ID), ORDER_STATUS)

        assert [summary.id for summary in pending] == [first.id]
        assert pending[0].from_location.street == "Brivibas"
        assert statuses == [OrderStatus.PENDING, OrderStatus.APPROVED]

    def test_find_unique_missing_returns_none(self, storage):
        assert storage.find_unique(1, ORDER_SUMMARY) is None

    def test_update_bumps_updated_at(self, storage, location_id):
        order = storage.insert(OWNER_ID, location_id, location_id)

        updated = storage.update(order.id, OrderUpdate(status=OrderStatus.DECLINED))

        assert updated.status is OrderStatus.DECLINED
        assert updated.created_at == order.created_at
        assert updated.updated_at > order.updated_at

    def test_update_missing_order(self, storage):
        with pytest.raises(OrderNotFoundError):
            storage.update(3, OrderUpdate(status=OrderStatus.APPROVED))

    def test_update_rejects_unknown_location(self, storage, location_id):
        order = storage.insert(OWNER_ID, location_id, location_id)

        with pytest.raises(StorageError):
            storage.update(order.id, OrderUpdate(to_location_id=999))


class TestInMemoryStore:
    def test_transaction_rolls_back_rows_and_sequences(self, store, storage, resolver):
        location_id = resolver.resolve(HOME)

        with pytest.raises(RuntimeError):
            with store.transaction():
                storage.insert(OWNER_ID, location_id, location_id)
                raise RuntimeError("boom")

        assert store.count("orders") == 0
        assert storage.insert(OWNER_ID, location_id, location_id).id == 1

    def test_transaction_commits(self, store, storage, resolver):
        location_id = resolver.resolve(HOME)

        with storage.transaction():
            order = storage.insert(OWNER_ID, location_id, location_id)

        assert store.get("orders", order.id) == order

    def test_add_user_with_explicit_id_advances_sequence(self, store):
        user = store.add_user("Liga", "Kalnina")

        assert user.id == OWNER_ID + 1
