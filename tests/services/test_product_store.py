"""Unit tests for the in-memory product store."""

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from product_catalog_api.app.core.errors import InvalidProductError
from product_catalog_api.app.schemas.product import ProductCreate, ProductUpdate
from product_catalog_api.app.services.product_store import ProductStore


def _widget(**overrides) -> ProductCreate:
    fields = {"name": "Widget", "price": "9.99", "quantity_in_stock": 10}
    fields.update(overrides)
    return ProductCreate(**fields)


class TestCreate:

    def test_assigns_id_and_keeps_fields(self, store):
        product = store.create(_widget())
        assert product.id == 1
        assert product.name == "Widget"
        assert product.price == Decimal("9.99")
        assert product.quantity_in_stock == 10

    def test_create_then_get_returns_equal_record(self, store):
        data = _widget(name="Lamp", price="12.50", quantity_in_stock=4)
        created = store.create(data)
        fetched = store.get(created.id)
        assert fetched is not None
        assert fetched.model_dump(exclude={"id"}) == data.model_dump()

    def test_sequential_ids(self, store):
        first = store.create(_widget())
        second = store.create(_widget(name="Gadget"))
        assert second.id == first.id + 1

    def test_caller_supplied_id_is_ignored(self, store):
        store.create(_widget())
        data = ProductCreate.model_validate({"id": 1, "name": "Clash", "price": "1.00", "quantity_in_stock": 1})
        created = store.create(data)
        assert created.id == 2
        assert store.get(1).name == "Widget"

    def test_ids_are_not_reused_after_delete(self, store):
        first = store.create(_widget())
        store.delete(first.id)
        second = store.create(_widget())
        assert second.id != first.id

    @pytest.mark.parametrize(
        "overrides",
        [
            {"price": "-0.01"},
            {"quantity_in_stock": -1},
            {"name": "   "},
        ],
    )
    def test_rejects_invalid_product(self, store, overrides):
        with pytest.raises(InvalidProductError):
            store.create(_widget(**overrides))
        assert store.list() == []

    def test_concurrent_creates_never_share_an_id(self, store):
        with ThreadPoolExecutor(max_workers=16) as pool:
            products = list(pool.map(lambda i: store.create(_widget(name=f"P{i}")), range(200)))
        ids = [product.id for product in products]
        assert len(set(ids)) == 200
        assert set(ids) == set(range(1, 201))
        assert store.count() == 200


class TestRead:

    def test_get_missing_returns_none(self, store):
        assert store.get(42) is None

    def test_list_keeps_insertion_order(self, seeded_store):
        assert [p.name for p in seeded_store.list()] == ["Widget", "Gadget"]

    def test_returned_records_are_copies(self, seeded_store):
        product = seeded_store.get(1)
        product.name = "Tampered"
        assert seeded_store.get(1).name == "Widget"


class TestUpdate:

    def test_updates_only_provided_fields(self, seeded_store):
        updated = seeded_store.update(1, ProductUpdate(price=Decimal("11.00")))
        assert updated.price == Decimal("11.00")
        assert updated.name == "Widget"
        assert updated.quantity_in_stock == 10
        assert seeded_store.get(1).price == Decimal("11.00")

    def test_missing_product_returns_none(self, store):
        assert store.update(7, ProductUpdate(name="Ghost")) is None
        assert store.list() == []

    def test_rejected_update_leaves_record_untouched(self, seeded_store):
        with pytest.raises(InvalidProductError):
            seeded_store.update(1, ProductUpdate(name="Cheaper", quantity_in_stock=-5))
        product = seeded_store.get(1)
        assert product.name == "Widget"
        assert product.quantity_in_stock == 10


class TestDelete:

    def test_delete_then_get_reports_missing(self, seeded_store):
        assert seeded_store.delete(1) is True
        assert seeded_store.get(1) is None

    def test_delete_missing_reports_false(self, store):
        assert store.delete(99) is False
        assert store.get(99) is None

    def test_clear_empties_store(self, seeded_store):
        seeded_store.clear()
        assert seeded_store.list() == []
        assert seeded_store.create(_widget()).id == 3


def test_store_starts_empty():
    assert ProductStore().list() == []
