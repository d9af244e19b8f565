import pytest
from fastapi.testclient import TestClient

from product_catalog_api.app.core.config import Settings
from product_catalog_api.app.gateway import Gateway
from product_catalog_api.app.main import create_app
from product_catalog_api.app.schemas.product import ProductCreate
from product_catalog_api.app.services.product_store import ProductStore
from product_catalog_api.app.services.query_resolver import QueryResolver
from tests.fakes import FakeWarehouseClient


@pytest.fixture
def store() -> ProductStore:
    return ProductStore()


@pytest.fixture
def warehouse() -> FakeWarehouseClient:
    return FakeWarehouseClient()


@pytest.fixture
def resolver(store, warehouse) -> QueryResolver:
    return QueryResolver(store, warehouse)


@pytest.fixture
def seeded_store(store) -> ProductStore:
    store.create(ProductCreate(name="Widget", price="9.99", quantity_in_stock=10))
    store.create(ProductCreate(name="Gadget", price="25.00", quantity_in_stock=3))
    return store


@pytest.fixture
def gateway(store, warehouse) -> Gateway:
    settings = Settings(project_name="Catalog Test", api_version="9.9.9", warehouse_base_url=warehouse.base_url)
    return Gateway(settings, store=store, warehouse=warehouse)


@pytest.fixture
def client(gateway):
    with TestClient(create_app(gateway=gateway)) as test_client:
        yield test_client
