from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from vitrina.api.deps import access_security, ADMIN_ROLE
from vitrina.core.config import Settings
from vitrina.main import create_app
from vitrina.models.category import Subcategory
from vitrina.models.product import Product
from vitrina.services.storage import ObjectStorage
from vitrina.services.store import CatalogStore

ADMIN_EMAIL = "extremeadmin@admin.com"
ADMIN_PASSWORD = "extreme-secret"


def make_product(**overrides) -> Product:
    data = {
        "name": "Producto",
        "description": "",
        "price": Decimal("100000"),
        "category": "Motor",
        "stock": 1,
    }
    data.update(overrides)
    return Product(**data)


def make_sub(sub_id, category_id="c1", parent_id=None, order_position=0, name=None) -> Subcategory:
    return Subcategory(
        id=sub_id,
        category_id=category_id,
        parent_id=parent_id,
        name=name or sub_id,
        order_position=order_position,
    )


@pytest.fixture
def settings(tmp_path):
    return Settings(
        ENV="test",
        DATABASE_URL=f"sqlite:///{tmp_path / 'vitrina.db'}",
        ADMIN_EMAIL=ADMIN_EMAIL,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        STORAGE_DIR=str(tmp_path / "storage"),
    )


@pytest.fixture
def store(tmp_path):
    store = CatalogStore.from_url(f"sqlite:///{tmp_path / 'vitrina.db'}")
    store.start()
    yield store
    store.stop()


@pytest.fixture
def storage(tmp_path):
    storage = ObjectStorage(str(tmp_path / "storage"), "products", "/storage")
    storage.start()
    return storage


@pytest.fixture
def client(settings, store, storage):
    app = create_app(settings=settings, store=store, storage=storage)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_headers():
    token = access_security.create_access_token(subject={"email": ADMIN_EMAIL, "role": ADMIN_ROLE})
    return {"Authorization": f"Bearer {token}"}
