from datetime import timedelta
from decimal import Decimal

import pytest
from fastapi import HTTPException

from conftest import make_product


@pytest.fixture
def motor(store):
    return store.create_category({"name": "Motor"})


def test_subcategory_levels_follow_parent(store, motor):
    root = store.create_subcategory({"category_id": motor.id, "name": "Filtros"})
    child = store.create_subcategory({"category_id": motor.id, "parent_id": root.id, "name": "Aceite"})
    grandchild = store.create_subcategory({"category_id": motor.id, "parent_id": child.id, "name": "Sintético"})
    assert (root.level, child.level, grandchild.level) == (0, 1, 2)


def test_child_inherits_parent_category(store, motor):
    other = store.create_category({"name": "Frenos"})
    root = store.create_subcategory({"category_id": motor.id, "name": "Filtros"})
    child = store.create_subcategory({"category_id": other.id, "parent_id": root.id, "name": "Aire"})
    assert child.category_id == motor.id


def test_subcategory_requires_existing_category(store):
    with pytest.raises(HTTPException) as exc:
        store.create_subcategory({"category_id": "nope", "name": "X"})
    assert exc.value.status_code == 400


def test_cycle_is_rejected_on_update(store, motor):
    root = store.create_subcategory({"category_id": motor.id, "name": "A"})
    child = store.create_subcategory({"category_id": motor.id, "parent_id": root.id, "name": "B"})

    with pytest.raises(HTTPException) as exc:
        store.update_subcategory(root.id, {"parent_id": child.id})
    assert exc.value.status_code == 400

    with pytest.raises(HTTPException):
        store.update_subcategory(root.id, {"parent_id": root.id})


def test_moving_a_node_cascades_category_and_level(store, motor):
    other = store.create_category({"name": "Frenos"})
    target = store.create_subcategory({"category_id": other.id, "name": "Discos"})
    root = store.create_subcategory({"category_id": motor.id, "name": "A"})
    child = store.create_subcategory({"category_id": motor.id, "parent_id": root.id, "name": "B"})

    moved = store.update_subcategory(root.id, {"parent_id": target.id})
    assert (moved.category_id, moved.level) == (other.id, 1)

    child = store.get_subcategory(child.id)
    assert (child.category_id, child.level) == (other.id, 2)


def test_delete_subcategory_removes_descendants(store, motor):
    root = store.create_subcategory({"category_id": motor.id, "name": "A"})
    child = store.create_subcategory({"category_id": motor.id, "parent_id": root.id, "name": "B"})
    store.create_subcategory({"category_id": motor.id, "parent_id": child.id, "name": "C"})
    keep = store.create_subcategory({"category_id": motor.id, "name": "D"})

    assert store.delete_subcategory(root.id) == 2
    assert [s.id for s in store.list_subcategories()] == [keep.id]


def test_delete_category_cascades(store, motor):
    root = store.create_subcategory({"category_id": motor.id, "name": "A"})
    store.create_subcategory({"category_id": motor.id, "parent_id": root.id, "name": "B"})

    assert store.delete_category(motor.id) == 2
    assert store.list_subcategories() == []
    with pytest.raises(HTTPException) as exc:
        store.get_category(motor.id)
    assert exc.value.status_code == 404


def test_active_only_lists(store):
    store.create_category({"name": "Visible", "order_position": 2})
    store.create_category({"name": "Oculta", "is_active": False})
    store.create_category({"name": "Primera", "order_position": 1})
    assert [c.name for c in store.list_categories(active_only=True)] == ["Primera", "Visible"]
    assert len(store.list_categories()) == 3


def test_duplicate_product(store):
    product = store.create_product({
        "name": "Escape", "price": Decimal("900000"), "category": "Motor", "stock": 2, "sku": "ESC-1",
    })
    copy = store.duplicate_product(product.id)
    assert copy.id != product.id
    assert copy.name == "Escape (Copia)"
    assert copy.sku == "ESC-1-COPY"
    assert copy.price == product.price


def test_get_products_by_ids(store):
    a = store.create_product({"name": "A", "price": Decimal("1"), "category": "X"})
    store.create_product({"name": "B", "price": Decimal("2"), "category": "X"})
    assert set(store.get_products([a.id, "missing"])) == {a.id}
    assert store.get_products([]) == {}


def test_single_active_theme(store):
    dark = store.create_theme({"theme_name": "Dark"})
    light = store.create_theme({"theme_name": "Light", "active": True})
    assert not light.active

    store.activate_theme(dark.id)
    store.activate_theme(light.id)
    assert [t.theme_name for t in store.list_themes() if t.active] == ["Light"]
    assert store.get_active_theme().id == light.id

    with pytest.raises(HTTPException) as exc:
        store.delete_theme(light.id)
    assert exc.value.status_code == 400
    store.delete_theme(dark.id)
    assert len(store.list_themes()) == 1


def test_footer_upsert(store):
    assert store.get_footer_settings() is None
    first = store.update_footer_settings({"company_name": "Extreme"})
    second = store.update_footer_settings({"phone": "+595 21 000"})
    assert first.id == second.id
    assert (second.company_name, second.phone) == ("Extreme", "+595 21 000")


def test_timestamps_are_utc_aware(store):
    product = make_product()
    assert product.created_at.utcoffset() == timedelta(0)

    category = store.create_category({"name": "Frenos"})
    updated = store.update_category(category.id, {"name": "Frenos y discos"})
    assert updated.name == "Frenos y discos"
