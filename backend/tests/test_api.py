from decimal import Decimal
from urllib.parse import unquote

import pytest
from fastapi.testclient import TestClient

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD
from vitrina.api.deps import access_security
from vitrina.main import create_app
from vitrina.services.storage import ObjectStorage


@pytest.fixture
def seeded(store):
    motor = store.create_category({"name": "Motor", "order_position": 1})
    filtros = store.create_subcategory({"category_id": motor.id, "name": "Filtros"})
    aceite = store.create_subcategory({"category_id": motor.id, "parent_id": filtros.id, "name": "Aceite"})
    filtro = store.create_product({
        "name": "Filtro de aceite", "price": Decimal("45000"), "category": "Motor",
        "subcategory_id": aceite.id, "stock": 10, "brand": "Mann", "sku": "FA-1",
    })
    casco = store.create_product({
        "name": "Casco integral", "price": Decimal("700000"), "category": "Accesorios",
        "stock": 0, "brand": "LS2",
    })
    return {"motor": motor, "filtros": filtros, "aceite": aceite, "filtro": filtro, "casco": casco}


# === Auth ===

def test_health(client):
    assert client.get("/api/health").json() == {"status": "healthy", "env": "test"}


def test_login_sets_cookie(client):
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    assert response.json() == {"email": ADMIN_EMAIL, "role": "admin"}
    assert "access_token_cookie" in response.cookies

    me = client.get("/api/auth/me")
    assert me.status_code == 200


def test_login_rejects_wrong_password(client):
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "nope"})
    assert response.status_code == 401


def test_admin_routes_require_auth(client):
    assert client.get("/api/admin/categories/").status_code == 401

    token = access_security.create_access_token(subject={"email": "x@y.z", "role": "viewer"})
    response = client.get("/api/admin/categories/", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


# === Public catalog ===

def test_catalog_browse_mode(client, seeded):
    data = client.get("/api/catalog/").json()
    assert data["browse_mode"] is True
    assert data["total"] == 2
    assert data["brands"] == ["LS2", "Mann"]
    assert {s["category"] for s in data["category_sections"]} == {"Motor", "Accesorios"}
    assert data["products"][0]["formatted_price"].startswith("₲ ")


def test_catalog_filters_from_query(client, seeded):
    data = client.get("/api/catalog/", params={"q": "filtro", "in_stock": True}).json()
    assert data["browse_mode"] is False
    assert [p["name"] for p in data["products"]] == ["Filtro de aceite"]

    data = client.get("/api/catalog/", params={"min_price": 100000}).json()
    assert [p["name"] for p in data["products"]] == ["Casco integral"]
    assert data["active_filters"] == 1


def test_catalog_rejects_inverted_price_range(client):
    response = client.get("/api/catalog/", params={"min_price": 10, "max_price": 1})
    assert response.status_code == 400


def test_selection_of_subcategory(client, seeded):
    response = client.post("/api/catalog/selection", json={
        "state": {"selected_brand": "LS2"},
        "action": "subcategory",
        "value": seeded["aceite"].id,
    })
    assert response.status_code == 200
    state = response.json()
    assert state["selected_category"] == "Motor"
    assert state["selected_subcategory_id"] == seeded["aceite"].id
    assert state["selected_brand"] == "all"


def test_selection_of_unknown_subcategory(client, seeded):
    response = client.post("/api/catalog/selection", json={"action": "subcategory", "value": "missing"})
    assert response.status_code == 404


def test_category_tree(client, seeded):
    tree = client.get("/api/categories/tree").json()
    assert [c["name"] for c in tree] == ["Motor"]
    root = tree[0]["subcategories"][0]
    assert root["name"] == "Filtros"
    assert [child["name"] for child in root["children"]] == ["Aceite"]

    roots = client.get(f"/api/categories/{seeded['motor'].id}/subcategories").json()
    assert [s["name"] for s in roots] == ["Filtros"]


def test_product_inquiry_link(client, seeded):
    data = client.get(f"/api/products/{seeded['filtro'].id}/inquiry").json()
    assert data["url"].startswith("https://wa.me/595975883322?text=")
    assert "SKU: FA-1" in data["message"]


def test_products_list_and_missing(client, seeded):
    assert len(client.get("/api/products/", params={"brand": "Mann"}).json()) == 1
    assert client.get("/api/products/missing").status_code == 404


# === Checkout ===

def test_checkout_builds_whatsapp_link(client, seeded):
    response = client.post("/api/checkout/", json={
        "items": [{"product_id": seeded["filtro"].id, "quantity": 50}],
    })
    assert response.status_code == 200
    data = response.json()
    assert data["total_items"] == 10
    assert data["formatted_total"] == "₲ 450.000"
    assert data["url"].startswith("https://wa.me/5491131889898?text=")
    assert unquote(data["url"].split("?text=", 1)[1]) == data["message"]


def test_checkout_rejects_out_of_stock(client, seeded):
    response = client.post("/api/checkout/", json={"items": [{"product_id": seeded["casco"].id}]})
    assert response.status_code == 400


def test_checkout_requires_items(client):
    assert client.post("/api/checkout/", json={"items": []}).status_code == 422


# === Admin ===

def test_admin_category_rows_follow_expansion(client, seeded, admin_headers):
    motor_id = seeded["motor"].id
    rows = client.get("/api/admin/categories/", headers=admin_headers).json()
    assert rows[0]["subcategories_count"] == 2
    assert rows[0]["rows"] == []

    rows = client.get(
        "/api/admin/categories/",
        params={"expanded": [motor_id, seeded["filtros"].id]},
        headers=admin_headers,
    ).json()
    assert [(r["subcategory"]["name"], r["depth"]) for r in rows[0]["rows"]] == [("Filtros", 0), ("Aceite", 1)]


def test_admin_rejects_cyclic_parent(client, seeded, admin_headers):
    response = client.patch(
        f"/api/admin/subcategories/{seeded['filtros'].id}",
        json={"parent_id": seeded["aceite"].id},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_admin_delete_category_cascades(client, seeded, admin_headers):
    motor_id = seeded["motor"].id
    warning = client.get(f"/api/admin/categories/{motor_id}/delete-warning", headers=admin_headers).json()
    assert warning["cascade_count"] == 2

    response = client.delete(f"/api/admin/categories/{motor_id}", headers=admin_headers)
    assert response.json() == {"message": "Category deleted", "subcategories_deleted": 2}


def test_admin_product_crud_and_duplicate(client, admin_headers):
    created = client.post("/api/admin/products/", json={
        "name": "Bujía", "price": "25000", "category": "Motor", "stock": 8, "sku": "BJ-1",
    }, headers=admin_headers)
    assert created.status_code == 200
    product_id = created.json()["id"]

    updated = client.patch(f"/api/admin/products/{product_id}", json={"stock": 3}, headers=admin_headers)
    assert updated.json()["stock"] == 3

    copy = client.post(f"/api/admin/products/{product_id}/duplicate", headers=admin_headers).json()
    assert copy["name"] == "Bujía (Copia)"
    assert copy["sku"] == "BJ-1-COPY"

    assert client.delete(f"/api/admin/products/{product_id}", headers=admin_headers).status_code == 200


def test_admin_product_validation(client, admin_headers):
    response = client.post("/api/admin/products/", json={
        "name": "Bujía", "price": "-1", "category": "Motor",
    }, headers=admin_headers)
    assert response.status_code == 422


def test_admin_csv_export(client, seeded, admin_headers):
    response = client.get("/api/admin/products/export/csv", headers=admin_headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "catalogo_" in response.headers["content-disposition"]
    assert response.content.startswith("\ufeff".encode("utf-8"))


def test_admin_html_export(client, seeded, admin_headers):
    response = client.get("/api/admin/products/export/html", headers=admin_headers)
    assert response.status_code == 200
    assert "Filtro de aceite" in response.text


def test_media_upload_list_delete(client, admin_headers):
    uploaded = client.post(
        "/api/admin/media/",
        files={"file": ("logo.txt", b"plain", "text/plain")},
        headers=admin_headers,
    ).json()
    assert uploaded["url"].startswith("/storage/products/")

    listed = client.get("/api/admin/media/", headers=admin_headers).json()
    assert [item["name"] for item in listed] == [uploaded["name"]]

    public = client.get(uploaded["url"])
    assert public.content == b"plain"

    removed = client.post("/api/admin/media/delete", json={"names": [uploaded["name"]]}, headers=admin_headers)
    assert removed.json()["deleted"] == 1


def test_themes_and_footer(client, admin_headers):
    assert client.get("/api/site/theme").json()["theme"] is None

    theme = client.post("/api/admin/site/themes", json={"theme_name": "Neon"}, headers=admin_headers).json()
    assert theme["active"] is False
    client.post(f"/api/admin/site/themes/{theme['id']}/activate", headers=admin_headers)

    active = client.get("/api/site/theme").json()
    assert active["theme"]["id"] == theme["id"]
    assert active["css_variables"]["--primary-color"] == "#39ff14"

    assert client.delete(f"/api/admin/site/themes/{theme['id']}", headers=admin_headers).status_code == 400

    footer = client.put("/api/admin/site/footer", json={"company_name": "Extreme"}, headers=admin_headers)
    assert footer.json()["company_name"] == "Extreme"
    assert client.get("/api/site/footer").json()["company_name"] == "Extreme"


def test_banners_public_only_active(client, admin_headers):
    for title, active in (("Visible", True), ("Oculto", False)):
        client.post("/api/admin/banners", json={
            "title": title, "image_url": "/storage/products/b.jpg", "is_active": active,
        }, headers=admin_headers)
    assert [b["title"] for b in client.get("/api/banners").json()] == ["Visible"]
    assert len(client.get("/api/admin/banners", headers=admin_headers).json()) == 2


def test_public_files_served_from_injected_storage(settings, store, tmp_path):
    storage = ObjectStorage(str(tmp_path / "other-bucket-root"), "media", "/files")
    app = create_app(settings=settings, store=store, storage=storage)
    with TestClient(app) as client:
        stored = storage.upload("notes.txt", b"hola", process_image=False)
        assert stored.url.startswith("/files/media/")
        assert client.get(stored.url).content == b"hola"


def test_app_rejects_settings_the_jwt_signer_cannot_honor(settings, store, storage):
    with pytest.raises(ValueError):
        create_app(settings=settings.model_copy(update={"SECRET_KEY": "otra-clave"}), store=store, storage=storage)
    with pytest.raises(ValueError):
        create_app(settings=settings.model_copy(update={"JWT_ACCESS_EXPIRES_DAYS": 1}), store=store, storage=storage)
