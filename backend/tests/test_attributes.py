from fastapi.testclient import TestClient

from storefront.main import app
from storefront.services.attribute_service import slugify

client = TestClient(app)


def test_slugify_folds_accents_and_separators():
    assert slugify("Colección Luna") == "coleccion-luna"
    assert slugify("  Anillos & Aros ") == "anillos-aros"
    assert slugify("Plata_950") == "plata-950"


def _create(type, name):
    return client.post("/api/admin/attributes", json={"type": type, "name": name})


def test_create_and_list_by_type():
    assert _create("category", "Aros").status_code == 200
    assert _create("category", "Anillos").status_code == 200
    created = _create("collection", "Colección Luna").json()
    assert created["slug"] == "coleccion-luna"

    categories = client.get("/api/admin/attributes", params={"type": "category"}).json()
    assert [a["name"] for a in categories] == ["Anillos", "Aros"]
    assert len(client.get("/api/admin/attributes").json()) == 3


def test_same_name_allowed_across_types_but_not_within():
    assert _create("category", "Celeste").status_code == 200
    assert _create("collection", "Celeste").status_code == 200
    assert _create("collection", "celeste ").status_code == 409


def test_blank_name_rejected():
    assert _create("category", "   ").status_code == 400
    assert _create("category", "!!!").status_code == 400
    assert _create("color", "Rojo").status_code == 422


def test_delete_attribute():
    aid = _create("erp_category", "Insumos").json()["id"]
    assert client.delete(f"/api/admin/attributes/{aid}").status_code == 200
    assert client.delete(f"/api/admin/attributes/{aid}").status_code == 404
    assert client.get("/api/admin/attributes").json() == []
