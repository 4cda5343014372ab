"""Tests for admin endpoints."""

from fastapi.testclient import TestClient

from studio_gallery.api.app import create_app
from tests.conftest import (
    InMemoryGalleryRepository,
    InMemoryStudioClientRepository,
    InMemorySupplierRepository,
)

ADMIN = {"X-Admin-Token": "admin-token"}


def _gallery_payload(gallery_id: str) -> dict[str, object]:
    return {
        "id": gallery_id,
        "name": "Portraits",
        "client_name": "Mia",
        "created_date": "2024-05-02T10:00:00+00:00",
        "password": "pw",
        "settings": {"allow_download": False},
    }


def test_admin_requires_token(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/admin/health").status_code == 401
    wrong_token = {"X-Admin-Token": "x"}
    assert client.get("/admin/health", headers=wrong_token).status_code == 401
    assert client.get("/admin/health", headers=ADMIN).json() == {"status": "ok"}


def test_admin_lists_galleries_with_photos(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/admin/galleries", headers=ADMIN)

    assert response.status_code == 200
    galleries = {item["id"]: item for item in response.json()["galleries"]}
    assert [photo["id"] for photo in galleries["g1"]["photos"]] == ["p1", "p2", "p3"]


def test_admin_saves_gallery(
    container, gallery_repository: InMemoryGalleryRepository
) -> None:
    client = TestClient(create_app(container))

    response = client.put(
        "/admin/galleries/g2", json=_gallery_payload("g2"), headers=ADMIN
    )

    assert response.status_code == 200
    saved = gallery_repository.galleries["g2"]
    assert saved.requires_password
    assert not saved.settings.allow_download


def test_admin_rejects_mismatched_gallery_id(container) -> None:
    client = TestClient(create_app(container))

    response = client.put(
        "/admin/galleries/other", json=_gallery_payload("g2"), headers=ADMIN
    )

    assert response.status_code == 400


def test_admin_photo_management(
    container, gallery_repository: InMemoryGalleryRepository
) -> None:
    client = TestClient(create_app(container))

    added = client.post(
        "/admin/galleries/g1/photos",
        json={
            "photos": [
                {
                    "id": "p4",
                    "url": "https://cdn.example.com/p4.jpg",
                    "thumbnail": "https://cdn.example.com/p4_thumb.jpg",
                    "filename": "IMG_0004.jpg",
                    "upload_date": "2024-05-02T10:00:00+00:00",
                }
            ]
        },
        headers=ADMIN,
    )
    deleted = client.delete("/admin/photos/p1", headers=ADMIN)

    assert added.json() == {"status": "ok", "added": 1}
    assert deleted.status_code == 200
    assert [photo.id for photo in gallery_repository.photos["g1"]] == ["p2", "p3", "p4"]


def test_admin_write_failure_returns_502(
    container, gallery_repository: InMemoryGalleryRepository
) -> None:
    gallery_repository.fail_writes = True
    client = TestClient(create_app(container))

    response = client.delete("/admin/galleries/g1", headers=ADMIN)

    assert response.status_code == 502


def test_admin_stats(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/admin/stats", headers=ADMIN)

    assert response.json() == {
        "total_galleries": 2,
        "total_photos": 4,
        "total_views": 0,
        "total_downloads": 0,
        "active_galleries": 2,
    }


def test_admin_rejects_naive_expiration_date(
    container, gallery_repository: InMemoryGalleryRepository
) -> None:
    payload = {**_gallery_payload("n1"), "expiration_date": "2030-01-01T00:00:00"}
    client = TestClient(create_app(container))

    response = client.put("/admin/galleries/n1", json=payload, headers=ADMIN)

    assert response.status_code == 422
    assert "n1" not in gallery_repository.galleries


def test_admin_offset_expiration_date_opens_cleanly(container) -> None:
    payload = {
        **_gallery_payload("n1"),
        "password": None,
        "expiration_date": "2030-01-01T00:00:00-03:00",
    }

    with TestClient(create_app(container)) as client:
        saved = client.put("/admin/galleries/n1", json=payload, headers=ADMIN)
        opened = client.post("/galleries/n1/open", headers={"X-Client-Id": "browser-b"})

    assert saved.status_code == 200
    assert opened.status_code == 200
    assert opened.json()["expired"] is False


def _supplier_payload(name: str = "Flor & Cia") -> dict[str, object]:
    return {"name": name, "email": "flor@example.com", "category": "decoracao"}


def test_admin_supplier_crud(
    container, supplier_repository: InMemorySupplierRepository
) -> None:
    client = TestClient(create_app(container))

    created = client.post("/admin/suppliers", json=_supplier_payload(), headers=ADMIN)
    updated = client.put(
        "/admin/suppliers/s1",
        json={**_supplier_payload("Flor Eventos"), "phone": "555-0101"},
        headers=ADMIN,
    )
    listed = client.get("/admin/suppliers", headers=ADMIN)
    missing = client.put(
        "/admin/suppliers/nope", json=_supplier_payload(), headers=ADMIN
    )
    deleted = client.delete("/admin/suppliers/s1", headers=ADMIN)

    assert created.status_code == 201
    assert created.json()["category_label"] == "Decoração"
    assert updated.json()["name"] == "Flor Eventos"
    assert updated.json()["phone"] == "555-0101"
    assert [item["id"] for item in listed.json()["suppliers"]] == ["s1"]
    assert missing.status_code == 404
    assert deleted.status_code == 200
    assert supplier_repository.suppliers == {}


def test_admin_rejects_unknown_supplier_category(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/admin/suppliers",
        json={**_supplier_payload(), "category": "catering"},
        headers=ADMIN,
    )

    assert response.status_code == 422


def test_admin_tags_photo_once(container) -> None:
    client = TestClient(create_app(container))
    client.post("/admin/suppliers", json=_supplier_payload(), headers=ADMIN)

    tagged = client.post(
        "/admin/photos/p1/suppliers/s1", json={"gallery_id": "g1"}, headers=ADMIN
    )
    again = client.post(
        "/admin/photos/p1/suppliers/s1", json={"gallery_id": "g1"}, headers=ADMIN
    )
    on_photo = client.get("/admin/photos/p1/suppliers", headers=ADMIN)
    untagged = client.delete("/admin/photos/p1/suppliers/s1", headers=ADMIN)
    after = client.get("/admin/photos/p1/suppliers", headers=ADMIN)

    assert tagged.status_code == 201
    assert tagged.json()["gallery_id"] == "g1"
    assert again.status_code == 409
    assert [item["id"] for item in on_photo.json()["suppliers"]] == ["s1"]
    assert untagged.status_code == 200
    assert after.json() == {"suppliers": []}


def test_admin_supplier_write_failure_returns_502(
    container, supplier_repository: InMemorySupplierRepository
) -> None:
    supplier_repository.fail = True
    client = TestClient(create_app(container))

    created = client.post("/admin/suppliers", json=_supplier_payload(), headers=ADMIN)
    listed = client.get("/admin/suppliers", headers=ADMIN)

    assert created.status_code == 502
    assert listed.json() == {"suppliers": []}


def test_admin_client_crud_and_gallery_link(
    container,
    gallery_repository: InMemoryGalleryRepository,
    studio_client_repository: InMemoryStudioClientRepository,
) -> None:
    client = TestClient(create_app(container))

    created = client.post(
        "/admin/clients", json={"name": "Ana", "email": ""}, headers=ADMIN
    )
    client_id = created.json()["id"]
    linked = client.put(
        "/admin/galleries/g1/client", json={"client_id": client_id}, headers=ADMIN
    )
    galleries = client.get(f"/admin/clients/{client_id}/galleries", headers=ADMIN)
    updated = client.put(
        f"/admin/clients/{client_id}",
        json={"name": "Ana Souza", "notes": "VIP"},
        headers=ADMIN,
    )
    unlinked = client.delete("/admin/galleries/g1/client", headers=ADMIN)
    after = client.get(f"/admin/clients/{client_id}/galleries", headers=ADMIN)

    assert created.status_code == 201
    assert created.json()["access_code"] == "ABCD1234"
    assert linked.status_code == 200
    assert [item["id"] for item in galleries.json()["galleries"]] == ["g1"]
    assert updated.json()["notes"] == "VIP"
    assert unlinked.status_code == 200
    assert after.json() == {"galleries": []}
    assert gallery_repository.galleries["g1"].client_id is None
    assert [c.name for c in studio_client_repository.clients.values()] == ["Ana Souza"]


def test_admin_unknown_client_update_returns_404(container) -> None:
    client = TestClient(create_app(container))

    response = client.put("/admin/clients/nope", json={"name": "X"}, headers=ADMIN)

    assert response.status_code == 404


def test_admin_client_routes_require_token(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/admin/clients").status_code == 401
    assert client.get("/admin/suppliers").status_code == 401
