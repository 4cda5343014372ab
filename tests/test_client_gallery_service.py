"""Tests for client gallery orchestration."""

import asyncio
from datetime import timedelta

import pytest

from studio_gallery.services.client_gallery import SessionNotLoadedError
from studio_gallery.services.galleries import GalleryNotFoundError
from tests.conftest import (
    FakeClock,
    InMemoryFavoriteRepository,
    InMemoryGalleryRepository,
    make_gallery,
)


def test_open_gallery_without_password_starts_session(
    container, gallery_repository: InMemoryGalleryRepository, clock: FakeClock
) -> None:
    client = container.client_registry.get("browser-a")

    async def scenario():
        decision = client.open_gallery("g1")
        await container.write_queue.drain()
        return decision

    decision = asyncio.run(scenario())

    assert decision.granted
    session = client.session("g1")
    assert session.accessed_at == clock.now
    assert client.state.current_gallery is not None
    assert client.state.current_gallery.id == "g1"
    assert gallery_repository.access_counts == {"g1": 1}


def test_open_unknown_gallery_raises(container) -> None:
    client = container.client_registry.get("browser-a")

    with pytest.raises(GalleryNotFoundError):
        client.open_gallery("missing")


def test_password_flow_and_cached_grant(container) -> None:
    client = container.client_registry.get("browser-a")

    decision = client.open_gallery("locked")
    assert decision.needs_password
    with pytest.raises(SessionNotLoadedError):
        client.session("locked")

    assert not client.verify_password("locked", "secret")
    assert client.verify_password("locked", "Secret")
    assert client.session("locked").gallery_id == "locked"

    assert client.open_gallery("locked").granted
    other_browser = container.client_registry.get("browser-b")
    assert other_browser.open_gallery("locked").needs_password


def test_access_counter_failure_does_not_block_access(
    container, gallery_repository: InMemoryGalleryRepository
) -> None:
    gallery_repository.fail_counters = True
    client = container.client_registry.get("browser-a")

    async def scenario():
        decision = client.open_gallery("g1")
        await container.write_queue.drain()
        return decision

    assert asyncio.run(scenario()).granted
    assert client.session("g1") is not None


def test_favorite_toggle_round_trip(
    container, favorite_repository: InMemoryFavoriteRepository
) -> None:
    client = container.client_registry.get("browser-a")
    client.open_gallery("g1")

    async def toggle():
        session = client.toggle_favorite("p1")
        await container.write_queue.drain()
        return session

    session = asyncio.run(toggle())
    assert session is not None
    assert session.favorites == ("p1",)
    assert ("p1", "session_g1") in favorite_repository.rows

    session = asyncio.run(toggle())
    assert session is not None
    assert session.favorites == ()
    assert favorite_repository.rows == {}


def test_show_favorites_reconciles_with_remote(
    container, favorite_repository: InMemoryFavoriteRepository
) -> None:
    client = container.client_registry.get("browser-a")
    client.open_gallery("g1")
    client.toggle_favorite("p1")
    favorite_repository.rows.clear()
    favorite_repository.seed("g1", "session_g1", "p2", "p3")

    photos = client.show_favorites("g1")

    assert [photo.id for photo in photos] == ["p2", "p3"]
    assert set(client.session("g1").favorites) == {"p2", "p3"}


def test_reopen_rehydrates_local_fields(container) -> None:
    client = container.client_registry.get("browser-a")
    client.open_gallery("g1")
    client.toggle_selection("p1")
    client.toggle_print_cart("p2")
    client.record_download()

    client.open_gallery("g1")

    session = client.session("g1")
    assert session.selected_photos == ("p1",)
    assert session.print_cart == ("p2",)
    assert session.downloads == 1


def test_select_then_print_request(
    container, gallery_repository: InMemoryGalleryRepository
) -> None:
    client = container.client_registry.get("browser-a")
    client.open_gallery("g1")
    client.toggle_selection("p1")
    client.toggle_selection("p3")

    session = client.move_selection_to_print_cart()

    assert session is not None
    assert set(session.print_cart) >= {"p1", "p3"}
    assert session.selected_photos == ()
    message = client.print_request_message("g1")
    assert "IMG_0001 OR IMG_0003" in message
    assert '"Wedding"' in message

    client.clear_print_cart()
    assert client.print_request_message("g1") == ""


def test_toggles_before_opening_are_ignored(container) -> None:
    client = container.client_registry.get("browser-a")

    assert client.toggle_favorite("p1") is None
    assert client.record_download() is None
    assert container.write_queue.pending() == []


def test_registry_reuses_client_services(container) -> None:
    registry = container.client_registry

    assert registry.get("browser-a") is registry.get("browser-a")
    assert registry.get("browser-a") is not registry.get("browser-b")


def test_opening_another_gallery_drops_previous_session(
    container, favorite_repository: InMemoryFavoriteRepository
) -> None:
    client = container.client_registry.get("browser-a")
    client.open_gallery("g1")
    client.toggle_favorite("p1")

    decision = client.open_gallery("locked")

    assert decision.needs_password
    assert client.state.client_session is None
    assert client.state.current_gallery is not None
    assert client.state.current_gallery.id == "locked"
    with pytest.raises(SessionNotLoadedError):
        client.session("g1")
    assert client.toggle_favorite("p9") is None
    assert set(favorite_repository.rows) == {("p1", "session_g1")}


def test_reopening_first_gallery_restores_its_session(container) -> None:
    client = container.client_registry.get("browser-a")
    client.open_gallery("g1")
    client.toggle_favorite("p1")
    client.open_gallery("locked")

    client.open_gallery("g1")

    assert client.session("g1").favorites == ("p1",)


def test_expired_gallery_reports_expiry_after_password(
    container, gallery_repository: InMemoryGalleryRepository, clock: FakeClock
) -> None:
    gallery_repository.galleries["old"] = make_gallery(
        "old", password="Secret", expiration_date=clock.now - timedelta(days=1)
    )
    client = container.client_registry.get("browser-a")

    assert client.open_gallery("old").expired
    assert client.verify_password("old", "Secret")
    assert client.is_expired("old")
    assert client.session("old").gallery_id == "old"


def test_select_supplier_switches_role(container) -> None:
    client = container.client_registry.get("browser-a")

    state = client.select_supplier("s1")
    assert state.user_role == "supplier"
    assert state.current_supplier_id == "s1"

    state = client.select_supplier(None)
    assert state.user_role == "client"
    assert state.current_supplier_id is None
