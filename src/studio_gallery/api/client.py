"""Client gallery endpoints scoped by the X-Client-Id header."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from studio_gallery.api.schemas import AccessOut, PasswordIn, PhotoModel, SessionOut
from studio_gallery.config import parse_client_id
from studio_gallery.services.client_gallery import (
    ClientGalleryService,
    SessionNotLoadedError,
)
from studio_gallery.services.galleries import GalleryNotFoundError

if TYPE_CHECKING:
    from studio_gallery.containers import AppContainer

router = APIRouter(prefix="/galleries", tags=["client"])


def get_client(
    request: Request, x_client_id: str | None = Header(default=None)
) -> ClientGalleryService:
    """Return the gallery service for the requesting client."""
    container: AppContainer = request.app.state.container
    return container.client_registry.get(parse_client_id(x_client_id))


def _require_session(client: ClientGalleryService, gallery_id: str) -> None:
    try:
        client.session(gallery_id)
    except SessionNotLoadedError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Gallery is not open for this client.",
        ) from exc


def _session_out(client: ClientGalleryService, gallery_id: str) -> SessionOut:
    return SessionOut.from_session(client.session(gallery_id))


@router.post("/{gallery_id}/open")
async def open_gallery(
    gallery_id: str, client: ClientGalleryService = Depends(get_client)
) -> AccessOut:
    """Open a gallery, starting the session when no password is needed."""
    try:
        decision = client.open_gallery(gallery_id)
    except GalleryNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    return AccessOut(
        access_granted=decision.granted,
        needs_password=decision.needs_password,
        expired=decision.expired,
        session=_session_out(client, gallery_id) if decision.granted else None,
    )


@router.post("/{gallery_id}/password")
async def verify_password(
    gallery_id: str,
    body: PasswordIn,
    client: ClientGalleryService = Depends(get_client),
) -> AccessOut:
    """Check a gallery password."""
    try:
        granted = client.verify_password(gallery_id, body.password)
    except GalleryNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    if not granted:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect password."
        )
    return AccessOut(
        access_granted=True,
        needs_password=False,
        expired=client.is_expired(gallery_id),
        session=_session_out(client, gallery_id),
    )


@router.get("/{gallery_id}/session")
async def get_session(
    gallery_id: str, client: ClientGalleryService = Depends(get_client)
) -> SessionOut:
    """Return the client's session for an open gallery."""
    _require_session(client, gallery_id)
    return _session_out(client, gallery_id)


@router.post("/{gallery_id}/photos/{photo_id}/favorite")
async def toggle_favorite(
    gallery_id: str, photo_id: str, client: ClientGalleryService = Depends(get_client)
) -> SessionOut:
    _require_session(client, gallery_id)
    client.toggle_favorite(photo_id)
    return _session_out(client, gallery_id)


@router.post("/{gallery_id}/photos/{photo_id}/selection")
async def toggle_selection(
    gallery_id: str, photo_id: str, client: ClientGalleryService = Depends(get_client)
) -> SessionOut:
    _require_session(client, gallery_id)
    client.toggle_selection(photo_id)
    return _session_out(client, gallery_id)


@router.post("/{gallery_id}/photos/{photo_id}/print-cart")
async def toggle_print_cart(
    gallery_id: str, photo_id: str, client: ClientGalleryService = Depends(get_client)
) -> SessionOut:
    _require_session(client, gallery_id)
    client.toggle_print_cart(photo_id)
    return _session_out(client, gallery_id)


@router.post("/{gallery_id}/selection/move-to-print-cart")
async def move_selection_to_print_cart(
    gallery_id: str, client: ClientGalleryService = Depends(get_client)
) -> SessionOut:
    """Queue every selected photo for printing."""
    _require_session(client, gallery_id)
    client.move_selection_to_print_cart()
    return _session_out(client, gallery_id)


@router.delete("/{gallery_id}/print-cart")
async def clear_print_cart(
    gallery_id: str, client: ClientGalleryService = Depends(get_client)
) -> SessionOut:
    _require_session(client, gallery_id)
    client.clear_print_cart()
    return _session_out(client, gallery_id)


@router.get("/{gallery_id}/print-cart/message")
async def print_request_message(
    gallery_id: str, client: ClientGalleryService = Depends(get_client)
) -> dict[str, str]:
    """Return the print request text for the cart."""
    _require_session(client, gallery_id)
    return {"message": client.print_request_message(gallery_id)}


@router.post("/{gallery_id}/downloads")
async def record_download(
    gallery_id: str, client: ClientGalleryService = Depends(get_client)
) -> SessionOut:
    _require_session(client, gallery_id)
    client.record_download()
    return _session_out(client, gallery_id)


@router.get("/{gallery_id}/favorites")
async def show_favorites(
    gallery_id: str, client: ClientGalleryService = Depends(get_client)
) -> dict[str, object]:
    """Return favorite photos after reconciling with the remote store."""
    _require_session(client, gallery_id)
    photos = client.show_favorites(gallery_id)
    return {
        "photos": [PhotoModel.from_photo(photo) for photo in photos],
        "session": _session_out(client, gallery_id),
    }
