"""Client-facing gallery session orchestration."""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from studio_gallery.domain.galleries import Gallery, Photo
from studio_gallery.domain.sessions import GallerySession
from studio_gallery.domain.state import (
    AppState,
    ClearPrintCart,
    IncrementDownloadCount,
    MoveSelectionToPrintCart,
    SetClientSession,
    SetCurrentGallery,
    SetCurrentSupplierId,
    SetUserRole,
    ToggleFavorite,
    TogglePrintCart,
    ToggleSelection,
)
from studio_gallery.services.access import (
    DEFAULT_GRANT_TTL,
    AccessDecision,
    AccessGate,
    utc_now,
)
from studio_gallery.services.favorites import FavoriteService
from studio_gallery.services.galleries import GalleryService
from studio_gallery.services.session_cache import SessionCache
from studio_gallery.services.storage import KeyValueStore, NamespacedKeyValueStore
from studio_gallery.services.store import AppStore, EffectHandler
from studio_gallery.services.sync import SessionSynchronizer
from studio_gallery.services.write_queue import KeyedTaskQueue

logger = logging.getLogger(__name__)

_EXTENSION = re.compile(r"\.[^/.]+$")


class SessionNotLoadedError(Exception):
    """Raised when a gallery session is read before the gallery is opened."""


@dataclass
class ClientGalleryService:
    """One client's view of galleries: access, session and toggles."""

    gallery_service: GalleryService
    access_gate: AccessGate
    synchronizer: SessionSynchronizer
    store: AppStore
    write_queue: KeyedTaskQueue

    @property
    def state(self) -> AppState:
        return self.store.state

    def select_supplier(self, supplier_id: str | None) -> AppState:
        """Enter the supplier view for a supplier, or leave it with None."""
        self.store.dispatch(SetUserRole("supplier" if supplier_id else "client"))
        return self.store.dispatch(SetCurrentSupplierId(supplier_id))

    def open_gallery(self, gallery_id: str) -> AccessDecision:
        """Load a gallery and start its session when access is granted."""
        gallery = self.gallery_service.require_gallery(gallery_id)
        self._switch_to(gallery)
        decision = self.access_gate.check(gallery)
        if decision.granted:
            self._start_session(gallery)
        return decision

    def verify_password(self, gallery_id: str, candidate: str) -> bool:
        """Check a password and start the session on success."""
        gallery = self._gallery(gallery_id)
        if not self.access_gate.verify(gallery, candidate):
            return False
        self._start_session(gallery)
        return True

    def is_expired(self, gallery_id: str) -> bool:
        return self._gallery(gallery_id).is_expired(self.access_gate.clock())

    def session(self, gallery_id: str) -> GallerySession:
        """Return the loaded session for a gallery."""
        session = self.state.client_session
        if session is None or session.gallery_id != gallery_id:
            raise SessionNotLoadedError(gallery_id)
        return session

    def toggle_favorite(self, photo_id: str) -> GallerySession | None:
        return self.store.dispatch(ToggleFavorite(photo_id)).client_session

    def toggle_selection(self, photo_id: str) -> GallerySession | None:
        return self.store.dispatch(ToggleSelection(photo_id)).client_session

    def toggle_print_cart(self, photo_id: str) -> GallerySession | None:
        return self.store.dispatch(TogglePrintCart(photo_id)).client_session

    def move_selection_to_print_cart(self) -> GallerySession | None:
        return self.store.dispatch(MoveSelectionToPrintCart()).client_session

    def clear_print_cart(self) -> GallerySession | None:
        return self.store.dispatch(ClearPrintCart()).client_session

    def record_download(self) -> GallerySession | None:
        """Count a completed download locally and on the gallery."""
        session = self.store.dispatch(IncrementDownloadCount()).client_session
        if session is not None:
            self.write_queue.submit(
                f"downloads:{session.gallery_id}",
                self.gallery_service.increment_download_count,
                session.gallery_id,
            )
        return session

    def show_favorites(self, gallery_id: str) -> tuple[Photo, ...]:
        """Switch to the favorites view, reconciling with the remote store."""
        session = self.session(gallery_id)
        updated = self.synchronizer.resync_favorites(session)
        if updated is not session:
            self.store.dispatch(SetClientSession(updated))
        favorites = set(updated.favorites)
        return tuple(
            photo for photo in self._photos(gallery_id) if photo.id in favorites
        )

    def print_cart_photos(self, gallery_id: str) -> tuple[Photo, ...]:
        cart = set(self.session(gallery_id).print_cart)
        return tuple(photo for photo in self._photos(gallery_id) if photo.id in cart)

    def print_request_message(self, gallery_id: str) -> str:
        """Build the print request text for the photos in the cart."""
        photos = self.print_cart_photos(gallery_id)
        if not photos:
            return ""
        names = " OR ".join(_EXTENSION.sub("", photo.filename) for photo in photos)
        gallery = self.state.current_gallery
        gallery_name = gallery.name if gallery else gallery_id
        return (
            "Hello! I would like to request prints of the following photos "
            f'from the gallery "{gallery_name}":\n\n{names}\n\nThank you!'
        )

    def _start_session(self, gallery: Gallery) -> None:
        session = self.synchronizer.initialize(gallery.id)
        self.store.dispatch(SetClientSession(session))
        self.write_queue.submit(
            f"access:{gallery.id}",
            self.gallery_service.increment_access_count,
            gallery.id,
        )

    def _gallery(self, gallery_id: str) -> Gallery:
        current = self.state.current_gallery
        if current is not None and current.id == gallery_id:
            return current
        gallery = self.gallery_service.require_gallery(gallery_id)
        self._switch_to(gallery)
        return gallery

    def _switch_to(self, gallery: Gallery) -> None:
        # One active gallery per client: a session for another gallery is dropped.
        session = self.state.client_session
        if session is not None and session.gallery_id != gallery.id:
            self.store.dispatch(SetClientSession(None))
        self.store.dispatch(SetCurrentGallery(gallery))

    def _photos(self, gallery_id: str) -> tuple[Photo, ...]:
        current = self.state.current_gallery
        if current is None or current.id != gallery_id:
            return ()
        return current.photos


@dataclass
class ClientRegistry:
    """Creates and keeps one ClientGalleryService per client id."""

    base_store: KeyValueStore
    gallery_service: GalleryService
    favorite_service: FavoriteService
    write_queue: KeyedTaskQueue
    grant_ttl: timedelta = DEFAULT_GRANT_TTL
    session_id_prefix: str = "session_"
    clock: Callable[[], datetime] = field(default=utc_now)
    _clients: dict[str, ClientGalleryService] = field(default_factory=dict)

    def get(self, client_id: str) -> ClientGalleryService:
        """Return the service bound to a client's storage namespace."""
        existing = self._clients.get(client_id)
        if existing is not None:
            return existing
        cache = SessionCache(NamespacedKeyValueStore(self.base_store, client_id))
        service = ClientGalleryService(
            gallery_service=self.gallery_service,
            access_gate=AccessGate(cache, grant_ttl=self.grant_ttl, clock=self.clock),
            synchronizer=SessionSynchronizer(
                cache,
                self.favorite_service,
                clock=self.clock,
                session_id_prefix=self.session_id_prefix,
            ),
            store=AppStore(
                effect_handler=EffectHandler(
                    cache=cache,
                    favorite_service=self.favorite_service,
                    write_queue=self.write_queue,
                ),
                session_id_prefix=self.session_id_prefix,
            ),
            write_queue=self.write_queue,
        )
        self._clients[client_id] = service
        logger.debug("Created client gallery service", extra={"client_id": client_id})
        return service
