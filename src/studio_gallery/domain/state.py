"""Application state, actions and effects for the dispatch core."""

from dataclasses import dataclass, field
from typing import Literal

from studio_gallery.domain.galleries import AdminStats, Gallery, Photo
from studio_gallery.domain.sessions import GallerySession

Theme = Literal["light", "dark"]
UserRole = Literal["admin", "client", "supplier"]


@dataclass(frozen=True)
class AppState:
    """Immutable snapshot of one client's application state."""

    user_role: UserRole = "client"
    theme: Theme = "dark"
    galleries: tuple[Gallery, ...] = ()
    current_gallery: Gallery | None = None
    client_session: GallerySession | None = None
    admin_stats: AdminStats = field(default_factory=AdminStats)
    is_loading: bool = False
    error: str | None = None
    current_supplier_id: str | None = None


# Session actions


@dataclass(frozen=True)
class ToggleFavorite:
    """Flip a photo in or out of the session favorites."""

    photo_id: str


@dataclass(frozen=True)
class ToggleSelection:
    """Flip a photo in or out of the current selection."""

    photo_id: str


@dataclass(frozen=True)
class TogglePrintCart:
    """Flip a photo in or out of the print cart."""

    photo_id: str


@dataclass(frozen=True)
class MoveSelectionToPrintCart:
    """Add every selected photo to the print cart and clear the selection."""


@dataclass(frozen=True)
class ClearPrintCart:
    """Empty the print cart."""


@dataclass(frozen=True)
class IncrementDownloadCount:
    """Count one completed download in the session."""


# Collection and setter actions


@dataclass(frozen=True)
class SetGalleries:
    """Replace the loaded gallery list."""

    galleries: tuple[Gallery, ...]


@dataclass(frozen=True)
class AddGallery:
    """Append a gallery to the loaded list."""

    gallery: Gallery


@dataclass(frozen=True)
class UpdateGallery:
    """Replace a loaded gallery by id."""

    gallery: Gallery


@dataclass(frozen=True)
class DeleteGallery:
    """Drop a gallery from the loaded list."""

    gallery_id: str


@dataclass(frozen=True)
class AddPhotos:
    """Append photos to a loaded gallery."""

    gallery_id: str
    photos: tuple[Photo, ...]


@dataclass(frozen=True)
class SetCurrentGallery:
    """Select the gallery being viewed."""

    gallery: Gallery | None


@dataclass(frozen=True)
class SetClientSession:
    """Install or clear the active gallery session."""

    session: GallerySession | None


@dataclass(frozen=True)
class SetTheme:
    """Switch between light and dark themes."""

    theme: Theme


@dataclass(frozen=True)
class SetUserRole:
    """Change the role the state is presented for."""

    user_role: UserRole


@dataclass(frozen=True)
class SetAdminStats:
    """Store aggregate counters for the admin dashboard."""

    stats: AdminStats


@dataclass(frozen=True)
class SetLoading:
    """Flag an in-progress load."""

    is_loading: bool


@dataclass(frozen=True)
class SetError:
    """Record or clear a user-facing error message."""

    error: str | None


@dataclass(frozen=True)
class SetCurrentSupplierId:
    """Select the supplier whose tagged photos are shown."""

    supplier_id: str | None


SessionAction = (
    ToggleFavorite
    | ToggleSelection
    | TogglePrintCart
    | MoveSelectionToPrintCart
    | ClearPrintCart
    | IncrementDownloadCount
)

Action = (
    SessionAction
    | SetGalleries
    | AddGallery
    | UpdateGallery
    | DeleteGallery
    | AddPhotos
    | SetCurrentGallery
    | SetClientSession
    | SetTheme
    | SetUserRole
    | SetAdminStats
    | SetLoading
    | SetError
    | SetCurrentSupplierId
)


# Effects


@dataclass(frozen=True)
class PersistSession:
    """Overwrite the local cache entry for the session's gallery."""

    session: GallerySession


@dataclass(frozen=True)
class AddFavoriteRecord:
    """Create the remote favorite row for a photo."""

    photo_id: str
    gallery_id: str
    session_id: str
    client_id: str | None = None


@dataclass(frozen=True)
class RemoveFavoriteRecord:
    """Delete the remote favorite row for a photo."""

    photo_id: str
    gallery_id: str
    session_id: str


Effect = PersistSession | AddFavoriteRecord | RemoveFavoriteRecord


@dataclass(frozen=True)
class Transition:
    """Result of applying an action: the new state and effects to run."""

    state: AppState
    effects: tuple[Effect, ...] = ()
