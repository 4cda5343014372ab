"""Pure state transitions for the client dispatch core."""

import logging
from dataclasses import replace

from studio_gallery.domain.galleries import Gallery
from studio_gallery.domain.sessions import (
    derive_session_id,
    toggle_member,
    unique_ids,
)
from studio_gallery.domain.state import (
    Action,
    AddFavoriteRecord,
    AddGallery,
    AddPhotos,
    AppState,
    ClearPrintCart,
    DeleteGallery,
    Effect,
    IncrementDownloadCount,
    MoveSelectionToPrintCart,
    PersistSession,
    RemoveFavoriteRecord,
    SessionAction,
    SetAdminStats,
    SetClientSession,
    SetCurrentGallery,
    SetCurrentSupplierId,
    SetError,
    SetGalleries,
    SetLoading,
    SetTheme,
    SetUserRole,
    ToggleFavorite,
    TogglePrintCart,
    ToggleSelection,
    Transition,
    UpdateGallery,
)

logger = logging.getLogger(__name__)


def reduce(
    state: AppState, action: Action, session_id_prefix: str = "session_"
) -> Transition:
    """Apply an action and return the new state with the effects it requires."""
    if isinstance(
        action,
        ToggleFavorite
        | ToggleSelection
        | TogglePrintCart
        | MoveSelectionToPrintCart
        | ClearPrintCart
        | IncrementDownloadCount,
    ):
        return _reduce_session(state, action, session_id_prefix)
    return Transition(state=_reduce_collections(state, action))


def _reduce_session(
    state: AppState, action: SessionAction, session_id_prefix: str
) -> Transition:
    session = state.client_session
    if session is None:
        logger.warning(
            "No client session loaded, ignoring action",
            extra={"action": type(action).__name__},
        )
        return Transition(state=state)

    effects: list[Effect] = []
    if isinstance(action, ToggleFavorite):
        updated = session.with_favorites(
            toggle_member(session.favorites, action.photo_id)
        )
        session_id = derive_session_id(session.gallery_id, session_id_prefix)
        if action.photo_id in updated.favorites:
            effects.append(
                AddFavoriteRecord(
                    photo_id=action.photo_id,
                    gallery_id=session.gallery_id,
                    session_id=session_id,
                    client_id=_gallery_client_id(state, session.gallery_id),
                )
            )
        else:
            effects.append(
                RemoveFavoriteRecord(
                    photo_id=action.photo_id,
                    gallery_id=session.gallery_id,
                    session_id=session_id,
                )
            )
    elif isinstance(action, ToggleSelection):
        updated = session.with_selected_photos(
            toggle_member(session.selected_photos, action.photo_id)
        )
    elif isinstance(action, TogglePrintCart):
        updated = session.with_print_cart(
            toggle_member(session.print_cart, action.photo_id)
        )
    elif isinstance(action, MoveSelectionToPrintCart):
        updated = replace(
            session,
            print_cart=unique_ids(session.print_cart + session.selected_photos),
            selected_photos=(),
        )
    elif isinstance(action, ClearPrintCart):
        updated = session.with_print_cart(())
    else:
        updated = replace(session, downloads=session.downloads + 1)

    # Local persistence runs before any remote write.
    effects.insert(0, PersistSession(updated))
    return Transition(
        state=replace(state, client_session=updated), effects=tuple(effects)
    )


def _reduce_collections(state: AppState, action: Action) -> AppState:  # noqa: PLR0911
    if isinstance(action, SetGalleries):
        return replace(state, galleries=tuple(action.galleries))
    if isinstance(action, AddGallery):
        return replace(state, galleries=(*state.galleries, action.gallery))
    if isinstance(action, UpdateGallery):
        return _update_gallery(state, action.gallery)
    if isinstance(action, DeleteGallery):
        current = state.current_gallery
        return replace(
            state,
            galleries=tuple(g for g in state.galleries if g.id != action.gallery_id),
            current_gallery=(
                None if current and current.id == action.gallery_id else current
            ),
        )
    if isinstance(action, AddPhotos):
        return _add_photos(state, action)
    if isinstance(action, SetCurrentGallery):
        return replace(state, current_gallery=action.gallery)
    if isinstance(action, SetClientSession):
        return replace(state, client_session=action.session)
    if isinstance(action, SetTheme):
        return replace(state, theme=action.theme)
    if isinstance(action, SetUserRole):
        return replace(state, user_role=action.user_role)
    if isinstance(action, SetAdminStats):
        return replace(state, admin_stats=action.stats)
    if isinstance(action, SetLoading):
        return replace(state, is_loading=action.is_loading)
    if isinstance(action, SetError):
        return replace(state, error=action.error)
    if isinstance(action, SetCurrentSupplierId):
        return replace(state, current_supplier_id=action.supplier_id)
    return state


def _update_gallery(state: AppState, gallery: Gallery) -> AppState:
    current = state.current_gallery
    return replace(
        state,
        galleries=tuple(gallery if g.id == gallery.id else g for g in state.galleries),
        current_gallery=gallery if current and current.id == gallery.id else current,
    )


def _add_photos(state: AppState, action: AddPhotos) -> AppState:
    def extend(gallery: Gallery) -> Gallery:
        if gallery.id != action.gallery_id:
            return gallery
        return replace(gallery, photos=(*gallery.photos, *action.photos))

    current = state.current_gallery
    return replace(
        state,
        galleries=tuple(extend(g) for g in state.galleries),
        current_gallery=extend(current) if current else None,
    )


def _gallery_client_id(state: AppState, gallery_id: str) -> str | None:
    current = state.current_gallery
    if current is not None and current.id == gallery_id:
        return current.client_id
    return None
