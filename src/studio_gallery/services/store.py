"""Application state store and effect handling."""

import logging
from dataclasses import dataclass, field

from studio_gallery.domain.state import (
    Action,
    AddFavoriteRecord,
    AppState,
    Effect,
    PersistSession,
    RemoveFavoriteRecord,
)
from studio_gallery.services.favorites import FavoriteService
from studio_gallery.services.reducer import reduce
from studio_gallery.services.session_cache import SessionCache
from studio_gallery.services.write_queue import KeyedTaskQueue

logger = logging.getLogger(__name__)


def favorite_write_key(gallery_id: str, photo_id: str) -> str:
    return f"favorite:{gallery_id}:{photo_id}"


@dataclass
class EffectHandler:
    """Runs effects emitted by the reducer."""

    cache: SessionCache
    favorite_service: FavoriteService
    write_queue: KeyedTaskQueue

    def handle(self, effect: Effect) -> None:
        if isinstance(effect, PersistSession):
            self.cache.save_session(effect.session)
        elif isinstance(effect, AddFavoriteRecord):
            self.write_queue.submit(
                favorite_write_key(effect.gallery_id, effect.photo_id),
                self.favorite_service.add,
                effect.photo_id,
                effect.gallery_id,
                effect.session_id,
                effect.client_id,
            )
        elif isinstance(effect, RemoveFavoriteRecord):
            self.write_queue.submit(
                favorite_write_key(effect.gallery_id, effect.photo_id),
                self.favorite_service.remove,
                effect.photo_id,
                effect.session_id,
            )


@dataclass
class AppStore:
    """Holds one client's state and applies actions to it."""

    effect_handler: EffectHandler
    session_id_prefix: str = "session_"
    state: AppState = field(default_factory=AppState)

    def dispatch(self, action: Action) -> AppState:
        """Apply an action, run its effects and return the new state."""
        transition = reduce(self.state, action, self.session_id_prefix)
        self.state = transition.state
        for effect in transition.effects:
            self.effect_handler.handle(effect)
        return self.state
