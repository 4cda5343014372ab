"""Studio client records and their access codes."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from studio_gallery.domain.studio_clients import (
    ClientDraft,
    StudioClient,
    generate_access_code,
    normalize_access_code,
)

logger = logging.getLogger(__name__)

MAX_ACCESS_CODE_ATTEMPTS = 10


class StudioClientNotFoundError(Exception):
    """Raised when a studio client does not exist."""


class StudioClientOperationError(Exception):
    """Raised when a studio client change or lookup fails."""


class DuplicateAccessCodeError(Exception):
    """Raised when a generated access code is already taken."""


class StudioClientRepository(Protocol):
    """Persistence interface for studio clients."""

    def list_clients(self) -> list[StudioClient]:
        """Return clients, newest first."""

    def find_by_access_code(self, access_code: str) -> StudioClient | None:
        """Return the client owning an access code, if any."""

    def create_client(self, draft: ClientDraft, access_code: str) -> StudioClient:
        """Insert a client; raises DuplicateAccessCodeError on a code clash."""

    def update_client(self, client_id: str, draft: ClientDraft) -> StudioClient | None:
        """Update a client and return it, or None when it does not exist."""

    def delete_client(self, client_id: str) -> None:
        """Delete a client."""


@dataclass
class StudioClientService:
    """Application service for studio clients."""

    repository: StudioClientRepository
    code_factory: Callable[[], str] = field(default=generate_access_code)
    max_code_attempts: int = MAX_ACCESS_CODE_ATTEMPTS

    def list_clients(self) -> list[StudioClient]:
        try:
            return self.repository.list_clients()
        except Exception:
            logger.exception("Failed to load clients")
            return []

    def find_by_access_code(self, access_code: str) -> StudioClient | None:
        """Look up a client by code, ignoring case and surrounding spaces."""
        code = normalize_access_code(access_code)
        if not code:
            return None
        try:
            return self.repository.find_by_access_code(code)
        except Exception as exc:
            logger.exception("Failed to look up access code")
            raise StudioClientOperationError("Failed to look up client") from exc

    def create_client(self, draft: ClientDraft) -> StudioClient:
        """Create a client, drawing new access codes until one is free."""
        for attempt in range(1, self.max_code_attempts + 1):
            try:
                return self.repository.create_client(draft, self.code_factory())
            except DuplicateAccessCodeError:
                logger.info("Access code collision", extra={"attempt": attempt})
            except Exception as exc:
                logger.exception("Failed to create client")
                raise StudioClientOperationError("Failed to create client") from exc
        raise StudioClientOperationError("Failed to generate unique access code")

    def update_client(self, client_id: str, draft: ClientDraft) -> StudioClient:
        try:
            client = self.repository.update_client(client_id, draft)
        except Exception as exc:
            logger.exception("Failed to update client", extra={"client_id": client_id})
            raise StudioClientOperationError("Failed to update client") from exc
        if client is None:
            raise StudioClientNotFoundError(client_id)
        return client

    def delete_client(self, client_id: str) -> None:
        try:
            self.repository.delete_client(client_id)
        except Exception as exc:
            logger.exception("Failed to delete client", extra={"client_id": client_id})
            raise StudioClientOperationError("Failed to delete client") from exc
