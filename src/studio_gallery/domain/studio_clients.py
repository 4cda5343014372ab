"""Domain models for studio clients who own galleries."""

import secrets
from dataclasses import dataclass
from datetime import datetime

ACCESS_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
ACCESS_CODE_LENGTH = 8


def generate_access_code() -> str:
    """Return a random eight-character access code."""
    return "".join(
        secrets.choice(ACCESS_CODE_ALPHABET) for _ in range(ACCESS_CODE_LENGTH)
    )


def normalize_access_code(code: str) -> str:
    return code.strip().upper()


@dataclass(frozen=True)
class ClientDraft:
    """Editable client fields for create and update."""

    name: str
    email: str | None = None
    phone: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class StudioClient:
    """A studio customer reachable through an access code."""

    id: str
    name: str
    access_code: str
    created_at: datetime
    updated_at: datetime
    email: str | None = None
    phone: str | None = None
    notes: str | None = None
