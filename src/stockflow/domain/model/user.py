"""User aggregate — the account that owns orders."""

from __future__ import annotations

from dataclasses import dataclass

from stockflow.domain.validation import validate_user_fields


@dataclass
class User:

    id: int | None
    username: str
    email: str

    @staticmethod
    def register(username: str, email: str) -> User:
        """Create a new, not yet persisted user from trimmed, validated fields."""
        username = (username or "").strip()
        email = (email or "").strip()
        validate_user_fields(username, email)
        return User(id=None, username=username, email=email)
