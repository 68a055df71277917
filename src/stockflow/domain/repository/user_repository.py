"""Abstract repository for User aggregate (the account store)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockflow.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: int) -> User | None:
        """Return a user by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every user ordered by ID."""

    @abstractmethod
    def add(self, user: User) -> None:
        """Insert a new user and assign its ID."""
