"""Application services: account queries."""

from __future__ import annotations

from stockflow.application.atomic import UnitOfWorkFactory
from stockflow.application.dto import UserDTO, user_to_dto
from stockflow.domain.exceptions import EntityNotFoundError


class ShowUserHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, user_id: int) -> UserDTO:
        with self._uow_factory() as uow:
            user = uow.users.get_by_id(user_id)
            if user is None:
                raise EntityNotFoundError(f"User not found with id {user_id}")
            return user_to_dto(user)


class ListUsersHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[UserDTO]:
        with self._uow_factory() as uow:
            return [user_to_dto(u) for u in uow.users.list_all()]
