"""Application service: Register User use case."""

from __future__ import annotations

import structlog

from stockflow.application.atomic import UnitOfWorkFactory
from stockflow.application.dto import UserDTO, user_to_dto
from stockflow.domain.model.user import User

logger = structlog.get_logger(__name__)


class RegisterUserHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, username: str, email: str) -> UserDTO:
        user = User.register(username, email)

        with self._uow_factory() as uow:
            uow.users.add(user)
            uow.commit()

        logger.info("user.registered", user_id=user.id, username=user.username)
        return user_to_dto(user)
