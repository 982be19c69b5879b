from __future__ import annotations

from typing import Dict, Optional

from django.db import transaction

from apps.api.exceptions import ForbiddenError, NotFoundError
from apps.common import get_logger
from .dtos import UserDTO, user_to_dto
from .models import User
from .protocols import UserRepositoryProtocol

logger = get_logger(__name__).bind(component="users", layer="service")


class UserService:
    def __init__(self, users: UserRepositoryProtocol):
        self.users = users
        self.logger = logger.bind(service="UserService")

    def get_user(self, actor: User, user_id: int) -> UserDTO:
        user = self._resolve_for_actor(actor, user_id)
        return user_to_dto(user)

    def get_address(self, actor: User, user_id: int) -> Dict[str, Optional[str]]:
        user = self._resolve_for_actor(actor, user_id)
        return {"address": user.address}

    def set_address(self, actor: User, user_id: int, address: str) -> UserDTO:
        self._check_access(actor, user_id)
        with transaction.atomic():
            user = self.users.lock(user_id)
            if user is None:
                self.logger.info("Address update failed: user missing", user_id=user_id)
                raise NotFoundError("User not found")
            self.users.update(user, address=address)
        self.logger.info("Shipping address updated", user_id=user_id)
        return user_to_dto(user)

    def _resolve_for_actor(self, actor: User, user_id: int) -> User:
        self._check_access(actor, user_id)
        user = self.users.get(id=user_id)
        if user is None:
            self.logger.info("User not found", user_id=user_id)
            raise NotFoundError("User not found")
        return user

    def _check_access(self, actor: User, user_id: int) -> None:
        if getattr(actor, "id", None) != user_id:
            self.logger.warning(
                "User access forbidden",
                actor_id=getattr(actor, "id", None),
                user_id=user_id,
            )
            raise ForbiddenError("User not authorized to access this resource")
