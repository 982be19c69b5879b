from typing import Optional

from apps.common.repository import GenericRepository
from .models import User


class UserRepository(GenericRepository[User]):
    def __init__(self):
        super().__init__(User)

    def lock(self, user_id: int) -> Optional[User]:
        """Re-read the user row with a row lock; must run inside ``transaction.atomic``."""
        return self.model.objects.select_for_update().filter(id=user_id).first()
