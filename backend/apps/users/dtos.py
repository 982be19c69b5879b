from dataclasses import dataclass
from typing import Optional

from .models import User


@dataclass
class UserDTO:
    id: int
    username: str
    email: str
    wallet_money: str
    address: Optional[str]


def user_to_dto(u: User) -> UserDTO:
    return UserDTO(
        id=u.id,
        username=u.username,
        email=u.email,
        wallet_money=str(u.wallet_money),
        address=u.address,
    )
