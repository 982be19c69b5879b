from __future__ import annotations

from typing import Iterable, Optional, Protocol, TYPE_CHECKING

from .models import Cart, CartItem

if TYPE_CHECKING:
    from apps.carts.dtos import CartDTO
    from apps.catalog.models import Product
    from apps.users.models import User


class CartRepositoryProtocol(Protocol):
    def get_for_user(self, user_id: int) -> Optional[Cart]:
        ...

    def create(self, **data) -> Cart:
        ...

    def touch(self, cart: Cart) -> Cart:
        ...


class CartItemRepositoryProtocol(Protocol):
    def create(self, **data) -> CartItem:
        ...

    def list_for_cart(self, cart_id: int) -> Iterable[CartItem]:
        ...

    def get_for_cart_product(self, cart_id: int, product_id: int) -> Optional[CartItem]:
        ...

    def set_quantity(self, item: CartItem, quantity: int) -> CartItem:
        ...

    def delete(self, item: CartItem) -> None:
        ...

    def delete_for_cart(self, cart: Cart) -> None:
        ...


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...


class UserRepositoryProtocol(Protocol):
    def lock(self, user_id: int) -> Optional["User"]:
        ...

    def update(self, user: "User", **fields) -> "User":
        ...


class CartMapperProtocol(Protocol):
    def to_dto(self, cart: Cart) -> "CartDTO":
        ...
