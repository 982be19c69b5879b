from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from django.db import DatabaseError, IntegrityError, transaction

from apps.api.exceptions import InternalError, InvalidRequestError, NotFoundError
from apps.common import get_logger
from apps.users.dtos import UserDTO, user_to_dto
from apps.users.models import User
from .dtos import CartDTO
from .models import Cart, CartItem
from .protocols import (
    CartItemRepositoryProtocol,
    CartMapperProtocol,
    CartRepositoryProtocol,
    ProductRepositoryProtocol,
    UserRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="carts", layer="service")

NO_CART = "User does not have a cart"
NO_CART_FOR_UPDATE = (
    "User does not have a cart. Use POST to create cart and add a product"
)
PRODUCT_MISSING = "Product doesn't exist in database"
PRODUCT_IN_CART = (
    "Product already in cart. Use the cart sidebar to update or remove product from cart"
)
PRODUCT_NOT_IN_CART = "Product not in cart"
EMPTY_CART = "Cart is empty, nothing to check out"
ADDRESS_NOT_SET = "Address not set, add a shipping address before checkout"
INSUFFICIENT_BALANCE = "Wallet balance is insufficient"


def cart_total(items: Iterable[CartItem]) -> Decimal:
    return sum(
        (Decimal(item.product.cost) * item.quantity for item in items), Decimal("0")
    )


class CartService:
    """
    Cart operations for an authenticated user.

    Every mutation runs in one database transaction that starts by locking the
    user's row, so concurrent cart or checkout calls for the same user are
    applied one after another.
    """

    def __init__(
        self,
        carts: CartRepositoryProtocol,
        cart_items: CartItemRepositoryProtocol,
        products: ProductRepositoryProtocol,
        users: UserRepositoryProtocol,
        cart_mapper: CartMapperProtocol,
    ):
        self.carts = carts
        self.cart_items = cart_items
        self.products = products
        self.users = users
        self.cart_mapper = cart_mapper
        self.logger = logger.bind(service="CartService")

    def get_cart_by_user(self, user: User) -> CartDTO:
        self.logger.debug("Fetching cart", user_id=user.id)
        return self.cart_mapper.to_dto(self._cart_or_404(user))

    def add_product_to_cart(self, user: User, product_id: int, quantity: int) -> CartDTO:
        self.logger.info(
            "Adding product to cart",
            user_id=user.id,
            product_id=product_id,
            quantity=quantity,
        )
        product = self._require_product(product_id)
        with transaction.atomic():
            self._lock_user(user)
            cart = self.carts.get_for_user(user.id)
            if cart is None:
                self._create_cart(user, product, quantity)
            else:
                if self.cart_items.get_for_cart_product(cart.id, product.id):
                    self.logger.info(
                        "Product already in cart", user_id=user.id, product_id=product.id
                    )
                    raise InvalidRequestError(PRODUCT_IN_CART)
                try:
                    self.cart_items.create(cart=cart, product=product, quantity=quantity)
                except IntegrityError as exc:
                    raise InvalidRequestError(PRODUCT_IN_CART) from exc
                self.carts.touch(cart)
        return self._reload(user)

    def update_product_in_cart(
        self, user: User, product_id: int, quantity: int
    ) -> CartDTO:
        self.logger.info(
            "Updating cart item quantity",
            user_id=user.id,
            product_id=product_id,
            quantity=quantity,
        )
        product = self._require_product(product_id)
        with transaction.atomic():
            self._lock_user(user)
            cart = self.carts.get_for_user(user.id)
            if cart is None:
                self.logger.info("Cart update failed: no cart", user_id=user.id)
                raise InvalidRequestError(NO_CART_FOR_UPDATE)
            item = self._require_item(cart, product.id)
            self.cart_items.set_quantity(item, quantity)
            self.carts.touch(cart)
        return self._reload(user)

    def delete_product_from_cart(self, user: User, product_id: int) -> None:
        self.logger.info("Removing product from cart", user_id=user.id, product_id=product_id)
        with transaction.atomic():
            self._lock_user(user)
            cart = self.carts.get_for_user(user.id)
            if cart is None:
                self.logger.info("Cart delete failed: no cart", user_id=user.id)
                raise InvalidRequestError(NO_CART)
            item = self._require_item(cart, product_id)
            self.cart_items.delete(item)
            self.carts.touch(cart)

    def checkout(self, user: User) -> UserDTO:
        """
        Debit the cart total from the wallet and empty the cart.

        Gates are evaluated in order and the first failure aborts: cart exists,
        cart has items, a shipping address is set, the balance covers the
        total. The debit and the clearing commit together or not at all.
        """
        self.logger.info("Checking out cart", user_id=user.id)
        with transaction.atomic():
            account = self._lock_user(user)
            cart = self._cart_or_404(user)
            items = list(self.cart_items.list_for_cart(cart.id))
            if not items:
                self.logger.info("Checkout rejected: empty cart", user_id=user.id)
                raise InvalidRequestError(EMPTY_CART)
            if not account.has_set_non_default_address():
                self.logger.info("Checkout rejected: address not set", user_id=user.id)
                raise InvalidRequestError(ADDRESS_NOT_SET)
            total = cart_total(items)
            if account.wallet_money < total:
                self.logger.info(
                    "Checkout rejected: insufficient balance",
                    user_id=user.id,
                    total=str(total),
                    balance=str(account.wallet_money),
                )
                raise InvalidRequestError(INSUFFICIENT_BALANCE)
            self.users.update(account, wallet_money=account.wallet_money - total)
            self.cart_items.delete_for_cart(cart)
            self.carts.touch(cart)
        user.wallet_money = account.wallet_money
        self.logger.info(
            "Checkout completed",
            user_id=user.id,
            total=str(total),
            balance=str(account.wallet_money),
        )
        return user_to_dto(account)

    def _cart_or_404(self, user: User) -> Cart:
        cart = self.carts.get_for_user(user.id)
        if cart is None:
            self.logger.info("Cart not found", user_id=user.id)
            raise NotFoundError(NO_CART)
        return cart

    def _require_product(self, product_id: int):
        product = self.products.get(id=product_id)
        if product is None:
            self.logger.info("Product not found", product_id=product_id)
            raise InvalidRequestError(PRODUCT_MISSING)
        return product

    def _require_item(self, cart: Cart, product_id: int) -> CartItem:
        item = self.cart_items.get_for_cart_product(cart.id, product_id)
        if item is None:
            self.logger.info(
                "Product not in cart", cart_id=cart.id, product_id=product_id
            )
            raise InvalidRequestError(PRODUCT_NOT_IN_CART)
        return item

    def _lock_user(self, user: User) -> User:
        account = self.users.lock(user.id)
        if account is None:
            raise NotFoundError("User not found")
        return account

    def _create_cart(self, user: User, product, quantity: int) -> Cart:
        try:
            cart = self.carts.create(user=user)
            self.cart_items.create(cart=cart, product=product, quantity=quantity)
        except DatabaseError as exc:
            self.logger.exception("Cart creation failed", user_id=user.id)
            raise InternalError() from exc
        self.logger.info("Cart created", user_id=user.id, cart_id=cart.id)
        return cart

    def _reload(self, user: User) -> CartDTO:
        return self.cart_mapper.to_dto(self.carts.get_for_user(user.id))
