from typing import Optional

from apps.common.repository import GenericRepository
from .models import Cart, CartItem


class CartRepository(GenericRepository[Cart]):
    def __init__(self):
        super().__init__(Cart)

    def _base_queryset(self):
        return self.model.objects.select_related("user").prefetch_related(
            "cart_items__product"
        )

    def get(self, **filters):
        return self._base_queryset().filter(**filters).first()

    def get_for_user(self, user_id: int) -> Optional[Cart]:
        return self.get(user_id=user_id)

    def touch(self, cart: Cart) -> Cart:
        cart.save(update_fields=["updated_at"])
        return cart


class CartItemRepository(GenericRepository[CartItem]):
    def __init__(self):
        super().__init__(CartItem)

    def list_for_cart(self, cart_id: int):
        return self.model.objects.filter(cart_id=cart_id).select_related("product")

    def get_for_cart_product(self, cart_id: int, product_id: int) -> Optional[CartItem]:
        return (
            self.model.objects.filter(cart_id=cart_id, product_id=product_id)
            .select_related("product")
            .first()
        )

    def set_quantity(self, item: CartItem, quantity: int) -> CartItem:
        return self.update(item, quantity=quantity)

    def delete_for_cart(self, cart: Cart) -> None:
        self.model.objects.filter(cart=cart).delete()
