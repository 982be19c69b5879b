import types
import unittest
from unittest.mock import Mock, patch

from rest_framework.test import APIRequestFactory, force_authenticate

from apps.api.exceptions import InvalidRequestError, NotFoundError
from apps.carts.dtos import CartDTO, CartItemDTO
from apps.carts.views import CartItemView, CartView, CheckoutView
from apps.catalog.dtos import ProductDTO
from apps.users.dtos import UserDTO


def make_cart_dto(quantity=2):
    product = ProductDTO(
        id=1, name="Sneakers", category="Fashion", cost="100.00", rating=4, image=""
    )
    return CartDTO(
        id=3,
        user_id=7,
        email="user7@example.com",
        items=[CartItemDTO(product=product, quantity=quantity)],
    )


class CartViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.user = types.SimpleNamespace(id=7, is_authenticated=True)

    def call(self, view_cls, request, **kwargs):
        force_authenticate(request, user=self.user)
        return view_cls.as_view()(request, **kwargs)

    def test_get_returns_serialized_cart(self):
        service = Mock()
        service.get_cart_by_user.return_value = make_cart_dto()
        with patch.object(CartView, "service", service):
            response = self.call(CartView, self.factory.get("/api/cart/"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["email"], "user7@example.com")
        self.assertEqual(response.data["cartItems"][0]["quantity"], 2)
        self.assertEqual(response.data["cartItems"][0]["product"]["cost"], "100.00")
        service.get_cart_by_user.assert_called_once_with(self.user)

    def test_get_without_cart_returns_not_found_envelope(self):
        service = Mock()
        service.get_cart_by_user.side_effect = NotFoundError("User does not have a cart")
        with patch.object(CartView, "service", service):
            response = self.call(CartView, self.factory.get("/api/cart/"))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"]["code"], "NOT_FOUND")
        self.assertEqual(response.data["error"]["message"], "User does not have a cart")

    def test_post_adds_product(self):
        service = Mock()
        service.add_product_to_cart.return_value = make_cart_dto()
        with patch.object(CartView, "service", service):
            request = self.factory.post(
                "/api/cart/", {"productId": 1, "quantity": 2}, format="json"
            )
            response = self.call(CartView, request)
        self.assertEqual(response.status_code, 201)
        service.add_product_to_cart.assert_called_once_with(self.user, 1, 2)

    def test_post_rejects_zero_quantity_before_service(self):
        service = Mock()
        with patch.object(CartView, "service", service):
            request = self.factory.post(
                "/api/cart/", {"productId": 1, "quantity": 0}, format="json"
            )
            response = self.call(CartView, request)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")
        service.add_product_to_cart.assert_not_called()

    def test_post_duplicate_product_maps_to_bad_request(self):
        service = Mock()
        service.add_product_to_cart.side_effect = InvalidRequestError(
            "Product already in cart"
        )
        with patch.object(CartView, "service", service):
            request = self.factory.post(
                "/api/cart/", {"productId": 1, "quantity": 1}, format="json"
            )
            response = self.call(CartView, request)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "BAD_REQUEST")

    def test_put_updates_quantity(self):
        service = Mock()
        service.update_product_in_cart.return_value = make_cart_dto(quantity=5)
        with patch.object(CartView, "service", service):
            request = self.factory.put(
                "/api/cart/", {"productId": 1, "quantity": 5}, format="json"
            )
            response = self.call(CartView, request)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["cartItems"][0]["quantity"], 5)
        service.update_product_in_cart.assert_called_once_with(self.user, 1, 5)
        service.delete_product_from_cart.assert_not_called()

    def test_put_with_zero_quantity_removes_product(self):
        service = Mock()
        with patch.object(CartView, "service", service):
            request = self.factory.put(
                "/api/cart/", {"productId": 1, "quantity": 0}, format="json"
            )
            response = self.call(CartView, request)
        self.assertEqual(response.status_code, 204)
        service.delete_product_from_cart.assert_called_once_with(self.user, 1)
        service.update_product_in_cart.assert_not_called()

    def test_delete_item(self):
        service = Mock()
        with patch.object(CartItemView, "service", service):
            request = self.factory.delete("/api/cart/items/4/")
            response = self.call(CartItemView, request, product_id=4)
        self.assertEqual(response.status_code, 204)
        service.delete_product_from_cart.assert_called_once_with(self.user, 4)

    def test_checkout_returns_no_content(self):
        service = Mock()
        service.checkout.return_value = UserDTO(
            id=7, username="u7", email="user7@example.com", wallet_money="50.00", address="x"
        )
        with patch.object(CheckoutView, "service", service):
            response = self.call(CheckoutView, self.factory.put("/api/cart/checkout/"))
        self.assertEqual(response.status_code, 204)
        service.checkout.assert_called_once_with(self.user)

    def test_checkout_insufficient_balance(self):
        service = Mock()
        service.checkout.side_effect = InvalidRequestError("Wallet balance is insufficient")
        with patch.object(CheckoutView, "service", service):
            response = self.call(CheckoutView, self.factory.put("/api/cart/checkout/"))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.data["error"]["message"], "Wallet balance is insufficient"
        )

    def test_unauthenticated_request_is_rejected(self):
        service = Mock()
        with patch.object(CartView, "service", service):
            response = CartView.as_view()(self.factory.get("/api/cart/"))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["error"]["code"], "UNAUTHORIZED")
        service.get_cart_by_user.assert_not_called()
