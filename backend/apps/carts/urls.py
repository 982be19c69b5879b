from django.urls import path
from .views import CartItemView, CartView, CheckoutView

urlpatterns = [
    path("", CartView.as_view(), name="api-cart"),
    path("checkout/", CheckoutView.as_view(), name="api-cart-checkout"),
    path("items/<int:product_id>/", CartItemView.as_view(), name="api-cart-item"),
]
