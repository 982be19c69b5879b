from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import build_cart_service
from .serializers import (
    CartItemUpdateSerializer,
    CartItemWriteSerializer,
    CartReadSerializer,
)

logger = get_logger(__name__).bind(component="carts", layer="view")

ERROR_RESPONSES = {
    400: OpenApiResponse(response=ErrorResponseSerializer),
    401: OpenApiResponse(response=ErrorResponseSerializer),
}


@extend_schema(tags=["Cart"])
class CartView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartView")

    @extend_schema(
        summary="Get the current user's cart",
        responses={
            200: CartReadSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        self.log.debug("Fetching cart via API", user_id=request.user.id)
        dto = self.service.get_cart_by_user(request.user)
        return Response(CartReadSerializer(dto).data)

    @extend_schema(
        summary="Add a product to the cart",
        description=(
            "Creates the cart on first use. Adding a product that is already in the cart is "
            "rejected; use PUT to change its quantity."
        ),
        request=CartItemWriteSerializer,
        responses={201: CartReadSerializer, **ERROR_RESPONSES},
    )
    def post(self, request):
        serializer = CartItemWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        dto = self.service.add_product_to_cart(
            request.user, data["productId"], data["quantity"]
        )
        self.log.info(
            "Product added via API",
            user_id=request.user.id,
            product_id=data["productId"],
        )
        return Response(CartReadSerializer(dto).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Change a product's quantity",
        description="Sets the quantity of a product already in the cart. Quantity 0 removes it.",
        request=CartItemUpdateSerializer,
        responses={200: CartReadSerializer, 204: None, **ERROR_RESPONSES},
    )
    def put(self, request):
        serializer = CartItemUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        if data["quantity"] == 0:
            self.service.delete_product_from_cart(request.user, data["productId"])
            return Response(status=status.HTTP_204_NO_CONTENT)
        dto = self.service.update_product_in_cart(
            request.user, data["productId"], data["quantity"]
        )
        return Response(CartReadSerializer(dto).data)


@extend_schema(tags=["Cart"])
class CartItemView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartItemView")

    @extend_schema(
        summary="Remove a product from the cart",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={204: None, **ERROR_RESPONSES},
    )
    def delete(self, request, product_id: int):
        self.service.delete_product_from_cart(request.user, product_id)
        self.log.info(
            "Product removed via API", user_id=request.user.id, product_id=product_id
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=["Cart"])
class CheckoutView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CheckoutView")

    @extend_schema(
        summary="Check out the cart",
        description=(
            "Debits the cart total from the wallet and empties the cart. Requires a "
            "non-empty cart, a shipping address and a sufficient wallet balance."
        ),
        request=None,
        responses={
            204: None,
            404: OpenApiResponse(response=ErrorResponseSerializer),
            **ERROR_RESPONSES,
        },
    )
    def put(self, request):
        dto = self.service.checkout(request.user)
        self.log.info(
            "Checkout completed via API",
            user_id=request.user.id,
            balance=dto.wallet_money,
        )
        return Response(status=status.HTTP_204_NO_CONTENT)
