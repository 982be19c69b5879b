from rest_framework import serializers
from apps.catalog.serializers import ProductReadSerializer


class CartItemSerializer(serializers.Serializer):
    product = ProductReadSerializer()
    quantity = serializers.IntegerField()


class CartReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    user_id = serializers.IntegerField()
    email = serializers.EmailField()
    cartItems = CartItemSerializer(source="items", many=True)


class CartItemWriteSerializer(serializers.Serializer):
    # POST adds a new line, so a zero quantity is meaningless there
    productId = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)


class CartItemUpdateSerializer(CartItemWriteSerializer):
    # PUT with quantity 0 removes the line
    quantity = serializers.IntegerField(min_value=0)
