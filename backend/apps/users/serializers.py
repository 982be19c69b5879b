from rest_framework import serializers


class UserSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    username = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)
    walletMoney = serializers.CharField(source="wallet_money", read_only=True)
    address = serializers.CharField(read_only=True, allow_null=True)


class AddressSerializer(serializers.Serializer):
    address = serializers.CharField(allow_null=True)


class AddressWriteSerializer(serializers.Serializer):
    address = serializers.CharField(min_length=20, max_length=255, trim_whitespace=True)
