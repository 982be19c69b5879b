from rest_framework import serializers


class ProductReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    category = serializers.CharField()
    cost = serializers.CharField()
    rating = serializers.IntegerField()
    image = serializers.CharField(allow_blank=True)
