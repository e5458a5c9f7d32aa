from typing import Any, Optional, Type

from rest_framework import serializers

from .errors import ConnectivityError


class ProductSchema(serializers.Serializer):
    _id = serializers.CharField()
    name = serializers.CharField()
    category = serializers.CharField()
    cost = serializers.FloatField()
    rating = serializers.IntegerField(min_value=0, max_value=5)
    image = serializers.CharField()

    def validate_cost(self, value: float) -> float:
        if value <= 0:
            raise serializers.ValidationError("Cost must be positive")
        return value


class CartEntrySchema(serializers.Serializer):
    productId = serializers.CharField()
    qty = serializers.IntegerField(min_value=0)


class LoginSchema(serializers.Serializer):
    success = serializers.BooleanField()
    token = serializers.CharField()
    username = serializers.CharField()
    balance = serializers.FloatField()


class ErrorSchema(serializers.Serializer):
    success = serializers.BooleanField(required=False)
    code = serializers.CharField(required=False)
    message = serializers.CharField(required=False, allow_blank=True)


def validate_payload(
    schema: Type[serializers.Serializer],
    payload: Any,
    *,
    many: bool = False,
    message: Optional[str] = None,
):
    """Validate a decoded response body; anything malformed fails closed."""
    serializer = schema(data=payload, many=many)
    if not serializer.is_valid():
        raise ConnectivityError(message)
    return serializer.validated_data
