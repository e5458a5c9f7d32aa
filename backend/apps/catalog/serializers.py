from decimal import Decimal
from typing import Union

from rest_framework import serializers


def as_number(value: Decimal) -> Union[int, float]:
    """Render a decimal cost as a JSON number, integral costs without a fraction."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


class ProductReadSerializer(serializers.Serializer):
    # Wire shape of the storefront: `_id`, `image`, numeric `cost`
    _id = serializers.CharField(source="id")
    name = serializers.CharField()
    category = serializers.CharField()
    cost = serializers.DecimalField(max_digits=10, decimal_places=2)
    rating = serializers.IntegerField(min_value=0, max_value=5)
    image = serializers.CharField()

    def to_representation(self, instance):
        if instance is None:
            return None
        return {
            "_id": instance.id,
            "name": instance.name,
            "category": instance.category,
            "cost": as_number(Decimal(instance.cost)),
            "rating": instance.rating,
            "image": instance.image,
        }


class ProductSearchQuerySerializer(serializers.Serializer):
    value = serializers.CharField(required=False, allow_blank=True, default="")
