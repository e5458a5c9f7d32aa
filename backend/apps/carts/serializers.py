from rest_framework import serializers


class CartEntrySerializer(serializers.Serializer):
    productId = serializers.CharField(source="product_id")
    qty = serializers.IntegerField(source="quantity")


class CartUpsertSerializer(serializers.Serializer):
    productId = serializers.CharField(
        error_messages={"required": "productId is required"}
    )
    qty = serializers.IntegerField(
        min_value=0,
        error_messages={
            "required": "qty is required",
            "min_value": "Quantity cannot be negative",
        },
    )

    def validate_productId(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("productId is required")
        return value
