"""
Cart request serializers.
"""
from rest_framework import serializers

from apps.common.validators import validate_quantity


class CartAddSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField(default=1, validators=[validate_quantity])


class CartQuantitySerializer(serializers.Serializer):
    delta = serializers.IntegerField(help_text="Positive to increment, negative to decrement")

    def validate_delta(self, value):
        if value == 0:
            raise serializers.ValidationError("delta cannot be zero")
        return value
