"""
Store pricing settings serializer.
"""
from rest_framework import serializers

from apps.common.validators import validate_price_range


class PricingSettingsSerializer(serializers.Serializer):
    shipping_flat_rate = serializers.DecimalField(max_digits=10, decimal_places=2,
                                                  validators=[validate_price_range])
    shipping_free_threshold = serializers.DecimalField(max_digits=10, decimal_places=2,
                                                       validators=[validate_price_range])
    tax_rate = serializers.DecimalField(max_digits=6, decimal_places=4)
    gift_wrap_fee = serializers.DecimalField(max_digits=10, decimal_places=2,
                                             validators=[validate_price_range])

    def validate_tax_rate(self, value):
        if value < 0 or value >= 1:
            raise serializers.ValidationError("Tax rate must be a fraction between 0 and 1, e.g. 0.08")
        return value
