"""
Discount serializers.
"""
from rest_framework import serializers

from apps.common.validators import validate_discount_value
from .models import DiscountCode


class PromoValidateSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=50, allow_blank=True, trim_whitespace=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, min_value=0)
    gift_wrap = serializers.BooleanField(default=False)


class DiscountCodeSerializer(serializers.ModelSerializer):
    """Admin create/update of discount codes"""

    class Meta:
        model = DiscountCode
        fields = [
            'id', 'code', 'description', 'discount_type', 'discount_value', 'max_uses',
            'used_count', 'expires_at', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'used_count', 'created_at', 'updated_at']

    def validate_code(self, value):
        code = value.strip().upper()
        if not code:
            raise serializers.ValidationError("Code cannot be blank")
        existing = DiscountCode.objects.filter(code__iexact=code)
        if self.instance is not None:
            existing = existing.exclude(pk=self.instance.pk)
        if existing.exists():
            raise serializers.ValidationError("A discount with this code already exists")
        return code

    def validate_max_uses(self, value):
        if value is not None and value < 1:
            raise serializers.ValidationError("Max uses must be at least 1, or empty for unlimited")
        return value

    def validate(self, attrs):
        kind = attrs.get('discount_type', getattr(self.instance, 'discount_type', DiscountCode.TYPE_PERCENTAGE))
        value = attrs.get('discount_value', getattr(self.instance, 'discount_value', None))
        validate_discount_value(kind, value)
        return attrs
