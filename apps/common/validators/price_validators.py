"""
Price, quantity and discount validators.
"""
from rest_framework import serializers
from decimal import Decimal


def validate_price_range(value, min_value=0, max_value=None):
    """
    Validate price is within acceptable range.

    Raises:
        serializers.ValidationError: If price is outside valid range

    Returns:
        decimal.Decimal: Validated price
    """
    if value < min_value:
        raise serializers.ValidationError(f"Price must be at least {min_value}.")

    if max_value is not None and value > max_value:
        raise serializers.ValidationError(f"Price must not exceed {max_value}.")

    return value


def validate_quantity(value, min_value=1):
    """
    Validate quantity is positive and meets minimum requirement.

    Raises:
        serializers.ValidationError: If quantity is invalid
    """
    if value < min_value:
        raise serializers.ValidationError(f"Quantity must be at least {min_value}.")

    return value


def validate_discount_value(kind, value):
    """
    Validate a discount amount against its kind.

    Percentages must lie in [0, 100]; fixed amounts must not be negative.
    This is an object-level validator meant for a serializer's validate().
    """
    if value is None:
        raise serializers.ValidationError({'discount_value': 'A discount value is required.'})

    if value < Decimal('0'):
        raise serializers.ValidationError({'discount_value': 'Discount value cannot be negative.'})

    if kind == 'percentage' and value > Decimal('100'):
        raise serializers.ValidationError({'discount_value': 'Percentage discounts cannot exceed 100.'})

    return value
