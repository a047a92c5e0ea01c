"""
Order serializers.
"""
from rest_framework import serializers

from .models import Order, OrderItem, ReturnRequest


class CheckoutSerializer(serializers.Serializer):
    """
    Shape of a checkout request. Required-field checks happen in the
    checkout service so every entry point reports them the same way.
    """
    full_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    email = serializers.EmailField(required=False, allow_blank=True, default='')
    address = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    city = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    state = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    postal_code = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    country = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    receiver_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    receiver_phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    nearest_landmark = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    payment_method = serializers.ChoiceField(choices=Order.PAYMENT_METHOD_CHOICES, default=Order.PAYMENT_COD)
    promo_code = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    gift_wrap = serializers.BooleanField(default=False)
    idempotency_key = serializers.CharField(max_length=64, required=False, allow_blank=True, allow_null=True)


class CheckoutPreviewSerializer(serializers.Serializer):
    promo_code = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    gift_wrap = serializers.BooleanField(default=False)


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = ['product_id', 'name', 'unit_price', 'quantity', 'image', 'line_total']


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'short_id', 'full_name', 'email',
            'address', 'city', 'state', 'postal_code', 'country',
            'receiver_name', 'receiver_phone', 'nearest_landmark',
            'subtotal_amount', 'shipping_amount', 'tax_amount', 'discount_amount',
            'add_on_amount', 'total_amount', 'discount_code', 'gift_wrap',
            'payment_method', 'status', 'items', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = ['id', 'short_id', 'full_name', 'email', 'total_amount', 'payment_method',
                  'status', 'item_count', 'created_at']

    def get_item_count(self, obj):
        return sum(item.quantity for item in obj.items.all())


class ReturnRequestCreateSerializer(serializers.Serializer):
    order = serializers.CharField(max_length=20, help_text="Order reference, e.g. LRN-1A2B3C4D")
    reason = serializers.CharField(max_length=200)
    details = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_reason(self, value):
        if not value.strip():
            raise serializers.ValidationError("Return reason cannot be empty")
        return value


class ReturnStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ReturnRequest.STATUS_CHOICES)


class ReturnRequestSerializer(serializers.ModelSerializer):
    short_id = serializers.CharField(source='order.short_id', read_only=True)

    class Meta:
        model = ReturnRequest
        fields = ['id', 'short_id', 'customer_email', 'customer_name', 'reason', 'details',
                  'amount', 'status', 'created_at', 'updated_at']
        read_only_fields = fields
