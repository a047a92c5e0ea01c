from django.contrib import admin

from .models import Order, OrderItem, ReturnRequest


class OrderItemInline(admin.TabularInline):
    """Inline admin for the order's item snapshot"""
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ['product_id', 'name', 'unit_price', 'quantity', 'image', 'line_total']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['short_id', 'email', 'full_name', 'total_amount', 'discount_code',
                    'payment_method', 'status', 'created_at']
    list_filter = ['status', 'payment_method', 'gift_wrap', 'created_at']
    search_fields = ['short_id', 'email', 'full_name', 'receiver_phone', 'discount_code']
    ordering = ['-created_at']
    readonly_fields = [
        'id', 'short_id', 'subtotal_amount', 'shipping_amount', 'tax_amount', 'discount_amount',
        'add_on_amount', 'total_amount', 'discount_code', 'idempotency_key', 'created_at', 'updated_at',
    ]
    inlines = [OrderItemInline]

    fieldsets = (
        ('Order', {
            'fields': ('id', 'short_id', 'user', 'status', 'payment_method', 'idempotency_key')
        }),
        ('Customer', {
            'fields': ('full_name', 'email', 'receiver_name', 'receiver_phone')
        }),
        ('Shipping Address', {
            'fields': ('address', 'city', 'state', 'postal_code', 'country', 'nearest_landmark')
        }),
        ('Totals', {
            'fields': ('subtotal_amount', 'shipping_amount', 'tax_amount', 'discount_amount',
                       'add_on_amount', 'gift_wrap', 'total_amount', 'discount_code')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(ReturnRequest)
class ReturnRequestAdmin(admin.ModelAdmin):
    list_display = ['id', 'order', 'customer_email', 'reason', 'amount', 'status', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['order__short_id', 'customer_email', 'customer_name', 'reason']
    readonly_fields = ['order', 'user', 'amount', 'created_at', 'updated_at']
    ordering = ['-created_at']
