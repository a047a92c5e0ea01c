import uuid

from django.conf import settings
from django.db import models


def generate_short_id(order_id: uuid.UUID) -> str:
    """Human-readable order reference, e.g. LRN-1A2B3C4D"""
    return f"{settings.STOREFRONT_ORDER_PREFIX}-{order_id.hex[:8].upper()}"


class Order(models.Model):
    """Placed order. Totals and line items are copied at checkout and never recomputed."""

    STATUS_PENDING = 'pending'
    STATUS_PROCESSING = 'processing'
    STATUS_FULFILLED = 'fulfilled'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_PROCESSING, 'Processing'),
        (STATUS_FULFILLED, 'Fulfilled'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    PAYMENT_COD = 'cod'
    PAYMENT_CARD = 'card'
    PAYMENT_WALLET = 'wallet'
    PAYMENT_METHOD_CHOICES = [
        (PAYMENT_COD, 'Cash on delivery'),
        (PAYMENT_CARD, 'Card'),
        (PAYMENT_WALLET, 'Wallet'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    short_id = models.CharField(max_length=20, unique=True, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                             related_name='orders')

    # Contact
    full_name = models.CharField(max_length=200, blank=True, default='')
    email = models.EmailField()

    # Shipping address
    address = models.CharField(max_length=500)
    city = models.CharField(max_length=100, blank=True, default='')
    state = models.CharField(max_length=100, blank=True, default='')
    postal_code = models.CharField(max_length=20, blank=True, default='')
    country = models.CharField(max_length=100, blank=True, default='')
    receiver_name = models.CharField(max_length=200, blank=True, default='')
    receiver_phone = models.CharField(max_length=30, blank=True, default='')
    nearest_landmark = models.CharField(max_length=200, blank=True, default='')

    # Totals
    subtotal_amount = models.DecimalField(max_digits=12, decimal_places=2)
    shipping_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    add_on_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0,
                                        help_text="Gift wrap and similar optional fees")
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)

    discount_code = models.CharField(max_length=50, null=True, blank=True)
    gift_wrap = models.BooleanField(default=False)
    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES, default=PAYMENT_COD)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    idempotency_key = models.CharField(max_length=64, null=True, blank=True)
    placed_by = models.CharField(max_length=80, blank=True, default='',
                                 help_text='Cart owner that placed the order: user:<id> or session:<key>')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'created_at']),
            models.Index(fields=['email']),
            models.Index(fields=['status']),
        ]
        constraints = [
            # A retry key only has meaning for the cart that sent it
            models.UniqueConstraint(fields=['placed_by', 'idempotency_key'],
                                    name='unique_idempotency_key_per_owner'),
        ]

    def __str__(self):
        return f"Order {self.short_id} - {self.email}"

    def save(self, *args, **kwargs):
        if not self.short_id:
            self.short_id = generate_short_id(self.id)
        super().save(*args, **kwargs)
