"""
Order persistence and queries.
"""
import logging
from typing import Iterable, Optional

from django.db import transaction

from ..models import Order, OrderItem
from .pricing import OrderTotals

logger = logging.getLogger(__name__)

CONTACT_FIELDS = (
    'full_name', 'email', 'address', 'city', 'state', 'postal_code', 'country',
    'receiver_name', 'receiver_phone', 'nearest_landmark',
)


class OrderService:
    """Service class for order storage"""

    @staticmethod
    @transaction.atomic
    def create_order(details: dict, lines: Iterable, totals: OrderTotals, user=None,
                     discount_code: Optional[str] = None, gift_wrap: bool = False,
                     idempotency_key: Optional[str] = None, placed_by: str = '') -> Order:
        """Write the order and its item snapshot in one transaction"""
        order = Order.objects.create(
            user=user if user is not None and user.is_authenticated else None,
            subtotal_amount=totals.subtotal,
            shipping_amount=totals.shipping_fee,
            tax_amount=totals.tax_amount,
            discount_amount=totals.discount_amount,
            add_on_amount=totals.add_on_fees,
            total_amount=totals.grand_total,
            discount_code=discount_code,
            gift_wrap=gift_wrap,
            payment_method=details.get('payment_method') or Order.PAYMENT_COD,
            idempotency_key=idempotency_key or None,
            placed_by=placed_by,
            **{field: (details.get(field) or '').strip() for field in CONTACT_FIELDS},
        )
        OrderItem.objects.bulk_create([
            OrderItem(
                order=order,
                product_id=line.product_id,
                name=line.name,
                unit_price=line.unit_price,
                quantity=line.quantity,
                image=line.image,
                line_total=line.line_total,
            )
            for line in lines
        ])
        logger.info(f"Created order {order.short_id} total={order.total_amount}")
        return order

    @staticmethod
    def get_by_idempotency_key(key: Optional[str], placed_by: str) -> Optional[Order]:
        """Order an earlier attempt from the same cart owner placed with this key"""
        if not key:
            return None
        return Order.objects.filter(idempotency_key=key, placed_by=placed_by).first()

    @staticmethod
    def totals_for(order: Order) -> OrderTotals:
        return OrderTotals(
            subtotal=order.subtotal_amount,
            shipping_fee=order.shipping_amount,
            tax_amount=order.tax_amount,
            discount_amount=order.discount_amount,
            add_on_fees=order.add_on_amount,
            grand_total=order.total_amount,
        )

    @staticmethod
    def list_for_user(user):
        return Order.objects.filter(user=user).prefetch_related('items')

    @staticmethod
    def track(short_id: str, email: str) -> Optional[Order]:
        """Find an order by its short reference, only when the email matches too"""
        short_id = (short_id or '').strip().upper()
        email = (email or '').strip()
        if not short_id or not email:
            return None
        return (Order.objects.prefetch_related('items')
                .filter(short_id=short_id, email__iexact=email).first())

    @staticmethod
    def update_status(order: Order, status: str) -> Order:
        valid = {choice for choice, _ in Order.STATUS_CHOICES}
        if status not in valid:
            raise ValueError(f"Unknown order status: {status}")
        previous = order.status
        order.status = status
        order.save(update_fields=['status', 'updated_at'])
        logger.info(f"Order {order.short_id} status {previous} -> {status}")
        return order
