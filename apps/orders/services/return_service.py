"""
Return service for order return and refund requests.
"""
import logging
from typing import Optional

from apps.notifications.models import Notification
from apps.notifications.services import NotificationService
from ..models import Order, ReturnRequest
from .side_effects import run_best_effort

logger = logging.getLogger(__name__)

RETURN_REQUEST_TITLE = 'Return Requested'
RETURN_REQUEST_URL = '/admin/returns'


class ReturnService:
    """Service class for return requests"""

    @staticmethod
    def find_returnable_order(user, short_id: str) -> Optional[Order]:
        """The user's own order with this reference, if any"""
        short_id = (short_id or '').strip().upper()
        if not short_id:
            return None
        return Order.objects.filter(short_id=short_id, user=user).first()

    @staticmethod
    def create_request(user, order: Order, reason: str, details: str = '') -> ReturnRequest:
        """
        Open a return for an order. Cancelled orders cannot be returned and an
        order has at most one open return at a time.
        """
        if order.status == Order.STATUS_CANCELLED:
            raise ValueError("Cancelled orders cannot be returned")
        if order.returns.filter(status__in=ReturnRequest.OPEN_STATUSES).exists():
            raise ValueError("A return for this order is already in progress")

        return_request = ReturnRequest.objects.create(
            order=order,
            user=user,
            customer_email=order.email,
            customer_name=order.full_name or getattr(user, 'full_name', '') or '',
            reason=reason.strip(),
            details=(details or '').strip(),
            amount=order.total_amount,
        )
        logger.info(f"Return {return_request.id} opened for order {order.short_id}")

        run_best_effort(
            'record_notification',
            NotificationService.create,
            RETURN_REQUEST_TITLE,
            f"Order #{order.short_id}: {return_request.reason}",
            notification_type=Notification.TYPE_REFUND,
            priority=Notification.PRIORITY_WARNING,
            deep_link=RETURN_REQUEST_URL,
            data={'return_id': return_request.id, 'short_id': order.short_id},
        )
        return return_request

    @staticmethod
    def list_for_user(user):
        return ReturnRequest.objects.filter(user=user).select_related('order')

    @staticmethod
    def list_all(status: Optional[str] = None):
        returns = ReturnRequest.objects.select_related('order')
        if status:
            returns = returns.filter(status=status)
        return returns

    @staticmethod
    def update_status(return_request: ReturnRequest, status: str) -> ReturnRequest:
        if not return_request.can_move_to(status):
            raise ValueError(f"Cannot move a {return_request.status} return to {status}")
        previous = return_request.status
        return_request.status = status
        return_request.save(update_fields=['status', 'updated_at'])
        logger.info(f"Return {return_request.id} status {previous} -> {status}")
        return return_request
