from django.conf import settings
from django.db import models

from .order import Order


class ReturnRequest(models.Model):
    """A buyer's request to return a placed order for a refund"""

    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'
    STATUS_REFUNDED = 'refunded'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_REJECTED, 'Rejected'),
        (STATUS_REFUNDED, 'Refunded'),
    ]

    # Allowed moves; rejected and refunded are final
    TRANSITIONS = {
        STATUS_PENDING: {STATUS_APPROVED, STATUS_REJECTED},
        STATUS_APPROVED: {STATUS_REFUNDED},
        STATUS_REJECTED: set(),
        STATUS_REFUNDED: set(),
    }
    OPEN_STATUSES = (STATUS_PENDING, STATUS_APPROVED)

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='returns')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                             related_name='return_requests')
    customer_email = models.EmailField()
    customer_name = models.CharField(max_length=200, blank=True, default='')
    reason = models.CharField(max_length=200)
    details = models.TextField(blank=True, default='')
    amount = models.DecimalField(max_digits=12, decimal_places=2, help_text="Refundable amount")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'return_requests'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'created_at']),
            models.Index(fields=['status']),
        ]

    def __str__(self):
        return f"Return {self.id} for {self.order_id} ({self.status})"

    def can_move_to(self, status: str) -> bool:
        return status in self.TRANSITIONS.get(self.status, set())
