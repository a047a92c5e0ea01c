from django.conf import settings
from django.db import models


class Notification(models.Model):
    """In-app notice for the admin inbox. Rows without a user are broadcasts to staff."""

    TYPE_ORDER = 'order'
    TYPE_INVENTORY = 'inventory'
    TYPE_REVIEW = 'review'
    TYPE_VENDOR = 'vendor'
    TYPE_REFUND = 'refund'
    TYPE_SYSTEM = 'system'
    TYPE_CHOICES = [
        (TYPE_ORDER, 'Orders'),
        (TYPE_INVENTORY, 'Inventory'),
        (TYPE_REVIEW, 'Reviews'),
        (TYPE_VENDOR, 'Vendors'),
        (TYPE_REFUND, 'Refunds'),
        (TYPE_SYSTEM, 'System'),
    ]

    PRIORITY_INFO = 'info'
    PRIORITY_WARNING = 'warning'
    PRIORITY_CRITICAL = 'critical'
    PRIORITY_CHOICES = [
        (PRIORITY_INFO, 'Info'),
        (PRIORITY_WARNING, 'Warning'),
        (PRIORITY_CRITICAL, 'Critical'),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, null=True, blank=True,
                             related_name='notifications')
    notification_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_SYSTEM)
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default=PRIORITY_INFO)
    title = models.CharField(max_length=200)
    message = models.TextField(blank=True, default='')
    deep_link = models.CharField(max_length=300, blank=True, default='')
    data = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_read', 'created_at']),
            models.Index(fields=['notification_type', 'created_at']),
            models.Index(fields=['priority', 'created_at']),
        ]

    def __str__(self):
        return f"{self.title} ({self.priority})"

    @property
    def is_broadcast(self) -> bool:
        return self.user_id is None
