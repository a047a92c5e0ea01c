"""
In-app notification inbox.

Each user sees the rows addressed to them. Staff also see broadcast rows
(no user), which is where store events such as new orders land.
"""
import logging
from typing import Iterable, Optional

from django.db import transaction
from django.db.models import Count, Q
from django.utils import timezone

from ..models import Notification

logger = logging.getLogger('storefront.push')


class NotificationService:
    """Service class for the notification inbox"""

    @staticmethod
    @transaction.atomic
    def create(title: str, message: str = '', notification_type: str = Notification.TYPE_SYSTEM,
               priority: str = Notification.PRIORITY_INFO, user=None, deep_link: str = '',
               data: Optional[dict] = None) -> Notification:
        notification = Notification.objects.create(
            user=user,
            title=title,
            message=message,
            notification_type=notification_type,
            priority=priority,
            deep_link=deep_link,
            data=data or {},
        )
        logger.info(f"Recorded {notification_type} notification {notification.id}: {title}")
        return notification

    @staticmethod
    def visible_to(user):
        scope = Q(user=user)
        if user.is_staff:
            scope |= Q(user__isnull=True)
        return Notification.objects.filter(scope)

    @staticmethod
    def list_for(user, unread_only: bool = False, notification_type: Optional[str] = None,
                 priority: Optional[str] = None):
        notifications = NotificationService.visible_to(user)
        if unread_only:
            notifications = notifications.filter(is_read=False)
        if notification_type:
            notifications = notifications.filter(notification_type=notification_type)
        if priority:
            notifications = notifications.filter(priority=priority)
        return notifications

    @staticmethod
    def set_read(user, ids: Iterable[int], is_read: bool = True) -> int:
        """Mark the given rows read or unread. Rows the user cannot see are ignored."""
        return NotificationService.visible_to(user).filter(id__in=list(ids)).update(
            is_read=is_read,
            read_at=timezone.now() if is_read else None,
        )

    @staticmethod
    def mark_all_read(user) -> int:
        return NotificationService.visible_to(user).filter(is_read=False).update(
            is_read=True, read_at=timezone.now()
        )

    @staticmethod
    def delete(user, ids: Iterable[int]) -> int:
        deleted, _ = NotificationService.visible_to(user).filter(id__in=list(ids)).delete()
        return deleted

    @staticmethod
    def clear_read(user) -> int:
        deleted, _ = NotificationService.visible_to(user).filter(is_read=True).delete()
        return deleted

    @staticmethod
    def stats(user) -> dict:
        notifications = NotificationService.visible_to(user)
        total = notifications.count()
        unread = notifications.filter(is_read=False).count()

        by_type = {value: 0 for value, _ in Notification.TYPE_CHOICES}
        for row in notifications.values('notification_type').annotate(count=Count('id')):
            by_type[row['notification_type']] = row['count']

        by_priority = {value: 0 for value, _ in Notification.PRIORITY_CHOICES}
        for row in notifications.values('priority').annotate(count=Count('id')):
            by_priority[row['priority']] = row['count']

        return {
            'total': total,
            'unread': unread,
            'read': total - unread,
            'by_type': by_type,
            'by_priority': by_priority,
        }
