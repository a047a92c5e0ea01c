"""
In-app notification inbox views.
"""
from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework import status

from apps.common.utils import success_response, error_response
from ..models import Notification
from ..serializers import NotificationBulkSerializer, NotificationReadSerializer, NotificationSerializer
from ..services import NotificationService


class NotificationListView(APIView):
    """
    GET lists visible notifications, filtered by ?unread=1, ?type= and ?priority=.
    DELETE clears the ones already read.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            page = max(int(request.GET.get('page', 1)), 1)
            page_size = min(max(int(request.GET.get('pageSize', 20)), 1), 100)
        except ValueError:
            return error_response("page and pageSize must be integers")

        notifications = NotificationService.list_for(
            request.user,
            unread_only=request.GET.get('unread') in ('1', 'true'),
            notification_type=request.GET.get('type'),
            priority=request.GET.get('priority'),
        )
        total = notifications.count()
        start_index = (page - 1) * page_size
        return success_response({
            "list": NotificationSerializer(notifications[start_index:start_index + page_size], many=True).data,
            "page": {
                "pageNum": page,
                "pageSize": page_size,
                "total": total,
                "totalPages": (total + page_size - 1) // page_size
            }
        })

    def delete(self, request):
        removed = NotificationService.clear_read(request.user)
        return success_response({'removed': removed}, 'Read notifications cleared')


class NotificationDetailView(APIView):
    """PATCH {is_read} toggles one notification, DELETE removes it"""
    permission_classes = [IsAuthenticated]

    def _get(self, request, pk):
        return NotificationService.visible_to(request.user).filter(pk=pk).first()

    def patch(self, request, pk):
        notification = self._get(request, pk)
        if notification is None:
            return error_response("Notification not found", status_code=status.HTTP_404_NOT_FOUND)

        serializer = NotificationReadSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid data", serializer.errors)

        NotificationService.set_read(request.user, [notification.pk], serializer.validated_data['is_read'])
        notification.refresh_from_db()
        return success_response(NotificationSerializer(notification).data)

    def delete(self, request, pk):
        if self._get(request, pk) is None:
            return error_response("Notification not found", status_code=status.HTTP_404_NOT_FOUND)
        NotificationService.delete(request.user, [pk])
        return success_response({}, 'Notification deleted')


class NotificationBulkReadView(APIView):
    """POST {ids?, is_read} marks several (or, without ids, all) notifications"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = NotificationBulkSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid data", serializer.errors)

        ids = serializer.validated_data.get('ids')
        is_read = serializer.validated_data['is_read']
        if ids:
            updated = NotificationService.set_read(request.user, ids, is_read)
        elif is_read:
            updated = NotificationService.mark_all_read(request.user)
        else:
            return error_response("ids are required to mark notifications unread")
        return success_response({'updated': updated})


class NotificationBulkDeleteView(APIView):
    """POST {ids} deletes several notifications"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = NotificationBulkSerializer(data=request.data)
        if not serializer.is_valid() or not serializer.validated_data.get('ids'):
            return error_response("ids are required", serializer.errors)
        removed = NotificationService.delete(request.user, serializer.validated_data['ids'])
        return success_response({'removed': removed}, 'Notifications deleted')


class NotificationStatsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return success_response(NotificationService.stats(request.user))
