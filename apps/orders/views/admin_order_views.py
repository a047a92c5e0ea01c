"""
Admin order management views.
"""
import logging

from rest_framework.views import APIView
from rest_framework.permissions import IsAdminUser
from rest_framework import status

from apps.common.utils import success_response, error_response
from ..models import Order
from ..serializers import OrderListSerializer, OrderSerializer, OrderStatusSerializer
from ..services import OrderService

logger = logging.getLogger(__name__)


class AdminOrderListView(APIView):
    """GET /api/admin/orders with optional status filter and paging"""
    permission_classes = [IsAdminUser]

    def get(self, request):
        try:
            page = max(int(request.GET.get('page', 1)), 1)
            page_size = min(max(int(request.GET.get('pageSize', 20)), 1), 100)
        except ValueError:
            return error_response("page and pageSize must be integers")

        orders = Order.objects.prefetch_related('items')
        order_status = request.GET.get('status')
        if order_status:
            orders = orders.filter(status=order_status)

        total = orders.count()
        start_index = (page - 1) * page_size
        return success_response({
            "list": OrderListSerializer(orders[start_index:start_index + page_size], many=True).data,
            "page": {
                "pageNum": page,
                "pageSize": page_size,
                "total": total,
                "totalPages": (total + page_size - 1) // page_size
            }
        })


class AdminOrderStatusView(APIView):
    """POST /api/admin/orders/<id>/status"""
    permission_classes = [IsAdminUser]

    def post(self, request, order_id):
        serializer = OrderStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid status", serializer.errors)

        try:
            order = Order.objects.get(id=order_id)
        except Order.DoesNotExist:
            return error_response("Order not found", status_code=status.HTTP_404_NOT_FOUND)

        order = OrderService.update_status(order, serializer.validated_data['status'])
        logger.info(f"Admin {request.user.id} set order {order.short_id} to {order.status}")
        return success_response(OrderSerializer(order).data, 'Order status updated')
