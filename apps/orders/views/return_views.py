"""
Return request views for buyers and admins.
"""
import logging

from rest_framework.views import APIView
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework import status

from apps.common.utils import success_response, error_response
from ..models import ReturnRequest
from ..serializers import ReturnRequestCreateSerializer, ReturnRequestSerializer, ReturnStatusSerializer
from ..services import ReturnService

logger = logging.getLogger(__name__)


class ReturnRequestView(APIView):
    """GET lists the caller's returns, POST opens one for their order"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        returns = ReturnService.list_for_user(request.user)
        return success_response(ReturnRequestSerializer(returns, many=True).data)

    def post(self, request):
        serializer = ReturnRequestCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid return request", serializer.errors)

        data = serializer.validated_data
        order = ReturnService.find_returnable_order(request.user, data['order'])
        if order is None:
            return error_response("Order not found", status_code=status.HTTP_404_NOT_FOUND)

        try:
            return_request = ReturnService.create_request(request.user, order, data['reason'], data['details'])
        except ValueError as e:
            return error_response(str(e))

        return success_response(ReturnRequestSerializer(return_request).data, 'Return request submitted',
                                status_code=status.HTTP_201_CREATED)


class AdminReturnListView(APIView):
    """GET /api/admin/returns with optional status filter and paging"""
    permission_classes = [IsAdminUser]

    def get(self, request):
        try:
            page = max(int(request.GET.get('page', 1)), 1)
            page_size = min(max(int(request.GET.get('pageSize', 20)), 1), 100)
        except ValueError:
            return error_response("page and pageSize must be integers")

        returns = ReturnService.list_all(request.GET.get('status'))
        total = returns.count()
        start_index = (page - 1) * page_size
        return success_response({
            "list": ReturnRequestSerializer(returns[start_index:start_index + page_size], many=True).data,
            "page": {
                "pageNum": page,
                "pageSize": page_size,
                "total": total,
                "totalPages": (total + page_size - 1) // page_size
            }
        })


class AdminReturnStatusView(APIView):
    """POST /api/admin/returns/<id>/status"""
    permission_classes = [IsAdminUser]

    def post(self, request, return_id):
        serializer = ReturnStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid status", serializer.errors)

        try:
            return_request = ReturnRequest.objects.select_related('order').get(id=return_id)
        except ReturnRequest.DoesNotExist:
            return error_response("Return not found", status_code=status.HTTP_404_NOT_FOUND)

        try:
            return_request = ReturnService.update_status(return_request, serializer.validated_data['status'])
        except ValueError as e:
            return error_response(str(e))

        logger.info(f"Admin {request.user.id} set return {return_request.id} to {return_request.status}")
        return success_response(ReturnRequestSerializer(return_request).data, 'Return status updated')
