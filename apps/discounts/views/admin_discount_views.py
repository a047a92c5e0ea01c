"""
Admin discount code management.
"""
from rest_framework.views import APIView
from rest_framework.permissions import IsAdminUser
from rest_framework import status

from apps.common.utils import success_response, error_response
from ..models import DiscountCode
from ..serializers import DiscountCodeSerializer


class AdminDiscountListView(APIView):
    """GET lists every code, POST creates one"""
    permission_classes = [IsAdminUser]

    def get(self, request):
        discounts = DiscountCode.objects.all()
        if request.GET.get('active') in ('1', 'true'):
            discounts = discounts.filter(is_active=True)
        return success_response(DiscountCodeSerializer(discounts, many=True).data)

    def post(self, request):
        serializer = DiscountCodeSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid discount code", serializer.errors)
        discount = serializer.save()
        return success_response(DiscountCodeSerializer(discount).data, 'Discount code created',
                                status_code=status.HTTP_201_CREATED)


class AdminDiscountDetailView(APIView):
    permission_classes = [IsAdminUser]

    def _get(self, pk):
        try:
            return DiscountCode.objects.get(pk=pk)
        except DiscountCode.DoesNotExist:
            return None

    def get(self, request, pk):
        discount = self._get(pk)
        if discount is None:
            return error_response("Discount code not found", status_code=status.HTTP_404_NOT_FOUND)
        return success_response(DiscountCodeSerializer(discount).data)

    def patch(self, request, pk):
        discount = self._get(pk)
        if discount is None:
            return error_response("Discount code not found", status_code=status.HTTP_404_NOT_FOUND)
        serializer = DiscountCodeSerializer(discount, data=request.data, partial=True)
        if not serializer.is_valid():
            return error_response("Invalid discount code", serializer.errors)
        discount = serializer.save()
        return success_response(DiscountCodeSerializer(discount).data, 'Discount code updated')

    def delete(self, request, pk):
        discount = self._get(pk)
        if discount is None:
            return error_response("Discount code not found", status_code=status.HTTP_404_NOT_FOUND)
        discount.delete()
        return success_response(None, 'Discount code deleted')
