"""
Checkout and order lookup views.
"""
import logging

from rest_framework.views import APIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework import status

from apps.cart.services import BoundCart, CartService
from apps.common.exceptions import CheckoutValidationError, OrderPersistenceError
from apps.common.utils import success_response, error_response
from ..serializers import (
    CheckoutSerializer, CheckoutPreviewSerializer, OrderSerializer, OrderListSerializer
)
from ..services import CheckoutService, OrderService

logger = logging.getLogger(__name__)


class CheckoutView(APIView):
    """POST /api/orders/checkout places an order from the caller's cart"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(CheckoutValidationError.default_message, serializer.errors)

        data = dict(serializer.validated_data)
        promo_code = data.pop('promo_code', None)
        gift_wrap = data.pop('gift_wrap', False)
        idempotency_key = data.pop('idempotency_key', None) or request.headers.get('Idempotency-Key')

        cart = CartService.get_or_create_cart(request)
        checkout = CheckoutService(BoundCart(cart))
        try:
            result = checkout.submit(
                data,
                promo_code=promo_code,
                gift_wrap=gift_wrap,
                idempotency_key=idempotency_key,
                user=request.user,
            )
        except CheckoutValidationError as exc:
            return error_response(exc.message, exc.errors)
        except OrderPersistenceError as exc:
            return error_response(exc.message, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

        order_data = OrderSerializer(result.order).data
        order_data['checkout'] = result.as_dict()

        if result.replayed:
            return success_response(order_data, 'Order already placed')
        return success_response(order_data, f"Order {result.order.short_id} placed",
                                status_code=status.HTTP_201_CREATED)


class CheckoutPreviewView(APIView):
    """POST /api/orders/preview prices the cart without placing an order"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = CheckoutPreviewSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid preview request", serializer.errors)

        cart = CartService.get_or_create_cart(request)
        totals, promo = CheckoutService(BoundCart(cart)).preview(
            serializer.validated_data.get('promo_code'),
            serializer.validated_data['gift_wrap'],
        )
        return success_response({
            'totals': totals.as_dict(),
            'promo': promo.as_dict() if promo else None,
        })


class MyOrdersView(APIView):
    """GET /api/orders/mine lists the signed-in user's orders"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        orders = OrderService.list_for_user(request.user)
        return success_response(OrderListSerializer(orders, many=True).data)


class TrackOrderView(APIView):
    """GET /api/orders/track/<short_id>?email= for buyers without an account"""
    permission_classes = [AllowAny]

    def get(self, request, short_id):
        email = request.GET.get('email', '')
        if not email:
            return error_response("Email is required to track an order")

        order = OrderService.track(short_id, email)
        if order is None:
            return error_response("Order not found", status_code=status.HTTP_404_NOT_FOUND)
        return success_response(OrderSerializer(order).data)
