"""
Promo code validation endpoint.
"""
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny

from apps.cart.services import BoundCart, CartService
from apps.common.utils import success_response, error_response
from apps.orders.services import CheckoutService
from ..serializers import PromoValidateSerializer


class ValidatePromoView(APIView):
    """
    POST /api/discounts/validate

    Checks a code and previews the totals with and without it. The subtotal
    defaults to the caller's cart. Never counts a use of the code.
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = PromoValidateSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid promo request", serializer.errors)

        data = serializer.validated_data
        checkout = CheckoutService(BoundCart(CartService.get_or_create_cart(request)))
        subtotal = data.get('subtotal')

        without_discount, _ = checkout.preview(None, data['gift_wrap'], subtotal=subtotal)
        with_discount, promo = checkout.preview(data['code'], data['gift_wrap'], subtotal=subtotal)

        if promo is None:
            # Blank code
            payload = {'code': '', 'valid': False, 'reason': 'not_found',
                       'message': 'This promo code is not valid.'}
        else:
            payload = promo.as_dict()

        payload['totals'] = {
            'without_discount': without_discount.as_dict(),
            'with_discount': with_discount.as_dict(),
        }
        return success_response(payload, payload['message'])
