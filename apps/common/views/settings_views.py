"""
Admin view for the store's pricing settings.
"""
from rest_framework.views import APIView
from rest_framework.permissions import IsAdminUser

from apps.common.models import SystemConfiguration
from apps.common.serializers import PricingSettingsSerializer
from apps.common.utils import success_response, error_response
from apps.orders.services.pricing import (
    GIFT_WRAP_FEE_KEY, SHIPPING_FLAT_RATE_KEY, SHIPPING_FREE_THRESHOLD_KEY, TAX_RATE_KEY,
    load_pricing_settings,
)

SETTING_KEYS = {
    'shipping_flat_rate': (SHIPPING_FLAT_RATE_KEY, 'Flat shipping fee'),
    'shipping_free_threshold': (SHIPPING_FREE_THRESHOLD_KEY, 'Subtotal above which shipping is free'),
    'tax_rate': (TAX_RATE_KEY, 'Tax rate applied to the subtotal'),
    'gift_wrap_fee': (GIFT_WRAP_FEE_KEY, 'Gift wrap add-on fee'),
}


def pricing_settings_data():
    pricing = load_pricing_settings()
    return {
        'shipping_flat_rate': str(pricing.shipping.flat_rate),
        'shipping_free_threshold': str(pricing.shipping.free_threshold),
        'tax_rate': str(pricing.tax_rate),
        'gift_wrap_fee': str(pricing.gift_wrap_fee),
    }


class PricingSettingsView(APIView):
    """GET /api/admin/settings/pricing returns the effective values; PUT overrides them"""
    permission_classes = [IsAdminUser]

    def get(self, request):
        return success_response(pricing_settings_data())

    def put(self, request):
        serializer = PricingSettingsSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid pricing settings", serializer.errors)

        for field, (key, description) in SETTING_KEYS.items():
            SystemConfiguration.set_value(key, str(serializer.validated_data[field]), description, request.user)
        return success_response(pricing_settings_data(), 'Pricing settings updated')
