"""
Order services module.
"""
from .checkout_service import CheckoutResult, CheckoutService, CheckoutState
from .order_service import OrderService
from .pricing import (
    Discount, OrderTotals, PricingSettings, ShippingRule,
    compute_order_totals, load_pricing_settings,
)
from .return_service import ReturnService
from .side_effects import SideEffectOutcome, run_best_effort

__all__ = [
    'CheckoutResult',
    'CheckoutService',
    'CheckoutState',
    'Discount',
    'OrderService',
    'OrderTotals',
    'PricingSettings',
    'ReturnService',
    'ShippingRule',
    'SideEffectOutcome',
    'compute_order_totals',
    'load_pricing_settings',
    'run_best_effort',
]
