"""
Order total calculation.

``compute_order_totals`` is a pure function of its arguments: no database,
no clock. ``load_pricing_settings`` is the only part that reads configuration.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from django.conf import settings

from apps.common.models import SystemConfiguration
from apps.common.utils import quantize_money, to_decimal

ZERO = Decimal('0.00')

SHIPPING_FLAT_RATE_KEY = 'shipping.flat_rate'
SHIPPING_FREE_THRESHOLD_KEY = 'shipping.free_threshold'
TAX_RATE_KEY = 'tax.rate'
GIFT_WRAP_FEE_KEY = 'checkout.gift_wrap_fee'


@dataclass(frozen=True)
class ShippingRule:
    """Flat shipping fee, waived when the subtotal is strictly above the threshold"""
    flat_rate: Decimal
    free_threshold: Decimal

    def fee_for(self, subtotal: Decimal) -> Decimal:
        if subtotal > self.free_threshold:
            return ZERO
        return quantize_money(self.flat_rate)


@dataclass(frozen=True)
class Discount:
    """The pricing-relevant part of a discount code"""
    kind: str
    value: Decimal

    PERCENTAGE = 'percentage'
    FIXED = 'fixed'

    @classmethod
    def from_code(cls, discount_code) -> Optional['Discount']:
        if discount_code is None:
            return None
        return cls(kind=discount_code.discount_type, value=to_decimal(discount_code.discount_value))

    def amount_for(self, subtotal: Decimal) -> Decimal:
        if self.kind == self.PERCENTAGE:
            return quantize_money(subtotal * self.value / Decimal('100'))
        return quantize_money(min(self.value, subtotal))


@dataclass(frozen=True)
class PricingSettings:
    shipping: ShippingRule
    tax_rate: Decimal
    gift_wrap_fee: Decimal

    def add_on_fees(self, gift_wrap: bool = False) -> Decimal:
        return quantize_money(self.gift_wrap_fee) if gift_wrap else ZERO


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    shipping_fee: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    add_on_fees: Decimal
    grand_total: Decimal

    def as_dict(self):
        return {
            'subtotal': str(self.subtotal),
            'shipping_fee': str(self.shipping_fee),
            'tax_amount': str(self.tax_amount),
            'discount_amount': str(self.discount_amount),
            'add_on_fees': str(self.add_on_fees),
            'grand_total': str(self.grand_total),
        }


def compute_order_totals(subtotal, discount: Optional[Discount], shipping_rule: ShippingRule,
                         tax_rate, add_on_fees=ZERO) -> OrderTotals:
    """
    Derive shipping, tax, discount and grand total from a cart subtotal.

    Rounding is half-up to cents at each derived amount. The discount is
    capped at everything that is charged, so the grand total never goes
    negative.
    """
    subtotal = quantize_money(subtotal)
    add_on_fees = quantize_money(add_on_fees)

    shipping_fee = shipping_rule.fee_for(subtotal)
    tax_amount = quantize_money(subtotal * to_decimal(tax_rate))

    discount_amount = discount.amount_for(subtotal) if discount else ZERO
    discount_amount = min(discount_amount, subtotal + shipping_fee + tax_amount + add_on_fees)

    grand_total = max(ZERO, subtotal + shipping_fee + tax_amount - discount_amount + add_on_fees)

    return OrderTotals(
        subtotal=subtotal,
        shipping_fee=shipping_fee,
        tax_amount=tax_amount,
        discount_amount=discount_amount,
        add_on_fees=add_on_fees,
        grand_total=quantize_money(grand_total),
    )


def load_pricing_settings() -> PricingSettings:
    """Read the shipping rule, tax rate and gift-wrap fee, preferring admin overrides"""
    return PricingSettings(
        shipping=ShippingRule(
            flat_rate=SystemConfiguration.get_decimal(
                SHIPPING_FLAT_RATE_KEY, settings.STOREFRONT_SHIPPING_FLAT_RATE),
            free_threshold=SystemConfiguration.get_decimal(
                SHIPPING_FREE_THRESHOLD_KEY, settings.STOREFRONT_SHIPPING_FREE_THRESHOLD),
        ),
        tax_rate=SystemConfiguration.get_decimal(TAX_RATE_KEY, settings.STOREFRONT_TAX_RATE),
        gift_wrap_fee=SystemConfiguration.get_decimal(GIFT_WRAP_FEE_KEY, settings.STOREFRONT_GIFT_WRAP_FEE),
    )
