"""
Promo code validation.

Validation is read-only: it never touches ``used_count``. Usage is counted by
``DiscountService.increment_usage`` once an order carrying the code is placed.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

from django.db import models
from django.utils import timezone

from ..models import DiscountCode
from .discount_service import DiscountService


class RejectionReason(models.TextChoices):
    NOT_FOUND = 'not_found', 'This promo code is not valid.'
    EXPIRED = 'expired', 'This promo code has expired.'
    EXHAUSTED = 'exhausted', 'This promo code has reached its maximum usage limit.'
    INACTIVE = 'inactive', 'This promo code is no longer active.'


@dataclass(frozen=True)
class PromoValidation:
    """Outcome of validating a code: either applied (with the code) or rejected (with a reason)"""
    code: str
    discount: Optional[DiscountCode] = None
    reason: Optional[RejectionReason] = None

    @classmethod
    def applied(cls, discount: DiscountCode) -> 'PromoValidation':
        return cls(code=discount.code, discount=discount)

    @classmethod
    def rejected(cls, code: str, reason: RejectionReason) -> 'PromoValidation':
        return cls(code=code, reason=reason)

    @property
    def is_applied(self) -> bool:
        return self.discount is not None

    @property
    def message(self) -> str:
        if self.is_applied:
            return f"Promo code {self.discount.code} applied: {self.discount.label}"
        return self.reason.label

    def as_dict(self):
        data = {
            'code': self.code,
            'valid': self.is_applied,
            'reason': None if self.is_applied else self.reason.value,
            'message': self.message,
        }
        if self.is_applied:
            data['discount'] = {
                'id': self.discount.id,
                'code': self.discount.code,
                'discount_type': self.discount.discount_type,
                'discount_value': str(self.discount.discount_value),
                'description': self.discount.description,
            }
        return data


class PromoCodeValidator:
    """
    Applies the promo rules in a fixed order: not found, expired, exhausted,
    inactive. The first failing rule decides the rejection reason.

    ``lookup`` resolves a code to a DiscountCode or None; it defaults to the
    case-insensitive database lookup.
    """

    def __init__(self, lookup: Optional[Callable[[str], Optional[DiscountCode]]] = None):
        self.lookup = lookup or DiscountService.get_by_code

    def validate(self, code: str, subtotal: Optional[Decimal] = None, now=None) -> PromoValidation:
        # subtotal is accepted so callers validate with the same context they price with;
        # no rule currently depends on it.
        code = (code or '').strip()
        if not code:
            return PromoValidation.rejected(code, RejectionReason.NOT_FOUND)

        discount = self.lookup(code)
        if discount is None:
            return PromoValidation.rejected(code, RejectionReason.NOT_FOUND)

        now = now or timezone.now()
        if discount.expires_at is not None and discount.expires_at < now:
            return PromoValidation.rejected(code, RejectionReason.EXPIRED)

        if discount.max_uses is not None and discount.used_count >= discount.max_uses:
            return PromoValidation.rejected(code, RejectionReason.EXHAUSTED)

        if not discount.is_active:
            return PromoValidation.rejected(code, RejectionReason.INACTIVE)

        return PromoValidation.applied(discount)


def validate_promo_code(code: str, subtotal: Optional[Decimal] = None, now=None) -> PromoValidation:
    """Validate against the database"""
    return PromoCodeValidator().validate(code, subtotal, now)
