"""
Discount services module.
"""
from .discount_service import DiscountService
from .promo_validator import (
    PromoCodeValidator, PromoValidation, RejectionReason, validate_promo_code
)

__all__ = [
    'DiscountService',
    'PromoCodeValidator',
    'PromoValidation',
    'RejectionReason',
    'validate_promo_code',
]
