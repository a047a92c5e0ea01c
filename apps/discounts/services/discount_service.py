"""
Discount code persistence: lookup and usage counting.
"""
import logging
from typing import Optional

from django.db.models import F

from ..models import DiscountCode

logger = logging.getLogger(__name__)


class DiscountService:
    """Service class for discount code storage"""

    @staticmethod
    def get_by_code(code: str) -> Optional[DiscountCode]:
        """Case-insensitive lookup; None when no such code exists"""
        code = (code or '').strip()
        if not code:
            return None
        return DiscountCode.objects.filter(code__iexact=code).first()

    @staticmethod
    def increment_usage(discount_id: int) -> int:
        """
        Count one use of a code with a single UPDATE so concurrent orders
        never lose an increment. The max-uses cap is not re-checked here.

        Returns the new used_count.
        """
        updated = DiscountCode.objects.filter(pk=discount_id).update(used_count=F('used_count') + 1)
        if not updated:
            raise DiscountCode.DoesNotExist(f"Discount {discount_id} not found")

        used_count = DiscountCode.objects.values_list('used_count', flat=True).get(pk=discount_id)
        logger.info(f"Discount {discount_id} used_count is now {used_count}")
        return used_count
