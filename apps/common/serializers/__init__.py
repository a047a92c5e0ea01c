"""
Common serializers module.
"""
from .settings_serializers import PricingSettingsSerializer

__all__ = [
    'PricingSettingsSerializer',
]
