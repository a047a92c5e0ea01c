"""
Common views module.
"""
from .settings_views import PricingSettingsView

__all__ = [
    'PricingSettingsView',
]
