"""
Common models module.
"""
from .config import SystemConfiguration

__all__ = [
    'SystemConfiguration',
]
