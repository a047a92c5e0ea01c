"""
Notification models module.
"""
from .device_token import DeviceToken
from .notification import Notification

__all__ = [
    'DeviceToken',
    'Notification',
]
