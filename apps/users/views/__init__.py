"""
User views module.
"""
from .user_views import RegisterView, UserProfileView

__all__ = [
    'RegisterView',
    'UserProfileView',
]
