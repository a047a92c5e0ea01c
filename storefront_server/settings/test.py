"""
Test settings for storefront_server project.
"""

from .base import *

# Use SQLite for testing
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}


# Disable migrations for faster testing
class DisableMigrations:
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None


MIGRATION_MODULES = DisableMigrations()

# Use faster password hasher for testing
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# Disable logging during tests
LOGGING_CONFIG = None

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

CSRF_COOKIE_SECURE = False
SESSION_COOKIE_SECURE = False

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

# Deterministic pricing defaults for the test-suite
STOREFRONT_SHIPPING_FLAT_RATE = '15.00'
STOREFRONT_SHIPPING_FREE_THRESHOLD = '150.00'
STOREFRONT_TAX_RATE = '0.08'
STOREFRONT_GIFT_WRAP_FEE = '5.00'

FCM_PROJECT_ID = 'storefront-test'
FCM_MAX_WORKERS = 4
PUSH_ADMIN_USER_IDS = []
CHECKOUT_NOTIFY_IN_BACKGROUND = False
