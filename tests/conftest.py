"""
Test configuration for the storefront server.
"""
import os

import django
import pytest


def pytest_configure():
    """Configure Django settings for testing."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'storefront_server.settings.test')
    django.setup()


@pytest.fixture
def user_factory():
    from tests.factories import UserFactory
    return UserFactory


@pytest.fixture
def admin_user():
    from tests.factories import AdminUserFactory
    return AdminUserFactory()


@pytest.fixture
def api_client():
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def sample_product():
    from tests.factories import ProductFactory
    return ProductFactory()


@pytest.fixture
def rsa_private_key_pem():
    """Throwaway RSA key for signing service-account assertions"""
    from cryptography.hazmat.primitives import serialization
    from cryptography.hazmat.primitives.asymmetric import rsa

    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()
