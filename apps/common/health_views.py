"""
Health check for monitoring the storefront API.

The database and the cache (which holds the FCM access token) must answer
for the service to be healthy. Push configuration is reported but never
fails the check: checkout keeps working without it.
"""
import logging
import os
import time

from django.conf import settings
from django.core.cache import cache
from django.db import connection, DatabaseError
from django.http import JsonResponse
from django.utils import timezone
from django.views import View

logger = logging.getLogger(__name__)

CACHE_CHECK_KEY = 'health:check'


def check_database():
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            row = cursor.fetchone()
    except DatabaseError as e:
        logger.error(f"Database health check failed: {e}")
        return {'status': 'unhealthy', 'message': 'Database connection failed'}
    if not row or row[0] != 1:
        return {'status': 'unhealthy', 'message': 'Database query returned unexpected result'}
    return {'status': 'healthy'}


def check_cache():
    # Cache backends raise their own exception types
    try:
        cache.set(CACHE_CHECK_KEY, 'ok', 10)
        ok = cache.get(CACHE_CHECK_KEY) == 'ok'
    except Exception as e:
        logger.error(f"Cache health check failed: {e}")
        return {'status': 'unhealthy', 'message': 'Cache unavailable'}
    return {'status': 'healthy'} if ok else {'status': 'unhealthy', 'message': 'Cache did not keep a value'}


def push_configuration():
    account_file = settings.FCM_SERVICE_ACCOUNT_FILE
    return {
        'service_account': bool(account_file) and os.path.isfile(account_file),
        'project_id': bool(settings.FCM_PROJECT_ID),
        'background_delivery': settings.CHECKOUT_NOTIFY_IN_BACKGROUND,
    }


class BasicHealthCheckView(View):
    """GET /api/health/ answers 200 when healthy and 503 otherwise. No authentication."""

    def get(self, request):
        start_time = time.time()

        checks = {
            'database': check_database(),
            'cache': check_cache(),
        }
        healthy = all(check['status'] == 'healthy' for check in checks.values())

        return JsonResponse({
            'status': 'healthy' if healthy else 'unhealthy',
            'timestamp': timezone.now().isoformat(),
            'checks': checks,
            'push': push_configuration(),
            'response_time_ms': round((time.time() - start_time) * 1000, 2),
        }, status=200 if healthy else 503)
