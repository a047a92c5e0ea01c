"""
Request timing and API error handling middleware
"""

import logging
import time
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger('storefront.requests')


class RequestLoggingMiddleware(MiddlewareMixin):
    """
    Logs method, path, status and duration of every API request, and turns
    uncaught exceptions on /api/ paths into a generic JSON 500 response
    """

    def __call__(self, request):
        start_time = time.time()
        response = self.get_response(request)

        if request.path.startswith('/api/'):
            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                f"{request.method} {request.path} -> {response.status_code} "
                f"({duration_ms:.1f}ms) client={self._get_client_ip(request)}"
            )

        return response

    def process_exception(self, request, exception):
        """Hide internal details of unhandled errors from API clients"""
        logger.error(f"Exception in {request.path}: {str(exception)}", exc_info=True)

        if request.path.startswith('/api/'):
            return JsonResponse({
                'code': 500,
                'msg': 'Internal server error, please try again later',
                'data': None
            }, status=500)

        return None

    def _get_client_ip(self, request):
        """Get client IP address"""
        x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
        if x_forwarded_for:
            return x_forwarded_for.split(',')[0].strip()
        return request.META.get('REMOTE_ADDR', '127.0.0.1')
