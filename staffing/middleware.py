import logging
import time

logger = logging.getLogger(__name__)


class RequestLogMiddleware:
    """Log one line per API request with status and duration."""
    PREFIXES = ('/api/', '/healthz')

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path or ''
        if not path.startswith(self.PREFIXES):
            return self.get_response(request)

        start = time.monotonic()
        response = self.get_response(request)
        duration_ms = int((time.monotonic() - start) * 1000)

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            '%s %s -> %s (%dms) ip=%s',
            request.method,
            path,
            response.status_code,
            duration_ms,
            request.META.get('REMOTE_ADDR'),
        )
        return response
