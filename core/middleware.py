import logging
import time

from django.conf import settings

logger = logging.getLogger("performance")


class ServerTimingMiddleware:
    """Adds a Server-Timing header to API responses and logs slow requests.

    The threshold comes from the SLOW_REQUEST_MS setting.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.slow_request_ms = settings.SLOW_REQUEST_MS
        self.static_prefix = '/' + settings.STATIC_URL.lstrip('/')

    def __call__(self, request):
        if request.path.startswith(self.static_prefix):
            return self.get_response(request)

        start = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - start) * 1000

        response["Server-Timing"] = f"app;dur={elapsed_ms:.1f}"

        if elapsed_ms > self.slow_request_ms:
            logger.warning(
                "Slow request: %s %s -> %s in %.0fms",
                request.method,
                request.get_full_path(),
                response.status_code,
                elapsed_ms,
            )

        return response
