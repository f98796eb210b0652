"""
Request logging middleware.
"""
import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from gallery.utils.logger import set_request_id

logger = logging.getLogger("gallery.request")

SLOW_REQUEST_THRESHOLD_MS = 3000

REQUEST_ID_HEADER = "X-Request-ID"

EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc", "/favicon.ico"}


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Sets a request id and logs failed or slow requests.
    
    - 5xx: ERROR
    - 4xx: WARNING
    - slower than SLOW_REQUEST_THRESHOLD_MS: WARNING
    - everything else: not logged
    """
    
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in EXCLUDED_PATHS:
            return await call_next(request)
        
        rid = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        start = time.perf_counter()
        
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request exception",
                exc_info=True,
                extra={
                    "event": "request",
                    "error_type": type(e).__name__,
                    "http_method": request.method,
                    "http_path": request.url.path,
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                },
            )
            raise
        
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = rid
        
        context = {
            "event": "request",
            "http_method": request.method,
            "http_path": request.url.path,
            "http_status": response.status_code,
            "duration_ms": duration_ms,
        }
        if response.status_code >= 500:
            logger.error("Request error - Server error occurred", extra=context)
        elif response.status_code >= 400:
            logger.warning("Request failed - Client error", extra=context)
        elif duration_ms >= SLOW_REQUEST_THRESHOLD_MS:
            logger.warning("Slow request detected", extra=context)
        
        return response
