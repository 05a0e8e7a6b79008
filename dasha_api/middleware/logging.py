import os
import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

access_logger = logging.getLogger("dasha_api.access")


class LoggingMiddleware(BaseHTTPMiddleware):
    """One ``http_access`` record per request when ``LOGGING_ENABLED=true``."""

    async def dispatch(self, request: Request, call_next):
        if os.getenv("LOGGING_ENABLED", "false").lower() != "true":
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        access_logger.info(
            "http_access",
            extra={
                "client_ip": request.client.host if request.client else None,
                "http_method": request.method,
                "endpoint": request.url.path,
                "status": response.status_code,
                "latency_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return response
