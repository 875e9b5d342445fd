from fastapi import Request
import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware

from threadline.core.config import settings

logger = logging.getLogger("threadline")

# Profile pictures are fetched on every feed render; keep them out of INFO logs
QUIET_PREFIXES = (f"{settings.API_PREFIX}/media/",)

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        path = request.url.path
        target = f"{path}?{request.url.query}" if request.url.query else path
        level = logging.DEBUG if path.startswith(QUIET_PREFIXES) else logging.INFO

        logger.log(level, f"Request: {request.method} {target}")

        response = await call_next(request)

        elapsed = time.perf_counter() - start_time
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        if response.status_code >= 500:
            logger.error(f"Response: {response.status_code} for {request.method} {target} in {elapsed:.4f}s")
        else:
            logger.log(level, f"Response: {response.status_code} in {elapsed:.4f}s")

        return response
