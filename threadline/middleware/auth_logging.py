from fastapi import Request
import logging
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("threadline")

# Routes that are readable without a token
PUBLIC_PREFIXES = ("/api/auth/register", "/api/auth/login", "/api/media/", "/api/feed")

class AuthLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        if not request.headers.get("Authorization") and request.method != "GET":
            if path.startswith("/api/") and not path.startswith(PUBLIC_PREFIXES):
                logger.warning(f"Protected endpoint {request.method} {path} accessed without auth header")

        response = await call_next(request)

        # Log auth-related status codes
        if response.status_code in [401, 403]:
            logger.warning(f"Auth error: {response.status_code} on {path}")

        return response
