"""
Per-client rate limiting for report downloads (slowapi).

PDF and XLSX generation runs inside the request and is CPU heavy, so the
export endpoints carry ``@limiter.limit(settings.export_rate_limit)``.
slowapi needs the decorated endpoint to take a ``request: Request``
argument. Tests switch the limiter off with RATE_LIMIT_ENABLED=false.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from shared.config.settings import settings

RATE_LIMITED_MESSAGE = "Çok fazla rapor isteği. Lütfen biraz bekleyip tekrar deneyin."

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 with the Turkish message and the limit that was hit."""
    return JSONResponse(
        status_code=429,
        content={"detail": RATE_LIMITED_MESSAGE, "limit": exc.detail},
        headers={"Retry-After": "60"},
    )
