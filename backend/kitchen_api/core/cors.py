"""
CORS for the back-office frontend.

The frontend runs on its own dev server locally and on a separate domain
in production, so the API answers cross-origin requests from the origins
listed in ALLOWED_ORIGINS (or the local dev servers when unset).
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.settings import settings

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    # Vite
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

# Downloads read the report filename from Content-Disposition
EXPOSED_HEADERS = ["X-Request-ID", "Content-Disposition"]


def get_cors_origins() -> list[str]:
    """ALLOWED_ORIGINS split on commas, or the local dev servers."""
    configured = [origin.strip() for origin in settings.allowed_origins.split(",")]
    return [origin for origin in configured if origin] or DEFAULT_CORS_ORIGINS


def configure_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Accept-Language", "X-Request-ID"],
        expose_headers=EXPOSED_HEADERS,
        # No preflight caching in development so origin edits apply at once
        max_age=0 if settings.environment == "development" else 600,
    )
