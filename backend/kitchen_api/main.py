"""
Kitchen API main application.
Entry point for the FastAPI back-office server.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from shared.config.constants import ErrorMessages
from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware
from shared.rate_limit import limiter, rate_limit_exceeded_handler
from shared.utils.validation import format_validation_errors
from kitchen_api.core import configure_cors, lifespan
from kitchen_api.routers import api_router


app = FastAPI(
    title=f"{settings.product_name} API",
    description="Restaurant back-office: outlets, ingredients, recipes, costing and reports",
    version="1.0.0",
    lifespan=lifespan,
)

# Rate limiting (report exports)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

app.add_middleware(CorrelationIdMiddleware)
configure_cors(app)


# =============================================================================
# Validation errors
# =============================================================================


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Flat, per-row list of validation messages instead of pydantic's nested dicts."""
    return JSONResponse(
        status_code=422,
        content={
            "detail": ErrorMessages.INVALID_INPUT,
            "errors": format_validation_errors(exc.errors()),
        },
    )


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(api_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "kitchen_api.main:app",
        host="0.0.0.0",
        port=settings.api_port,
        reload=settings.debug,
    )
