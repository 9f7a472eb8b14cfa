"""FastAPI application entry point.

Wiring only: logging, lifespan, exception handlers, middleware, tracing, routers.
No business logic here (SRP). See esgsearch.core.lifespan and
esgsearch.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and optionally
clear get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from esgsearch.api.v1 import api_router
from esgsearch.core.config import get_settings
from esgsearch.core.exception_handlers import register_exception_handlers
from esgsearch.core.lifespan import create_lifespan
from esgsearch.core.limiter import limiter
from esgsearch.middleware import RequestIDMiddleware, TimeoutMiddleware
from esgsearch.shared.telemetry import SearchTelemetry, setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Middleware: first added = innermost. Order (outer -> inner): timeout -> request ID -> CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    telemetry = SearchTelemetry.from_settings(settings)
    if telemetry is not None:
        telemetry.instrument_app(app)
    app.state.telemetry = telemetry

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
