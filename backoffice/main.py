"""ASGI entry point: `uvicorn backoffice.main:app`.

create_app() only assembles the pieces (lifespan, rate limiter, error
handlers, CORS, /api/v1 routers). Settings are read inside it, so tests
can adjust the environment before the app is built.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from backoffice.api.v1 import api_router
from backoffice.core.config import get_settings
from backoffice.core.exception_handlers import register_exception_handlers
from backoffice.core.lifespan import create_lifespan
from backoffice.core.limiter import limiter


def _origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_origins(settings.allowed_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
