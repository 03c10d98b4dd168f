"""
FastAPI application factory.

* Owns the process-lifetime ``RideLedger`` (``app.state.ledger``).
* Registers routes for rides and admin.
* Renders every error as ``{"message": ...}``.
* Applies CORS and rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from aeras.api.middleware import limiter
from aeras.api.routes import admin, rides
from aeras.api.routes.rides import MISSING_INFO
from aeras.config import settings
from aeras.infrastructure.ledger import RideLedger

logging.basicConfig(level=settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s starting", settings.app_name)
    yield
    all_rides, _ = app.state.ledger.list_rides()
    logger.info("%s stopping; %d rides discarded", settings.app_name, len(all_rides))


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _rate_limit_handler(request: Request, exc: RateLimitExceeded):
    response = JSONResponse(
        status_code=429, content={"message": f"Rate limit exceeded: {exc.detail}"}
    )
    return request.app.state.limiter._inject_headers(
        response, request.state.view_rate_limit
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"message": MISSING_INFO})


def create_app(ledger: Optional[RideLedger] = None) -> FastAPI:
    app = FastAPI(
        title="AERAS Ride Ledger API",
        description=(
            "Tracks rickshaw ride requests from creation to drop-off and "
            "keeps each puller's point total."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.ledger = ledger or RideLedger.from_settings(settings)

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)

    # Error bodies
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(admin.router)
    app.include_router(rides.router)

    return app
