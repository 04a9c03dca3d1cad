from __future__ import annotations

import logging
import os
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from asus_model_api.catalog import ModelLookupError, supported_models
from asus_model_api.config import Settings, get_settings
from asus_model_api.middlewares.rate_limit import (
    FixedWindowRateLimiter,
    RateLimitMiddleware,
    client_key,
    global_key,
)
from asus_model_api.middlewares.security_headers import SecurityHeadersMiddleware
from asus_model_api.routes import catalog_router
from asus_model_api.schemas import HealthResponse
from asus_model_api.services.assembly import utc_timestamp

SERVICE_NAME = "asus-model-api"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# keep uvicorn loggers on the service level
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logging.getLogger("uvicorn").setLevel(LOG_LEVEL)
logging.getLogger("uvicorn.error").setLevel(LOG_LEVEL)
logging.getLogger("uvicorn.access").setLevel(LOG_LEVEL)
logging.getLogger(SERVICE_NAME).setLevel(LOG_LEVEL)

logger = logging.getLogger(SERVICE_NAME)


async def _model_lookup_error(request: Request, exc: ModelLookupError) -> JSONResponse:
    logger.info(
        "model lookup rejected",
        extra={"path": request.url.path, "status": exc.status_code, "query_model": request.query_params.get("model")},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.payload)


def _add_rate_limit(app: FastAPI, settings: Settings) -> None:
    cfg = settings.rate_limit
    if not cfg.enabled:
        logger.info("Rate limiting disabled")
        return
    limiter = FixedWindowRateLimiter(max_requests=cfg.max_requests, window_seconds=cfg.window_seconds)
    app.add_middleware(
        RateLimitMiddleware,
        limiter=limiter,
        key_func=client_key if cfg.per_client else global_key,
    )
    logger.info(
        "RateLimitMiddleware ready",
        extra={"max_requests": cfg.max_requests, "window_seconds": cfg.window_seconds, "per_client": cfg.per_client},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="ASUS Model API", version="1.0.0")
    app.state.settings = settings

    _add_rate_limit(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)

    allow_all = "*" in settings.allowed_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.allowed_origins,
        allow_credentials=not allow_all,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        max_age=86400,
    )

    app.add_exception_handler(ModelLookupError, _model_lookup_error)  # type: ignore[arg-type]

    @app.get("/", include_in_schema=False)
    def root() -> dict[str, Any]:
        return {"service": SERVICE_NAME, "ok": True}

    @app.head("/", include_in_schema=False)
    def root_head() -> Response:
        return Response(status_code=200)

    @app.get("/api/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(ok=True, service=SERVICE_NAME, time=utc_timestamp())

    app.include_router(catalog_router)

    logger.info(
        "%s ready",
        SERVICE_NAME,
        extra={
            "environment": settings.environment,
            "allowed_origins": settings.allowed_origins,
            "supported_models": supported_models(),
            "fetch_timeout_s": settings.fetch.timeout_seconds,
        },
    )
    return app


app = create_app()

__all__ = ["app", "create_app"]
