from __future__ import annotations

import logging
from typing import Dict

from dotenv import load_dotenv

# Load .env before settings are read so every module sees the same env.
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from contact_relay.config import Settings, get_settings
from contact_relay.dependencies import get_app_settings
from contact_relay.routers import contact as contact_router
from contact_relay.services.contact_service import (
    FAILURE_MESSAGE,
    METHOD_NOT_ALLOWED_MESSAGE,
)

logger = logging.getLogger("contact_relay.main")


def _request_settings(app: FastAPI) -> Settings:
    """Settings as the routes see them, honoring dependency overrides."""
    provider = app.dependency_overrides.get(get_app_settings, get_app_settings)
    return provider()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, debug=settings.debug)

    app.include_router(contact_router.router)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> Response:
        """Methods with no route of their own still get the JSON envelope."""
        if exc.status_code != 405:
            return await http_exception_handler(request, exc)

        logger.debug("Rejected %s %s", request.method, request.url.path)
        return contact_router.json_response(
            {"success": False, "message": METHOD_NOT_ALLOWED_MESSAGE},
            405,
            _request_settings(app),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
        """Last-resort boundary: JSON envelope, no stack trace to the caller."""
        logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
        return contact_router.json_response(
            {"success": False, "message": FAILURE_MESSAGE},
            500,
            _request_settings(app),
        )

    @app.on_event("startup")
    async def on_startup() -> None:
        logger.info(
            "Starting %s (env=%s, provider=%s)",
            settings.app_name,
            settings.environment,
            settings.email_provider,
        )

    @app.get("/healthz")
    async def healthcheck() -> Dict[str, str]:
        return {"status": "ok", "app": settings.app_name}

    return app


app = create_app()
