from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from contact_relay.config import Settings
from contact_relay.dependencies import (
    get_app_settings,
    get_contact_logger,
    get_dispatcher,
)
from contact_relay.email import EmailDispatcher
from contact_relay.services.contact_service import (
    FAILURE_MESSAGE,
    METHOD_NOT_ALLOWED_MESSAGE,
    handle_submission,
)

logger = logging.getLogger("contact_relay.routers.contact")

router = APIRouter(tags=["contact"])

CORS_MAX_AGE_SECONDS = 86400


def cors_headers(settings: Settings) -> Dict[str, str]:
    """
    CORS headers for the static front end.

    SECURITY: CORS_ALLOW_ORIGIN defaults to '*'; set it to the real site
    origin in production.
    """
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Max-Age": str(CORS_MAX_AGE_SECONDS),
    }


def json_response(
    body: Dict[str, Any],
    status_code: int,
    settings: Settings,
) -> JSONResponse:
    return JSONResponse(
        content=body,
        status_code=status_code,
        headers=cors_headers(settings),
    )


@router.post("/contact")
async def submit_contact(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    dispatcher: EmailDispatcher = Depends(get_dispatcher),
    contact_logger: logging.Logger = Depends(get_contact_logger),
) -> JSONResponse:
    """
    Public endpoint hit by the static site's contact form.

    - Accepts a form-encoded body.
    - Runs honeypot screening, validation, sanitization and one dispatch.
    - Never lets an exception escape: anything unexpected becomes a
      generic 500 envelope.
    """
    try:
        form = await request.form()
        outcome = handle_submission(
            form,
            request.headers.get("user-agent"),
            dispatcher,
            contact_logger,
        )
    except Exception as exc:  # noqa: BLE001
        contact_logger.exception("Contact form error: %s", exc)
        return json_response(
            {"success": False, "message": FAILURE_MESSAGE},
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            settings,
        )

    return json_response(outcome.body, outcome.status_code, settings)


@router.options("/contact")
async def contact_preflight(
    settings: Settings = Depends(get_app_settings),
) -> Response:
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=cors_headers(settings),
    )


@router.api_route(
    "/contact",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def contact_method_not_allowed(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    logger.debug("Rejected %s /contact", request.method)
    return json_response(
        {"success": False, "message": METHOD_NOT_ALLOWED_MESSAGE},
        status.HTTP_405_METHOD_NOT_ALLOWED,
        settings,
    )


__all__ = ["router", "cors_headers", "json_response"]
