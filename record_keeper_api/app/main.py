"""
Main entrypoint for the Record Keeper API.

This module assembles the FastAPI application: it sets up logging,
builds the identity and record stores, the process-wide session and the
notification feed, and includes the versioned API routers plus the
view routes.  ``create_app`` is called at import time to produce
``app``, so the service can be run with uvicorn, e.g.::

    uvicorn record_keeper_api.app.main:app --reload

The stores are owned by the application instance (``app.state``); two
apps built by ``create_app`` share nothing except, optionally, the
session slot database.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import Settings, settings
from .core.errors import RecordKeeperError, to_http_exception
from .core.logging_config import parse_logger_levels, setup_logging
from .services.identity_service import SEED_IDENTITIES, IdentityStore
from .services.notification_service import NotificationService
from .services.record_service import SEED_RECORDS, RecordStore
from .services.session_service import Session
from .services.slot_service import SlotService
from .views import not_found_redirect_handler, router as views_router


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed payloads as ``ValidationFailed`` (HTTP 400)."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "; ".join(messages) or "Validation failed"},
    )


async def service_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map errors that escaped the endpoint ``try`` blocks.

    Service errors raised from dependencies or views keep their status
    code; anything else becomes ``ValidationFailed`` with the generic
    message.
    """
    http_exc = to_http_exception(exc)
    return JSONResponse(
        status_code=http_exc.status_code,
        content={"detail": http_exc.detail},
        headers=http_exc.headers,
    )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module-level ``settings``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    cfg = app_settings or settings
    # Initialise logging before anything else so that the stores can
    # safely log while being built.
    setup_logging(cfg.log_level, cfg.log_file or None, parse_logger_levels(cfg.log_levels))
    logger = logging.getLogger(__name__)

    app = FastAPI(title=cfg.project_name, version=cfg.api_version, debug=cfg.debug)

    identities = IdentityStore(SEED_IDENTITIES if cfg.seed_demo_data else ())
    records = RecordStore(identities, SEED_RECORDS if cfg.seed_demo_data else ())
    session = Session(identities, SlotService(cfg.session_db_path), slot_key=cfg.session_key)
    session.restore()

    app.state.settings = cfg
    app.state.identities = identities
    app.state.records = records
    app.state.session = session
    app.state.notifications = NotificationService(cfg.notification_history)

    app.include_router(v1_router, prefix="/api/v1")
    app.include_router(views_router, tags=["views"])

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_redirect_handler)
    app.add_exception_handler(RecordKeeperError, service_exception_handler)
    app.add_exception_handler(Exception, service_exception_handler)

    logger.info(
        "%s started with %s identities and %s records",
        cfg.project_name,
        len(identities),
        len(records),
    )
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
