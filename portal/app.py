"""
Support Portal - application factory

Builds the FastAPI app and wires its components from an explicit Settings
object.
"""
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from portal.config import Settings, get_settings
from portal.middleware.logging_middleware import LoggingMiddleware
from portal.repositories import FileRepository, TicketRepository
from portal.routes import auth, files, tickets, realtime, health, frontend
from portal.services import CredentialStore, TicketNotifier
from portal.utils.errors import PortalError
from portal.utils.logger import get_logger
from portal.utils.responses import error_response

logger = get_logger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Convert every failure into a {success: false, message} envelope"""

    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"Invalid request to {request.url.path}: {exc.errors()}")
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Server error on {request.url.path}: {exc}", exc_info=exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application and its components from settings

    Args:
        settings: Explicit settings; defaults to get_settings()

    Returns:
        Configured FastAPI app with components on app.state
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Support Portal",
        description="File manager and support tickets with live chat",
        version=settings.app_version
    )

    # Components (wired explicitly, no module-level state)
    notifier = TicketNotifier(send_timeout=settings.notify_send_timeout)
    app.state.settings = settings
    app.state.notifier = notifier
    app.state.credential_store = CredentialStore.from_settings(settings)
    app.state.file_repository = FileRepository(settings.FILES_PATH)
    app.state.ticket_repository = TicketRepository(settings.TICKETS_PATH, notifier=notifier)

    # Middleware added last runs first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(files.router)
    app.include_router(tickets.router)
    app.include_router(realtime.router)
    # Catch-all GET, must stay last
    app.include_router(frontend.router)

    return app

