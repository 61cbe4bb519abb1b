"""
API request logging

Only API calls are logged (login, file manager, tickets), each tagged with
the file or ticket it targets. Front-end fallback hits (entry document and
static assets) and the health check pass through silently. The /ws live
channel is not HTTP and logs from its own route.
"""
import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from portal.utils.logger import get_logger

logger = get_logger(__name__)

API_PREFIXES = ("/files/", "/tickets/")
FILE_API_PATHS = {"/files/list", "/files/read", "/files/write", "/files/delete"}


def is_api_path(path: str) -> bool:
    return path == "/login" or path.startswith(API_PREFIXES)


def describe_target(request: Request) -> str:
    """
    Short tag naming the file or ticket a request is about

    Examples:
        GET /files/read?filename=a.txt -> "file=a.txt"
        GET /files/a.txt               -> "file=a.txt"
        POST /tickets/17/message       -> "ticket=17"
    """
    path = request.url.path

    if path.startswith("/tickets/"):
        ticket_id = path.split("/")[2]
        return "" if ticket_id in ("", "create") else f"ticket={ticket_id}"

    filename = request.query_params.get("filename")
    if filename:
        return f"file={filename}"
    if path.startswith("/files/") and path not in FILE_API_PATHS:
        return f"file={path[len('/files/'):]}"

    # Write/delete carry the filename in the body; the repository logs those
    return ""


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log API calls with status, duration and target; never log bodies."""

    async def dispatch(self, request: Request, call_next: Callable):
        path = request.url.path
        if not is_api_path(path):
            return await call_next(request)

        start_time = time.time()
        target = describe_target(request)
        label = f"{request.method} {path}" + (f" [{target}]" if target else "")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.error(f"✗ {label} ERROR ({duration_ms}ms): {e}", exc_info=True)
            raise

        duration_ms = int((time.time() - start_time) * 1000)
        log = logger.warning if response.status_code >= 500 else logger.info
        log(f"{label} {response.status_code} ({duration_ms}ms)")

        response.headers["X-Process-Time"] = str(duration_ms)
        return response
