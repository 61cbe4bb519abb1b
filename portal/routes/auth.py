"""
Login route

Plain credential check; no session or token is issued. The front-end keeps
the returned user block and routes to the redirect target.
"""
import json

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from portal.config import Settings
from portal.models.schemas import LoginRequest, UserInfo
from portal.services import CredentialStore
from portal.utils.dependencies import get_app_settings, get_credential_store
from portal.utils.errors import UnauthorizedError
from portal.utils.logger import get_logger
from portal.utils.responses import ok_response

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])


async def parse_login(request: Request) -> LoginRequest:
    """
    Read the login body leniently

    A missing, malformed or non-object body yields empty credentials, so
    every bad login ends in the same 401.
    """
    body_bytes = await request.body()
    if not body_bytes:
        return LoginRequest()

    try:
        return LoginRequest.model_validate(json.loads(body_bytes))
    except (ValueError, ValidationError):
        logger.debug("Unusable login body")
        return LoginRequest()


@router.post("/login")
async def login(
    body: LoginRequest = Depends(parse_login),
    store: CredentialStore = Depends(get_credential_store),
    settings: Settings = Depends(get_app_settings)
):
    """
    Check username/password against the credential store

    Body: {"username": ..., "password": ...}

    Returns:
        {"success": true, "redirect": ..., "user": {"username", "isAdmin"}}

    Raises:
        UnauthorizedError: On any mismatch or unusable body (401)
    """
    logger.info(f"Login attempt: {body.username}")

    result = store.authenticate(body.username, body.password)
    if not result.is_valid:
        logger.warning(f"Invalid credentials for: {body.username}")
        raise UnauthorizedError("Invalid credentials")

    user = UserInfo(username=body.username, is_admin=result.is_admin)
    return ok_response(
        redirect=settings.login_redirect,
        user=user.model_dump(by_alias=True)
    )
