"""
Response envelope helpers

Every API response has the shape {"success": bool, "message"?: str, ...payload}.
"""
from typing import Any, Dict, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def envelope(
    success: bool = True,
    message: Optional[str] = None,
    **payload: Any
) -> Dict[str, Any]:
    """Build an envelope body"""
    body: Dict[str, Any] = {"success": success}
    if message is not None:
        body["message"] = message
    body.update(payload)
    return body


def error_response(status_code: int, message: str) -> JSONResponse:
    """Envelope with success=false and the given status"""
    return JSONResponse(
        status_code=status_code,
        content=envelope(success=False, message=message)
    )


def ok_response(**payload: Any) -> JSONResponse:
    """Envelope with success=true and a 200 status"""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=jsonable_encoder(envelope(success=True, **payload))
    )
