"""
Front-end fallback

Unmatched GET requests serve a file from the static directory when one
exists at that path, and the front-end entry document otherwise (client-side
routing). Registered last so API routes take precedence.
"""
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from portal.config import Settings
from portal.utils.dependencies import get_app_settings
from portal.utils.errors import BadRequestError, NotFoundError
from portal.utils.validators import resolve_within

router = APIRouter(tags=["frontend"])


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(full_path: str, settings: Settings = Depends(get_app_settings)):
    """Serve a static asset or the entry document"""
    if full_path:
        try:
            asset = resolve_within(Path(settings.static_dir), full_path)
        except BadRequestError:
            asset = None
        if asset is not None and asset.is_file():
            return FileResponse(asset)

    entry = settings.FRONTEND_ENTRY_PATH
    if not entry.is_file():
        raise NotFoundError("Front-end entry document not found")
    return FileResponse(entry)
