"""
File Manager API Routes
"""
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from portal.models.schemas import FileWriteRequest, FileDeleteRequest
from portal.repositories import FileRepository
from portal.utils.dependencies import get_file_repository
from portal.utils.logger import get_logger
from portal.utils.responses import ok_response

logger = get_logger(__name__)

router = APIRouter(prefix="/files", tags=["files"])


@router.get("/list")
async def list_files(repo: FileRepository = Depends(get_file_repository)):
    """List every filename in the file manager directory"""
    files = await repo.list_files()
    return ok_response(files=files)


@router.get("/read")
async def read_file(
    filename: Optional[str] = None,
    repo: FileRepository = Depends(get_file_repository)
):
    """Return a file's content (?filename=...)"""
    content = await repo.read_file(filename)
    return ok_response(content=content)


@router.post("/write")
async def write_file(
    body: FileWriteRequest,
    repo: FileRepository = Depends(get_file_repository)
):
    """Create or overwrite a file; empty content is allowed"""
    await repo.write_file(body.filename, body.content)
    return ok_response()


@router.post("/delete")
async def delete_file(
    body: FileDeleteRequest,
    repo: FileRepository = Depends(get_file_repository)
):
    """Delete a file"""
    await repo.delete_file(body.filename)
    return ok_response()


# Registered after /list and /read so those names keep their API meaning
@router.get("/{filename:path}")
async def download_file(
    filename: str,
    repo: FileRepository = Depends(get_file_repository)
):
    """Public download of a stored file (raw content, not an envelope)"""
    path = repo.locate_file(filename)
    logger.info(f"File downloaded: {filename}")
    return FileResponse(path)
