"""
Health check endpoint

GET /api/health - uptime plus a check of the storage directories
"""
import asyncio
import os
import time
from pathlib import Path
from typing import Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from portal.config import Settings
from portal.utils.dependencies import get_app_settings
from portal.utils.logger import get_logger
from portal.utils.responses import ok_response

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

# Application start time for uptime calculation
APP_START_TIME = time.time()


# ============================================================================
# Pydantic Models
# ============================================================================

class StorageStatus(BaseModel):
    """Status of a single storage directory"""
    name: str = Field(..., description="Storage name")
    path: str = Field(..., description="Directory path")
    status: str = Field(..., description="Status: healthy, unhealthy")
    error_message: Optional[str] = Field(None, description="Error message if unhealthy")


# ============================================================================
# Check Functions
# ============================================================================

def check_directory(name: str, path: Path) -> StorageStatus:
    """
    Check that a storage directory exists and is writable

    Returns:
        StorageStatus with health information
    """
    if not path.is_dir():
        return StorageStatus(
            name=name,
            path=str(path),
            status="unhealthy",
            error_message="Directory does not exist"
        )

    if not os.access(path, os.R_OK | os.W_OK):
        return StorageStatus(
            name=name,
            path=str(path),
            status="unhealthy",
            error_message="Directory is not readable and writable"
        )

    return StorageStatus(name=name, path=str(path), status="healthy")


def determine_overall_status(storage: Dict[str, StorageStatus]) -> str:
    """
    Determine overall status from storage checks

    Rules:
    - Every directory healthy → "healthy"
    - Otherwise → "unhealthy"
    """
    if all(s.status == "healthy" for s in storage.values()):
        return "healthy"
    return "unhealthy"


# ============================================================================
# API Endpoints
# ============================================================================

@router.get("")
async def health_check(settings: Settings = Depends(get_app_settings)):
    """
    Health check endpoint

    Always returns 200 with the current status; inspect "status" and
    "storage" for problems.
    """
    files_status, tickets_status = await asyncio.gather(
        asyncio.to_thread(check_directory, "files", settings.FILES_PATH),
        asyncio.to_thread(check_directory, "tickets", settings.TICKETS_PATH),
    )
    storage = {"files": files_status, "tickets": tickets_status}

    overall_status = determine_overall_status(storage)
    if overall_status != "healthy":
        unhealthy = [name for name, s in storage.items() if s.status != "healthy"]
        logger.warning(f"Unhealthy storage: {', '.join(unhealthy)}")

    return ok_response(
        status=overall_status,
        version=settings.app_version,
        uptimeSeconds=round(time.time() - APP_START_TIME, 2),
        storage={name: s.model_dump() for name, s in storage.items()}
    )
