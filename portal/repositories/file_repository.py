"""
File Repository

CRUD over plain files in a single directory, keyed by filename. Blocking disk
I/O runs in a worker thread so the event loop keeps serving other requests.

Writes are not locked: concurrent writers to the same filename race and the
last one to finish wins.
"""
from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import List, Optional

from portal.utils.errors import BadRequestError, NotFoundError, StorageError
from portal.utils.logger import get_logger
from portal.utils.validators import is_blank, resolve_within

logger = get_logger(__name__)


class FileRepository:
    """Repository for the file manager directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = Path(base_dir)
        if not self.base_dir.exists():
            self.base_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created files directory: {self.base_dir.resolve()}")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _path_for(self, filename: Optional[str]) -> Path:
        """Validate filename and resolve it inside base_dir."""
        if is_blank(filename):
            raise BadRequestError("Filename required")
        return resolve_within(self.base_dir, filename)

    @staticmethod
    def _read(path: Path) -> str:
        # newline="" keeps the content byte-exact
        with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
            return f.read()

    @staticmethod
    def _write(path: Path, content: str) -> None:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def list_files(self) -> List[str]:
        """
        List filenames in the repository

        Returns:
            Sorted filenames; empty list for an empty directory

        Raises:
            StorageError: If the directory cannot be read
        """
        try:
            files = await asyncio.to_thread(os.listdir, self.base_dir)
        except OSError as e:
            logger.error(f"Error listing files: {e}")
            raise StorageError(f"Error listing files: {e.strerror or e}")

        files.sort()
        logger.debug(f"Files listed: {files}")
        return files

    async def read_file(self, filename: Optional[str]) -> str:
        """
        Read a file's full content

        Raises:
            BadRequestError: If filename is missing or escapes the directory
            NotFoundError: If the file does not exist
            StorageError: On any other read failure
        """
        path = self._path_for(filename)
        if not path.exists():
            raise NotFoundError("File not found")

        try:
            content = await asyncio.to_thread(self._read, path)
        except OSError as e:
            logger.error(f"Error reading file {filename}: {e}")
            raise StorageError(f"Error reading file: {e.strerror or e}")

        logger.info(f"File read: {filename}")
        return content

    def locate_file(self, filename: Optional[str]) -> Path:
        """
        Path of an existing file, for streaming downloads

        Raises:
            BadRequestError: If filename is missing or escapes the directory
            NotFoundError: If no regular file exists under that name
        """
        path = self._path_for(filename)
        if not path.is_file():
            raise NotFoundError("File not found")
        return path

    async def write_file(self, filename: Optional[str], content: Optional[str]) -> None:
        """
        Create or fully overwrite a file

        An empty string is valid content; None is not.

        Raises:
            BadRequestError: If filename or content is missing
            StorageError: If the write fails
        """
        if is_blank(filename) or content is None:
            raise BadRequestError("Filename and content required")
        path = self._path_for(filename)

        try:
            await asyncio.to_thread(self._write, path, content)
        except OSError as e:
            logger.error(f"Error writing file {filename}: {e}")
            raise StorageError(f"Error writing file: {e.strerror or e}")

        logger.info(f"File written: {filename}")

    async def delete_file(self, filename: Optional[str]) -> None:
        """
        Remove a file

        Raises:
            BadRequestError: If filename is missing
            NotFoundError: If the file does not exist
            StorageError: If removal fails
        """
        path = self._path_for(filename)
        if not path.exists():
            raise NotFoundError("File not found")

        try:
            await asyncio.to_thread(path.unlink)
        except OSError as e:
            logger.error(f"Error deleting file {filename}: {e}")
            raise StorageError(f"Error deleting file: {e.strerror or e}")

        logger.info(f"File deleted: {filename}")
