"""
Ticket Repository

One JSON record per ticket under the tickets directory (<id>.json). Tickets
are created and appended to, never deleted.

Message appends are read-modify-write and are serialized per ticket id, so
two concurrent appends to the same ticket both persist. Ticket creation is
not transactional: a failed write can leave no record behind, but an id is
never reused.
"""
from __future__ import annotations

import asyncio
import json
import time
from collections import defaultdict
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Dict, Optional

from pydantic import ValidationError

from portal.models.schemas import SYSTEM_AUTHOR, ADMIN_USERNAME, Message, Ticket
from portal.services.notifier import TicketNotifier
from portal.utils.errors import BadRequestError, NotFoundError, StorageError
from portal.utils.logger import get_logger
from portal.utils.validators import is_blank, validate_ticket_id

logger = get_logger(__name__)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class TicketRepository:
    """Repository for ticket records and their message logs."""

    def __init__(
        self,
        base_dir: Path,
        notifier: Optional[TicketNotifier] = None,
        clock=_now_ms
    ) -> None:
        self.base_dir = Path(base_dir)
        self.notifier = notifier
        self._clock = clock
        self._last_id = 0
        self._locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = defaultdict(int)

        if not self.base_dir.exists():
            self.base_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created tickets directory: {self.base_dir.resolve()}")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _ticket_path(self, ticket_id: str) -> Path:
        """Get file path for a ticket."""
        return self.base_dir / f"{ticket_id}.json"

    def _next_id(self) -> str:
        """
        Allocate a new ticket id

        Milliseconds since epoch, bumped past the previous id (and any record
        already on disk) when the clock has not advanced. Runs without
        awaiting, so allocation is atomic on the event loop.
        """
        candidate = max(self._clock(), self._last_id + 1)
        while self._ticket_path(str(candidate)).exists():
            candidate += 1
        self._last_id = candidate
        return str(candidate)

    @asynccontextmanager
    async def _ticket_lock(self, ticket_id: str) -> AsyncIterator[None]:
        """Serialize read-modify-write on one ticket; the lock is dropped when unused."""
        lock = self._locks.setdefault(ticket_id, asyncio.Lock())
        self._lock_users[ticket_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[ticket_id] -= 1
            if not self._lock_users[ticket_id]:
                del self._lock_users[ticket_id]
                self._locks.pop(ticket_id, None)

    @staticmethod
    def _write_record(path: Path, ticket: Ticket) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(ticket.to_record(), f, indent=2, ensure_ascii=False)

    @staticmethod
    def _read_record(path: Path) -> Ticket:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return Ticket.model_validate(data)

    async def _load(self, ticket_id: str) -> Ticket:
        if not validate_ticket_id(ticket_id):
            raise NotFoundError("Ticket not found")

        path = self._ticket_path(ticket_id)
        if not path.exists():
            raise NotFoundError("Ticket not found")

        try:
            return await asyncio.to_thread(self._read_record, path)
        except (OSError, ValueError, ValidationError) as e:
            logger.error(f"Error reading ticket {ticket_id}: {e}")
            raise StorageError("Error reading ticket")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def create_ticket(
        self,
        product: Optional[str],
        contact_handle: Optional[str]
    ) -> str:
        """
        Create a ticket with its initial system message

        Args:
            product: Product name
            contact_handle: Discord handle or email of the creator

        Returns:
            The new ticket id

        Raises:
            BadRequestError: If product or contact_handle is missing
            StorageError: If the record cannot be written
        """
        if is_blank(product) or is_blank(contact_handle):
            raise BadRequestError("Product and Discord/Email required")

        ticket_id = self._next_id()
        ticket = Ticket(
            id=ticket_id,
            product=product,
            contact_handle=contact_handle,
            messages=[
                Message(
                    author=SYSTEM_AUTHOR,
                    text=f"Ticket created for {product}. Discord/Email: {contact_handle}"
                )
            ],
            visible_to=[ADMIN_USERNAME, contact_handle]
        )

        try:
            await asyncio.to_thread(self._write_record, self._ticket_path(ticket_id), ticket)
        except OSError as e:
            logger.error(f"Error creating ticket: {e}")
            raise StorageError("Error creating ticket")

        logger.info(f"Ticket created: {ticket_id}")
        return ticket_id

    async def get_ticket(self, ticket_id: str) -> Ticket:
        """
        Load a ticket

        No visibility filtering: anyone holding the id can read the ticket.

        Raises:
            NotFoundError: If no record exists for ticket_id
            StorageError: If the record is unreadable or corrupt
        """
        return await self._load(ticket_id)

    async def append_message(
        self,
        ticket_id: str,
        author: Optional[str],
        text: Optional[str]
    ) -> Message:
        """
        Append a message to a ticket and notify its subscribers

        Args:
            ticket_id: Target ticket
            author: Message author identity
            text: Message body

        Returns:
            The appended message (with its server-assigned timestamp)

        Raises:
            BadRequestError: If author or text is missing
            NotFoundError: If the ticket does not exist
            StorageError: If the record cannot be read or written
        """
        if is_blank(text) or is_blank(author):
            raise BadRequestError("Text and author required")

        async with self._ticket_lock(ticket_id):
            ticket = await self._load(ticket_id)
            message = Message(author=author, text=text)
            ticket.messages.append(message)

            try:
                await asyncio.to_thread(self._write_record, self._ticket_path(ticket_id), ticket)
            except OSError as e:
                logger.error(f"Error saving message on ticket {ticket_id}: {e}")
                raise StorageError("Error saving message")

            logger.info(f"Message appended to ticket {ticket_id} by {author}")

            # Published under the lock so subscribers see append order
            if self.notifier is not None:
                await self.notifier.publish(ticket_id, message)

        return message
