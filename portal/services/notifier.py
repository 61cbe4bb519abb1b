"""
Real-Time Notifier

Publish/subscribe keyed by ticket id. Connections join a ticket's subscriber
set and stay in it until they disconnect. Delivery is fire-and-forget: a
connection that was not subscribed at publish time never sees that message
and has to fetch the ticket to catch up.
"""
import asyncio
from collections import defaultdict
from typing import Any, Dict, List, Protocol, Set

from portal.models.schemas import Message
from portal.utils.logger import get_logger

logger = get_logger(__name__)

NEW_MESSAGE_EVENT = "newMessage"

# Seconds a single subscriber may take to accept a frame
DEFAULT_SEND_TIMEOUT = 5.0


class Connection(Protocol):
    """Anything that can push a JSON frame to a client (e.g. a WebSocket)"""

    async def send_json(self, data: Any) -> None:
        ...


def event_frame(event: str, data: Any) -> Dict[str, Any]:
    """Wire frame for a server -> client event"""
    return {"event": event, "data": data}


class TicketNotifier:
    """Subscriber sets per ticket id, with single-threaded dispatch"""

    def __init__(self, send_timeout: float = DEFAULT_SEND_TIMEOUT) -> None:
        self.send_timeout = send_timeout
        self._rooms: Dict[str, Set[Connection]] = defaultdict(set)
        self._memberships: Dict[Connection, Set[str]] = defaultdict(set)

    def subscribe(self, connection: Connection, ticket_id: str) -> None:
        """Add connection to ticket_id's subscriber set"""
        self._rooms[ticket_id].add(connection)
        self._memberships[connection].add(ticket_id)
        logger.info(f"User joined ticket: {ticket_id}")

    def disconnect(self, connection: Connection) -> int:
        """Remove connection from every subscriber set; returns how many it had joined"""
        ticket_ids = self._memberships.pop(connection, set())
        for ticket_id in ticket_ids:
            room = self._rooms.get(ticket_id)
            if room is None:
                continue
            room.discard(connection)
            if not room:
                del self._rooms[ticket_id]
        logger.debug(f"Subscriber removed from {len(ticket_ids)} ticket(s)")
        return len(ticket_ids)

    def subscribers(self, ticket_id: str) -> List[Connection]:
        """Snapshot of the current subscriber set"""
        return list(self._rooms.get(ticket_id, ()))

    async def publish(self, ticket_id: str, message: Message) -> int:
        """
        Deliver a newMessage event to every current subscriber of ticket_id

        Args:
            ticket_id: Ticket the message was appended to
            message: The appended message

        Returns:
            Number of connections the event was delivered to
        """
        frame = event_frame(NEW_MESSAGE_EVENT, message.model_dump())
        delivered = 0

        for connection in self.subscribers(ticket_id):
            try:
                await asyncio.wait_for(connection.send_json(frame), timeout=self.send_timeout)
                delivered += 1
            except Exception as e:
                # No retry: the connection is gone, broken or too slow
                logger.warning(f"Dropping subscriber of ticket {ticket_id}: {e!r}")
                self.disconnect(connection)

        logger.debug(f"Published message on ticket {ticket_id} to {delivered} subscriber(s)")
        return delivered
