"""
Live chat channel

A client opens /ws and sends event frames:

    {"event": "joinTicket", "data": "<ticketId>"}

The server acknowledges with {"event": "joined", "data": "<ticketId>"} and
from then on pushes {"event": "newMessage", "data": {timestamp, author, text}}
for every message appended to that ticket. Membership ends when the socket
closes.
"""
import json
from typing import Any

from fastapi import APIRouter, WebSocket

from portal.services.notifier import TicketNotifier, event_frame
from portal.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["realtime"])

JOIN_TICKET_EVENT = "joinTicket"
JOINED_EVENT = "joined"


async def handle_frame(websocket: WebSocket, notifier: TicketNotifier, frame: Any) -> None:
    """Dispatch one client frame"""
    if not isinstance(frame, dict):
        logger.debug("Ignoring non-object frame")
        return

    event = frame.get("event")
    if event == JOIN_TICKET_EVENT:
        ticket_id = frame.get("data")
        if not isinstance(ticket_id, (str, int)) or isinstance(ticket_id, bool) or ticket_id == "":
            logger.debug(f"Ignoring joinTicket without ticket id: {ticket_id!r}")
            return
        ticket_id = str(ticket_id)
        notifier.subscribe(websocket, ticket_id)
        await websocket.send_json(event_frame(JOINED_EVENT, ticket_id))
    else:
        logger.debug(f"Ignoring unknown event: {event!r}")


@router.websocket("/ws")
async def ticket_channel(websocket: WebSocket):
    """Persistent connection carrying ticket subscriptions"""
    notifier: TicketNotifier = websocket.app.state.notifier

    await websocket.accept()
    client = f"{websocket.client.host}:{websocket.client.port}" if websocket.client else "unknown"
    logger.info(f"Live connection opened: {client}")

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            try:
                frame = json.loads(message.get("text") or "")
            except ValueError:
                logger.debug("Ignoring malformed frame")
                continue
            await handle_frame(websocket, notifier, frame)
    finally:
        joined = notifier.disconnect(websocket)
        logger.info(f"Live connection closed: {client} ({joined} ticket(s) joined)")
