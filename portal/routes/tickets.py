"""
Ticket-related API routes
"""
from fastapi import APIRouter, Depends

from portal.models.schemas import TicketCreateRequest, MessageCreateRequest
from portal.repositories import TicketRepository
from portal.utils.dependencies import get_ticket_repository
from portal.utils.responses import ok_response

router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.post("/create")
async def create_ticket(
    body: TicketCreateRequest,
    repo: TicketRepository = Depends(get_ticket_repository)
):
    """
    Open a new ticket

    Body: {"product": ..., "discordEmail": ...}
    """
    ticket_id = await repo.create_ticket(body.product, body.contact_handle)
    return ok_response(ticketId=ticket_id)


@router.get("/{ticket_id}")
async def get_ticket(
    ticket_id: str,
    repo: TicketRepository = Depends(get_ticket_repository)
):
    """
    Get the full ticket, including every message
    """
    ticket = await repo.get_ticket(ticket_id)
    return ok_response(ticket=ticket.to_record())


@router.post("/{ticket_id}/message")
async def add_message(
    ticket_id: str,
    body: MessageCreateRequest,
    repo: TicketRepository = Depends(get_ticket_repository)
):
    """
    Append a message; live viewers of the ticket receive a newMessage event
    """
    await repo.append_message(ticket_id, body.author, body.text)
    return ok_response()
