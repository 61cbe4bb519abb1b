"""
Repositories package for on-disk storage

Provides repository classes for:
- plain files in the file manager directory (FileRepository)
- one JSON record per support ticket (TicketRepository)
"""
from portal.repositories.file_repository import FileRepository
from portal.repositories.ticket_repository import TicketRepository

__all__ = [
    "FileRepository",
    "TicketRepository",
]
