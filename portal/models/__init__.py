"""
Pydantic models for the Support Portal
"""

from portal.models.schemas import (
    # Constants
    SYSTEM_AUTHOR,
    ADMIN_USERNAME,
    utc_timestamp,

    # Records
    Message,
    Ticket,

    # API Models
    LoginRequest,
    FileWriteRequest,
    FileDeleteRequest,
    TicketCreateRequest,
    MessageCreateRequest,

    # Auth Models
    AuthResult,
    UserInfo,
)

__all__ = [
    # Constants
    "SYSTEM_AUTHOR",
    "ADMIN_USERNAME",
    "utc_timestamp",

    # Records
    "Message",
    "Ticket",

    # API Models
    "LoginRequest",
    "FileWriteRequest",
    "FileDeleteRequest",
    "TicketCreateRequest",
    "MessageCreateRequest",

    # Auth Models
    "AuthResult",
    "UserInfo",
]
