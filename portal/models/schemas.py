"""
Pydantic models for the Support Portal

Persisted ticket records and API request bodies. JSON field names follow the
front-end contract (discordEmail, visibleTo, isAdmin); Python attributes use
snake_case with aliases.
"""
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict


SYSTEM_AUTHOR = "System"
ADMIN_USERNAME = "admin"


def utc_timestamp() -> str:
    """Current UTC instant as ISO-8601 with millisecond precision and Z suffix"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ============================================================================
# Ticket Records
# ============================================================================

class Message(BaseModel):
    """
    A single message in a ticket thread.

    Immutable once appended; ordering is append order.
    """
    model_config = ConfigDict(frozen=True)

    timestamp: str = Field(default_factory=utc_timestamp, description="ISO-8601 append instant")
    author: str = Field(..., description="'System' or the supplied identity")
    text: str = Field(..., description="Message body")


class Ticket(BaseModel):
    """
    Support ticket persisted as one JSON record.

    Attributes:
        id: Time-derived identifier, monotonic by creation order
        product: Product the ticket is about
        contact_handle: Discord handle or email of the creator
        messages: Append-only message log, never empty
        visible_to: Identities permitted to view (not enforced server-side)
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Ticket identifier")
    product: str = Field(..., description="Product name")
    contact_handle: str = Field(..., alias="discordEmail", description="Discord handle or email")
    messages: List[Message] = Field(default_factory=list, description="Ordered message log")
    visible_to: List[str] = Field(default_factory=list, alias="visibleTo", description="Viewer identities")

    def to_record(self) -> dict:
        """Serialize with the on-disk/front-end field names"""
        return self.model_dump(by_alias=True)


# ============================================================================
# API Request Models
# ============================================================================
# Fields are optional so that missing values reach the route and produce the
# envelope's 400 message instead of a schema error.

class LoginRequest(BaseModel):
    """Request model for /login"""
    username: Optional[str] = None
    password: Optional[str] = None


class FileWriteRequest(BaseModel):
    """Request model for /files/write"""
    filename: Optional[str] = None
    content: Optional[str] = None


class FileDeleteRequest(BaseModel):
    """Request model for /files/delete"""
    filename: Optional[str] = None


class TicketCreateRequest(BaseModel):
    """Request model for /tickets/create"""
    model_config = ConfigDict(populate_by_name=True)

    product: Optional[str] = None
    contact_handle: Optional[str] = Field(None, alias="discordEmail")


class MessageCreateRequest(BaseModel):
    """Request model for /tickets/{id}/message"""
    text: Optional[str] = None
    author: Optional[str] = None


# ============================================================================
# Auth Models
# ============================================================================

class AuthResult(BaseModel):
    """Outcome of a credential check"""
    is_valid: bool
    is_admin: bool = False


class UserInfo(BaseModel):
    """User block returned by /login"""
    model_config = ConfigDict(populate_by_name=True)

    username: str
    is_admin: bool = Field(False, alias="isAdmin")
