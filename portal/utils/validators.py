"""
Input validation utilities
"""
from pathlib import Path
from typing import Any, Optional

from portal.utils.errors import BadRequestError


def validate_ticket_id(ticket_id: str) -> bool:
    """
    Validate ticket ID format

    Args:
        ticket_id: Ticket ID to validate

    Returns:
        True if valid format
    """
    # Ticket IDs are millisecond timestamps
    return bool(ticket_id) and ticket_id.isascii() and ticket_id.isdigit()


def is_blank(value: Optional[Any]) -> bool:
    """True for None and empty strings"""
    return value is None or value == ""


def resolve_within(base_dir: Path, name: str) -> Path:
    """
    Resolve a client-supplied name to a path inside base_dir

    Args:
        base_dir: Directory the result must stay inside
        name: Relative name supplied by the client

    Returns:
        Canonical absolute path

    Raises:
        BadRequestError: If the name escapes base_dir or names base_dir itself
    """
    if "\x00" in name:
        raise BadRequestError("Invalid filename")

    root = base_dir.resolve()
    target = (root / name).resolve()

    if target == root or not target.is_relative_to(root):
        raise BadRequestError("Invalid filename")

    return target
