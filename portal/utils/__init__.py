"""
Utility functions
"""
from portal.utils.logger import setup_logger, get_logger
from portal.utils.validators import (
    validate_ticket_id,
    is_blank,
    resolve_within
)

__all__ = [
    "setup_logger",
    "get_logger",
    "validate_ticket_id",
    "is_blank",
    "resolve_within",
]
