"""
Business Logic Services
"""
from .credentials import CredentialStore, plaintext_verifier
from .notifier import TicketNotifier

__all__ = [
    "CredentialStore",
    "plaintext_verifier",
    "TicketNotifier",
]
