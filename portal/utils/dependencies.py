"""
FastAPI dependencies resolving the components built by create_app()
"""
from fastapi import Request

from portal.config import Settings
from portal.repositories import FileRepository, TicketRepository
from portal.services import CredentialStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credential_store


def get_file_repository(request: Request) -> FileRepository:
    return request.app.state.file_repository


def get_ticket_repository(request: Request) -> TicketRepository:
    return request.app.state.ticket_repository
