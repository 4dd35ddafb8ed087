# helpdesk/dependencies.py
from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from helpdesk.accounts.auth import LoginSession
from helpdesk.accounts.repository import AccountRepository
from helpdesk.accounts.tokens import decode_access_token
from helpdesk.core.config import Settings, get_settings
from helpdesk.core.errors import InvalidCredentials
from helpdesk.ticket.repository import TicketRepository
from helpdesk.ticket.services import TicketService

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_account_repository() -> AccountRepository:
    return AccountRepository()


@lru_cache
def get_ticket_service() -> TicketService:
    # built once per process so the Open status id is looked up once
    return TicketService(TicketRepository(), get_account_repository())


def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> LoginSession:
    if credentials is None:
        raise InvalidCredentials("Not authenticated")
    return decode_access_token(credentials.credentials, settings)
