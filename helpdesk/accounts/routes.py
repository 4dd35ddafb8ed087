# helpdesk/accounts/routes.py
from fastapi import APIRouter, Depends

from helpdesk.accounts import auth
from helpdesk.accounts.auth import LoginSession
from helpdesk.accounts.repository import AccountRepository
from helpdesk.accounts.schemas import AccountOut, LoginRequest, TokenOut
from helpdesk.accounts.tokens import create_access_token
from helpdesk.core.config import Settings, get_settings
from helpdesk.dependencies import get_account_repository, get_current_session, get_ticket_service
from helpdesk.ticket.services import TicketService

router = APIRouter(tags=["Accounts"])


@router.post("/auth/login", response_model=TokenOut)
def login(
    payload: LoginRequest,
    accounts: AccountRepository = Depends(get_account_repository),
    settings: Settings = Depends(get_settings),
):
    session = auth.login(accounts, payload.username, payload.password)
    return TokenOut(access_token=create_access_token(session, settings), role=session.role_name)


@router.get("/admins", response_model=list[AccountOut])
def list_admins(
    session: LoginSession = Depends(get_current_session),
    service: TicketService = Depends(get_ticket_service),
):
    return service.list_admins(session)
