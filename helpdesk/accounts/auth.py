# helpdesk/accounts/auth.py
import logging
from dataclasses import dataclass

from helpdesk.accounts.repository import AccountRepository
from helpdesk.core.errors import Forbidden, InvalidCredentials

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginSession:
    """Who is calling, resolved once at login."""

    account_id: int
    username: str
    role_name: str


def login(accounts: AccountRepository, username: str, password: str) -> LoginSession:
    account = accounts.find_account_by_credentials(username, password)
    if account is None:
        logger.warning("Rejected login for %r", username)
        raise InvalidCredentials()

    role = accounts.get_role(account.account_id)
    if role is None:
        # the account vanished between the two reads
        raise InvalidCredentials()

    logger.info("Account %s logged in as %s", account.account_id, role.role_name)
    return LoginSession(account_id=account.account_id, username=account.username, role_name=role.role_name)


def require_role(session: LoginSession, role_name: str) -> None:
    if session.role_name != role_name:
        logger.warning("Account %s (%s) needs role %s", session.account_id, session.role_name, role_name)
        raise Forbidden()