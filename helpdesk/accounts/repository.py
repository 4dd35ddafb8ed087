# helpdesk/accounts/repository.py
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from helpdesk.accounts.models import Account, Role
from helpdesk.accounts.schemas import AccountOut, RoleOut
from helpdesk.accounts.security import verify_password
from helpdesk.core.config import Settings, get_settings
from helpdesk.core.database import session_scope


class AccountRepository:
    def __init__(self, session_factory: sessionmaker | None = None, settings: Settings | None = None):
        self.session_factory = session_factory
        self.admin_role_name = (settings or get_settings()).ADMIN_ROLE_NAME

    def find_account_by_credentials(self, username: str, password: str) -> AccountOut | None:
        """Return the account only if the password matches.

        Unknown username and wrong password look the same to the caller.
        """
        with session_scope(self.session_factory) as db:
            account = db.scalars(select(Account).where(Account.username == username)).first()
            stored_hash = account.userpassword if account is not None else None
            found = AccountOut.model_validate(account) if account is not None else None

        # connection is back in the pool before the slow hash check
        if not verify_password(password, stored_hash):
            return None
        return found

    def get_role(self, account_id: int) -> RoleOut | None:
        with session_scope(self.session_factory) as db:
            role = db.scalars(
                select(Role).join(Account, Account.role_id == Role.role_id).where(Account.account_id == account_id)
            ).first()
            return RoleOut.model_validate(role) if role is not None else None

    def list_admins(self) -> list[AccountOut]:
        with session_scope(self.session_factory) as db:
            rows = db.scalars(
                select(Account)
                .join(Role, Account.role_id == Role.role_id)
                .where(Role.role_name == self.admin_role_name)
                .order_by(Account.account_id)
            ).all()
            return [AccountOut.model_validate(row) for row in rows]

    def is_admin_account(self, account_id: int) -> bool:
        with session_scope(self.session_factory) as db:
            found = db.scalar(
                select(Account.account_id)
                .join(Role, Account.role_id == Role.role_id)
                .where(Account.account_id == account_id, Role.role_name == self.admin_role_name)
            )
            return found is not None
