# helpdesk/seed.py
"""Out-of-band setup: schema, reference rows and accounts.

The ticket service only reads roles, categories and statuses; they are put
in place here, by an operator, before the service starts::

    python -m helpdesk.seed --account admin s3cret-pass Admin
"""
import argparse
import logging

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from helpdesk.accounts.models import Account, Role
from helpdesk.accounts.security import hash_password
from helpdesk.core.database import Base, session_scope
from helpdesk.ticket.models import Category, TicketStatus

logger = logging.getLogger(__name__)

DEFAULT_ROLES = ("Admin", "Teacher", "Student")
DEFAULT_CATEGORIES = ("Hardware", "Software", "Printer", "Network", "Account Access")
DEFAULT_STATUSES = ("Open", "In Progress", "Resolved", "Closed")


def create_schema(bind: Engine) -> None:
    Base.metadata.create_all(bind=bind)


def seed_reference_data(session_factory: sessionmaker | None = None) -> None:
    """Insert the default roles, categories and statuses that are missing."""
    with session_scope(session_factory) as db:
        roles = set(db.scalars(select(Role.role_name)))
        db.add_all(Role(role_name=name) for name in DEFAULT_ROLES if name not in roles)

        categories = set(db.scalars(select(Category.category_name)))
        db.add_all(Category(category_name=name) for name in DEFAULT_CATEGORIES if name not in categories)

        statuses = set(db.scalars(select(TicketStatus.status_name)))
        db.add_all(TicketStatus(status_name=name) for name in DEFAULT_STATUSES if name not in statuses)
    logger.info("Reference data in place")


def create_account(
    username: str,
    password: str,
    role_name: str,
    session_factory: sessionmaker | None = None,
) -> int:
    with session_scope(session_factory) as db:
        role_id = db.scalar(select(Role.role_id).where(Role.role_name == role_name))
        if role_id is None:
            raise ValueError(f"Unknown role {role_name!r}")
        account = Account(username=username, userpassword=hash_password(password), role_id=role_id)
        db.add(account)
        db.flush()
        logger.info("Created account %s (%s)", username, role_name)
        return account.account_id


def main(argv: list[str] | None = None) -> None:
    from helpdesk.core.database import engine
    from helpdesk.core.logging_config import configure_logging

    parser = argparse.ArgumentParser(description="Create the helpdesk schema and reference data.")
    parser.add_argument(
        "--account",
        nargs=3,
        action="append",
        default=[],
        metavar=("USERNAME", "PASSWORD", "ROLE"),
        help="create an account (repeatable)",
    )
    args = parser.parse_args(argv)

    configure_logging()
    create_schema(engine)
    seed_reference_data()
    for username, password, role_name in args.account:
        create_account(username, password, role_name)


if __name__ == "__main__":
    main()
