# tests/conftest.py
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from sqlalchemy import event
from sqlalchemy.orm import sessionmaker

from helpdesk.accounts.auth import LoginSession
from helpdesk.accounts.repository import AccountRepository
from helpdesk.core.database import build_engine
from helpdesk.seed import create_account, create_schema, seed_reference_data
from helpdesk.ticket.repository import TicketRepository
from helpdesk.ticket.services import TicketService

PASSWORDS = {
    "admin": "admin-pass",
    "carol": "carol-pass",
    "alice": "alice-pass",
    "bob": "bob-pass",
}
ROLES = {"admin": "Admin", "carol": "Admin", "alice": "Teacher", "bob": "Student"}


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    seed_reference_data(factory)
    return factory


@pytest.fixture
def account_ids(session_factory):
    return {
        username: create_account(username, PASSWORDS[username], ROLES[username], session_factory)
        for username in ("admin", "carol", "alice", "bob")
    }


@pytest.fixture
def account_repo(session_factory):
    return AccountRepository(session_factory)


@pytest.fixture
def ticket_repo(session_factory):
    return TicketRepository(session_factory)


@pytest.fixture
def service(ticket_repo, account_repo, account_ids):
    return TicketService(ticket_repo, account_repo)


@pytest.fixture
def sessions(account_ids):
    return {
        username: LoginSession(account_id=account_id, username=username, role_name=ROLES[username])
        for username, account_id in account_ids.items()
    }


@pytest.fixture
def write_statements(engine):
    """INSERT/UPDATE/DELETE statements sent to the database while the test runs."""
    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith(("INSERT", "UPDATE", "DELETE")):
            statements.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    yield statements
    event.remove(engine, "before_cursor_execute", record)
