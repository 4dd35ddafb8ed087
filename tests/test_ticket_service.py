# tests/test_ticket_service.py
from unittest.mock import Mock, call

import pytest

from helpdesk.accounts.auth import LoginSession, login
from helpdesk.accounts.repository import AccountRepository
from helpdesk.core.config import Settings
from helpdesk.core.errors import (
    Forbidden,
    InvalidAssignee,
    InvalidCategory,
    InvalidStatus,
    NoChangesRequested,
    ReferenceDataError,
    TextTooLong,
    TextTooShort,
    TicketNotFound,
)
from helpdesk.seed import create_account
from helpdesk.ticket.repository import TicketRepository
from helpdesk.ticket.selection import NO_SELECTION, AllTickets, ByAssignee, Unassigned
from helpdesk.ticket.services import TicketService

SUMMARY = "Printer broken"
DESCRIPTION = "The printer on floor 2 jams every print job"


@pytest.fixture
def ticket_id(service, sessions):
    return service.create_ticket(sessions["alice"], 3, SUMMARY, DESCRIPTION)


def test_open_status_is_resolved_once():
    tickets = Mock(spec=TicketRepository)
    tickets.get_status_id.return_value = 1
    service = TicketService(tickets, Mock(spec=AccountRepository), Settings())
    session = LoginSession(account_id=3, username="alice", role_name="Teacher")
    tickets.category_exists.return_value = True

    service.create_ticket(session, 1, SUMMARY, DESCRIPTION)
    service.create_ticket(session, 1, SUMMARY, DESCRIPTION)

    assert tickets.get_status_id.call_count == 1
    assert tickets.insert_ticket.call_args.kwargs["status_id"] == 1


def test_missing_open_status_fails_at_start(ticket_repo, account_repo):
    with pytest.raises(ReferenceDataError):
        TicketService(ticket_repo, account_repo, Settings(OPEN_STATUS_NAME="Brand New"))


# creating tickets

def test_teacher_submits_ticket(account_repo, service, ticket_repo, account_ids):
    session = login(account_repo, "alice", "alice-pass")
    assert session.role_name == "Teacher"

    ticket_id = service.create_ticket(session, 3, SUMMARY, DESCRIPTION)

    record = ticket_repo.get_ticket(ticket_id)
    assert record.status_id == service.open_status_id
    assert record.creator_account_id == account_ids["alice"]
    assert record.category_id == 3
    assert record.assigned_account_id is None
    assert ticket_repo.get_detailed_description(ticket_id) == DESCRIPTION


@pytest.mark.parametrize("category_id", [None, NO_SELECTION, 99])
def test_create_rejects_bad_category(service, sessions, write_statements, category_id):
    with pytest.raises(InvalidCategory):
        service.create_ticket(sessions["alice"], category_id, SUMMARY, DESCRIPTION)
    assert write_statements == []


@pytest.mark.parametrize(
    "summary, description",
    [
        ("short", DESCRIPTION),
        (SUMMARY, "tiny"),
        ("", ""),
        ("1234567", "12345678"),
    ],
)
def test_create_rejects_short_text(service, sessions, write_statements, summary, description):
    with pytest.raises(TextTooShort) as excinfo:
        service.create_ticket(sessions["alice"], 3, summary, description)
    assert excinfo.value.min_length == 8
    assert write_statements == []


def test_create_accepts_text_at_minimum_length(service, sessions):
    assert service.create_ticket(sessions["bob"], 1, "12345678", "abcdefgh") > 0


def test_category_is_checked_before_text(service, sessions):
    with pytest.raises(InvalidCategory):
        service.create_ticket(sessions["alice"], NO_SELECTION, "x", "y")


def test_create_rejects_long_text(service, sessions, write_statements):
    with pytest.raises(TextTooLong):
        service.create_ticket(sessions["alice"], 3, "s" * 101, DESCRIPTION)
    with pytest.raises(TextTooLong):
        service.create_ticket(sessions["alice"], 3, SUMMARY, "d" * 1001)
    assert write_statements == []


def test_min_text_length_is_configurable(ticket_repo, account_repo, sessions):
    service = TicketService(ticket_repo, account_repo, Settings(MIN_TEXT_LENGTH=3))
    assert service.create_ticket(sessions["alice"], 1, "abc", "def") > 0


# listing

def test_reference_lists(service, sessions):
    assert len(service.list_categories(sessions["alice"])) == 5
    assert [s.status_name for s in service.list_statuses(sessions["admin"])][0] == "Open"
    assert [a.username for a in service.list_admins(sessions["admin"])] == ["admin", "carol"]


@pytest.mark.parametrize("method", ["list_statuses", "list_admins"])
def test_management_lists_need_admin(service, sessions, method):
    with pytest.raises(Forbidden):
        getattr(service, method)(sessions["alice"])


def test_list_filters_partition_tickets(service, sessions, account_ids):
    admin = sessions["admin"]
    ids = [service.create_ticket(sessions["alice"], 1, SUMMARY, DESCRIPTION) for _ in range(4)]
    service.update_ticket(admin, ids[1], new_assignee=account_ids["admin"])
    service.update_ticket(admin, ids[2], new_assignee=account_ids["carol"])
    service.update_ticket(admin, ids[3], new_assignee=account_ids["carol"])

    everything = {v.ticket_id for v in service.list_tickets(admin, AllTickets())}
    unassigned = {v.ticket_id for v in service.list_tickets(admin, Unassigned())}
    by_admin = {v.ticket_id for v in service.list_tickets(admin, ByAssignee(account_ids["admin"]))}
    by_carol = {v.ticket_id for v in service.list_tickets(admin, ByAssignee(account_ids["carol"]))}

    assert unassigned == {ids[0]}
    assert by_admin == {ids[1]}
    assert by_carol == {ids[2], ids[3]}
    assert everything == unassigned | by_admin | by_carol == set(ids)


def test_list_tickets_defaults_to_all(service, sessions, ticket_id):
    assert [v.ticket_id for v in service.list_tickets(sessions["admin"])] == [ticket_id]


# updating

def test_update_only_assignee(service, sessions, ticket_repo, ticket_id, account_ids):
    before = ticket_repo.get_ticket(ticket_id)
    service.update_ticket(sessions["admin"], ticket_id, new_assignee=account_ids["carol"])
    after = ticket_repo.get_ticket(ticket_id)

    assert after.assigned_account_id == account_ids["carol"]
    assert after.category_id == before.category_id
    assert after.status_id == before.status_id


def test_update_only_status_with_sentinels(service, sessions, ticket_repo, ticket_id):
    before = ticket_repo.get_ticket(ticket_id)
    service.update_ticket(sessions["admin"], ticket_id, NO_SELECTION, NO_SELECTION, 3)
    after = ticket_repo.get_ticket(ticket_id)

    assert after.status_id == 3
    assert after.model_dump(exclude={"status_id"}) == before.model_dump(exclude={"status_id"})


def test_update_all_three_fields(service, sessions, ticket_repo, ticket_id, account_ids):
    service.update_ticket(sessions["carol"], ticket_id, account_ids["admin"], 2, 4)
    record = ticket_repo.get_ticket(ticket_id)
    assert (record.assigned_account_id, record.category_id, record.status_id) == (account_ids["admin"], 2, 4)


def test_admin_assigns_ticket_seven_to_account_twelve(service, sessions, ticket_repo, session_factory):
    for n in range(5, 12):
        create_account(f"student{n}", "student-pass", "Student", session_factory)
    assert create_account("dana", "dana-pass", "Admin", session_factory) == 12
    for _ in range(7):
        service.create_ticket(sessions["alice"], 3, SUMMARY, DESCRIPTION)
    before = ticket_repo.get_ticket(7)

    service.update_ticket(sessions["admin"], 7, new_assignee=12, new_category=NO_SELECTION, new_status=NO_SELECTION)

    after = ticket_repo.get_ticket(7)
    assert after.assigned_account_id == 12
    assert after.category_id == before.category_id
    assert after.status_id == before.status_id


def test_update_without_changes_touches_nothing():
    tickets = Mock(spec=TicketRepository)
    tickets.get_status_id.return_value = 1
    accounts = Mock(spec=AccountRepository)
    service = TicketService(tickets, accounts, Settings())
    admin = LoginSession(account_id=1, username="admin", role_name="Admin")

    with pytest.raises(NoChangesRequested):
        service.update_ticket(admin, 7, NO_SELECTION, NO_SELECTION, NO_SELECTION)
    with pytest.raises(NoChangesRequested):
        service.update_ticket(admin, 7)

    assert tickets.method_calls == [call.get_status_id("Open")]
    assert accounts.method_calls == []


def test_update_without_changes_writes_nothing(service, sessions, ticket_id, write_statements):
    with pytest.raises(NoChangesRequested):
        service.update_ticket(sessions["admin"], ticket_id)
    assert write_statements == []


def test_update_validates_targets(service, sessions, ticket_id, account_ids, write_statements):
    admin = sessions["admin"]
    with pytest.raises(InvalidAssignee):
        service.update_ticket(admin, ticket_id, new_assignee=account_ids["alice"])
    with pytest.raises(InvalidCategory):
        service.update_ticket(admin, ticket_id, new_category=99)
    with pytest.raises(InvalidStatus):
        service.update_ticket(admin, ticket_id, new_status=99)
    assert write_statements == []


def test_update_unknown_ticket(service, sessions):
    with pytest.raises(TicketNotFound):
        service.update_ticket(sessions["admin"], 999, new_status=2)


# deleting

def test_delete_ticket(service, sessions, ticket_repo, ticket_id):
    service.delete_ticket(sessions["admin"], ticket_id)
    assert ticket_repo.get_ticket(ticket_id) is None
    with pytest.raises(TicketNotFound):
        service.delete_ticket(sessions["admin"], ticket_id)


# authorization

@pytest.mark.parametrize("username", ["alice", "bob"])
def test_non_admin_cannot_triage(service, sessions, ticket_repo, ticket_id, account_ids, write_statements, username):
    session = sessions[username]
    before = ticket_repo.get_ticket(ticket_id)

    with pytest.raises(Forbidden):
        service.update_ticket(session, ticket_id, new_assignee=account_ids["admin"])
    with pytest.raises(Forbidden):
        service.delete_ticket(session, ticket_id)
    with pytest.raises(Forbidden):
        service.list_tickets(session, AllTickets())

    assert write_statements == []
    assert ticket_repo.get_ticket(ticket_id) == before


def test_detail_for_admin_and_creator_only(service, sessions, ticket_id):
    assert service.get_detail(sessions["admin"], ticket_id) == DESCRIPTION
    assert service.get_detail(sessions["alice"], ticket_id) == DESCRIPTION
    with pytest.raises(Forbidden):
        service.get_detail(sessions["bob"], ticket_id)
    with pytest.raises(TicketNotFound):
        service.get_detail(sessions["admin"], 999)
