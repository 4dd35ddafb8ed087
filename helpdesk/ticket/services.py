# helpdesk/ticket/services.py
import logging

from helpdesk.accounts.auth import LoginSession, require_role
from helpdesk.accounts.repository import AccountRepository
from helpdesk.accounts.schemas import AccountOut
from helpdesk.core.config import Settings, get_settings
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
from helpdesk.ticket.repository import TicketRepository
from helpdesk.ticket.schemas import CategoryOut, StatusOut, TicketView
from helpdesk.ticket.selection import AllTickets, TicketFilter, decode_selection

logger = logging.getLogger(__name__)


class TicketService:
    """Business rules for submitting and triaging tickets.

    Every method takes the caller's ``LoginSession`` and checks it before
    touching storage. Nothing here asks for confirmation: callers confirm
    updates and deletions with the user before calling.
    """

    def __init__(
        self,
        tickets: TicketRepository,
        accounts: AccountRepository,
        settings: Settings | None = None,
    ):
        self.tickets = tickets
        self.accounts = accounts
        self.settings = settings or get_settings()

        open_status_id = tickets.get_status_id(self.settings.OPEN_STATUS_NAME)
        if open_status_id is None:
            raise ReferenceDataError(f"Ticket status {self.settings.OPEN_STATUS_NAME!r} is missing")
        self.open_status_id = open_status_id

    def _is_admin(self, session: LoginSession) -> bool:
        return session.role_name == self.settings.ADMIN_ROLE_NAME

    def _require_admin(self, session: LoginSession) -> None:
        require_role(session, self.settings.ADMIN_ROLE_NAME)

    # reference data

    def list_categories(self, session: LoginSession) -> list[CategoryOut]:
        return self.tickets.list_categories()

    def list_statuses(self, session: LoginSession) -> list[StatusOut]:
        self._require_admin(session)
        return self.tickets.list_statuses()

    def list_admins(self, session: LoginSession) -> list[AccountOut]:
        self._require_admin(session)
        return self.accounts.list_admins()

    # tickets

    def create_ticket(self, session: LoginSession, category_id: int | None, summary: str, description: str) -> int:
        category_id = decode_selection(category_id)
        if category_id is None or not self.tickets.category_exists(category_id):
            raise InvalidCategory()

        min_length = self.settings.MIN_TEXT_LENGTH
        if len(summary) < min_length or len(description) < min_length:
            raise TextTooShort(min_length)
        if len(summary) > self.settings.MAX_SUMMARY_LENGTH:
            raise TextTooLong("brief summary", self.settings.MAX_SUMMARY_LENGTH)
        if len(description) > self.settings.MAX_DESCRIPTION_LENGTH:
            raise TextTooLong("detailed description", self.settings.MAX_DESCRIPTION_LENGTH)

        ticket_id = self.tickets.insert_ticket(
            creator_id=session.account_id,
            category_id=category_id,
            status_id=self.open_status_id,
            summary=summary,
            description=description,
        )
        logger.info("Account %s submitted ticket %s", session.account_id, ticket_id)
        return ticket_id

    def list_tickets(self, session: LoginSession, ticket_filter: TicketFilter = AllTickets()) -> list[TicketView]:
        self._require_admin(session)
        return self.tickets.list_tickets(ticket_filter)

    def get_detail(self, session: LoginSession, ticket_id: int) -> str:
        ticket = self.tickets.get_ticket(ticket_id)
        if ticket is None:
            raise TicketNotFound(ticket_id)
        if not self._is_admin(session) and ticket.creator_account_id != session.account_id:
            logger.warning("Account %s denied detail of ticket %s", session.account_id, ticket_id)
            raise Forbidden()

        description = self.tickets.get_detailed_description(ticket_id)
        if description is None:
            raise TicketNotFound(ticket_id)
        return description

    def update_ticket(
        self,
        session: LoginSession,
        ticket_id: int,
        new_assignee: int | None = None,
        new_category: int | None = None,
        new_status: int | None = None,
    ) -> None:
        self._require_admin(session)
        new_assignee = decode_selection(new_assignee)
        new_category = decode_selection(new_category)
        new_status = decode_selection(new_status)
        if new_assignee is None and new_category is None and new_status is None:
            raise NoChangesRequested()

        if new_assignee is not None and not self.accounts.is_admin_account(new_assignee):
            raise InvalidAssignee()
        if new_category is not None and not self.tickets.category_exists(new_category):
            raise InvalidCategory()
        if new_status is not None and not self.tickets.status_exists(new_status):
            raise InvalidStatus()

        matched = self.tickets.update_ticket_fields(
            ticket_id,
            assigned_account_id=new_assignee,
            category_id=new_category,
            status_id=new_status,
        )
        if matched == 0:
            raise TicketNotFound(ticket_id)
        logger.info(
            "Account %s updated ticket %s (assignee=%s, category=%s, status=%s)",
            session.account_id, ticket_id, new_assignee, new_category, new_status,
        )

    def delete_ticket(self, session: LoginSession, ticket_id: int) -> None:
        self._require_admin(session)
        if self.tickets.delete_ticket(ticket_id) == 0:
            raise TicketNotFound(ticket_id)
        logger.info("Account %s deleted ticket %s", session.account_id, ticket_id)
