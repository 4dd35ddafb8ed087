# helpdesk/ticket/repository.py
from sqlalchemy import delete, select, update
from sqlalchemy.orm import aliased, sessionmaker

from helpdesk.accounts.models import Account, Role
from helpdesk.core.database import session_scope
from helpdesk.ticket.models import Category, Ticket, TicketStatus
from helpdesk.ticket.schemas import CategoryOut, StatusOut, TicketRecord, TicketView
from helpdesk.ticket.selection import AllTickets, ByAssignee, TicketFilter, Unassigned

Creator = aliased(Account, name="creator")
Assignee = aliased(Account, name="assignee")


def _ticket_view_query():
    return (
        select(
            Ticket.ticket_id,
            TicketStatus.status_name.label("current_status"),
            Assignee.username.label("assigned_admin"),
            Category.category_name.label("issue_category"),
            Ticket.brief_summary,
            Creator.username.label("ticket_creator"),
            Role.role_name.label("creator_role"),
            Ticket.created_at,
        )
        .select_from(Ticket)
        .outerjoin(Creator, Ticket.creator_account_id == Creator.account_id)
        .outerjoin(Assignee, Ticket.assigned_account_id == Assignee.account_id)
        .outerjoin(TicketStatus, Ticket.status_id == TicketStatus.status_id)
        .outerjoin(Category, Ticket.category_id == Category.category_id)
        .outerjoin(Role, Creator.role_id == Role.role_id)
        .order_by(Ticket.ticket_id)
    )


class TicketRepository:
    def __init__(self, session_factory: sessionmaker | None = None):
        self.session_factory = session_factory

    # reference data

    def list_categories(self) -> list[CategoryOut]:
        with session_scope(self.session_factory) as db:
            rows = db.scalars(select(Category).order_by(Category.category_id)).all()
            return [CategoryOut.model_validate(row) for row in rows]

    def list_statuses(self) -> list[StatusOut]:
        with session_scope(self.session_factory) as db:
            rows = db.scalars(select(TicketStatus).order_by(TicketStatus.status_id)).all()
            return [StatusOut.model_validate(row) for row in rows]

    def get_status_id(self, status_name: str) -> int | None:
        with session_scope(self.session_factory) as db:
            return db.scalar(select(TicketStatus.status_id).where(TicketStatus.status_name == status_name))

    def category_exists(self, category_id: int) -> bool:
        with session_scope(self.session_factory) as db:
            return db.get(Category, category_id) is not None

    def status_exists(self, status_id: int) -> bool:
        with session_scope(self.session_factory) as db:
            return db.get(TicketStatus, status_id) is not None

    # tickets

    def list_tickets(self, ticket_filter: TicketFilter = AllTickets()) -> list[TicketView]:
        query = _ticket_view_query()
        if isinstance(ticket_filter, ByAssignee):
            query = query.where(Ticket.assigned_account_id == ticket_filter.account_id)
        elif isinstance(ticket_filter, Unassigned):
            query = query.where(Ticket.assigned_account_id.is_(None))

        with session_scope(self.session_factory) as db:
            rows = db.execute(query).mappings().all()
            return [TicketView.model_validate(dict(row)) for row in rows]

    def get_ticket(self, ticket_id: int) -> TicketRecord | None:
        with session_scope(self.session_factory) as db:
            ticket = db.get(Ticket, ticket_id)
            return TicketRecord.model_validate(ticket) if ticket is not None else None

    def get_detailed_description(self, ticket_id: int) -> str | None:
        with session_scope(self.session_factory) as db:
            return db.scalar(select(Ticket.detailed_description).where(Ticket.ticket_id == ticket_id))

    def insert_ticket(
        self,
        creator_id: int,
        category_id: int,
        status_id: int,
        summary: str,
        description: str,
    ) -> int:
        with session_scope(self.session_factory) as db:
            ticket = Ticket(
                creator_account_id=creator_id,
                category_id=category_id,
                status_id=status_id,
                brief_summary=summary,
                detailed_description=description,
            )
            db.add(ticket)
            db.flush()
            return ticket.ticket_id

    def update_ticket_fields(
        self,
        ticket_id: int,
        assigned_account_id: int | None = None,
        category_id: int | None = None,
        status_id: int | None = None,
    ) -> int:
        """Write only the columns given; returns the number of rows matched."""
        values = {}
        if assigned_account_id is not None:
            values["assigned_account_id"] = assigned_account_id
        if category_id is not None:
            values["category_id"] = category_id
        if status_id is not None:
            values["status_id"] = status_id
        if not values:
            return 0

        # one statement, one transaction: either every column changes or none does
        with session_scope(self.session_factory) as db:
            result = db.execute(update(Ticket).where(Ticket.ticket_id == ticket_id).values(**values))
            return result.rowcount

    def delete_ticket(self, ticket_id: int) -> int:
        with session_scope(self.session_factory) as db:
            result = db.execute(delete(Ticket).where(Ticket.ticket_id == ticket_id))
            return result.rowcount
