# helpdesk/ticket/routes.py
from fastapi import APIRouter, Depends, Query, Response

from helpdesk.accounts.auth import LoginSession
from helpdesk.dependencies import get_current_session, get_ticket_service
from helpdesk.ticket.schemas import (
    CategoryOut,
    StatusOut,
    TicketCreate,
    TicketCreated,
    TicketDetail,
    TicketUpdate,
    TicketView,
)
from helpdesk.ticket.selection import decode_filter
from helpdesk.ticket.services import TicketService

router = APIRouter(tags=["Tickets"])


@router.get("/categories", response_model=list[CategoryOut])
def list_categories(
    session: LoginSession = Depends(get_current_session),
    service: TicketService = Depends(get_ticket_service),
):
    return service.list_categories(session)


@router.get("/statuses", response_model=list[StatusOut])
def list_statuses(
    session: LoginSession = Depends(get_current_session),
    service: TicketService = Depends(get_ticket_service),
):
    return service.list_statuses(session)


@router.post("/tickets", response_model=TicketCreated, status_code=201)
def create(
    ticket: TicketCreate,
    session: LoginSession = Depends(get_current_session),
    service: TicketService = Depends(get_ticket_service),
):
    ticket_id = service.create_ticket(session, ticket.category_id, ticket.brief_summary, ticket.detailed_description)
    return TicketCreated(ticket_id=ticket_id)


@router.get("/tickets", response_model=list[TicketView])
def list_all(
    assignee: int | None = Query(default=None, description="Admin account id, 0 for unassigned, -1 or empty for all"),
    session: LoginSession = Depends(get_current_session),
    service: TicketService = Depends(get_ticket_service),
):
    return service.list_tickets(session, decode_filter(assignee))


@router.get("/tickets/{ticket_id}/description", response_model=TicketDetail)
def get_description(
    ticket_id: int,
    session: LoginSession = Depends(get_current_session),
    service: TicketService = Depends(get_ticket_service),
):
    return TicketDetail(ticket_id=ticket_id, detailed_description=service.get_detail(session, ticket_id))


@router.patch("/tickets/{ticket_id}", status_code=204)
def update(
    ticket_id: int,
    changes: TicketUpdate,
    session: LoginSession = Depends(get_current_session),
    service: TicketService = Depends(get_ticket_service),
):
    service.update_ticket(
        session,
        ticket_id,
        new_assignee=changes.assigned_account_id,
        new_category=changes.category_id,
        new_status=changes.status_id,
    )
    return Response(status_code=204)


@router.delete("/tickets/{ticket_id}", status_code=204)
def delete(
    ticket_id: int,
    session: LoginSession = Depends(get_current_session),
    service: TicketService = Depends(get_ticket_service),
):
    service.delete_ticket(session, ticket_id)
    return Response(status_code=204)
