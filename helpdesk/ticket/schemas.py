# helpdesk/ticket/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field


class CategoryOut(BaseModel):
    category_id: int
    category_name: str

    model_config = {"from_attributes": True}


class StatusOut(BaseModel):
    status_id: int
    status_name: str

    model_config = {"from_attributes": True}


class TicketRecord(BaseModel):
    """Raw ticket row, foreign keys as ids."""

    ticket_id: int
    creator_account_id: int
    assigned_account_id: int | None = None
    category_id: int
    status_id: int
    brief_summary: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class TicketView(BaseModel):
    """Ticket as listed in the management grid, names instead of ids."""

    ticket_id: int
    current_status: str | None = None
    assigned_admin: str | None = None
    issue_category: str | None = None
    brief_summary: str
    ticket_creator: str | None = None
    creator_role: str | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class TicketCreate(BaseModel):
    category_id: int | None = None
    brief_summary: str
    detailed_description: str


class TicketCreated(BaseModel):
    ticket_id: int


class TicketUpdate(BaseModel):
    # -1 (or leaving the field out) means "no change"
    assigned_account_id: int | None = None
    category_id: int | None = None
    status_id: int | None = None


class TicketDetail(BaseModel):
    ticket_id: int
    detailed_description: str = Field(..., description="Full description entered by the creator")
