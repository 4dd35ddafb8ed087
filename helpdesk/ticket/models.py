# helpdesk/ticket/models.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from helpdesk.core.database import Base


class Category(Base):
    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, index=True)
    category_name = Column(String(100), nullable=False)


class TicketStatus(Base):
    __tablename__ = "ticket_statuses"

    status_id = Column(Integer, primary_key=True, index=True)
    status_name = Column(String(50), unique=True, nullable=False)


class Ticket(Base):
    __tablename__ = "tickets"

    ticket_id = Column(Integer, primary_key=True, index=True)
    creator_account_id = Column(Integer, ForeignKey("accounts.account_id"), nullable=False)
    assigned_account_id = Column(Integer, ForeignKey("accounts.account_id"), nullable=True, index=True)
    category_id = Column(Integer, ForeignKey("categories.category_id"), nullable=False)
    status_id = Column(Integer, ForeignKey("ticket_statuses.status_id"), nullable=False)
    brief_summary = Column(String(255), nullable=False)
    detailed_description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
