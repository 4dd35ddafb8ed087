# helpdesk/ticket/selection.py
"""Ticket list filters and the legacy integer selectors.

Older front ends post plain integers from their combo boxes: ``-1`` means
"no selection / no change" and, in the assignee filter only, ``0`` means
"unassigned tickets". Database ids start at 1, so neither value can name a
real row. Inside the service these integers never appear; filters are the
tagged types below and "no change" is ``None``.
"""
from dataclasses import dataclass

NO_SELECTION = -1
UNASSIGNED = 0


@dataclass(frozen=True)
class AllTickets:
    pass


@dataclass(frozen=True)
class ByAssignee:
    account_id: int


@dataclass(frozen=True)
class Unassigned:
    pass


TicketFilter = AllTickets | ByAssignee | Unassigned


def decode_filter(value: int | None) -> TicketFilter:
    if value is None or value == NO_SELECTION:
        return AllTickets()
    if value == UNASSIGNED:
        return Unassigned()
    return ByAssignee(value)


def encode_filter(ticket_filter: TicketFilter) -> int:
    if isinstance(ticket_filter, ByAssignee):
        return ticket_filter.account_id
    if isinstance(ticket_filter, Unassigned):
        return UNASSIGNED
    return NO_SELECTION


def decode_selection(value: int | None) -> int | None:
    """Map a combo-box value to an id, or ``None`` for "no change"."""
    if value is None or value == NO_SELECTION:
        return None
    return value
