# helpdesk/core/errors.py


class HelpdeskError(Exception):
    """Base class for every error the helpdesk core raises."""

    message = "Helpdesk error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        return str(self)


class InvalidCredentials(HelpdeskError):
    message = "Wrong username or password"


class Forbidden(HelpdeskError):
    message = "You are not allowed to perform this action"


class InvalidCategory(HelpdeskError):
    message = "Please choose a category"


class InvalidStatus(HelpdeskError):
    message = "Unknown ticket status"


class InvalidAssignee(HelpdeskError):
    message = "Tickets can only be assigned to admin accounts"


class TextTooShort(HelpdeskError):
    def __init__(self, min_length: int):
        self.min_length = min_length
        super().__init__(
            f"The brief summary and detailed description must be at least {min_length} characters."
        )


class TextTooLong(HelpdeskError):
    def __init__(self, field: str, max_length: int):
        self.field = field
        self.max_length = max_length
        super().__init__(f"The {field} must be at most {max_length} characters.")


class NoChangesRequested(HelpdeskError):
    message = "No changes were made."


class TicketNotFound(HelpdeskError):
    def __init__(self, ticket_id: int):
        self.ticket_id = ticket_id
        super().__init__(f"Ticket {ticket_id} not found")


class ReferenceDataError(HelpdeskError):
    """Required reference rows (roles, statuses) are missing from the store."""


class StorageError(HelpdeskError):
    """Wraps the underlying database error; the original is kept on ``cause``."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(str(cause))
