# helpdesk/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from helpdesk.accounts.routes import router as accounts_router
from helpdesk.core.config import get_settings
from helpdesk.core.database import engine
from helpdesk.core.errors import (
    Forbidden,
    HelpdeskError,
    InvalidCredentials,
    NoChangesRequested,
    ReferenceDataError,
    StorageError,
    TicketNotFound,
)
from helpdesk.core.logging_config import configure_logging
from helpdesk.seed import create_schema, seed_reference_data
from helpdesk.ticket.routes import router as ticket_router

STATUS_CODES = {
    InvalidCredentials: 401,
    Forbidden: 403,
    TicketNotFound: 404,
    NoChangesRequested: 409,
    ReferenceDataError: 500,
    StorageError: 503,
}
# validation errors (category, status, assignee, text length)
DEFAULT_CLIENT_ERROR = 422


def status_code_for(exc: HelpdeskError) -> int:
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return DEFAULT_CLIENT_ERROR


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if settings.AUTO_CREATE_SCHEMA:
        create_schema(engine)
    if settings.SEED_REFERENCE_DATA:
        seed_reference_data()
    yield


settings = get_settings()
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HelpdeskError)
async def helpdesk_error_handler(request: Request, exc: HelpdeskError):
    status_code = status_code_for(exc)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content={"detail": exc.detail}, headers=headers)


# Routers
app.include_router(accounts_router)
app.include_router(ticket_router)


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}
