# helpdesk/accounts/tokens.py
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from helpdesk.accounts.auth import LoginSession
from helpdesk.core.config import Settings, get_settings
from helpdesk.core.errors import InvalidCredentials


def create_access_token(session: LoginSession, settings: Settings | None = None) -> str:
    settings = settings or get_settings()
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": str(session.account_id),
        "username": session.username,
        "role": session.role_name,
        "exp": expire,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str, settings: Settings | None = None) -> LoginSession:
    settings = settings or get_settings()
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return LoginSession(
            account_id=int(claims["sub"]),
            username=claims["username"],
            role_name=claims["role"],
        )
    except (JWTError, KeyError, ValueError) as exc:
        raise InvalidCredentials("Token expired or invalid") from exc
