# helpdesk/accounts/security.py
import bcrypt

from helpdesk.core.config import get_settings

# bcrypt only looks at this many bytes; longer passwords are refused outright
MAX_PASSWORD_BYTES = 72

# Checked against when the username is unknown, so both failure paths cost one bcrypt round.
_DUMMY_HASH = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(get_settings().BCRYPT_ROUNDS))


def hash_password(password: str) -> str:
    secret = password.encode("utf-8")
    if len(secret) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Passwords are limited to {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(get_settings().BCRYPT_ROUNDS)
    return bcrypt.hashpw(secret, salt).decode("utf-8")


def verify_password(password: str, stored_hash: str | None) -> bool:
    secret = password.encode("utf-8")
    if stored_hash is None or len(secret) > MAX_PASSWORD_BYTES:
        bcrypt.checkpw(secret[:MAX_PASSWORD_BYTES], _DUMMY_HASH)
        return False
    try:
        return bcrypt.checkpw(secret, stored_hash.encode("utf-8"))
    except ValueError:
        # not a bcrypt hash (e.g. a legacy SHA2 digest)
        return False
