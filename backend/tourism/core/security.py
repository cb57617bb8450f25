from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from tourism.core.config import settings
from tourism.core.errors import Unauthenticated

# PBKDF2 avoids bcrypt backend/version issues and the 72-byte bcrypt input limit.
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
ALGO = "HS256"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(password, password_hash)


def create_session_token(subject: str, expires_minutes: int | None = None) -> str:
    if expires_minutes is None:
        expires_minutes = settings.access_token_expire_minutes
    exp = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    payload = {"sub": subject, "type": "session", "exp": exp}
    return jwt.encode(payload, settings.secret_key, algorithm=ALGO)


def decode_session_token(token: str) -> str:
    """Return the user id carried by a session token."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGO])
    except JWTError as exc:
        raise Unauthenticated("Invalid session") from exc
    if payload.get("type") != "session" or not payload.get("sub"):
        raise Unauthenticated("Invalid session")
    return payload["sub"]
