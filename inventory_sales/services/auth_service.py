import jwt
import bcrypt
from datetime import datetime, timedelta, timezone
from typing import Optional
from pydantic import ValidationError
from inventory_sales.config import settings
from inventory_sales.errors import InvalidToken
from inventory_sales.schemas.auth import Identity

ALGORITHM = "HS256"


def create_token(identity) -> str:
    """Sign a token for a user or an Identity.

    Accepts anything with ``id`` and ``username`` attributes; the admin flag is
    read from ``is_admin`` and defaults to False.
    """
    payload = {
        "id": identity.id,
        "username": identity.username,
        "isAdmin": bool(getattr(identity, "is_admin", False)),
    }
    if settings.token_expire_minutes:
        payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=settings.token_expire_minutes)
    return jwt.encode(payload, settings.secret_key, algorithm=ALGORITHM)


def verify_token(token: str) -> Identity:
    """Decode and validate a token, raising InvalidToken on any problem."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except jwt.InvalidTokenError as e:
        raise InvalidToken(f"Invalid token: {e}")

    try:
        return Identity.model_validate(payload)
    except ValidationError:
        raise InvalidToken("Invalid token payload")


def token_from_header(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_work_factor)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
