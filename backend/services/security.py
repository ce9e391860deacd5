# backend/services/security.py
"""
Password hashing and bearer-token helpers.

- Passwords are stored as bcrypt hashes only.
- Tokens are HS256 JWTs carrying the user id in `sub` with a fixed lifetime
  (30 days by default). Verification is pure: no database access here.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from config.settings import settings
from services.errors import InvalidArgument, Unauthorized

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def hash_password(raw_password: str) -> str:
    encoded = raw_password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise InvalidArgument("Password is too long")
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(encoded, salt).decode("utf-8")


def verify_password(raw_password: str, password_hash: str) -> bool:
    encoded = raw_password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def create_access_token(user_id: int, now: Optional[datetime] = None) -> str:
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expire_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int:
    """
    Verify signature and expiry and return the user id.

    Raises:
        Unauthorized: token missing, malformed, expired or without a usable subject.
    """
    if not token:
        raise Unauthorized("Not authorized, no token")
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Not authorized, token expired")
    except jwt.PyJWTError:
        raise Unauthorized("Not authorized, token failed")

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise Unauthorized("Not authorized, token failed")
