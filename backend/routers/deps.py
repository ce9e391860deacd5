# backend/routers/deps.py
"""Request-scoped dependencies: who is calling, and are they allowed in."""
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from database.session import get_db
from models.user_model import User
from services import identity_service, policy
from services.errors import Unauthorized
from services.security import decode_access_token

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


def _resolve(db: Session, credentials: Optional[HTTPAuthorizationCredentials]) -> User:
    token = credentials.credentials if credentials else None
    user_id = decode_access_token(token)
    user = identity_service.get_user(db, user_id)
    if not user:
        raise Unauthorized("Not authorized, user not found")
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    """Strict: no valid token, no entry."""
    return _resolve(db, credentials)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Permissive: a missing or unusable token yields an anonymous caller."""
    if not credentials:
        return None
    try:
        return _resolve(db, credentials)
    except Unauthorized as e:
        logger.debug("Proceeding anonymously: %s", e.message)
        return None


def require_roles(*roles: str):
    def dependency(user: User = Depends(get_current_user)) -> User:
        return policy.authorize(user, roles)
    return dependency
