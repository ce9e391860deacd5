# backend/services/policy.py
"""
Who may do what.

Role checks are plain membership tests. Requirement mutations are additionally
scoped to the posting company, with two bypasses: admins, and (while
ALLOW_ANONYMOUS_ADMIN_CONSOLE is on) callers that carry no token at all.
"""
import logging
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from config.settings import settings
from models.user_model import User
from models.company_profile_model import CompanyProfile
from models.requirement_model import Requirement
from services.errors import Forbidden, NotFound, Unauthorized

logger = logging.getLogger(__name__)


def authorize(user: Optional[User], roles: Iterable[str]) -> User:
    roles = tuple(roles)
    if user is None or user.role not in roles:
        logger.warning(
            "Role check failed: %s not in %s",
            user.role if user is not None else "anonymous", roles,
        )
        raise Forbidden("Access denied")
    return user


def caller_profile(db: Session, user: User) -> CompanyProfile:
    profile = db.query(CompanyProfile).filter(CompanyProfile.user_id == user.id).first()
    if not profile:
        raise NotFound("Company profile not found")
    return profile


def ensure_requirement_access(db: Session, requirement: Requirement, user: Optional[User]) -> None:
    if user is None:
        if settings.allow_anonymous_admin_console:
            logger.info("Anonymous console access to %s", requirement.req_id)
            return
        raise Unauthorized("Not authorized, no token")

    if user.role == "admin":
        return

    profile = caller_profile(db, user)
    if requirement.company_id != profile.id:
        logger.warning("User %s denied access to %s", user.email, requirement.req_id)
        raise Forbidden("Not authorized to modify this requirement")
