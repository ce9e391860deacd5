# backend/services/identity_service.py
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.user_model import User, PROFILE_ROLES
from models.company_profile_model import CompanyProfile
from services.errors import Conflict, Forbidden, Unauthorized
from services.profile_service import default_profile_fields
from services.security import hash_password, verify_password, create_access_token

logger = logging.getLogger(__name__)


def _auth_result(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "token": create_access_token(user.id),
    }


def _provision_profile(db: Session, user: User) -> None:
    """Empty profile for a new company user, in a savepoint. Failure is logged, never raised."""
    try:
        with db.begin_nested():
            fields = default_profile_fields(owner_name=user.name, email=user.email)
            db.add(CompanyProfile(user_id=user.id, status="pending", **fields))
        logger.info("Company profile provisioned for %s", user.email)
    except SQLAlchemyError:
        logger.exception("Company profile provisioning failed for %s", user.email)


def register(db: Session, name: str, email: str, password: str, role: str) -> dict:
    """Create the user and, for company roles, its empty profile in one transaction."""
    if role == "admin":
        raise Forbidden("Admin accounts cannot be self-registered")

    existing = db.query(User).filter(User.email == email).first()
    if existing:
        logger.info("Registration rejected, email already in use: %s", email)
        raise Conflict(f"User already exists with this email as a {existing.role}")

    user = User(name=name, email=email, password_hash=hash_password(password), role=role)
    db.add(user)
    db.flush()

    if role in PROFILE_ROLES:
        _provision_profile(db, user)

    db.commit()
    db.refresh(user)
    logger.info("User registered: %s (%s)", email, role)
    return _auth_result(user)


def authenticate(db: Session, email: str, password: str, role: Optional[str] = None) -> dict:
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        logger.info("Login failed for %s: bad credentials", email)
        raise Unauthorized("Invalid email or password")
    if role and role != user.role:
        logger.info("Login failed for %s: role %s does not match", email, role)
        raise Forbidden(f"This account is not registered as a {role}")

    logger.info("Login: %s (%s)", email, user.role)
    return _auth_result(user)


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()
