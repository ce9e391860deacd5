# backend/models/user_model.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, DateTime, CheckConstraint
from sqlalchemy.types import Unicode
from sqlalchemy.orm import relationship

from database.session import Base

ROLES = ("manufacturer", "distributor", "retailer", "candidate", "admin")
# roles that get a company profile provisioned at registration
PROFILE_ROLES = ("manufacturer", "distributor", "retailer")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id            = Column(Integer, primary_key=True, index=True)
    name          = Column(Unicode(255), nullable=False)
    email         = Column(Unicode(255), unique=True, nullable=False, index=True)
    password_hash = Column(Unicode(255), nullable=False)
    role          = Column(Unicode(20), nullable=False)
    created_at    = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint(
            "role in (%s)" % ",".join(f"'{r}'" for r in ROLES),
            name="ck_users_role",
        ),
    )

    profile = relationship("CompanyProfile", back_populates="user", uselist=False)
