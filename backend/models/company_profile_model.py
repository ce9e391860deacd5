# backend/models/company_profile_model.py
from sqlalchemy import Column, Integer, DateTime, ForeignKey, JSON, CheckConstraint
from sqlalchemy.types import Unicode
from sqlalchemy.orm import relationship

from database.session import Base
from models.user_model import utcnow

PROFILE_STATUSES = ("pending", "underReview", "approved", "rejected")


class CompanyProfile(Base):
    __tablename__ = "company_profiles"

    id                 = Column(Integer, primary_key=True, index=True)
    # one profile per user, enforced by the unique constraint
    user_id            = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)

    company_name       = Column(Unicode(255), nullable=False, default="")
    industry           = Column(Unicode(255), nullable=False, default="")
    company_type       = Column(Unicode(32), nullable=False, default="Proprietor")
    incorporation_year = Column(Unicode(8), nullable=False, default="")
    gst_number         = Column(Unicode(15), nullable=False, default="")
    owner_name         = Column(Unicode(255), nullable=False, default="")
    contact_number     = Column(Unicode(32), nullable=False, default="")
    email              = Column(Unicode(255), nullable=False, default="")
    website            = Column(Unicode(255), nullable=False, default="")

    business_model      = Column(JSON, nullable=False, default=list)
    other_directors     = Column(JSON, nullable=False, default=list)
    head_office         = Column(JSON, nullable=False, default=dict)
    manufacturing_unit  = Column(JSON, nullable=False, default=dict)
    branches            = Column(JSON, nullable=False, default=list)
    products            = Column(JSON, nullable=False, default=list)
    gallery             = Column(JSON, nullable=False, default=dict)
    certificates        = Column(JSON, nullable=False, default=dict)
    geographic_coverage = Column(JSON, nullable=False, default=dict)
    network_details     = Column(JSON, nullable=False, default=dict)

    status     = Column(Unicode(20), nullable=False, default="pending")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint(
            "status in (%s)" % ",".join(f"'{s}'" for s in PROFILE_STATUSES),
            name="ck_company_profiles_status",
        ),
    )

    user         = relationship("User", back_populates="profile")
    requirements = relationship("Requirement", back_populates="company", cascade="all, delete-orphan")
