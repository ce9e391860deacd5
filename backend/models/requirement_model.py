# backend/models/requirement_model.py
from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey, JSON, CheckConstraint
from sqlalchemy.types import Unicode, UnicodeText
from sqlalchemy.orm import relationship

from database.session import Base
from models.user_model import utcnow

REQUIREMENT_STATUSES = ("OPEN", "CLOSED", "FULFILLED", "EXPIRED")
TARGET_AUDIENCES = ("Distributor", "Retailer", "Both")


class Requirement(Base):
    __tablename__ = "requirements"

    id                = Column(Integer, primary_key=True, index=True)
    req_id            = Column(Unicode(32), unique=True, nullable=False, index=True)
    title             = Column(Unicode(255), nullable=False)
    company_id        = Column(Integer, ForeignKey("company_profiles.id"), nullable=False, index=True)
    target_audience   = Column(Unicode(20), nullable=False)
    states            = Column(JSON, nullable=False, default=list)
    towns             = Column(JSON, nullable=False, default=list)
    marketing_support = Column(Boolean, nullable=False, default=False)
    support_options   = Column(JSON, nullable=False, default=dict)
    notes             = Column(UnicodeText, nullable=False, default="")
    status            = Column(Unicode(20), nullable=False, default="OPEN")
    created_at        = Column(DateTime, nullable=False, default=utcnow)
    updated_at        = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint(
            "status in (%s)" % ",".join(f"'{s}'" for s in REQUIREMENT_STATUSES),
            name="ck_requirements_status",
        ),
        CheckConstraint(
            "target_audience in (%s)" % ",".join(f"'{a}'" for a in TARGET_AUDIENCES),
            name="ck_requirements_audience",
        ),
    )

    company = relationship("CompanyProfile", back_populates="requirements")
