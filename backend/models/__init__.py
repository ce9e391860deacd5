# backend/models/__init__.py
from .user_model import User, ROLES, PROFILE_ROLES
from .company_profile_model import CompanyProfile, PROFILE_STATUSES
from .requirement_model import (
    Requirement,
    REQUIREMENT_STATUSES,
    TARGET_AUDIENCES,
)
from .sequence_model import SequenceCounter

__all__ = [
    "User", "ROLES", "PROFILE_ROLES",
    "CompanyProfile", "PROFILE_STATUSES",
    "Requirement", "REQUIREMENT_STATUSES", "TARGET_AUDIENCES",
    "SequenceCounter",
]
