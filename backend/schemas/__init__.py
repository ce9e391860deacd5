# backend/schemas/__init__.py

# auth
from .users import RegisterPayload, LoginPayload, AuthResponse, UserMini, Role, RegisterRole

# company profiles
from .company import (
    Address, Branch, Product, Gallery, Certificates, GeographicCoverage, NetworkDetails,
    CompanyProfilePatch, CompanyProfileOut, OwnProfileOut, StatusUpdate, ProfileStats,
    MessageOut, GALLERY_SECTIONS, CERTIFICATE_KEYS,
)

# requirements
from .requirements import (
    SupportOptions, RequirementCreate, RequirementUpdate, RequirementOut,
    CompanySummary, RequirementStats, RequirementStatus, TargetAudience,
)

# media
from .media import MediaUploadOut

__all__ = [
    # auth
    "RegisterPayload", "LoginPayload", "AuthResponse", "UserMini", "Role", "RegisterRole",
    # company profiles
    "Address", "Branch", "Product", "Gallery", "Certificates", "GeographicCoverage",
    "NetworkDetails", "CompanyProfilePatch", "CompanyProfileOut", "OwnProfileOut",
    "StatusUpdate", "ProfileStats", "MessageOut", "GALLERY_SECTIONS", "CERTIFICATE_KEYS",
    # requirements
    "SupportOptions", "RequirementCreate", "RequirementUpdate", "RequirementOut",
    "CompanySummary", "RequirementStats", "RequirementStatus", "TargetAudience",
    # media
    "MediaUploadOut",
]
