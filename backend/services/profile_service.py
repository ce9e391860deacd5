# backend/services/profile_service.py
"""
Company profile store.

One profile per user. Owners save their profile tab by tab, so every save is a
patch: only the top-level keys present in the request are written, and nested
documents (addresses, gallery, certificates, coverage, ...) replace the stored
value as a whole. Admins only change the moderation status or delete.
"""
import logging
from typing import Dict, Any, List, Optional, Tuple

from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from models.user_model import User
from models.company_profile_model import CompanyProfile, PROFILE_STATUSES
from queries.directory_queries import filter_profiles
from schemas.company import (
    Address, Gallery, Certificates, GeographicCoverage, NetworkDetails, CompanyProfilePatch,
)
from services.errors import InvalidArgument, NotFound

logger = logging.getLogger(__name__)

BUSINESS_MODELS_BY_ROLE = {
    "manufacturer": ("Manufacturer", "Outsourcing", "Importer"),
    "distributor": ("Distributor", "Supplier", "Dealer", "C&F", "OEM", "Showroom"),
    "retailer": (
        "Manufacturer", "Outsourcing", "Importer",
        "Distributor", "Supplier", "Dealer", "C&F", "OEM", "Showroom",
    ),
}


def _doc(model_cls) -> Dict[str, Any]:
    return model_cls().model_dump(by_alias=True)


# column -> factory for its documented default
PROFILE_DEFAULTS = {
    "company_name": lambda: "",
    "industry": lambda: "",
    "business_model": list,
    "company_type": lambda: "Proprietor",
    "incorporation_year": lambda: "",
    "gst_number": lambda: "",
    "owner_name": lambda: "",
    "other_directors": list,
    "contact_number": lambda: "",
    "email": lambda: "",
    "website": lambda: "",
    "head_office": lambda: _doc(Address),
    "manufacturing_unit": lambda: _doc(Address),
    "branches": list,
    "products": list,
    "gallery": lambda: _doc(Gallery),
    "certificates": lambda: _doc(Certificates),
    "geographic_coverage": lambda: _doc(GeographicCoverage),
    "network_details": lambda: _doc(NetworkDetails),
}


def default_profile_fields(owner_name: str = "", email: str = "") -> Dict[str, Any]:
    fields = {name: factory() for name, factory in PROFILE_DEFAULTS.items()}
    fields["owner_name"] = owner_name
    fields["email"] = email
    return fields


def _to_storage(value):
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    if isinstance(value, list):
        return [_to_storage(v) for v in value]
    return value


def merge_profile_fields(patch: CompanyProfilePatch) -> Dict[str, Any]:
    """
    Column values for the keys the client actually sent.

    Omitted keys are absent from the result; an explicit null maps to the
    field's default; nested documents come back whole, never deep-merged.
    """
    changes = {}
    for name in patch.model_fields_set:
        value = getattr(patch, name)
        if value is None:
            changes[name] = PROFILE_DEFAULTS[name]()
        else:
            changes[name] = _to_storage(value)
    return changes


def check_business_model(role: str, values: Optional[List[str]]) -> None:
    if not values:
        return
    allowed = BUSINESS_MODELS_BY_ROLE.get(role, ())
    rejected = [v for v in values if v not in allowed]
    if rejected:
        raise InvalidArgument(
            f"Business model {', '.join(rejected)} is not available for a {role}"
        )


def get_for_user(db: Session, user_id: int) -> Optional[CompanyProfile]:
    return db.query(CompanyProfile).filter(CompanyProfile.user_id == user_id).first()


def get_own(db: Session, user: User) -> CompanyProfile:
    profile = get_for_user(db, user.id)
    if not profile:
        logger.info("No profile found for user %s", user.email)
        raise NotFound("Company profile not found")
    return profile


def upsert(db: Session, user: User, patch: CompanyProfilePatch) -> Tuple[CompanyProfile, bool]:
    """Apply a partial save for `user`. Returns (profile, created)."""
    changes = merge_profile_fields(patch)
    check_business_model(user.role, changes.get("business_model"))

    profile = get_for_user(db, user.id)
    created = profile is None
    if created:
        # provisioning at registration failed or predates this user; build from defaults
        fields = default_profile_fields()
        fields.update(changes)
        profile = CompanyProfile(user_id=user.id, status="pending", **fields)
        db.add(profile)
    else:
        for name, value in changes.items():
            setattr(profile, name, value)

    db.commit()
    db.refresh(profile)
    logger.info(
        "Company profile %s for %s (fields: %s)",
        "created" if created else "updated",
        user.email,
        ", ".join(sorted(changes)) or "none",
    )
    return profile, created


def get_by_id(db: Session, profile_id: int) -> CompanyProfile:
    profile = (
        db.query(CompanyProfile)
        .options(joinedload(CompanyProfile.user))
        .filter(CompanyProfile.id == profile_id)
        .first()
    )
    if not profile:
        raise NotFound("Company profile not found")
    return profile


def list_all(
    db: Session,
    role: Optional[str] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> List[CompanyProfile]:
    """Every profile, newest first, optionally narrowed like the admin monitor does."""
    q = db.query(CompanyProfile).options(joinedload(CompanyProfile.user))
    if role:
        q = q.join(User, User.id == CompanyProfile.user_id).filter(User.role == role)
    profiles = q.order_by(CompanyProfile.created_at.desc(), CompanyProfile.id.desc()).all()
    return filter_profiles(profiles, search=search, status=status)


def set_status(db: Session, profile_id: int, status: str) -> CompanyProfile:
    if status not in PROFILE_STATUSES:
        raise InvalidArgument("Invalid status value")
    profile = get_by_id(db, profile_id)
    profile.status = status
    db.commit()
    db.refresh(profile)
    logger.info("Company status updated: %s -> %s", profile.company_name or profile.id, status)
    return profile


def delete(db: Session, profile_id: int) -> None:
    """Remove the profile, its owning user and all its requirements in one transaction."""
    profile = get_by_id(db, profile_id)
    label = profile.company_name or f"profile {profile.id}"
    user_id = profile.user_id
    try:
        removed = len(profile.requirements)
        owner = profile.user
        db.delete(profile)
        if owner is not None:
            db.delete(owner)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Cascade delete failed for %s; nothing was removed", label)
        raise
    logger.info("Company deleted: %s (user %s, %s requirements)", label, user_id, removed)


def list_by_role(db: Session, role: str) -> List[CompanyProfile]:
    """Directory browse: profiles of `role` users that have a company name."""
    return (
        db.query(CompanyProfile)
        .join(User, User.id == CompanyProfile.user_id)
        .options(joinedload(CompanyProfile.user))
        .filter(User.role == role, CompanyProfile.company_name != "")
        .order_by(CompanyProfile.created_at.desc(), CompanyProfile.id.desc())
        .all()
    )


def stats(db: Session) -> Dict[str, int]:
    counts = dict(
        db.query(CompanyProfile.status, func.count(CompanyProfile.id))
        .group_by(CompanyProfile.status)
        .all()
    )
    out = {s: counts.get(s, 0) for s in PROFILE_STATUSES}
    out["total"] = sum(out.values())
    return out
