# backend/routers/company_router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from database.session import get_db
from models.user_model import User
from models.company_profile_model import CompanyProfile
from routers.deps import require_roles
from schemas.company import (
    CompanyProfilePatch, CompanyProfileOut, OwnProfileOut, StatusUpdate, ProfileStats, MessageOut,
)
from services import profile_service

router = APIRouter(prefix="/company", tags=["company"])

company_roles = require_roles("manufacturer", "distributor", "retailer")
admin_only = require_roles("admin")


def _to_out(p: CompanyProfile) -> CompanyProfileOut:
    return CompanyProfileOut.model_validate(p)


def _to_own(p: CompanyProfile, user: User) -> OwnProfileOut:
    data = CompanyProfileOut.model_validate(p).model_dump()
    return OwnProfileOut(**data, caller_id=str(user.id), caller_email=user.email)


# ---------- own profile ----------

@router.get("", response_model=OwnProfileOut)
def get_my_profile(user: User = Depends(company_roles), db: Session = Depends(get_db)):
    return _to_own(profile_service.get_own(db, user), user)


@router.post("", response_model=OwnProfileOut)
def save_my_profile(
    body: CompanyProfilePatch,
    response: Response,
    user: User = Depends(company_roles),
    db: Session = Depends(get_db),
):
    profile, created = profile_service.upsert(db, user, body)
    if created:
        response.status_code = 201
    return _to_own(profile, user)


# ---------- directory browse ----------

@router.get("/distributors", response_model=List[CompanyProfileOut])
def list_distributors(
    _: User = Depends(require_roles("manufacturer")), db: Session = Depends(get_db)
):
    return [_to_out(p) for p in profile_service.list_by_role(db, "distributor")]


@router.get("/retailers", response_model=List[CompanyProfileOut])
def list_retailers(
    _: User = Depends(require_roles("manufacturer")), db: Session = Depends(get_db)
):
    return [_to_out(p) for p in profile_service.list_by_role(db, "retailer")]


# ---------- admin ----------

@router.get("/all", response_model=List[CompanyProfileOut])
def list_all_profiles(
    role: Optional[str] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
    _: User = Depends(admin_only),
    db: Session = Depends(get_db),
):
    profiles = profile_service.list_all(db, role=role, search=search, status=status)
    return [_to_out(p) for p in profiles]


@router.get("/stats", response_model=ProfileStats)
def profile_stats(_: User = Depends(admin_only), db: Session = Depends(get_db)):
    return ProfileStats(**profile_service.stats(db))


@router.get("/{profile_id}", response_model=CompanyProfileOut)
def get_profile(profile_id: int, _: User = Depends(admin_only), db: Session = Depends(get_db)):
    return _to_out(profile_service.get_by_id(db, profile_id))


@router.patch("/{profile_id}/status", response_model=CompanyProfileOut)
def update_status(
    profile_id: int,
    body: StatusUpdate,
    _: User = Depends(admin_only),
    db: Session = Depends(get_db),
):
    return _to_out(profile_service.set_status(db, profile_id, body.status))


@router.delete("/{profile_id}", response_model=MessageOut)
def delete_profile(profile_id: int, _: User = Depends(admin_only), db: Session = Depends(get_db)):
    profile_service.delete(db, profile_id)
    return MessageOut(message="Company and related data deleted")
