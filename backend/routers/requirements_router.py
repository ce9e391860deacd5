# backend/routers/requirements_router.py
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.session import get_db
from models.user_model import User
from models.requirement_model import Requirement
from routers.deps import get_optional_user, require_roles
from schemas.company import MessageOut
from schemas.requirements import (
    RequirementCreate, RequirementUpdate, RequirementOut, RequirementStats,
    RequirementStatus, TargetAudience,
)
from services import requirement_service

router = APIRouter(prefix="/requirements", tags=["requirements"])


def _to_out(r: Requirement) -> RequirementOut:
    return RequirementOut.model_validate(r)


@router.get("", response_model=List[RequirementOut])
def list_requirements(
    search: Optional[str] = None,
    status: Optional[RequirementStatus] = None,
    audience: Optional[TargetAudience] = None,
    state: Optional[str] = None,
    town: Optional[str] = None,
    db: Session = Depends(get_db),
):
    reqs = requirement_service.list_all(
        db, search=search, status=status, audience=audience, state=state, town=town
    )
    return [_to_out(r) for r in reqs]


@router.get("/my-requirements", response_model=List[RequirementOut])
def my_requirements(
    user: User = Depends(require_roles("manufacturer")), db: Session = Depends(get_db)
):
    return [_to_out(r) for r in requirement_service.list_mine(db, user)]


@router.get("/matches", response_model=List[RequirementOut])
def matching_requirements(
    user: User = Depends(require_roles("distributor", "retailer")), db: Session = Depends(get_db)
):
    return [_to_out(r) for r in requirement_service.matches(db, user)]


@router.get("/stats", response_model=RequirementStats)
def requirement_stats(_: User = Depends(require_roles("admin")), db: Session = Depends(get_db)):
    return RequirementStats(**requirement_service.stats(db))


@router.get("/{requirement_id}", response_model=RequirementOut)
def get_requirement(requirement_id: int, db: Session = Depends(get_db)):
    return _to_out(requirement_service.get(db, requirement_id))


@router.post("", response_model=RequirementOut, status_code=201)
def create_requirement(
    body: RequirementCreate,
    user: User = Depends(require_roles("manufacturer")),
    db: Session = Depends(get_db),
):
    return _to_out(requirement_service.create(db, user, body))


@router.put("/{requirement_id}", response_model=RequirementOut)
def update_requirement(
    requirement_id: int,
    body: RequirementUpdate,
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    return _to_out(requirement_service.update(db, requirement_id, user, body))


@router.delete("/{requirement_id}", response_model=MessageOut)
def delete_requirement(
    requirement_id: int,
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    requirement_service.delete(db, requirement_id, user)
    return MessageOut(message="Requirement deleted")
