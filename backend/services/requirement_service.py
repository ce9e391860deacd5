# backend/services/requirement_service.py
"""
Requirement postings.

A posting belongs to the manufacturer company that created it; the company is
always taken from the caller, never from the request body. Each new posting
draws the next `REQ-NNN` number from the requirement counter.
"""
import logging
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from models.user_model import User
from models.requirement_model import Requirement, REQUIREMENT_STATUSES
from queries.requirement_queries import filter_requirements, match_requirements
from schemas.requirements import RequirementCreate, RequirementUpdate
from services import policy
from services.errors import NotFound, Unauthorized
from services.sequence_service import REQUIREMENT_SEQUENCE, next_value, format_req_id

logger = logging.getLogger(__name__)


def _base_query(db: Session):
    return db.query(Requirement).options(joinedload(Requirement.company))


def _newest_first(q):
    return q.order_by(Requirement.created_at.desc(), Requirement.id.desc())


def create(db: Session, user: User, data: RequirementCreate) -> Requirement:
    try:
        profile = policy.caller_profile(db, user)
    except NotFound:
        raise NotFound("Company profile not found. Please complete your company profile first.")

    req = Requirement(
        req_id=format_req_id(next_value(db, REQUIREMENT_SEQUENCE)),
        title=data.title,
        company_id=profile.id,
        target_audience=data.target_audience,
        states=data.states,
        towns=data.towns,
        marketing_support=data.marketing_support,
        support_options=data.support_options.model_dump(by_alias=True),
        notes=data.notes,
        status=data.status,
    )
    db.add(req)
    db.commit()
    logger.info("Requirement %s created by %s", req.req_id, user.email)
    return get(db, req.id)


def get(db: Session, requirement_id: int) -> Requirement:
    req = _base_query(db).filter(Requirement.id == requirement_id).first()
    if not req:
        raise NotFound("Requirement not found")
    return req


def list_all(
    db: Session,
    search: Optional[str] = None,
    status: Optional[str] = None,
    audience: Optional[str] = None,
    state: Optional[str] = None,
    town: Optional[str] = None,
) -> List[Requirement]:
    reqs = _newest_first(_base_query(db)).all()
    return filter_requirements(
        reqs, search=search, status=status, audience=audience, state=state, town=town
    )


def list_mine(db: Session, user: Optional[User]) -> List[Requirement]:
    if user is None or user.role != "manufacturer":
        raise Unauthorized("Only manufacturers have requirements")
    profile = policy.caller_profile(db, user)
    return _newest_first(_base_query(db).filter(Requirement.company_id == profile.id)).all()


def matches(db: Session, user: User) -> List[Requirement]:
    profile = policy.caller_profile(db, user)
    reqs = _newest_first(_base_query(db).filter(Requirement.status == "OPEN")).all()
    return match_requirements(reqs, user.role, profile)


def update(
    db: Session, requirement_id: int, user: Optional[User], patch: RequirementUpdate
) -> Requirement:
    req = get(db, requirement_id)
    policy.ensure_requirement_access(db, req, user)

    changes = {k: v for k, v in patch.model_dump(exclude_unset=True).items() if v is not None}
    if "support_options" in changes:
        changes["support_options"] = patch.support_options.model_dump(by_alias=True)
    for name, value in changes.items():
        setattr(req, name, value)

    db.commit()
    logger.info(
        "Requirement %s updated (fields: %s)", req.req_id, ", ".join(sorted(changes)) or "none"
    )
    return get(db, req.id)


def delete(db: Session, requirement_id: int, user: Optional[User]) -> None:
    req = get(db, requirement_id)
    policy.ensure_requirement_access(db, req, user)
    req_id = req.req_id
    db.delete(req)
    db.commit()
    logger.info("Requirement %s deleted", req_id)


def stats(db: Session) -> Dict[str, int]:
    counts = dict(
        db.query(Requirement.status, func.count(Requirement.id))
        .group_by(Requirement.status)
        .all()
    )
    out = {s: counts.get(s, 0) for s in REQUIREMENT_STATUSES}
    out["total"] = sum(out.values())
    return out
