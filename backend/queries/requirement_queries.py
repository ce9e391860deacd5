# backend/queries/requirement_queries.py
"""
In-memory narrowing of requirement lists.

States and towns live in JSON columns, so geography is matched here rather
than in SQL. An empty states/towns list on a requirement means "anywhere".
"""
from typing import Iterable, List, Optional

from models.company_profile_model import CompanyProfile
from models.requirement_model import Requirement

REQUIREMENT_SEARCH_FIELDS = ("title", "req_id", "notes")
COMPANY_SEARCH_FIELDS = ("company_name", "owner_name", "gst_number")

# which target audiences a browsing role can see
AUDIENCES_FOR_ROLE = {
    "distributor": ("Distributor", "Both"),
    "retailer": ("Retailer", "Both"),
}


def _norm(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def _covers(places: Optional[List[str]], wanted: str) -> bool:
    if not places:
        return True
    return wanted in {_norm(p) for p in places}


def _matches_search(req: Requirement, needle: str) -> bool:
    for field in REQUIREMENT_SEARCH_FIELDS:
        if needle in _norm(getattr(req, field)):
            return True
    company = req.company
    if company is not None:
        for field in COMPANY_SEARCH_FIELDS:
            if needle in _norm(getattr(company, field)):
                return True
    return False


def filter_requirements(
    requirements: Iterable[Requirement],
    search: Optional[str] = None,
    status: Optional[str] = None,
    audience: Optional[str] = None,
    state: Optional[str] = None,
    town: Optional[str] = None,
) -> List[Requirement]:
    needle = _norm(search)
    state, town = _norm(state), _norm(town)

    out = []
    for r in requirements:
        if status and r.status != status:
            continue
        if audience and r.target_audience != audience:
            continue
        if state and not _covers(r.states, state):
            continue
        if town and not _covers(r.towns, town):
            continue
        if needle and not _matches_search(r, needle):
            continue
        out.append(r)
    return out


def _profile_places(role: str, profile: Optional[CompanyProfile]):
    """States and towns the browsing company operates in."""
    states, towns = set(), set()
    if profile is None:
        return states, towns

    head_office = profile.head_office or {}
    if _norm(head_office.get("state")):
        states.add(_norm(head_office.get("state")))
    if _norm(head_office.get("town")):
        towns.add(_norm(head_office.get("town")))

    if role == "distributor":
        coverage = profile.geographic_coverage or {}
        for entry in coverage.get("states") or []:
            if _norm(entry.get("state")):
                states.add(_norm(entry.get("state")))
            for district in entry.get("districts") or []:
                if _norm(district):
                    towns.add(_norm(district))
    return states, towns


def _overlaps(places: Optional[List[str]], mine: set) -> bool:
    # requirement open to anywhere, or the browser has not said where it is
    if not places or not mine:
        return True
    return any(_norm(p) in mine for p in places)


def match_requirements(
    requirements: Iterable[Requirement],
    role: str,
    profile: Optional[CompanyProfile] = None,
) -> List[Requirement]:
    """OPEN requirements addressed to `role` whose geography overlaps the browsing company."""
    audiences = AUDIENCES_FOR_ROLE.get(role, ())
    states, towns = _profile_places(role, profile)

    out = []
    for r in requirements:
        if r.status != "OPEN" or r.target_audience not in audiences:
            continue
        if not _overlaps(r.states, states) or not _overlaps(r.towns, towns):
            continue
        out.append(r)
    return out
