# backend/queries/directory_queries.py
from typing import Iterable, List, Optional

from models.company_profile_model import CompanyProfile

# fields the admin monitor searches in
SEARCH_FIELDS = ("company_name", "owner_name", "email", "gst_number")


def _contains(value: Optional[str], needle: str) -> bool:
    return needle in (value or "").lower()


def filter_profiles(
    profiles: Iterable[CompanyProfile],
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> List[CompanyProfile]:
    """Case-insensitive substring search plus exact status match; order is preserved."""
    needle = (search or "").strip().lower()
    out = []
    for p in profiles:
        if status and p.status != status:
            continue
        if needle and not any(_contains(getattr(p, f), needle) for f in SEARCH_FIELDS):
            continue
        out.append(p)
    return out
