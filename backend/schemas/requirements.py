from datetime import datetime
from typing import Optional, List, Literal

from pydantic import ConfigDict, Field, computed_field, constr, field_validator
from pydantic.alias_generators import to_camel

from schemas.base import CamelModel
from schemas.company import Address

RequirementStatus = Literal["OPEN", "CLOSED", "FULFILLED", "EXPIRED"]
TargetAudience = Literal["Distributor", "Retailer", "Both"]

Title = constr(strip_whitespace=True, min_length=1, max_length=255)


def _unique_places(values):
    """Strip, drop blanks and de-duplicate while keeping the first occurrence."""
    if values is None:
        return None
    seen, out = set(), []
    for v in values:
        v = (v or "").strip()
        if v and v not in seen:
            seen.add(v)
            out.append(v)
    return out


class SupportOptions(CamelModel):
    model_config = ConfigDict(extra="forbid")

    marketing_team: bool = False
    branding: bool = False
    influencer_meets: bool = False
    gifts: bool = False
    schemes: bool = False
    stock_support: bool = False


class RequirementCreate(CamelModel):
    title: Title
    target_audience: TargetAudience
    states: List[str] = Field(default_factory=list)
    towns: List[str] = Field(default_factory=list)
    marketing_support: bool = False
    support_options: SupportOptions = Field(default_factory=SupportOptions)
    notes: str = ""
    status: RequirementStatus = "OPEN"

    @field_validator("states", "towns")
    @classmethod
    def clean_places(cls, v):
        return _unique_places(v)


class RequirementUpdate(CamelModel):
    """Any subset of fields; `false` and empty lists are real values, `null` means untouched."""
    title: Optional[Title] = None
    target_audience: Optional[TargetAudience] = None
    states: Optional[List[str]] = None
    towns: Optional[List[str]] = None
    marketing_support: Optional[bool] = None
    support_options: Optional[SupportOptions] = None
    notes: Optional[str] = None
    status: Optional[RequirementStatus] = None

    @field_validator("states", "towns")
    @classmethod
    def clean_places(cls, v):
        return _unique_places(v)


class CompanySummary(CamelModel):
    id: int
    company_name: str = ""
    owner_name: str = ""
    email: str = ""
    contact_number: str = ""
    gst_number: str = ""
    head_office: Address = Field(default_factory=Address)


class RequirementOut(CamelModel):
    id: int
    req_id: str
    title: str
    company_id: int
    company: Optional[CompanySummary] = None
    target_audience: TargetAudience
    states: List[str] = Field(default_factory=list)
    towns: List[str] = Field(default_factory=list)
    marketing_support: bool = False
    support_options: SupportOptions = Field(default_factory=SupportOptions)
    notes: str = ""
    status: RequirementStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @computed_field(alias="activeSupportOptions")
    @property
    def active_support_options(self) -> List[str]:
        if not self.marketing_support:
            return []
        return [to_camel(name) for name, on in self.support_options if on]


class RequirementStats(CamelModel):
    total: int
    open: int = Field(0, alias="OPEN")
    closed: int = Field(0, alias="CLOSED")
    fulfilled: int = Field(0, alias="FULFILLED")
    expired: int = Field(0, alias="EXPIRED")
