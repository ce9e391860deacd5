import re
from datetime import datetime
from typing import Optional, List, Literal

from pydantic import Field, constr, field_validator

from schemas.base import CamelModel
from schemas.users import UserMini

CompanyType = Literal["Proprietor", "Partnership", "LLP", "Pvt Ltd", "Public Ltd"]
BusinessModel = Literal[
    "Manufacturer", "Outsourcing", "Importer",
    "Distributor", "Supplier", "Dealer", "C&F", "OEM", "Showroom",
]
NetworkBand = Literal["0–50", "50–100", "100–200", "200–300", "300 & Above"]
ProfileStatus = Literal["pending", "underReview", "approved", "rejected"]

GST_PATTERN = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")

Required = constr(strip_whitespace=True, min_length=1)


# ---------- nested documents ----------

class Address(CamelModel):
    country: str = "India"
    state: str = ""
    town: str = ""
    address: str = ""


class Branch(CamelModel):
    country: str = "India"
    state: Required
    town: Required
    address: Required
    contact: Required


class Product(CamelModel):
    category: Required
    sub_category: Optional[str] = None
    quantity_band: Optional[str] = None
    brand_name: Optional[str] = None
    multi_brand_support: bool = False
    other_product: Optional[str] = None


class Gallery(CamelModel):
    factory: List[str] = Field(default_factory=list)
    machinery: List[str] = Field(default_factory=list)
    offices: List[str] = Field(default_factory=list)
    warehouse: List[str] = Field(default_factory=list)
    products: List[str] = Field(default_factory=list)
    events: List[str] = Field(default_factory=list)


class Certificates(CamelModel):
    gst: str = ""
    iso: str = ""
    msme: str = ""
    import_license: str = ""
    compliance: List[str] = Field(default_factory=list)


class StateCoverage(CamelModel):
    state: Required
    districts: List[str] = Field(default_factory=list)


class GeographicCoverage(CamelModel):
    country: str = "India"
    states: List[StateCoverage] = Field(default_factory=list)


class NetworkDetails(CamelModel):
    distributor_network: Optional[NetworkBand] = None
    influencer_network: Optional[NetworkBand] = None

    @field_validator("distributor_network", "influencer_network", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        return v or None


GALLERY_SECTIONS = tuple(Gallery.model_fields)
CERTIFICATE_KEYS = tuple(Certificates.model_fields)


# ---------- patch / output ----------

class CompanyProfilePatch(CamelModel):
    """
    Partial profile save. Only keys present in the request are applied;
    nested documents (addresses, gallery, certificates, ...) replace the
    stored value wholesale.
    """
    company_name: Optional[str] = None
    industry: Optional[str] = None
    business_model: Optional[List[BusinessModel]] = None
    company_type: Optional[CompanyType] = None
    incorporation_year: Optional[str] = None
    gst_number: Optional[str] = None
    owner_name: Optional[str] = None
    other_directors: Optional[List[str]] = None
    contact_number: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None

    head_office: Optional[Address] = None
    manufacturing_unit: Optional[Address] = None
    branches: Optional[List[Branch]] = None

    products: Optional[List[Product]] = None
    gallery: Optional[Gallery] = None
    certificates: Optional[Certificates] = None

    geographic_coverage: Optional[GeographicCoverage] = None
    network_details: Optional[NetworkDetails] = None

    @field_validator("gst_number")
    @classmethod
    def valid_gst(cls, v):
        if v and not GST_PATTERN.match(v):
            raise ValueError("Please enter a valid GST Number")
        return v


class CompanyProfileOut(CamelModel):
    id: int
    user_id: int
    user: Optional[UserMini] = None

    company_name: str = ""
    industry: str = ""
    business_model: List[str] = Field(default_factory=list)
    company_type: str = "Proprietor"
    incorporation_year: str = ""
    gst_number: str = ""
    owner_name: str = ""
    other_directors: List[str] = Field(default_factory=list)
    contact_number: str = ""
    email: str = ""
    website: str = ""

    head_office: Address = Field(default_factory=Address)
    manufacturing_unit: Address = Field(default_factory=Address)
    branches: List[Branch] = Field(default_factory=list)
    products: List[Product] = Field(default_factory=list)
    gallery: Gallery = Field(default_factory=Gallery)
    certificates: Certificates = Field(default_factory=Certificates)
    geographic_coverage: GeographicCoverage = Field(default_factory=GeographicCoverage)
    network_details: NetworkDetails = Field(default_factory=NetworkDetails)

    status: ProfileStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OwnProfileOut(CompanyProfileOut):
    # echoed so the client can detect a profile served for the wrong account
    caller_id: str = Field(alias="_userId")
    caller_email: str = Field(alias="_userEmail")


class StatusUpdate(CamelModel):
    status: str


class ProfileStats(CamelModel):
    total: int
    pending: int = 0
    under_review: int = 0
    approved: int = 0
    rejected: int = 0


class MessageOut(CamelModel):
    message: str
