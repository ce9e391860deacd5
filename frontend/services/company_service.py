# frontend/services/company_service.py
from typing import Any, Dict, List, Optional

from frontend.services.api_client import ApiClient, ApiError

# profile tabs and the top-level keys each one saves
PROFILE_TABS = {
    "general": (
        "companyName", "industry", "businessModel", "companyType", "incorporationYear",
        "gstNumber", "ownerName", "otherDirectors", "contactNumber", "email", "website",
        "headOffice", "manufacturingUnit", "branches",
    ),
    "products": ("products",),
    "gallery": ("gallery",),
    "certificates": ("certificates",),
    "network": ("geographicCoverage", "networkDetails"),
}


class CompanyService:
    def __init__(self, client: ApiClient):
        self.client = client

    # ---- own profile ----
    def get_profile(self) -> Dict[str, Any]:
        profile = self.client.get("/company")
        # a profile served for another account means a stale session
        if str(profile.get("_userId")) != str(self.client.session.user_id):
            raise ApiError(409, "Profile does not belong to the signed-in user")
        return profile

    def save_profile(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Partial save: only the keys in `fields` are written."""
        return self.client.post("/company", fields)

    def save_tab(self, tab: str, data: Dict[str, Any]) -> Dict[str, Any]:
        keys = PROFILE_TABS[tab]
        return self.save_profile({k: data[k] for k in keys if k in data})

    def upload_media(self, kind: str, path: str) -> Dict[str, Any]:
        with open(path, "rb") as fh:
            return self.client.post(
                "/media/upload", data={"kind": kind}, files={"file": fh}, timeout=60
            )

    # ---- directory ----
    def list_distributors(self) -> List[Dict[str, Any]]:
        return self.client.get("/company/distributors")

    def list_retailers(self) -> List[Dict[str, Any]]:
        return self.client.get("/company/retailers")

    # ---- admin ----
    def list_all(
        self, role: Optional[str] = None, search: Optional[str] = None, status: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        params = {k: v for k, v in {"role": role, "search": search, "status": status}.items() if v}
        return self.client.get("/company/all", params=params or None)

    def stats(self) -> Dict[str, int]:
        return self.client.get("/company/stats")

    def get_by_id(self, profile_id: int) -> Dict[str, Any]:
        return self.client.get(f"/company/{profile_id}")

    def set_status(self, profile_id: int, status: str) -> Dict[str, Any]:
        return self.client.patch(f"/company/{profile_id}/status", {"status": status})

    def delete(self, profile_id: int) -> None:
        self.client.delete(f"/company/{profile_id}")
