# frontend/services/requirements_service.py
from typing import Any, Dict, List, Optional

from frontend.services.api_client import ApiClient


class RequirementsService:
    def __init__(self, client: ApiClient):
        self.client = client

    def list(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        audience: Optional[str] = None,
        state: Optional[str] = None,
        town: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params = {
            "search": search, "status": status, "audience": audience, "state": state, "town": town,
        }
        params = {k: v for k, v in params.items() if v}
        return self.client.get("/requirements", params=params or None)

    def mine(self) -> List[Dict[str, Any]]:
        return self.client.get("/requirements/my-requirements")

    def matches(self) -> List[Dict[str, Any]]:
        return self.client.get("/requirements/matches")

    def stats(self) -> Dict[str, int]:
        return self.client.get("/requirements/stats")

    def get(self, requirement_id: int) -> Dict[str, Any]:
        return self.client.get(f"/requirements/{requirement_id}")

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.post("/requirements", payload)

    def update(self, requirement_id: int, patch: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.put(f"/requirements/{requirement_id}", patch)

    def set_status(self, requirement_id: int, status: str) -> Dict[str, Any]:
        return self.update(requirement_id, {"status": status})

    def delete(self, requirement_id: int) -> None:
        self.client.delete(f"/requirements/{requirement_id}")
