# frontend/services/api_client.py
"""
HTTP client for the directory API.

The caller's session is an explicit `SessionContext` handed to the client;
nothing reads login state from globals. A 401 clears that session, a 403
carries the route the UI should send the user back to.
"""
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

API_BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000/api")

HOME_ROUTES = {
    "manufacturer": "/manufacturer",
    "distributor": "/distributor",
    "retailer": "/retailer",
    "admin": "/admin",
}


@dataclass
class SessionContext:
    token: Optional[str] = None
    user_id: Optional[int] = None
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def clear(self) -> None:
        self.token = None
        self.user_id = None
        self.name = None
        self.email = None
        self.role = None

    def home_route(self) -> str:
        return HOME_ROUTES.get(self.role or "", "/")

    def fill(self, auth: Dict[str, Any]) -> None:
        """Load the `{id,name,email,role,token}` body returned by login/register."""
        self.token = auth.get("token")
        self.user_id = auth.get("id")
        self.name = auth.get("name")
        self.email = auth.get("email")
        self.role = auth.get("role")


class ApiError(RuntimeError):
    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


class SessionExpired(ApiError):
    pass


class AccessDenied(ApiError):
    def __init__(self, status: int, message: str, redirect_to: str = "/"):
        super().__init__(status, message)
        self.redirect_to = redirect_to


def _err(resp: requests.Response) -> str:
    try:
        j = resp.json()
        if isinstance(j, dict):
            for key in ("message", "detail"):
                if key in j:
                    return str(j[key])
        return str(j)
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"


class ApiClient:
    def __init__(self, session: SessionContext, base_url: str = API_BASE_URL, timeout: float = 15):
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _headers(self) -> Dict[str, str]:
        if self.session.token:
            return {"Authorization": f"Bearer {self.session.token}"}
        return {}

    def request(self, method: str, path: str, **kwargs) -> Any:
        kwargs.setdefault("timeout", self.timeout)
        try:
            r = requests.request(method, self._url(path), headers=self._headers(), **kwargs)
        except requests.exceptions.RequestException as e:
            raise ApiError(0, f"Connection error: {e}")

        if r.status_code == 401:
            self.session.clear()
            raise SessionExpired(401, _err(r))
        if r.status_code == 403:
            raise AccessDenied(403, _err(r), redirect_to=self.session.home_route())
        if r.status_code >= 400:
            raise ApiError(r.status_code, _err(r))
        if r.status_code == 204 or not r.content:
            return None
        return r.json()

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, payload: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        if payload is not None:
            kwargs["json"] = payload
        return self.request("POST", path, **kwargs)

    def put(self, path: str, payload: Dict[str, Any]) -> Any:
        return self.request("PUT", path, json=payload)

    def patch(self, path: str, payload: Dict[str, Any]) -> Any:
        return self.request("PATCH", path, json=payload)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
