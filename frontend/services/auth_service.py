# frontend/services/auth_service.py
from typing import Tuple, Optional, Dict

from frontend.services.api_client import ApiClient, ApiError, SessionContext


class AuthService:
    """Login/sign-up against the API; a successful call fills the session."""

    def __init__(self, client: ApiClient):
        self.client = client

    @property
    def session(self) -> SessionContext:
        return self.client.session

    # ---------- LOGIN ----------
    def verify_login(
        self, email: str, password: str, role: Optional[str] = None
    ) -> Tuple[bool, Optional[Dict], Optional[str]]:
        body = {"email": email, "password": password}
        if role:
            body["role"] = role
        try:
            user = self.client.post("/auth/login", body)
        except ApiError as e:
            return False, None, e.message
        self.session.fill(user)
        return True, user, None

    # ---------- SIGNUP ----------
    def register_user(
        self, name: str, email: str, password: str, role: str
    ) -> Tuple[bool, Optional[Dict], Optional[str]]:
        try:
            user = self.client.post(
                "/auth/register",
                {"name": name, "email": email, "password": password, "role": role},
            )
        except ApiError as e:
            return False, None, e.message
        self.session.fill(user)
        return True, user, None

    def logout(self) -> None:
        self.session.clear()
