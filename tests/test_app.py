"""
Tests for the app shell: health, root and error rendering.
"""
from main import _validation_message


class TestAppShell:

    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        body = r.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["media"] == "not configured"

    def test_root_lists_endpoints(self, client):
        body = client.get("/").json()
        assert body["endpoints"]["requirements"] == "/api/requirements"

    def test_errors_are_rendered_as_message(self, client):
        r = client.get("/api/requirements/404")
        assert r.status_code == 404
        assert r.json() == {"message": "Requirement not found"}

    def test_validation_errors_are_400(self, client):
        r = client.post("/api/auth/login", json={"email": "not-an-email", "password": "x"})
        assert r.status_code == 400
        assert "email" in r.json()["message"]
        assert r.json()["details"]


class TestValidationMessage:

    def test_value_error_text_is_passed_through(self):
        errors = [{"type": "value_error", "loc": ["body", "gstNumber"], "msg": "Value error, Bad GST"}]
        assert _validation_message(errors) == "Bad GST"

    def test_field_is_named(self):
        errors = [{"type": "missing", "loc": ["body", "title"], "msg": "Field required"}]
        assert _validation_message(errors) == "title: Field required"

    def test_empty(self):
        assert _validation_message([]) == "Invalid request"
