"""
Tests for requirement postings: numbering, ownership, the anonymous console
path, filtering and matching.
"""
import re

import pytest

from config.settings import settings
from models import CompanyProfile

from tests.conftest import auth, save_profile


def _post(client, token, **fields):
    body = {"title": "Need partners", "targetAudience": "Distributor"}
    body.update(fields)
    r = client.post("/api/requirements", json=body, headers=auth(token))
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def posted(client, manufacturer):
    return _post(
        client,
        manufacturer["token"],
        title="Dealers for Gujarat",
        targetAudience="Both",
        states=["Gujarat"],
        towns=["Surat"],
        notes="Cotton yarn",
    )


# ---------------------------------------------------------------------------
# Create / read
# ---------------------------------------------------------------------------

class TestCreate:

    def test_round_trip(self, client, manufacturer):
        created = _post(
            client,
            manufacturer["token"],
            title="Retail partners wanted",
            targetAudience="Retailer",
            states=["Maharashtra", "Goa"],
            towns=["Pune"],
            marketingSupport=True,
            supportOptions={"branding": True, "gifts": True},
            notes="Seasonal range",
        )
        assert re.fullmatch(r"REQ-\d{3,}", created["reqId"])
        assert created["status"] == "OPEN"

        fetched = client.get(f"/api/requirements/{created['id']}").json()
        for key in ("title", "targetAudience", "states", "towns", "marketingSupport", "notes", "reqId"):
            assert fetched[key] == created[key]
        assert fetched["supportOptions"]["branding"] is True
        assert fetched["supportOptions"]["schemes"] is False
        assert fetched["activeSupportOptions"] == ["branding", "gifts"]

    def test_sequential_numbers(self, client, manufacturer):
        first = _post(client, manufacturer["token"])
        second = _post(client, manufacturer["token"])
        assert first["reqId"] == "REQ-001"
        assert second["reqId"] == "REQ-002"

    def test_numbers_are_not_reused_after_delete(self, client, manufacturer):
        token = manufacturer["token"]
        _post(client, token)
        second = _post(client, token)
        client.delete(f"/api/requirements/{second['id']}", headers=auth(token))

        assert _post(client, token)["reqId"] == "REQ-003"

    def test_company_comes_from_caller(self, client, manufacturer):
        token = manufacturer["token"]
        save_profile(client, token, companyName="Acme Mills", headOffice={"state": "Gujarat", "town": "Surat"})
        pid = client.get("/api/company", headers=auth(token)).json()["id"]

        created = _post(client, token, companyId=pid + 100)
        assert created["companyId"] == pid
        assert created["company"]["companyName"] == "Acme Mills"
        assert created["company"]["headOffice"]["town"] == "Surat"

    def test_places_are_deduplicated(self, client, manufacturer):
        created = _post(client, manufacturer["token"], states=["Goa", " Goa ", "", "Kerala", "Goa"])
        assert created["states"] == ["Goa", "Kerala"]

    def test_support_options_are_gated(self, client, manufacturer):
        created = _post(
            client, manufacturer["token"], marketingSupport=False, supportOptions={"branding": True}
        )
        assert created["supportOptions"]["branding"] is True
        assert created["activeSupportOptions"] == []

    def test_unknown_support_option(self, client, manufacturer):
        r = client.post(
            "/api/requirements",
            json={"title": "X", "targetAudience": "Both", "supportOptions": {"freeLunch": True}},
            headers=auth(manufacturer["token"]),
        )
        assert r.status_code == 400

    def test_blank_title(self, client, manufacturer):
        r = client.post(
            "/api/requirements",
            json={"title": "   ", "targetAudience": "Both"},
            headers=auth(manufacturer["token"]),
        )
        assert r.status_code == 400

    def test_only_manufacturers_post(self, client, register):
        dist = register("distributor")
        r = client.post(
            "/api/requirements",
            json={"title": "X", "targetAudience": "Both"},
            headers=auth(dist["token"]),
        )
        assert r.status_code == 403

    def test_profile_is_required(self, client, manufacturer, db_session):
        db_session.query(CompanyProfile).filter_by(user_id=manufacturer["id"]).delete()
        db_session.commit()

        r = client.post(
            "/api/requirements",
            json={"title": "X", "targetAudience": "Both"},
            headers=auth(manufacturer["token"]),
        )
        assert r.status_code == 404
        assert "complete your company profile" in r.json()["message"]

    def test_missing_requirement(self, client):
        r = client.get("/api/requirements/12345")
        assert r.status_code == 404
        assert r.json()["message"] == "Requirement not found"


# ---------------------------------------------------------------------------
# Update / delete
# ---------------------------------------------------------------------------

class TestUpdate:

    def test_false_and_empty_values_apply(self, client, manufacturer):
        token = manufacturer["token"]
        created = _post(client, token, marketingSupport=True, states=["Goa"], notes="x")

        r = client.put(
            f"/api/requirements/{created['id']}",
            json={"marketingSupport": False, "states": [], "notes": ""},
            headers=auth(token),
        )
        assert r.status_code == 200
        body = r.json()
        assert body["marketingSupport"] is False
        assert body["states"] == []
        assert body["notes"] == ""
        assert body["title"] == created["title"]

    def test_null_leaves_field_untouched(self, client, manufacturer, posted):
        r = client.put(
            f"/api/requirements/{posted['id']}",
            json={"title": None, "status": "CLOSED"},
            headers=auth(manufacturer["token"]),
        )
        assert r.json()["title"] == "Dealers for Gujarat"
        assert r.json()["status"] == "CLOSED"

    def test_setting_same_status_twice(self, client, manufacturer, posted):
        url = f"/api/requirements/{posted['id']}"
        headers = auth(manufacturer["token"])
        first = client.put(url, json={"status": "FULFILLED"}, headers=headers)
        second = client.put(url, json={"status": "FULFILLED"}, headers=headers)

        assert first.status_code == second.status_code == 200
        assert second.json()["status"] == "FULFILLED"
        assert second.json()["reqId"] == posted["reqId"]

    @pytest.mark.parametrize("status", ["CLOSED", "EXPIRED", "OPEN"])
    def test_any_status_reachable(self, client, manufacturer, posted, status):
        r = client.put(
            f"/api/requirements/{posted['id']}", json={"status": status}, headers=auth(manufacturer["token"])
        )
        assert r.json()["status"] == status

    def test_bad_status_value(self, client, manufacturer, posted):
        r = client.put(
            f"/api/requirements/{posted['id']}", json={"status": "DONE"}, headers=auth(manufacturer["token"])
        )
        assert r.status_code == 400

    def test_req_id_cannot_be_changed(self, client, manufacturer, posted):
        r = client.put(
            f"/api/requirements/{posted['id']}", json={"reqId": "REQ-999"}, headers=auth(manufacturer["token"])
        )
        assert r.json()["reqId"] == posted["reqId"]

    def test_other_company_is_forbidden(self, client, register, posted):
        rival = register("manufacturer", email="rival@acme.com")
        url = f"/api/requirements/{posted['id']}"

        assert client.put(url, json={"status": "CLOSED"}, headers=auth(rival["token"])).status_code == 403
        assert client.delete(url, headers=auth(rival["token"])).status_code == 403
        assert client.get(url).json()["status"] == "OPEN"

    def test_admin_bypasses_ownership(self, client, admin, posted):
        url = f"/api/requirements/{posted['id']}"
        r = client.put(url, json={"status": "EXPIRED"}, headers=auth(admin["token"]))
        assert r.status_code == 200
        assert client.delete(url, headers=auth(admin["token"])).status_code == 200
        assert client.get(url).status_code == 404

    def test_anonymous_console_path(self, client, posted):
        url = f"/api/requirements/{posted['id']}"
        r = client.put(url, json={"status": "CLOSED"})
        assert r.status_code == 200
        assert r.json()["status"] == "CLOSED"

    def test_unusable_token_falls_back_to_anonymous(self, client, posted):
        r = client.put(
            f"/api/requirements/{posted['id']}", json={"notes": "edited"}, headers=auth("garbage")
        )
        assert r.status_code == 200

    def test_anonymous_path_can_be_disabled(self, client, posted, monkeypatch):
        monkeypatch.setattr(settings, "allow_anonymous_admin_console", False)
        url = f"/api/requirements/{posted['id']}"
        assert client.put(url, json={"status": "CLOSED"}).status_code == 401
        assert client.delete(url).status_code == 401

    def test_update_missing(self, client, manufacturer):
        r = client.put("/api/requirements/999", json={"status": "CLOSED"}, headers=auth(manufacturer["token"]))
        assert r.status_code == 404

    def test_owner_deletes(self, client, manufacturer, posted):
        url = f"/api/requirements/{posted['id']}"
        r = client.delete(url, headers=auth(manufacturer["token"]))
        assert r.status_code == 200
        assert client.get(url).status_code == 404


# ---------------------------------------------------------------------------
# Listing, filtering and matching
# ---------------------------------------------------------------------------

class TestListing:

    def test_list_all_newest_first(self, client, manufacturer):
        token = manufacturer["token"]
        _post(client, token, title="Old")
        _post(client, token, title="New")
        assert [r["title"] for r in client.get("/api/requirements").json()] == ["New", "Old"]

    def test_my_requirements(self, client, manufacturer, register):
        rival = register("manufacturer", email="rival@acme.com")
        _post(client, manufacturer["token"], title="Mine")
        _post(client, rival["token"], title="Theirs")

        r = client.get("/api/requirements/my-requirements", headers=auth(manufacturer["token"]))
        assert [req["title"] for req in r.json()] == ["Mine"]

    def test_my_requirements_is_manufacturer_only(self, client, register):
        dist = register("distributor")
        r = client.get("/api/requirements/my-requirements", headers=auth(dist["token"]))
        assert r.status_code == 403

    def test_status_and_audience_filters_are_anded(self, client, manufacturer):
        token = manufacturer["token"]
        _post(client, token, title="A", targetAudience="Retailer")
        b = _post(client, token, title="B", targetAudience="Retailer")
        _post(client, token, title="C", targetAudience="Distributor")
        client.put(f"/api/requirements/{b['id']}", json={"status": "CLOSED"}, headers=auth(token))

        r = client.get("/api/requirements", params={"status": "OPEN", "audience": "Retailer"})
        assert [req["title"] for req in r.json()] == ["A"]

    def test_search_reaches_company_fields(self, client, manufacturer):
        token = manufacturer["token"]
        save_profile(client, token, companyName="Zenith Polymers")
        _post(client, token, title="Resin buyers")

        assert len(client.get("/api/requirements", params={"search": "zenith"}).json()) == 1
        assert len(client.get("/api/requirements", params={"search": "req-001"}).json()) == 1
        assert client.get("/api/requirements", params={"search": "nothing"}).json() == []

    def test_state_filter_treats_empty_as_anywhere(self, client, manufacturer):
        token = manufacturer["token"]
        _post(client, token, title="Gujarat only", states=["Gujarat"])
        _post(client, token, title="Anywhere")
        _post(client, token, title="Kerala only", states=["Kerala"])

        r = client.get("/api/requirements", params={"state": "gujarat"})
        assert sorted(req["title"] for req in r.json()) == ["Anywhere", "Gujarat only"]

    def test_invalid_filter_value(self, client):
        assert client.get("/api/requirements", params={"status": "open"}).status_code == 400

    def test_matches_for_distributor(self, client, manufacturer, register):
        token = manufacturer["token"]
        _post(client, token, title="Gujarat distributors", states=["Gujarat"])
        _post(client, token, title="Anyone anywhere", targetAudience="Both")
        _post(client, token, title="Retail only", targetAudience="Retailer")
        _post(client, token, title="Kerala distributors", states=["Kerala"])
        _post(client, token, title="Rajasthan distributors", states=["Rajasthan"])
        closed = _post(client, token, title="Closed", states=["Gujarat"])
        client.put(f"/api/requirements/{closed['id']}", json={"status": "CLOSED"}, headers=auth(token))

        dist = register("distributor")
        save_profile(
            client,
            dist["token"],
            headOffice={"state": "Gujarat", "town": "Surat"},
            geographicCoverage={"states": [{"state": "Kerala", "districts": []}]},
        )

        r = client.get("/api/requirements/matches", headers=auth(dist["token"]))
        assert r.status_code == 200
        assert sorted(req["title"] for req in r.json()) == [
            "Anyone anywhere", "Gujarat distributors", "Kerala distributors",
        ]

    def test_matches_for_retailer(self, client, manufacturer, register):
        token = manufacturer["token"]
        _post(client, token, title="Pune retailers", targetAudience="Retailer", towns=["Pune"])
        _post(client, token, title="Mumbai retailers", targetAudience="Retailer", towns=["Mumbai"])

        retailer = register("retailer")
        save_profile(client, retailer["token"], headOffice={"state": "Maharashtra", "town": "Pune"})

        r = client.get("/api/requirements/matches", headers=auth(retailer["token"]))
        assert [req["title"] for req in r.json()] == ["Pune retailers"]

    def test_matches_not_for_manufacturers(self, client, manufacturer):
        r = client.get("/api/requirements/matches", headers=auth(manufacturer["token"]))
        assert r.status_code == 403

    def test_stats(self, client, admin, manufacturer):
        token = manufacturer["token"]
        _post(client, token)
        done = _post(client, token)
        client.put(f"/api/requirements/{done['id']}", json={"status": "FULFILLED"}, headers=auth(token))

        r = client.get("/api/requirements/stats", headers=auth(admin["token"]))
        assert r.json() == {"total": 2, "OPEN": 1, "CLOSED": 0, "FULFILLED": 1, "EXPIRED": 0}
        assert client.get("/api/requirements/stats", headers=auth(token)).status_code == 403
