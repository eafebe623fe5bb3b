"""Tests for POST /api/audit and the per-request endpoint audit."""

from conftest import FakeAPIError
from queens_facts.services.audit.audit_service import build_audit_record, client_ip
from queens_facts.services.audit.audit_models import AuditEventRequest

AUDIT_TABLE = "queens_facts_audit"
ENDPOINT_TABLE = "endpoint_audit"


class TestClientIp:
    def test_first_forwarded_hop_wins(self):
        headers = {"x-forwarded-for": "203.0.113.7, 10.0.0.1", "x-real-ip": "10.0.0.2"}
        assert client_ip(headers) == "203.0.113.7"

    def test_real_ip_fallback(self):
        assert client_ip({"x-real-ip": "10.0.0.2"}) == "10.0.0.2"

    def test_unknown_when_no_headers(self):
        assert client_ip({}) == "Unknown"
        assert client_ip({}, fallback="127.0.0.1") == "127.0.0.1"


def test_build_record_defaults():
    record = build_audit_record({})
    assert record.event_type == "home_page_visit"
    assert record.path == "/"
    assert record.user_agent == "Unknown"
    assert (record.country, record.city, record.region) == ("Unknown", "Unknown", "Unknown")


def test_build_record_uses_geo_headers():
    record = build_audit_record(
        {
            "x-vercel-ip-country": "US",
            "x-vercel-ip-city": "Queens",
            "x-vercel-ip-country-region": "NY",
            "user-agent": "pytest",
        },
        AuditEventRequest(event_type="fact_reload", path="/facts"),
    )
    assert (record.country, record.city, record.region) == ("US", "Queens", "NY")
    assert record.event_type == "fact_reload"
    assert record.path == "/facts"


class TestAuditEndpoint:
    def test_dev_mode_logs_only(self, client, fake_sb):
        res = client.post("/api/audit", json={"event_type": "home_page_visit", "path": "/"})
        assert res.status_code == 200
        assert res.json() == {"success": True}
        assert fake_sb.inserted == {}

    def test_production_inserts_row(self, make_client, fake_sb):
        client = make_client(APP_ENV="production")
        res = client.post(
            "/api/audit",
            json={"event_type": "fact_reload", "path": "/"},
            headers={
                "x-forwarded-for": "203.0.113.7, 10.0.0.1",
                "user-agent": "Mozilla/5.0",
                "x-vercel-ip-country": "US",
            },
        )
        assert res.status_code == 200
        assert res.json() == {"success": True}

        rows = fake_sb.inserted[AUDIT_TABLE]
        assert rows == [{
            "ip_address": "203.0.113.7",
            "path": "/",
            "event_type": "fact_reload",
            "user_agent": "Mozilla/5.0",
            "country": "US",
            "city": "Unknown",
            "region": "Unknown",
        }]

    def test_missing_or_bad_body_uses_defaults(self, make_client, fake_sb):
        client = make_client(APP_ENV="production")
        assert client.post("/api/audit").status_code == 200
        assert client.post("/api/audit", content=b"not json").status_code == 200
        assert client.post("/api/audit", json=["a", "list"]).status_code == 200
        assert client.post("/api/audit", json={"event_type": 12}).status_code == 200

        rows = fake_sb.inserted[AUDIT_TABLE]
        assert len(rows) == 4
        assert {r["event_type"] for r in rows} == {"home_page_visit"}
        assert {r["ip_address"] for r in rows} == {"Unknown"}

    def test_store_failure_returns_success_false(self, make_client, fake_sb):
        fake_sb.fail_tables[AUDIT_TABLE] = FakeAPIError("permission denied for table queens_facts_audit")
        client = make_client(APP_ENV="production")
        res = client.post("/api/audit", json={"event_type": "home_page_visit"})
        assert res.status_code == 500
        body = res.json()
        assert body["success"] is False
        assert "permission denied" in body["error"]


class TestEndpointAudit:
    def test_each_request_is_recorded(self, make_client, fake_sb):
        client = make_client(APP_ENV="production", ENDPOINT_AUDIT_ENABLED=True)
        client.get("/api/facts", params={"zipcode": "11101"})
        client.get("/api/all")

        rows = fake_sb.inserted[ENDPOINT_TABLE]
        assert [r["endpoint_request"] for r in rows] == ["/api/facts?zipcode=11101", "/api/all"]
        assert rows[0]["request_type"] == "GET"
        assert rows[0]["ip_address"] == "testclient"

    def test_forwarded_ip_recorded(self, make_client, fake_sb):
        client = make_client(APP_ENV="production", ENDPOINT_AUDIT_ENABLED=True)
        client.get("/api/all", headers={"x-forwarded-for": "198.51.100.4"})
        assert fake_sb.inserted[ENDPOINT_TABLE][0]["ip_address"] == "198.51.100.4"

    def test_write_failure_never_changes_response(self, make_client, fake_sb):
        fake_sb.fail_tables[ENDPOINT_TABLE] = FakeAPIError("insert failed")
        client = make_client(APP_ENV="production", ENDPOINT_AUDIT_ENABLED=True)

        res = client.get("/api/facts", params={"id": 4})
        assert res.status_code == 200
        assert res.json()[0]["fact_id"] == 4

        assert client.get("/api/facts", params={"id": 999}).status_code == 404

    def test_dev_mode_never_writes(self, make_client, fake_sb):
        client = make_client(ENDPOINT_AUDIT_ENABLED=True)
        assert client.get("/api/all").status_code == 200
        assert ENDPOINT_TABLE not in fake_sb.inserted

    def test_disabled(self, make_client, fake_sb):
        client = make_client(APP_ENV="production", ENDPOINT_AUDIT_ENABLED=False)
        client.get("/api/all")
        assert ENDPOINT_TABLE not in fake_sb.inserted
