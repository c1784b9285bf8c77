import pytest


@pytest.mark.parametrize("origin", ["http://localhost:3000", "http://127.0.0.1:3000"])
def test_preflight_allows_configured_origins(client, origin):
    r = client.options(
        "/api/issues",
        headers={
            "Origin": origin,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type, Authorization",
        },
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == origin
    assert r.headers["access-control-allow-credentials"] == "true"
    allowed = {h.strip().lower() for h in r.headers["access-control-allow-headers"].split(",")}
    assert {"content-type", "authorization"} <= allowed


def test_preflight_rejects_unknown_origin(client):
    r = client.options(
        "/api/auth/login",
        headers={"Origin": "http://evil.example.com", "Access-Control-Request-Method": "POST"},
    )
    assert r.status_code == 400
    assert "access-control-allow-origin" not in r.headers


def test_preflight_rejects_unlisted_header(client):
    r = client.options(
        "/api/auth/login",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "X-Custom-Header",
        },
    )
    assert r.status_code == 400


def test_simple_request_from_unknown_origin_has_no_cors_headers(client):
    r = client.post("/api/auth/login", json={"email": "a@b.co", "password": "x"}, headers={"Origin": "http://evil.example.com"})
    assert "access-control-allow-origin" not in r.headers
