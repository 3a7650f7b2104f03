"""Health, identity, admin, rate limiting and error envelope tests."""

from __future__ import annotations

from app.config.settings import AdminConfig, RateLimitConfig
from app.controllers.dependencies import get_admin_config
from app.main import app
from app.services.rate_limit import FixedWindowRateLimiter, get_rate_limiter


def test_health_reports_features(api) -> None:
    response = api.get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["status"] == "online"
    assert payload["system"] == "Bera AI"
    assert payload["creator"] == "Bruce Bera"
    assert payload["features"]["ai_conversation"] == "active"
    assert payload["features"]["music_recognition"] == "active"


def test_health_reports_unconfigured_and_simulated(api, chat_client, recognition_client) -> None:
    chat_client.configured = False
    recognition_client.configured = False
    recognition_client.simulated = True

    features = api.get("/health").json()["features"]

    assert features["ai_conversation"] == "inactive"
    assert features["music_recognition"] == "simulated"


def test_identity_endpoint(api) -> None:
    payload = api.get("/identity").json()

    assert payload["name"] == "Bera AI"
    assert payload["owner"] == "Bruce Bera"
    assert "exclusively owned by Bruce Bera" in payload["statement"]


def test_admin_status_unconfigured(api, monkeypatch) -> None:
    monkeypatch.delenv("ADMIN_TOKEN", raising=False)
    config = AdminConfig()
    app.dependency_overrides[get_admin_config] = lambda: config

    response = api.post("/admin/status", headers={"X-Admin-Token": "anything"})

    assert response.status_code == 503
    assert response.json()["success"] is False


def test_admin_status_requires_matching_token(api, monkeypatch) -> None:
    monkeypatch.setenv("ADMIN_TOKEN", "s3cret")
    config = AdminConfig()
    app.dependency_overrides[get_admin_config] = lambda: config

    missing = api.post("/admin/status")
    wrong = api.post("/admin/status", headers={"X-Admin-Token": "nope"})
    ok = api.post("/admin/status", headers={"X-Admin-Token": "s3cret"})

    assert missing.status_code == 403
    assert wrong.status_code == 403
    assert ok.status_code == 200
    payload = ok.json()
    assert payload["success"] is True
    assert payload["rate_limit"]["max_requests"] == 100
    assert payload["uptime_seconds"] >= 0
    assert payload["upload"]["allowed_mime_prefixes"] == ["audio/", "video/"]


def test_rate_limit_returns_429_with_retry_after(api) -> None:
    limiter = FixedWindowRateLimiter(RateLimitConfig(enabled=True, max_requests=2, window_seconds=60))
    app.dependency_overrides[get_rate_limiter] = lambda: limiter

    statuses = [api.post("/chat", json={"text": "help"}).status_code for _ in range(3)]

    assert statuses == [200, 200, 429]
    blocked = api.post("/chat", json={"text": "help"})
    assert int(blocked.headers["Retry-After"]) >= 1
    assert blocked.json()["success"] is False


def test_rate_limit_is_per_route(api) -> None:
    limiter = FixedWindowRateLimiter(RateLimitConfig(enabled=True, max_requests=1, window_seconds=60))
    app.dependency_overrides[get_rate_limiter] = lambda: limiter

    assert api.post("/chat", json={"text": "help"}).status_code == 200
    assert api.post("/speak", json={"text": "hi"}).status_code == 200
    assert api.post("/chat", json={"text": "help"}).status_code == 429


def test_health_is_not_rate_limited(api) -> None:
    limiter = FixedWindowRateLimiter(RateLimitConfig(enabled=True, max_requests=1, window_seconds=60))
    app.dependency_overrides[get_rate_limiter] = lambda: limiter

    assert all(api.get("/health").status_code == 200 for _ in range(3))


def test_unknown_route_uses_envelope(api) -> None:
    response = api.get("/does-not-exist")

    assert response.status_code == 404
    assert response.json()["success"] is False
    assert response.json()["creator"] == "Bruce Bera"


def test_metrics_exposed(api) -> None:
    api.post("/chat", json={"text": "help"})

    response = api.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total" in response.text
    assert "chat_intents_total" in response.text
