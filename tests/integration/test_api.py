"""Route-level tests (upstream and cache replaced via dependency override)."""
from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from marketplace_inbox.api.deps import get_context
from marketplace_inbox.app import create_app
from marketplace_inbox.config import settings
from tests.conftest import (
    FakeContext,
    business_payload,
    message_payload,
    notification_payload,
)

COOKIES = {settings.SESSION_COOKIE_NAME: "s%3Asession"}


@pytest.fixture
def app_with_ctx():
    app = create_app()
    ctx = FakeContext()
    ctx.api.businesses = {5: business_payload(5, "Corner Bakery", owner_id=2)}
    ctx.api.messages = [
        message_payload(1, sender=1, receiver=2, business=5, minutes=0),
        message_payload(2, sender=2, receiver=1, business=5, is_read=False, minutes=1),
    ]
    ctx.api.notifications = [
        notification_payload(1, type="message", related_id=2, is_read=True),
        notification_payload(2, type="subscription", related_id=5),
    ]

    async def _override():
        return ctx

    app.dependency_overrides[get_context] = _override
    return app, ctx


@pytest.fixture
def client(app_with_ctx):
    app, _ = app_with_ctx
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def ctx(app_with_ctx):
    _, ctx = app_with_ctx
    return ctx


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_request_id_is_echoed(client):
    resp = client.get("/healthz", headers={"X-Request-ID": "abc123"})
    assert resp.headers["X-Request-ID"] == "abc123"


def test_list_conversations(client):
    resp = client.get("/api/v1/inbox/conversations", cookies=COOKIES)
    assert resp.status_code == 200
    [conv] = resp.json()
    assert conv["counterparty_id"] == 2
    assert conv["business_id"] == 5
    assert conv["business_name"] == "Corner Bakery"
    assert conv["unread_count"] == 1
    assert conv["last_message"]["id"] == 2


def test_open_thread_marks_read(client, ctx):
    resp = client.get("/api/v1/inbox/conversations/5/2", cookies=COOKIES)
    assert resp.status_code == 200
    data = resp.json()
    assert data["marked_read"] == [2]
    assert data["failed_to_mark"] == []
    assert [m["id"] for m in data["messages"]] == [1, 2]

    resp = client.get("/api/v1/inbox/conversations", cookies=COOKIES)
    assert resp.json()[0]["unread_count"] == 0


def test_send_message(client):
    resp = client.post(
        "/api/v1/inbox/messages",
        cookies=COOKIES,
        json={"receiver_id": 2, "business_id": 5, "content": "Table for two?"},
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["content"] == "Table for two?"
    assert data["sender_id"] == 1


def test_send_blank_message_is_422(client):
    resp = client.post(
        "/api/v1/inbox/messages",
        cookies=COOKIES,
        json={"receiver_id": 2, "business_id": 5, "content": "  "},
    )
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Message content must not be empty"


def test_contact_business(client):
    resp = client.post(
        "/api/v1/inbox/businesses/5/contact",
        cookies=COOKIES,
        json={"content": "Are you open on Sunday?"},
    )
    assert resp.status_code == 201
    assert resp.json()["receiver_id"] == 2


def test_contact_unknown_business_is_404(client):
    resp = client.post(
        "/api/v1/inbox/businesses/404/contact",
        cookies=COOKIES,
        json={"content": "hello"},
    )
    assert resp.status_code == 404


def test_notifications_flow(client, ctx):
    resp = client.get("/api/v1/inbox/notifications/unread-count", cookies=COOKIES)
    assert resp.json() == {"count": 1}

    resp = client.get("/api/v1/inbox/notifications", cookies=COOKIES)
    assert [n["id"] for n in resp.json()] == [1, 2]

    resp = client.post("/api/v1/inbox/notifications/2/open", cookies=COOKIES)
    assert resp.status_code == 200
    assert resp.json() == {"notification_id": 2, "destination": "/business/5"}


def test_open_unknown_notification_is_404(client):
    resp = client.post("/api/v1/inbox/notifications/99/open", cookies=COOKIES)
    assert resp.status_code == 404


def test_mark_all_read_failure_is_silent(client, ctx):
    ctx.api.fail_mark_all = True
    resp = client.post("/api/v1/inbox/notifications/mark-all-read", cookies=COOKIES)
    assert resp.status_code == 204


def test_upstream_failure_is_generic_502(client, ctx):
    async def _broken() -> list:
        from marketplace_inbox.application.exceptions import UpstreamUnavailableError

        raise UpstreamUnavailableError("db down at 10.0.0.3")

    ctx.api.list_messages = _broken  # type: ignore[method-assign]
    resp = client.get("/api/v1/inbox/conversations", cookies=COOKIES)
    assert resp.status_code == 502
    assert "10.0.0.3" not in resp.json()["detail"]


def test_logged_out_session_is_401(client, ctx):
    ctx.api.me = None
    resp = client.get("/api/v1/inbox/conversations", cookies=COOKIES)
    assert resp.status_code == 401


def test_missing_cookie_is_401():
    with TestClient(create_app()) as client:
        resp = client.get("/api/v1/inbox/conversations")
    assert resp.status_code == 401


def test_malformed_request_id_is_replaced(client):
    resp = client.get("/healthz", headers={"X-Request-ID": "not a token"})
    rid = resp.headers["X-Request-ID"]
    assert rid != "not a token"
    assert len(rid) == 32


def test_unhandled_error_is_still_timed(client, ctx, caplog):
    async def _crash() -> list:
        raise RuntimeError("unexpected")

    ctx.api.list_messages = _crash  # type: ignore[method-assign]
    caplog.set_level(logging.INFO, logger="marketplace_inbox.api.middleware.timing")

    resp = client.get("/api/v1/inbox/conversations", cookies=COOKIES)

    assert resp.status_code == 500
    lines = [
        r.getMessage() for r in caplog.records
        if r.name == "marketplace_inbox.api.middleware.timing"
    ]
    assert any(line.startswith("GET /api/v1/inbox/conversations 500 ") for line in lines)
