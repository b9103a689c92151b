"""httpx client for the upstream marketplace REST API."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from marketplace_inbox.application.exceptions import (
    AuthenticationError,
    NotFoundError,
    UpstreamUnavailableError,
    ValidationError,
)
from marketplace_inbox.domain.value_objects.enums import UnauthorizedBehavior

logger = logging.getLogger(__name__)

JsonObject = dict[str, Any]


def create_http_client(base_url: str, timeout: float) -> httpx.AsyncClient:
    """Shared connection pool; one per process."""
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=timeout,
        headers={"Accept": "application/json"},
    )


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text.strip() or response.reason_phrase


class MarketplaceApiClient:
    """Implements application.ports.marketplace.MarketplaceApi for one session."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        session_cookie: str,
        *,
        cookie_name: str = "connect.sid",
        request_id: str | None = None,
    ) -> None:
        self._http = http
        self._headers = {"Cookie": f"{cookie_name}={session_cookie}"}
        if request_id:
            self._headers["X-Request-ID"] = request_id

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: JsonObject | None = None,
        on_401: UnauthorizedBehavior = UnauthorizedBehavior.RAISE,
    ) -> Any:
        try:
            response = await self._http.request(method, path, json=json, headers=self._headers)
        except httpx.TransportError as exc:
            logger.warning("Upstream %s %s failed: %s", method, path, exc)
            raise UpstreamUnavailableError() from exc

        logger.debug("Upstream %s %s -> %d", method, path, response.status_code)

        status = response.status_code
        if status == 401:
            if on_401 == UnauthorizedBehavior.RETURN_NULL:
                return None
            raise AuthenticationError(_error_message(response) or "Authentication required")
        if status >= 500:
            logger.warning(
                "Upstream %s %s -> %d: %s", method, path, status, _error_message(response),
            )
            raise UpstreamUnavailableError()
        if status == 404:
            raise NotFoundError(_error_message(response))
        if status >= 400:
            raise ValidationError(_error_message(response))

        if not response.content:
            return None
        return response.json()

    async def get_current_user(
        self, *, on_401: UnauthorizedBehavior = UnauthorizedBehavior.RETURN_NULL,
    ) -> JsonObject | None:
        return await self._request("GET", "/api/me", on_401=on_401)

    async def list_messages(self) -> list[JsonObject]:
        return await self._request("GET", "/api/messages") or []

    async def get_thread(self, business_id: int, other_user_id: int) -> list[JsonObject]:
        return await self._request("GET", f"/api/messages/{business_id}/{other_user_id}") or []

    async def send_message(
        self, receiver_id: int, business_id: int, content: str,
    ) -> JsonObject:
        return await self._request(
            "POST",
            "/api/messages",
            json={
                "receiverId": receiver_id,
                "businessId": business_id,
                "content": content,
            },
        )

    async def mark_message_read(self, message_id: int) -> None:
        await self._request("PATCH", f"/api/messages/{message_id}/read")

    async def list_notifications(self) -> list[JsonObject]:
        return await self._request("GET", "/api/notifications") or []

    async def get_unread_notification_count(self) -> int:
        body = await self._request("GET", "/api/notifications/unread-count")
        return int((body or {}).get("count", 0))

    async def mark_notification_read(self, notification_id: int) -> None:
        await self._request("PATCH", f"/api/notifications/{notification_id}/read")

    async def mark_all_notifications_read(self) -> None:
        await self._request("PATCH", "/api/notifications/mark-all-read")

    async def get_business(self, business_id: int) -> JsonObject:
        return await self._request("GET", f"/api/businesses/{business_id}")


async def ping_upstream(http: httpx.AsyncClient) -> None:
    """Raise UpstreamUnavailableError if the upstream cannot be reached."""
    try:
        await http.get("/")
    except httpx.TransportError as exc:
        raise UpstreamUnavailableError(str(exc)) from exc
