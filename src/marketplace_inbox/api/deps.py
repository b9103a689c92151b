"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from marketplace_inbox.api.middleware.correlation_id import current_request_id
from marketplace_inbox.application import mappers
from marketplace_inbox.application.context import InboxContext
from marketplace_inbox.config import settings
from marketplace_inbox.domain.entities.user import User
from marketplace_inbox.infrastructure.cache.scoped import ScopedQueryCache, scope_for_session
from marketplace_inbox.infrastructure.context import RequestContext
from marketplace_inbox.infrastructure.http.marketplace_client import MarketplaceApiClient


def get_session_cookie(request: Request) -> str:
    cookie = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not cookie:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return cookie


SessionCookie = Annotated[str, Depends(get_session_cookie)]


async def get_context(request: Request, session_cookie: SessionCookie) -> InboxContext:
    state = request.app.state
    return RequestContext(
        api=MarketplaceApiClient(
            state.http,
            session_cookie,
            cookie_name=settings.SESSION_COOKIE_NAME,
            request_id=current_request_id(),
        ),
        cache=ScopedQueryCache(state.cache, scope_for_session(session_cookie)),
        tasks=state.tasks,
    )


ContextDep = Annotated[InboxContext, Depends(get_context)]


async def get_viewer(ctx: ContextDep) -> User:
    body = await ctx.api.get_current_user()
    if body is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return mappers.payload_to_user(body)


CurrentViewer = Annotated[User, Depends(get_viewer)]
