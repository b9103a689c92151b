from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from marketplace_inbox.infrastructure.http.marketplace_client import ping_upstream

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(request: Request) -> JSONResponse:
    errors: list[str] = []
    state = request.app.state

    redis = getattr(state, "redis", None)
    if redis is not None:
        try:
            await redis.ping()
        except Exception as exc:  # noqa: BLE001
            errors.append(f"redis: {exc}")

    try:
        await ping_upstream(state.http)
    except Exception as exc:  # noqa: BLE001
        errors.append(f"upstream: {exc}")

    if errors:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "errors": errors},
        )
    return JSONResponse(content={"status": "ready"})
