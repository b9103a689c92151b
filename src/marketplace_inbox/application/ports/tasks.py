from __future__ import annotations

import asyncio
from typing import Any, Coroutine, Protocol


class TaskSpawner(Protocol):
    """Runs best-effort work that no caller waits on."""

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str) -> asyncio.Task[Any]: ...

    def adopt(self, task: asyncio.Task[Any]) -> None:
        """Keep an already running task alive until it finishes."""
        ...
