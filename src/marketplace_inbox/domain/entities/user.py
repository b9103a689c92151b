from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class User:
    """The viewer a request is made for, as reported by ``GET /api/me``."""

    id: int
    username: str
    name: str | None = None
    email: str | None = None
    avatar: str | None = None
