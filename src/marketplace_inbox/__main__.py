"""Entrypoint: python -m marketplace_inbox"""
from __future__ import annotations

import uvicorn

from marketplace_inbox.config import settings


def main() -> None:
    uvicorn.run(
        "marketplace_inbox.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
