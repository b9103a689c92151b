"""Root conftest: test settings must be in the environment before
``marketplace_inbox.config`` builds its module-level ``settings``."""
from __future__ import annotations

import os
from pathlib import Path

_ENV_TEST = Path(__file__).resolve().parent / ".env.test"


def _load_env_test(path: Path) -> None:
    for raw in path.read_text().splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        os.environ.setdefault(key.strip(), value.strip())


if _ENV_TEST.exists():
    _load_env_test(_ENV_TEST)

# Never reach a real Redis from the test suite.
os.environ["CACHE_BACKEND"] = "memory"
