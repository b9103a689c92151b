from __future__ import annotations

from typing import Protocol

from marketplace_inbox.application.ports.cache import QueryCache
from marketplace_inbox.application.ports.marketplace import MarketplaceApi
from marketplace_inbox.application.ports.tasks import TaskSpawner


class InboxContext(Protocol):
    """Everything a use case needs for one viewer's request."""

    api: MarketplaceApi
    cache: QueryCache
    tasks: TaskSpawner
