from __future__ import annotations

from dataclasses import dataclass

from marketplace_inbox.application.ports.cache import QueryCache
from marketplace_inbox.application.ports.marketplace import MarketplaceApi
from marketplace_inbox.application.ports.tasks import TaskSpawner


@dataclass(slots=True)
class RequestContext:
    """Concrete InboxContext for one viewer's request."""

    api: MarketplaceApi
    cache: QueryCache
    tasks: TaskSpawner
