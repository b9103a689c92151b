from __future__ import annotations

import json
from datetime import datetime
from typing import Any


class _Encoder(json.JSONEncoder):
    def default(self, o: object) -> Any:
        if isinstance(o, datetime):
            return o.isoformat()
        return super().default(o)


def serialize_value(value: Any) -> str:
    return json.dumps(value, cls=_Encoder)


def deserialize_value(raw: str | bytes) -> Any:
    return json.loads(raw)


def encode_key(key: tuple[Any, ...]) -> str:
    return "|".join(str(part) for part in key)
