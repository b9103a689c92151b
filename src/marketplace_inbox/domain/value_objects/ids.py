from __future__ import annotations

from typing import NewType

UserId = NewType("UserId", int)
BusinessId = NewType("BusinessId", int)
