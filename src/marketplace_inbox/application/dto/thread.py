from __future__ import annotations

from dataclasses import dataclass, field

from marketplace_inbox.domain.entities.message import Message


@dataclass(frozen=True, slots=True)
class ReadMarkResult:
    marked: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)

    @property
    def attempted(self) -> bool:
        return bool(self.marked or self.failed)


@dataclass(frozen=True, slots=True)
class ThreadView:
    business_id: int
    other_user_id: int
    messages: list[Message]
    read_marks: ReadMarkResult
