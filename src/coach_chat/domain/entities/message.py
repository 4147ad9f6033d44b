from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

_REACTION_KEYS = frozenset({"emoji", "userId", "count"})


def _as_count(value: Any) -> int:
    # stored rows are client-shaped JSON; anything non-numeric counts as zero
    if isinstance(value, bool) or value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


@dataclass(frozen=True, slots=True)
class Reaction:
    """One (emoji, user) pair on a message and how many times it was applied.

    ``extra`` carries any other keys found on the stored entry so that a
    whole-list rewrite does not lose them.
    """

    emoji: str | None
    user_id: Any
    count: int = 1
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Reaction:
        return cls(
            emoji=data.get("emoji"),
            user_id=data.get("userId"),
            count=_as_count(data.get("count")),
            extra={k: v for k, v in data.items() if k not in _REACTION_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        return {**self.extra, "emoji": self.emoji, "userId": self.user_id, "count": self.count}


@dataclass(frozen=True, slots=True)
class StoredMessage:
    id: Any
    chat_id: str | None
    author_id: str | None
    content: str | None
    status: str
    created_at: datetime | None
    reactions: list[Reaction] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> StoredMessage:
        return cls(
            id=row.get("id"),
            chat_id=row.get("chat_id"),
            author_id=row.get("author_id"),
            content=row.get("content"),
            status=row.get("status") or "sent",
            created_at=row.get("created_at"),
            # entries that are not objects cannot be merged and are dropped
            reactions=[Reaction.from_dict(r) for r in row.get("reactions") or [] if isinstance(r, dict)],
        )
