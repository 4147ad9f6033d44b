from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from coach_chat.domain.entities.message import Reaction


def merge_reaction(
    reactions: Iterable[Reaction],
    emoji: str | None,
    user_id: Any,
) -> list[Reaction]:
    """Apply one reaction to a message's reaction list.

    Entries are keyed by (emoji, user_id): a repeat bumps ``count`` on the
    existing entry, anything else is appended with ``count=1``. The input is
    left untouched and ordering is preserved.
    """
    merged: list[Reaction] = []
    found = False
    for entry in reactions:
        if not found and entry.emoji == emoji and entry.user_id == user_id:
            entry = Reaction(
                emoji=entry.emoji,
                user_id=entry.user_id,
                count=entry.count + 1,
                extra=entry.extra,
            )
            found = True
        merged.append(entry)
    if not found:
        merged.append(Reaction(emoji=emoji, user_id=user_id, count=1))
    return merged
