from __future__ import annotations

from typing import Any, Mapping, Sequence

SEARCH_FIELDS = ("name", "email", "unique_id")


def _field_text(member: Any, name: str) -> str:
    if isinstance(member, Mapping):
        value = member.get(name)
    else:
        value = getattr(member, name, None)
    return "" if value is None else str(value)


def filter_members(members: Sequence[Any], query: str | None) -> Sequence[Any]:
    """
    Case-insensitive substring match on name, email and unique_id (any one
    matching is enough). A blank query returns ``members`` itself.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return members
    return [
        m for m in members
        if any(needle in _field_text(m, field).lower() for field in SEARCH_FIELDS)
    ]
