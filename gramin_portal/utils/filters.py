"""Client-side list filtering over already-fetched rows."""

from typing import Any, Iterable, List, Sequence

FAMILY_SEARCH_FIELDS = ("familyHeadName", "memberName", "family_head_name", "member_name")


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def filter_by_term(items: Iterable[Any], term: str, fields: Sequence[str]) -> List[Any]:
    """Case-insensitive substring match on any of ``fields``; keeps input order."""
    items = list(items)
    needle = (term or "").strip().lower()
    if not needle:
        return items
    return [
        item for item in items
        if any(
            needle in str(value).lower()
            for value in (_field(item, name) for name in fields)
            if value
        )
    ]


def filter_families(families: Iterable[Any], term: str) -> List[Any]:
    """Search families by head name or member name."""
    return filter_by_term(families, term, FAMILY_SEARCH_FIELDS)


def member_display_name(member: Any) -> str:
    first = _field(member, "firstName") or ""
    last = _field(member, "lastName") or ""
    full = f"{first} {last}".strip()
    return full or _field(member, "name") or _field(member, "memberName") or "-"


def sort_members_by_name(members: Iterable[Any]) -> List[Any]:
    return sorted(members, key=lambda m: member_display_name(m).lower())


def group_sessions_by_user(sessions: Iterable[Any]) -> List[dict]:
    """Group login sessions per ``(user_type, user_id)`` in first-seen order."""
    groups = {}
    for session in sessions:
        user_type = _field(session, "user_type") or _field(session, "userType")
        user_id = _field(session, "user_id") or _field(session, "userId")
        key = f"{user_type}_{user_id}"
        if key not in groups:
            groups[key] = {
                "user_id": user_id,
                "user_type": user_type,
                "username": _field(session, "user_name") or _field(session, "username"),
                "sessions": [],
            }
        groups[key]["sessions"].append(session)
    return list(groups.values())
