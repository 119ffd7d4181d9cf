"""Helpers over VDF expense and deposit bodies."""

from typing import Any, Iterable, List, Tuple

from gramin_portal.utils.filters import member_display_name


def page_content(body: Any) -> Tuple[List[dict], int]:
    """Items and page count from a paged body (``content``/``totalPages``) or a bare list."""
    if isinstance(body, dict):
        return list(body.get("content") or []), int(body.get("totalPages") or 1)
    if isinstance(body, list):
        return body, 1
    return [], 0


def category_name(item: dict) -> str:
    if item.get("categoryName"):
        return item["categoryName"]
    category = item.get("category")
    if isinstance(category, dict):
        return category.get("categoryName") or category.get("name") or "-"
    return "-"


def category_id(item: dict) -> str:
    category = item.get("category")
    if item.get("categoryId") is not None:
        return str(item["categoryId"])
    if isinstance(category, dict) and category.get("id") is not None:
        return str(category["id"])
    return ""


def member_id(item: dict) -> str:
    member = item.get("member")
    if item.get("memberId") is not None:
        return str(item["memberId"])
    if isinstance(member, dict) and member.get("id") is not None:
        return str(member["id"])
    return ""


def depositor_name(deposit: dict) -> str:
    """The member who deposited, else the named outside source."""
    member = deposit.get("member")
    if isinstance(member, dict):
        name = member_display_name(member)
        if name != "-":
            return name
    return deposit.get("memberName") or deposit.get("sourceName") or "-"


def filter_deposits(deposits: Iterable[dict], category: str = "all", member: str = "all") -> List[dict]:
    return [
        d for d in deposits
        if (category == "all" or category_id(d) == str(category))
        and (member == "all" or member_id(d) == str(member))
    ]


def sum_amounts(items: Iterable[dict]) -> float:
    total = 0.0
    for item in items:
        try:
            total += float(item.get("amount") or 0)
        except (TypeError, ValueError):
            continue
    return total


def contribution_years(contributions: Iterable[dict], current: int) -> List[int]:
    """Years present in a member's contributions plus the current one, newest first."""
    years = {int(c["year"]) for c in contributions if str(c.get("year") or "").isdigit()}
    years.add(current)
    return sorted(years, reverse=True)


def contributions_for_year(contributions: Iterable[dict], year: Any = "all") -> List[dict]:
    if year in (None, "all"):
        return list(contributions)
    return [c for c in contributions if str(c.get("year")) == str(year)]
