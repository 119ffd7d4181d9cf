"""Display formatting for money, numbers, dates and sizes."""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional, Union

import pytz

RUPEE = "₹"
IST = pytz.timezone("Asia/Kolkata")
BENGALI_DIGITS = str.maketrans("0123456789", "০১২৩৪৫৬৭৮৯")


def _to_decimal(value: Any) -> Decimal:
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal(0)
    return number if number.is_finite() else Decimal(0)


def group_indian(digits: str) -> str:
    """Indian digit grouping: last three digits, then pairs (12,34,567)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount: Any, language: str = "en") -> str:
    """Format an INR amount with two decimals, e.g. ``₹1,23,456.50``.

    ``bn`` renders Bengali digits with the symbol after the number.
    """
    if amount is None:
        return f"{RUPEE}0.00"
    value = _to_decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    integer_part, fraction = f"{abs(value):.2f}".split(".")
    body = f"{group_indian(integer_part)}.{fraction}"

    if language == "bn":
        text = f"{body.translate(BENGALI_DIGITS)}{RUPEE}"
    else:
        text = f"{RUPEE}{body}"
    return f"-{text}" if value < 0 else text


def format_number(n: Any, language: str = "en") -> str:
    """Group a number the Indian way, keeping up to three decimals."""
    if n is None:
        return "0"
    value = _to_decimal(n).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
    text = f"{abs(value):.3f}".rstrip("0").rstrip(".")
    integer_part, _, fraction = text.partition(".")
    body = group_indian(integer_part) + (f".{fraction}" if fraction else "")
    if language == "bn":
        body = body.translate(BENGALI_DIGITS)
    return f"-{body}" if value < 0 else body


def _parse_datetime(value: Union[str, date, datetime, None]) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return None


def format_date(value: Union[str, date, datetime, None], fmt: str = "%d %b %Y") -> str:
    """Format a date for tables, e.g. ``05 Mar 2025``; ``-`` when missing."""
    parsed = _parse_datetime(value)
    return parsed.strftime(fmt) if parsed else "-"


def format_timestamp(value: Union[str, datetime, None]) -> str:
    """Convert a backend timestamp to IST, e.g. ``05 Mar 2025 03:45 PM IST``."""
    dt = _parse_datetime(value)
    if dt is None:
        return "-"
    # Naive timestamps are already local (IST)
    if dt.tzinfo is None:
        dt = IST.localize(dt)
    else:
        dt = dt.astimezone(IST)
    return dt.strftime("%d %b %Y %I:%M %p %Z")


def time_ago(value: Union[str, datetime, None], now: Optional[datetime] = None) -> str:
    """Relative time used by the session list ("5 mins ago")."""
    dt = _parse_datetime(value)
    if dt is None:
        return "-"
    now = now or (datetime.now(dt.tzinfo) if dt.tzinfo else datetime.now())
    minutes = int((now - dt).total_seconds() // 60)
    hours = minutes // 60
    days = hours // 24

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes} min{'s' if minutes > 1 else ''} ago"
    if hours < 24:
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    return f"{days} day{'s' if days > 1 else ''} ago"


def format_file_size(size: Optional[int]) -> str:
    size = size or 0
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size / (1024 * 1024):.2f} MB"
