"""
Monthly contribution matrix: one canonical per-month shape for the UI.

The backend has emitted the matrix in several shapes over time (paid flags
as arrays or per-month maps, exemptions as arrays, maps or nested fields).
``normalize_family`` is the only place that knows about them; everything
downstream sees ``MonthCell`` objects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

MONTH_NAMES = ["January", "February", "March", "April", "May", "June",
               "July", "August", "September", "October", "November", "December"]

NESTED_EXEMPT_FIELDS = ("exempt", "exempted", "isExempt")


class CellState(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"
    EXEMPT = "exempt"


CELL_LABELS = {
    CellState.PAID: "Paid",
    CellState.UNPAID: "Due",
    CellState.EXEMPT: "Exempt",
}


@dataclass
class MonthCell:
    """Contribution status of one family for one month."""
    month: int                  # 1-12
    paid: bool = False
    exempt: bool = False
    amount: float = 0.0

    @property
    def state(self) -> CellState:
        # Exemption wins over a paid flag.
        if self.exempt:
            return CellState.EXEMPT
        if self.paid:
            return CellState.PAID
        return CellState.UNPAID

    @property
    def label(self) -> str:
        return CELL_LABELS[self.state]


@dataclass
class FamilyRow:
    """One family's row in the matrix."""
    family_config_id: Optional[str]
    family_head_name: str = ""
    member_name: str = ""
    months: List[MonthCell] = field(default_factory=list)
    total_paid: float = 0.0
    total_due: float = 0.0
    paid_count: int = 0
    pending_count: int = 0

    def cell(self, month: int) -> MonthCell:
        return self.months[month - 1]


@dataclass
class ContributionMatrix:
    """All family rows for one year."""
    year: int
    families: List[FamilyRow] = field(default_factory=list)

    @property
    def total_paid(self) -> float:
        return sum(f.total_paid for f in self.families)

    @property
    def total_due(self) -> float:
        return sum(f.total_due for f in self.families)


def _to_float(value: Any) -> float:
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _map_lookup(mapping: Dict[Any, Any], month: int) -> Any:
    for key in (f"month{month}", str(month), month):
        if key in mapping:
            return mapping[key]
    return None


def _month_entry(raw: Dict[str, Any], month: int) -> Optional[Dict[str, Any]]:
    months = raw.get("months")
    entry = None
    if isinstance(months, dict):
        entry = _map_lookup(months, month)
    elif isinstance(months, list) and len(months) >= month:
        entry = months[month - 1]
    return entry if isinstance(entry, dict) else None


def _is_paid(raw: Dict[str, Any], index: int, entry: Optional[Dict[str, Any]]) -> bool:
    paid_months = raw.get("paidMonths")
    if isinstance(paid_months, list) and index < len(paid_months) and paid_months[index] is True:
        return True
    return bool(entry and entry.get("paid"))


def _is_exempt(raw: Dict[str, Any], index: int, entry: Optional[Dict[str, Any]]) -> bool:
    month = index + 1

    exempted = raw.get("exemptedMonths")
    if isinstance(exempted, list):
        if index < len(exempted) and exempted[index] is True:
            return True
        # Some responses list month numbers instead of per-index flags
        if any(_is_count(value) and value == month for value in exempted):
            return True

    for key in ("exemptions", "exemptedMonths"):
        mapping = raw.get(key)
        if isinstance(mapping, dict) and _map_lookup(mapping, month):
            return True

    if entry:
        return any(bool(entry.get(name)) for name in NESTED_EXEMPT_FIELDS)
    return False


def _amount(raw: Dict[str, Any], index: int, entry: Optional[Dict[str, Any]]) -> float:
    if entry and entry.get("amount") is not None:
        return _to_float(entry.get("amount"))
    amounts = raw.get("amounts")
    if isinstance(amounts, list) and index < len(amounts):
        return _to_float(amounts[index])
    return 0.0


def normalize_family(raw: Dict[str, Any]) -> FamilyRow:
    """Convert one backend family entry into a ``FamilyRow`` of 12 cells."""
    cells = []
    for index in range(12):
        entry = _month_entry(raw, index + 1)
        cells.append(MonthCell(
            month=index + 1,
            paid=_is_paid(raw, index, entry),
            exempt=_is_exempt(raw, index, entry),
            amount=_amount(raw, index, entry),
        ))

    family_id = raw.get("familyConfigId") or raw.get("familyId") or raw.get("id")
    paid_count = raw.get("paidMonths")
    pending_count = raw.get("pendingMonths")

    return FamilyRow(
        family_config_id=str(family_id) if family_id is not None else None,
        family_head_name=raw.get("familyHeadName") or "",
        member_name=raw.get("memberName") or "",
        months=cells,
        total_paid=_to_float(raw.get("totalPaid")),
        total_due=_to_float(raw.get("totalDue")),
        paid_count=paid_count if _is_count(paid_count)
        else sum(1 for c in cells if c.state == CellState.PAID),
        pending_count=pending_count if _is_count(pending_count)
        else sum(1 for c in cells if c.state == CellState.UNPAID),
    )


def normalize_matrix(raw: Any, year: Optional[int] = None) -> ContributionMatrix:
    """Normalize a matrix body: ``{"year", "families": [...]}`` or a bare list."""
    if isinstance(raw, dict):
        families = raw.get("families") or []
        year = raw.get("year") or year
    elif isinstance(raw, list):
        families = raw
    else:
        families = []

    return ContributionMatrix(
        year=int(year or datetime.now().year),
        families=[normalize_family(f) for f in families if isinstance(f, dict)],
    )


def year_options(current: Optional[int] = None, first: int = 2024) -> List[int]:
    """Selectable years, newest first."""
    current = current or datetime.now().year
    return list(range(current, first - 1, -1))
