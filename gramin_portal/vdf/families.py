"""Family configuration list helpers."""

from dataclasses import dataclass
from typing import Iterable, List

from gramin_portal.models import FamilyConfig


@dataclass
class FamilySummary:
    total: int = 0
    active: int = 0
    collected: float = 0.0
    dues: float = 0.0


def parse_families(raw: Iterable[dict]) -> List[FamilyConfig]:
    return [FamilyConfig.model_validate(item) for item in raw or []]


def summarize_families(families: Iterable[FamilyConfig]) -> FamilySummary:
    """Summary cards over the currently loaded families."""
    summary = FamilySummary()
    for family in families:
        summary.total += 1
        if family.is_contribution_enabled:
            summary.active += 1
        summary.collected += family.total_amount_paid or 0.0
        summary.dues += family.total_amount_due or 0.0
    return summary
