"""
VDF form state, validation and request payloads.

Validation runs before submission and never reaches the server. Each
``validate()`` returns a dict of field -> message; an empty dict means the
form can be submitted.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional, Set

DEFAULT_MONTHLY_AMOUNT = "20.00"


def _today() -> str:
    return date.today().isoformat()


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_amount(value: Any) -> Optional[Decimal]:
    """Parse a typed amount; None when it is not a finite number."""
    if is_blank(value) or isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


@dataclass
class BulkContributionForm:
    """A year of monthly amounts for one family, saved in one bulk call.

    A blank month is left untouched, ``0`` asks the backend to delete that
    month's contribution, and months in ``exempt_months`` are never sent.
    """
    family_config_id: str
    year: int
    amounts: Dict[int, Any] = field(default_factory=dict)
    exempt_months: Set[int] = field(default_factory=set)
    payment_date: Optional[str] = field(default_factory=_today)
    notes: str = ""

    @classmethod
    def from_existing(
        cls,
        family_config_id: str,
        year: int,
        contributions: Iterable[Dict[str, Any]],
        exempt_months: Iterable[int] = (),
    ) -> "BulkContributionForm":
        """Pre-fill amounts from the family's recorded contributions."""
        amounts: Dict[int, Any] = {month: "" for month in range(1, 13)}
        for contribution in contributions or []:
            month = contribution.get("month")
            if isinstance(month, int) and 1 <= month <= 12 and contribution.get("amount") is not None:
                amounts[month] = str(contribution["amount"])
        return cls(family_config_id, year, amounts, set(exempt_months))

    def _entered(self) -> Dict[int, Any]:
        """Non-blank, non-exempt month values in month order."""
        return {
            month: self.amounts[month]
            for month in sorted(self.amounts)
            if month not in self.exempt_months and not is_blank(self.amounts[month])
        }

    def validate(self) -> Dict[Any, str]:
        errors: Dict[Any, str] = {}
        entered = self._entered()

        for month, value in entered.items():
            if not 1 <= month <= 12:
                errors[month] = "Invalid month"
                continue
            amount = parse_amount(value)
            if amount is None or amount < 0:
                errors[month] = "Invalid amount"

        if not entered:
            errors["general"] = "Please enter amount for at least one month"
        if not self.payment_date:
            errors["paymentDate"] = "Payment date is required"
        return errors

    def contributions(self) -> List[Dict[str, Any]]:
        return [
            {"month": month, "amount": float(parse_amount(value))}
            for month, value in self._entered().items()
            if parse_amount(value) is not None
        ]

    def total(self) -> float:
        return sum(c["amount"] for c in self.contributions())

    def to_payload(self) -> Dict[str, Any]:
        return {
            "familyConfigId": self.family_config_id,
            "year": self.year,
            "paymentDate": self.payment_date,
            "notes": self.notes or None,
            "contributions": self.contributions(),
        }


@dataclass
class FamilyConfigForm:
    """Create/edit a family's VDF participation."""
    member_id: str = ""
    family_head_name: str = ""
    is_contribution_enabled: bool = False
    effective_from: Optional[str] = field(default_factory=_today)
    monthly_amount: Any = DEFAULT_MONTHLY_AMOUNT
    notes: str = ""

    @classmethod
    def from_family(cls, family: Dict[str, Any]) -> "FamilyConfigForm":
        effective = family.get("effectiveFrom")
        return cls(
            member_id=str(family.get("memberId") or ""),
            family_head_name=family.get("familyHeadName") or "",
            is_contribution_enabled=bool(family.get("isContributionEnabled")),
            effective_from=str(effective)[:10] if effective else _today(),
            monthly_amount=str(family["monthlyAmount"]) if family.get("monthlyAmount") is not None
            else DEFAULT_MONTHLY_AMOUNT,
            notes=family.get("notes") or "",
        )

    def validate(self) -> Dict[str, str]:
        errors = {}
        if not self.member_id:
            errors["memberId"] = "Please select a member"
        if not self.family_head_name.strip():
            errors["familyHeadName"] = "Family head name is required"
        amount = parse_amount(self.monthly_amount)
        if is_blank(self.monthly_amount):
            errors["monthlyAmount"] = "Monthly amount is required"
        elif amount is None or amount <= 0:
            errors["monthlyAmount"] = "Amount must be greater than 0"
        if self.is_contribution_enabled and not self.effective_from:
            errors["effectiveFrom"] = "Effective date is required when enabling contribution"
        return errors

    def to_payload(self) -> Dict[str, Any]:
        return {
            "memberId": self.member_id,
            "familyHeadName": self.family_head_name.strip(),
            "isContributionEnabled": self.is_contribution_enabled,
            "effectiveFrom": self.effective_from if self.is_contribution_enabled else None,
            "monthlyAmount": float(parse_amount(self.monthly_amount)),
            "notes": self.notes.strip(),
        }


@dataclass
class ExpenseForm:
    """Create/edit a VDF expense."""
    expense_date: Optional[str] = field(default_factory=_today)
    category_id: str = ""
    amount: Any = ""
    description: str = ""
    notes: str = ""

    @classmethod
    def from_expense(cls, expense: Dict[str, Any]) -> "ExpenseForm":
        expense_date = expense.get("expenseDate")
        category = expense.get("category") if isinstance(expense.get("category"), dict) else {}
        return cls(
            expense_date=str(expense_date)[:10] if expense_date else _today(),
            category_id=str(expense.get("categoryId") or category.get("id") or ""),
            amount=str(expense["amount"]) if expense.get("amount") is not None else "",
            description=expense.get("description") or "",
            notes=expense.get("notes") or "",
        )

    def validate(self) -> Dict[str, str]:
        errors = {}
        if not self.expense_date:
            errors["expenseDate"] = "Expense date is required"
        if not self.category_id:
            errors["categoryId"] = "Category is required"
        amount = parse_amount(self.amount)
        if amount is None or amount <= 0:
            errors["amount"] = "Amount must be greater than 0"
        if not self.description.strip():
            errors["description"] = "Description is required"
        return errors

    def to_payload(self) -> Dict[str, Any]:
        return {
            "expenseDate": self.expense_date,
            "categoryId": self.category_id,
            "amount": float(parse_amount(self.amount)),
            "description": self.description.strip(),
            "notes": self.notes.strip() or None,
        }


@dataclass
class DepositForm:
    """Create/edit a VDF deposit. Amounts are whole rupees."""
    deposit_date: Optional[str] = field(default_factory=_today)
    category_id: str = ""
    member_id: str = ""
    amount: Any = ""
    notes: str = ""
    source_name: str = ""
    source_name_bn: str = ""
    send_notification: bool = False

    @classmethod
    def from_deposit(cls, deposit: Dict[str, Any]) -> "DepositForm":
        category = deposit.get("category") if isinstance(deposit.get("category"), dict) else {}
        return cls(
            deposit_date=str(deposit.get("depositDate") or _today())[:10],
            category_id=str(deposit.get("categoryId") or category.get("id") or ""),
            member_id=str(deposit.get("memberId") or ""),
            amount=str(deposit["amount"]) if deposit.get("amount") is not None else "",
            notes=deposit.get("notes") or "",
            source_name=deposit.get("sourceName") or "",
            source_name_bn=deposit.get("sourceNameBn") or "",
        )

    def validate(self) -> Dict[str, str]:
        errors = {}
        if not self.deposit_date:
            errors["depositDate"] = "Date is required"
        if not self.category_id:
            errors["categoryId"] = "Category is required"
        amount = parse_amount(self.amount)
        if is_blank(self.amount):
            errors["amount"] = "Amount is required"
        elif amount is None or self.rounded_amount() <= 0:
            errors["amount"] = "Amount must be greater than 0"
        return errors

    def rounded_amount(self) -> int:
        amount = parse_amount(self.amount) or Decimal(0)
        return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    def to_payload(self) -> Dict[str, Any]:
        return {
            "depositDate": self.deposit_date,
            "memberId": self.member_id or None,
            "categoryId": self.category_id,
            "amount": self.rounded_amount(),
            "notes": self.notes or None,
            "sourceName": self.source_name or None,
            "sourceNameBn": self.source_name_bn or None,
            "sendNotification": bool(self.send_notification),
        }
