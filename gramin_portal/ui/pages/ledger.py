"""Deposit and loan tables shared by the public, admin and member bank pages."""

from typing import Iterable, List

from nicegui import ui

from gramin_portal.utils.formatting import format_currency, format_date


def _col(name: str, label: str, align: str = "left", sortable: bool = True) -> dict:
    return {"name": name, "label": label, "field": name, "sortable": sortable, "align": align}


def deposit_rows(deposits: Iterable[dict], language: str = "en") -> List[dict]:
    rows = []
    for index, deposit in enumerate(deposits or []):
        amount = deposit.get("amount")
        rows.append({
            "id": deposit.get("id", index),
            "member": deposit.get("memberName") or "-",
            "date": format_date(deposit.get("depositDate")),
            "amount": format_currency(amount, language),
            "interest": format_currency(deposit.get("interestEarned") or deposit.get("currentInterest") or 0, language),
            "total": format_currency(deposit.get("totalAmount") or deposit.get("currentTotal") or amount, language),
            "status": deposit.get("status") or "-",
        })
    return rows


def loan_rows(loans: Iterable[dict], language: str = "en") -> List[dict]:
    rows = []
    for index, loan in enumerate(loans or []):
        active = loan.get("status") == "ACTIVE"
        rows.append({
            "id": loan.get("id", index),
            "member": loan.get("memberName") or "-",
            "date": format_date(loan.get("loanDate")),
            "amount": format_currency(loan.get("loanAmount"), language),
            "interest": format_currency(loan.get("currentInterest") or loan.get("interestAmount") or 0, language),
            "paid": format_currency(
                loan.get("paidAmount") if active else loan.get("totalRepayment"), language
            ),
            "status": loan.get("status") or "-",
        })
    return rows


def deposit_table(deposits: Iterable[dict], language: str = "en", show_member: bool = True):
    columns = [
        _col("date", "Date"),
        _col("amount", "Amount", "right"),
        _col("interest", "Interest", "right"),
        _col("total", "Total", "right"),
        _col("status", "Status", "center"),
    ]
    if show_member:
        columns.insert(0, _col("member", "Member"))
    rows = deposit_rows(deposits, language)
    if not rows:
        ui.label("No deposits found").classes("text-gray-500 p-4")
        return None
    return ui.table(columns=columns, rows=rows, row_key="id", pagination=25).classes("w-full")


def loan_table(loans: Iterable[dict], language: str = "en", show_member: bool = True):
    columns = [
        _col("date", "Date"),
        _col("amount", "Loan Amount", "right"),
        _col("interest", "Interest", "right"),
        _col("paid", "Paid", "right"),
        _col("status", "Status", "center"),
    ]
    if show_member:
        columns.insert(0, _col("member", "Member"))
    rows = loan_rows(loans, language)
    if not rows:
        ui.label("No loans found").classes("text-gray-500 p-4")
        return None
    return ui.table(columns=columns, rows=rows, row_key="id", pagination=25).classes("w-full")
