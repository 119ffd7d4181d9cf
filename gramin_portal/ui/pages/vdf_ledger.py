"""VDF expenses and deposits: management tables and public listings."""

import logging
from typing import List, Optional

from nicegui import ui

from gramin_portal.config import settings
from gramin_portal.forms import DepositForm, ExpenseForm
from gramin_portal.ui.feedback import confirm, show_errors, stat_card
from gramin_portal.ui.pages.base import PortalPage
from gramin_portal.utils.filters import member_display_name, sort_members_by_name
from gramin_portal.utils.formatting import format_currency, format_date
from gramin_portal.vdf.ledger import (
    category_name,
    depositor_name,
    filter_deposits,
    page_content,
    sum_amounts,
)
from gramin_portal.vdf.matrix import year_options

logger = logging.getLogger(__name__)

PAGE_SIZE = 20

EDIT_DELETE_SLOT = '''
    <q-td :props="props">
        <q-btn flat dense size="sm" icon="edit" @click="$parent.$emit('edit', props.row)" />
        <q-btn flat dense size="sm" icon="delete" color="negative" @click="$parent.$emit('delete', props.row)" />
    </q-td>
'''


def _categories(raw) -> dict:
    return {str(c.get("id")): c.get("categoryName") or c.get("name") or "-" for c in raw or []}


class VdfExpensesPage(PortalPage):
    """Expenses, paged. Admins can filter by category and edit."""

    def __init__(self, ctx, public: bool = True, scope=None):
        super().__init__(ctx, scope)
        self.public = public
        self.title = "VDF Expenses" if public else "Manage VDF Expenses"
        self.page = 0
        self.total_pages = 0
        self.category = "all"
        self.categories: dict = {}
        self.expenses: List[dict] = []

    @property
    def editable(self) -> bool:
        return not self.public and self.caps.can_write

    def build(self):
        with ui.row().classes("w-full justify-between items-center mb-4"):
            ui.label(self.title).classes("text-2xl font-bold")
            if self.editable:
                ui.button("+ Add Expense", on_click=lambda: self._expense_dialog(None)).props("color=primary")
        if not self.public:
            self.category_select = ui.select({"all": "All categories"}, value="all", label="Category",
                                             on_change=self._category_changed).classes("w-64 mb-4")
        self.stats_row = ui.row().classes("w-full gap-4 mb-4")
        self.container = ui.column().classes("w-full")
        with ui.row().classes("w-full justify-center gap-4 items-center mt-2"):
            ui.button(icon="chevron_left", on_click=lambda: self._go(-1)).props("flat")
            self.page_label = ui.label()
            ui.button(icon="chevron_right", on_click=lambda: self._go(1)).props("flat")
        self.reload()

    def _go(self, step: int):
        target = self.page + step
        if 0 <= target < max(self.total_pages, 1):
            self.page = target
            self.reload()

    def _category_changed(self, e):
        self.category = e.value
        self.page = 0
        self.reload()

    async def load(self):
        service = self.ctx.vdf_service
        if not self.public and not self.categories:
            self.categories = _categories(
                await self.call(service.get_expense_categories(), "Failed to load categories"))
            self.category_select.options = {"all": "All categories", **self.categories}
            self.category_select.update()

        if self.public:
            body = await self.call(service.get_public_expenses(self.page, PAGE_SIZE), "Failed to load expenses")
        elif self.category == "all":
            body = await self.call(service.get_all_expenses(self.page, PAGE_SIZE), "Failed to load expenses")
        else:
            body = await self.call(service.get_expenses_by_category(self.category), "Failed to load expenses")
        self.expenses, self.total_pages = page_content(body)
        self._render()

    def _render(self):
        self.page_label.set_text(f"Page {self.page + 1} of {max(self.total_pages, 1)}")
        self.stats_row.clear()
        with self.stats_row:
            stat_card("Expenses shown", format_currency(sum_amounts(self.expenses), self.language), "orange")

        self.container.clear()
        with self.container:
            if not self.expenses:
                ui.label("No expenses found").classes("text-gray-500 p-8")
                return
            columns = [
                {"name": "date", "label": "Date", "field": "date", "sortable": True, "align": "left"},
                {"name": "category", "label": "Category", "field": "category", "align": "left"},
                {"name": "description", "label": "Description", "field": "description", "align": "left"},
                {"name": "amount", "label": "Amount", "field": "amount", "align": "right"},
            ]
            if self.editable:
                columns.append({"name": "actions", "label": "Actions", "field": "actions", "align": "center"})
            rows = [
                {
                    "id": e.get("id", index),
                    "date": format_date(e.get("expenseDate")),
                    "category": category_name(e),
                    "description": e.get("description") or "-",
                    "amount": format_currency(e.get("amount"), self.language),
                }
                for index, e in enumerate(self.expenses)
            ]
            table = ui.table(columns=columns, rows=rows, row_key="id").classes("w-full")
            if self.editable:
                table.add_slot("body-cell-actions", EDIT_DELETE_SLOT)
                table.on("edit", lambda e: self._expense_dialog(self._find(e.args["id"])))
                table.on("delete", lambda e: self._confirm_delete(e.args["id"]))

    def _find(self, expense_id) -> Optional[dict]:
        return next((e for e in self.expenses if str(e.get("id")) == str(expense_id)), None)

    def _confirm_delete(self, expense_id):
        async def delete():
            if await self.attempt(self.ctx.vdf_service.delete_expense(expense_id), "Failed to delete expense"):
                ui.notify("Expense deleted", type="positive")
                await self.load()

        confirm("Delete this expense?", delete, confirm_label="Delete")

    def _expense_dialog(self, expense: Optional[dict]):
        form = ExpenseForm() if expense is None else ExpenseForm.from_expense(expense)
        with ui.dialog() as dialog, ui.card().classes("p-6 min-w-[480px]"):
            ui.label("Add Expense" if expense is None else "Edit Expense").classes("text-xl font-bold mb-4")
            expense_date = ui.input("Expense Date", value=form.expense_date).props(
                "outlined dense type=date").classes("w-full")
            category = ui.select(self.categories, value=form.category_id if form.category_id in self.categories else None,
                                 label="Category").classes("w-full")
            amount = ui.input("Amount", value=form.amount).props("outlined dense type=number step=0.01").classes(
                "w-full")
            description = ui.input("Description", value=form.description).props("outlined dense").classes("w-full")
            notes = ui.textarea("Notes", value=form.notes).props("outlined rows=2").classes("w-full")

            async def save():
                form.expense_date = expense_date.value or None
                form.category_id = category.value or ""
                form.amount = amount.value
                form.description = description.value or ""
                form.notes = notes.value or ""
                errors = form.validate()
                if errors:
                    show_errors(errors)
                    return
                service = self.ctx.vdf_service
                if expense is None:
                    action = service.create_expense(form.to_payload())
                else:
                    action = service.update_expense(expense["id"], form.to_payload())
                if not await self.attempt(action, "Failed to save expense"):
                    return
                ui.notify("Expense saved", type="positive")
                dialog.close()
                await self.load()

            with ui.row().classes("w-full justify-end gap-2 mt-4"):
                ui.button("Cancel", on_click=dialog.close).props("flat")
                ui.button("Save", on_click=save).props("color=primary")
        dialog.open()


class VdfDepositsPage(PortalPage):
    """Deposits for a year with category and member filters."""

    def __init__(self, ctx, public: bool = True, scope=None):
        super().__init__(ctx, scope)
        self.public = public
        self.title = "VDF Deposits" if public else "Manage VDF Deposits"
        self.year = year_options(first=settings.ui.first_year)[0]
        self.category = "all"
        self.member = "all"
        self.categories: dict = {}
        self.members: dict = {}
        self.deposits: List[dict] = []

    @property
    def editable(self) -> bool:
        return not self.public and self.caps.can_write

    def build(self):
        with ui.row().classes("w-full justify-between items-center mb-4"):
            ui.label(self.title).classes("text-2xl font-bold")
            if self.editable:
                ui.button("+ Add Deposit", on_click=lambda: self._deposit_dialog(None)).props("color=primary")
        with ui.row().classes("w-full gap-4 mb-4 items-center"):
            ui.select(year_options(first=settings.ui.first_year), value=self.year, label="Year",
                      on_change=self._year_changed).classes("w-32")
            self.category_select = ui.select({"all": "All categories"}, value="all", label="Category",
                                             on_change=self._filter_changed).classes("w-56")
            if not self.public:
                self.member_select = ui.select({"all": "All members"}, value="all", label="Member",
                                               with_input=True, on_change=self._filter_changed).classes("w-56")
        self.stats_row = ui.row().classes("w-full gap-4 mb-4")
        self.container = ui.column().classes("w-full")
        self.reload()

    def _year_changed(self, e):
        self.year = e.value
        self.reload()

    def _filter_changed(self, _):
        self.category = self.category_select.value or "all"
        if not self.public:
            self.member = self.member_select.value or "all"
        self._render()

    async def load(self):
        service = self.ctx.vdf_service
        if not self.public and not self.categories:
            self.categories = _categories(
                await self.call(service.get_deposit_categories(), "Failed to load categories"))
            members = await self.call(self.ctx.admin_service.get_all_members(""), "Failed to load members")
            self.members = {str(m.get("id")): member_display_name(m) for m in sort_members_by_name(members or [])}
            self.member_select.options = {"all": "All members", **self.members}
            self.member_select.update()

        body = await self.call(service.get_public_deposits(self.year), "Failed to load deposits")
        self.deposits, _ = page_content(body)

        if self.public:
            seen = {}
            for d in self.deposits:
                category = d.get("category") if isinstance(d.get("category"), dict) else {}
                key = str(d.get("categoryId") or category.get("id") or "")
                if key:
                    seen[key] = category_name(d)
            self.categories = seen
        self.category_select.options = {"all": "All categories", **self.categories}
        self.category_select.update()
        self._render()

    def _render(self):
        shown = filter_deposits(self.deposits, self.category, self.member)
        self.stats_row.clear()
        with self.stats_row:
            stat_card(f"Total deposits {self.year}", format_currency(sum_amounts(shown), self.language), "green")

        self.container.clear()
        with self.container:
            if not shown:
                ui.label("No deposits found").classes("text-gray-500 p-8")
                return
            columns = [
                {"name": "date", "label": "Date", "field": "date", "sortable": True, "align": "left"},
                {"name": "category", "label": "Category", "field": "category", "align": "left"},
                {"name": "source", "label": "From", "field": "source", "align": "left"},
                {"name": "amount", "label": "Amount", "field": "amount", "align": "right"},
            ]
            if self.editable:
                columns.append({"name": "actions", "label": "Actions", "field": "actions", "align": "center"})
            rows = [
                {
                    "id": d.get("id", index),
                    "date": format_date(d.get("depositDate")),
                    "category": category_name(d),
                    "source": depositor_name(d),
                    "amount": format_currency(d.get("amount"), self.language),
                }
                for index, d in enumerate(shown)
            ]
            table = ui.table(columns=columns, rows=rows, row_key="id",
                             pagination={"rowsPerPage": 25}).classes("w-full")
            if self.editable:
                table.add_slot("body-cell-actions", EDIT_DELETE_SLOT)
                table.on("edit", lambda e: self._deposit_dialog(self._find(e.args["id"])))
                table.on("delete", lambda e: self._confirm_delete(e.args["id"]))

    def _find(self, deposit_id) -> Optional[dict]:
        return next((d for d in self.deposits if str(d.get("id")) == str(deposit_id)), None)

    def _confirm_delete(self, deposit_id):
        async def delete():
            if await self.attempt(self.ctx.vdf_service.delete_deposit(deposit_id), "Failed to delete deposit"):
                ui.notify("Deposit deleted", type="positive")
                await self.load()

        confirm("Are you sure you want to delete this deposit?", delete, confirm_label="Delete")

    def _deposit_dialog(self, deposit: Optional[dict]):
        form = DepositForm() if deposit is None else DepositForm.from_deposit(deposit)
        with ui.dialog() as dialog, ui.card().classes("p-6 min-w-[480px]"):
            ui.label("Add Deposit" if deposit is None else "Edit Deposit").classes("text-xl font-bold mb-4")
            deposit_date = ui.input("Date", value=form.deposit_date).props("outlined dense type=date").classes("w-full")
            category = ui.select(self.categories, value=form.category_id if form.category_id in self.categories else None,
                                 label="Category").classes("w-full")
            member = ui.select({"": "None (outside source)", **self.members},
                               value=form.member_id if form.member_id in self.members else "",
                               label="Member", with_input=True).classes("w-full")
            source = ui.input("Source Name", value=form.source_name).props("outlined dense").classes("w-full")
            source_bn = ui.input("Source Name (Bengali)", value=form.source_name_bn).props(
                "outlined dense").classes("w-full")
            amount = ui.input("Amount", value=form.amount).props("outlined dense type=number step=1").classes("w-full")
            notes = ui.textarea("Notes", value=form.notes).props("outlined rows=2").classes("w-full")
            notify = ui.checkbox("Notify members", value=form.send_notification)

            async def save():
                form.deposit_date = deposit_date.value or None
                form.category_id = category.value or ""
                form.member_id = member.value or ""
                form.source_name = source.value or ""
                form.source_name_bn = source_bn.value or ""
                form.amount = amount.value
                form.notes = notes.value or ""
                form.send_notification = bool(notify.value)
                errors = form.validate()
                if errors:
                    show_errors(errors)
                    return
                service = self.ctx.vdf_service
                if deposit is None:
                    action = service.create_deposit(form.to_payload())
                else:
                    action = service.update_deposit(deposit["id"], form.to_payload())
                if not await self.attempt(action, "Failed to save deposit"):
                    return
                ui.notify("Deposit saved", type="positive")
                dialog.close()
                await self.load()

            with ui.row().classes("w-full justify-end gap-2 mt-4"):
                ui.button("Cancel", on_click=dialog.close).props("flat")
                ui.button("Save", on_click=save).props("color=primary")
        dialog.open()


class VdfLandingPage(PortalPage):
    """Entry page of the VDF section."""

    title = "VDF"

    def build(self):
        ui.label("Village Development Fund").classes("text-2xl font-bold mb-4")
        with ui.row().classes("w-full gap-4 flex-wrap"):
            for title, path, icon in (
                ("Monthly Contributions", "/vdf/contributions", "calendar_month"),
                ("Deposits", "/vdf/deposits", "savings"),
                ("Expenses", "/vdf/expenses", "receipt_long"),
            ):
                with ui.card().classes("p-6 w-64 cursor-pointer").on("click", lambda p=path: ui.navigate.to(p)):
                    ui.icon(icon).classes("text-4xl text-indigo-600")
                    ui.label(title).classes("text-lg font-bold")
