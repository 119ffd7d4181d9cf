"""Gramin Bank ledger pages: public lists, admin lists, statements and reports."""

import logging
from datetime import datetime

from nicegui import ui

from gramin_portal.ui.feedback import info_field, stat_card
from gramin_portal.ui.pages.base import PortalPage
from gramin_portal.ui.pages.documents import document_table, document_url, parse_documents, show_document
from gramin_portal.ui.pages.ledger import deposit_table, loan_table
from gramin_portal.ui.pages.member_management import MemberManagementPage
from gramin_portal.utils.filters import member_display_name, sort_members_by_name
from gramin_portal.utils.formatting import format_currency, format_number

logger = logging.getLogger(__name__)

STATUS_FILTERS = {"active": "Active", "closed": "Closed", "all": "All"}


class PublicLedgerPage(PortalPage):
    """Public deposit or loan list."""

    def __init__(self, ctx, kind: str = "deposits", scope=None):
        super().__init__(ctx, scope)
        self.kind = kind
        self.title = "Deposits" if kind == "deposits" else "Loans"

    def build(self):
        self.header(self.title)
        self.container = ui.column().classes("w-full")
        self.reload()

    async def load(self):
        if self.kind == "deposits":
            items = await self.call(self.ctx.public_service.get_deposits(), "Failed to load deposits")
        else:
            items = await self.call(self.ctx.public_service.get_loans(), "Failed to load loans")
        self.container.clear()
        with self.container:
            if self.kind == "deposits":
                deposit_table(items or [], self.language)
            else:
                loan_table(items or [], self.language)


class AdminLedgerPage(PortalPage):
    """Admin deposit or loan list with a status filter; read-only for operators."""

    def __init__(self, ctx, kind: str = "deposits", scope=None):
        super().__init__(ctx, scope)
        self.kind = kind
        self.title = "Bank Deposits" if kind == "deposits" else "Bank Loans"
        self.status = "active"

    def build(self):
        self.header(self.title)
        with ui.row().classes("w-full gap-4 mb-4 items-center"):
            ui.select(STATUS_FILTERS, value=self.status, label="Status",
                      on_change=self._status_changed).classes("w-40")
        self.container = ui.column().classes("w-full")
        self.reload()

    def _status_changed(self, e):
        self.status = e.value
        self.reload()

    async def load(self):
        service = self.ctx.admin_service
        if self.kind == "deposits":
            items = await self.call(service.get_deposits(self.status), "Failed to load deposits")
        else:
            items = await self.call(service.get_loans(self.status), "Failed to load loans")
        items = items or []
        self.container.clear()
        with self.container:
            ui.label(f"{len(items)} {self.kind}").classes("text-sm text-gray-500")
            if self.kind == "deposits":
                deposit_table(items, self.language)
            else:
                loan_table(items, self.language)


class StatementsPage(PortalPage):
    """Pick a member and a year to see their deposits, loans and documents."""

    title = "Member Statement"

    def build(self):
        self.header("Member Statement", refresh=False)
        current = datetime.now().year
        with ui.row().classes("w-full gap-4 mb-4 items-end"):
            self.member_select = ui.select({}, label="Member", with_input=True).classes("w-72")
            self.year_select = ui.select(
                {0: "All years", **{y: str(y) for y in range(current, current - 6, -1)}},
                value=0, label="Year",
            ).classes("w-40")
            ui.button("View", on_click=self._show).props("color=primary")
        self.container = ui.column().classes("w-full")
        self.reload()

    async def load(self):
        members = await self.call(self.ctx.admin_service.get_all_members(), "Failed to load members")
        self.member_select.options = {
            str(m.get("id")): member_display_name(m) for m in sort_members_by_name(members or [])
        }
        self.member_select.update()

    async def _show(self):
        member_id = self.member_select.value
        if not member_id:
            ui.notify("Please select a member", type="warning")
            return
        year = self.year_select.value or None
        statement = await self.call(
            self.ctx.admin_service.get_member_statement(member_id, year), "Failed to load statement"
        )
        if statement is None:
            return
        documents = await self.call(
            self.ctx.admin_service.get_member_documents(member_id), "Failed to fetch member documents"
        )
        self.render(statement, parse_documents(documents or []))

    def render(self, statement: dict, documents):
        self.container.clear()
        with self.container:
            with ui.card().classes("w-full p-4"):
                with ui.grid(columns=3).classes("w-full gap-2"):
                    info_field("Member", statement.get("memberName"))
                    info_field("Phone", statement.get("phone"))
                    info_field("Year", statement.get("year") or "All")
            ui.label("Deposits").classes("text-lg font-bold mt-4")
            deposit_table(statement.get("deposits") or [], self.language, show_member=False)
            ui.label("Loans").classes("text-lg font-bold mt-4")
            loan_table(statement.get("loans") or [], self.language, show_member=False)
            ui.label("Documents").classes("text-lg font-bold mt-4")
            document_table(documents, on_view=self._view_document)

    async def _view_document(self, document_id: str):
        body = await self.call(self.ctx.admin_service.get_document_url(document_id), "Failed to fetch document URL")
        url = document_url(body)
        if url:
            show_document(url)


class ReportsPage(PortalPage):
    """Yearly bank report."""

    title = "Yearly Report"

    def build(self):
        self.header("Yearly Report", refresh=False)
        current = datetime.now().year
        self.year = current
        with ui.row().classes("w-full gap-4 mb-4 items-end"):
            ui.select([y for y in range(current, current - 6, -1)], value=current, label="Year",
                      on_change=self._year_changed).classes("w-40")
        self.container = ui.column().classes("w-full")
        self.reload()

    def _year_changed(self, e):
        self.year = e.value
        self.reload()

    async def load(self):
        report = await self.call(self.ctx.admin_service.get_yearly_report(self.year), "Failed to load report")
        self.render(report or {})

    def render(self, report: dict):
        self.container.clear()
        with self.container:
            if not report:
                ui.label("No report data").classes("text-gray-500 p-4")
                return
            with ui.row().classes("gap-4 flex-wrap"):
                for key, value in report.items():
                    if isinstance(value, bool) or not isinstance(value, (int, float)):
                        continue
                    label = "".join(f" {c}" if c.isupper() else c for c in key).strip().title()
                    if "count" in key.lower() or "members" in key.lower() or key == "year":
                        stat_card(label, format_number(value, self.language))
                    else:
                        stat_card(label, format_currency(value, self.language))
            if report.get("deposits"):
                ui.label("Deposits").classes("text-lg font-bold mt-4")
                deposit_table(report["deposits"], self.language)
            if report.get("loans"):
                ui.label("Loans").classes("text-lg font-bold mt-4")
                loan_table(report["loans"], self.language)


class GraminBankPage(PortalPage):
    """Members, loans and deposits on one tabbed page."""

    title = "Gramin Bank"

    def build(self):
        ui.label("Gramin Bank").classes("text-2xl font-bold mb-4")
        with ui.tabs() as tabs:
            members_tab = ui.tab("Members")
            loans_tab = ui.tab("Loans")
            deposits_tab = ui.tab("Deposits")
        with ui.tab_panels(tabs, value=members_tab).classes("w-full"):
            with ui.tab_panel(members_tab):
                MemberManagementPage(self.ctx, self.scope).build()
            with ui.tab_panel(loans_tab):
                AdminLedgerPage(self.ctx, "loans", self.scope).build()
            with ui.tab_panel(deposits_tab):
                AdminLedgerPage(self.ctx, "deposits", self.scope).build()
