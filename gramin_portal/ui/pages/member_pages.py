"""Pages of a signed-in member: dashboard, VDF account, family, documents and PIN."""

import logging
from datetime import datetime

from nicegui import ui

from gramin_portal.forms import ChangePinForm
from gramin_portal.ui.feedback import info_field, show_errors, stat_card
from gramin_portal.ui.pages.base import PortalPage
from gramin_portal.ui.pages.documents import document_table, document_url, parse_documents, show_document
from gramin_portal.ui.pages.ledger import deposit_table, loan_table
from gramin_portal.utils.filters import member_display_name
from gramin_portal.utils.formatting import format_currency, format_date
from gramin_portal.vdf.ledger import contribution_years, contributions_for_year
from gramin_portal.vdf.matrix import MONTH_LABELS

logger = logging.getLogger(__name__)

MEMBER_LINKS = (
    ("My VDF", "/member/account"),
    ("My Bank", "/member/bank"),
    ("My Family", "/member/family"),
    ("My Documents", "/member/documents"),
    ("Family Documents", "/member/family-documents"),
)


class MemberDashboardPage(PortalPage):
    """The member's own deposits and loans."""

    title = "My Dashboard"

    def build(self):
        with ui.row().classes("w-full justify-between items-center mb-4 flex-wrap gap-2"):
            self.name_label = ui.label(self.ctx.member.member_name or "").classes("text-xl font-bold")
            with ui.row().classes("gap-2 flex-wrap"):
                for label, path in MEMBER_LINKS:
                    ui.button(label, on_click=lambda p=path: ui.navigate.to(p)).props("outline dense")
                ui.button("Change PIN", on_click=lambda: change_pin_dialog(self)).props("outline dense")
        self.container = ui.column().classes("w-full")
        self.reload()

    async def load(self):
        data = await self.call(self.ctx.member_service.get_dashboard(), "Failed to load data")
        self.container.clear()
        with self.container:
            if data is None:
                ui.label("Not found").classes("text-gray-500 p-8")
                return
            self.name_label.set_text(f"{data.get('memberName') or ''} ({data.get('phone') or '-'})")
            ui.label("My Deposits").classes("text-lg font-bold mt-2")
            deposit_table(data.get("deposits") or [], self.language, show_member=False)
            ui.label("My Loans").classes("text-lg font-bold mt-4")
            loan_table(data.get("loans") or [], self.language, show_member=False)


class MemberAccountPage(PortalPage):
    """VDF account: all-time totals and contributions by year."""

    title = "My VDF Account"

    def build(self):
        self.header("My VDF Account")
        self.stats_row = ui.row().classes("w-full gap-4 mb-4")
        self.year_select = ui.select({"all": "All years"}, value="all", label="Year",
                                     on_change=lambda: self._render()).classes("w-40 mb-2")
        self.container = ui.column().classes("w-full")
        self.contributions = []
        self.reload()

    async def load(self):
        account = await self.call(self.ctx.member_service.get_vdf_account(), "Failed to load VDF account")
        account = account or {}
        self.contributions = account.get("contributions") or []
        years = contribution_years(self.contributions, datetime.now().year)
        self.year_select.options = {"all": "All years", **{y: str(y) for y in years}}
        self.year_select.update()

        self.stats_row.clear()
        with self.stats_row:
            stat_card("Total Paid", format_currency(account.get("totalPaidAllTime") or 0, self.language), "green")
            stat_card("Total Due", format_currency(account.get("totalDueAllTime") or 0, self.language), "red")
            stat_card("Current Year Due", format_currency(account.get("currentYearDue") or 0, self.language),
                      "orange")
        self._render()

    def _render(self):
        shown = contributions_for_year(self.contributions, self.year_select.value)
        self.container.clear()
        with self.container:
            if not shown:
                ui.label("No contributions found").classes("text-gray-500 p-4")
                return
            columns = [
                {"name": "period", "label": "Month", "field": "period", "align": "left"},
                {"name": "amount", "label": "Amount", "field": "amount", "align": "right"},
                {"name": "paid_on", "label": "Payment Date", "field": "paid_on", "align": "left"},
                {"name": "notes", "label": "Notes", "field": "notes", "align": "left"},
            ]
            rows = []
            for index, c in enumerate(shown):
                month = c.get("month")
                label = MONTH_LABELS[month - 1] if isinstance(month, int) and 1 <= month <= 12 else month
                rows.append({
                    "id": c.get("id", index),
                    "period": f"{label} {c.get('year') or ''}".strip(),
                    "amount": format_currency(c.get("amount"), self.language),
                    "paid_on": format_date(c.get("paymentDate")),
                    "notes": c.get("notes") or "-",
                })
            ui.table(columns=columns, rows=rows, row_key="id").classes("w-full")


class FamilyDetailsPage(PortalPage):
    """The member's family: VDF configuration, totals and members."""

    title = "My Family"

    def build(self):
        self.header("Family Details")
        self.container = ui.column().classes("w-full")
        self.reload()

    async def load(self):
        details = await self.call(self.ctx.member_service.get_family_details(),
                                  "You are not associated with any family. Please contact admin.")
        self.container.clear()
        with self.container:
            if not details:
                ui.label("No family details").classes("text-gray-500 p-8")
                return
            with ui.card().classes("w-full p-4"):
                with ui.grid(columns=3).classes("w-full gap-2"):
                    info_field("Family Head", details.get("familyHeadName"))
                    info_field("Monthly Amount", format_currency(details.get("monthlyAmount"), self.language))
                    info_field("Effective From", format_date(details.get("effectiveFrom")))
                    info_field("Notes", details.get("notes"))

            def money(key):
                return format_currency(details.get(key) or 0, self.language)

            with ui.row().classes("gap-4 flex-wrap mt-2"):
                stat_card("Total Deposits", money("totalDeposits"), "green")
                stat_card("Total Loans", money("totalLoans"), "orange")
                stat_card("VDF Contributions", money("totalVdfContributions"), "teal")
                stat_card("VDF Expenses", money("totalVdfExpenses"), "red")

            members = details.get("members") or []
            ui.label(f"Family Members ({len(members)})").classes("text-lg font-bold mt-4")
            columns = [
                {"name": "name", "label": "Name", "field": "name", "align": "left"},
                {"name": "phone", "label": "Phone", "field": "phone", "align": "left"},
                {"name": "dob", "label": "Date of Birth", "field": "dob", "align": "left"},
                {"name": "deposits", "label": "Deposits", "field": "deposits", "align": "right"},
                {"name": "loans", "label": "Loans", "field": "loans", "align": "right"},
            ]
            rows = [
                {
                    "id": m.get("id", index),
                    "name": member_display_name(m),
                    "phone": m.get("phone") or "-",
                    "dob": format_date(m.get("dateOfBirth")),
                    "deposits": format_currency(m.get("totalDeposits") or 0, self.language),
                    "loans": format_currency(m.get("totalLoans") or 0, self.language),
                }
                for index, m in enumerate(members)
            ]
            ui.table(columns=columns, rows=rows, row_key="id").classes("w-full")


class MemberDocumentsPage(PortalPage):
    """The member's own documents, or every document of the family."""

    def __init__(self, ctx, family: bool = False, scope=None):
        super().__init__(ctx, scope)
        self.family = family
        self.title = "Family Documents" if family else "My Documents"
        self.documents = []

    def build(self):
        self.header(self.title)
        self.container = ui.column().classes("w-full")
        self.reload()

    async def load(self):
        service = self.ctx.member_service
        fetch = service.get_family_documents() if self.family else service.get_my_documents()
        raw = await self.call(fetch, "Failed to load documents")
        self.documents = parse_documents(raw or [])
        self.container.clear()
        with self.container:
            document_table(self.documents, on_view=self._view, on_download=self._download,
                           show_member=self.family)

    async def _view(self, document_id: str):
        body = await self.call(self.ctx.member_service.get_document_url(document_id), "Failed to fetch document URL")
        url = document_url(body)
        if url:
            show_document(url)

    async def _download(self, document_id: str):
        content = await self.call(self.ctx.member_service.download_document(document_id),
                                  "Failed to download document")
        if content is None:
            return
        doc = next((d for d in self.documents if d.id == str(document_id)), None)
        ui.download(content, filename=(doc.file_name if doc and doc.file_name else f"document-{document_id}"))


def change_pin_dialog(page: PortalPage) -> None:
    """Dialog for a member to change their own PIN."""
    form = ChangePinForm()
    with ui.dialog() as dialog, ui.card().classes("p-6 min-w-[360px]"):
        ui.label("Change PIN").classes("text-xl font-bold mb-2")
        old_pin = ui.input("Current PIN", password=True).props("outlined dense maxlength=4").classes("w-full")
        new_pin = ui.input("New PIN", password=True).props("outlined dense maxlength=4").classes("w-full")
        confirm_pin = ui.input("Confirm New PIN", password=True).props("outlined dense maxlength=4").classes("w-full")

        async def save():
            form.old_pin = old_pin.value or ""
            form.new_pin = new_pin.value or ""
            form.confirm_pin = confirm_pin.value or ""
            errors = form.validate()
            if errors:
                show_errors(errors)
                return
            if not await page.attempt(page.ctx.member_service.change_pin(form.old_pin, form.new_pin),
                                      "Failed to change PIN"):
                return
            ui.notify("PIN changed successfully", type="positive")
            dialog.close()

        with ui.row().classes("w-full justify-end gap-2 mt-4"):
            ui.button("Cancel", on_click=dialog.close).props("flat")
            ui.button("Change PIN", on_click=save).props("color=primary")
    dialog.open()
