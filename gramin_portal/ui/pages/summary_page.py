"""Public landing page with the bank and VDF summaries side by side."""

import asyncio

from nicegui import ui

from gramin_portal.api.errors import ApiError
from gramin_portal.ui.feedback import report_error, stat_card
from gramin_portal.ui.pages.base import PortalPage
from gramin_portal.utils.formatting import format_currency, format_number


class SummaryPage(PortalPage):
    title = "Summary"

    def build(self):
        self.header("Village Summary")
        self.container = ui.column().classes("w-full gap-6")
        self.reload()

    async def load(self):
        try:
            bank, vdf = await asyncio.gather(
                self.ctx.public_service.get_summary(),
                self.ctx.vdf_service.get_public_summary(),
            )
        except ApiError as exc:
            report_error(exc, "Failed to load summary data")
            self.container.clear()
            with self.container:
                ui.label("Failed to load summary data").classes("text-red-500 p-8")
            return
        self.render(bank or {}, vdf or {})

    def render(self, bank: dict, vdf: dict):
        def money(value):
            return format_currency(value, self.language)

        self.container.clear()
        with self.container:
            ui.label("Banking Summary").classes("text-lg font-bold")
            with ui.row().classes("gap-4 flex-wrap"):
                stat_card("Total Deposits", money(bank.get("totalDeposits")), "green")
                stat_card("Total Loans", money(bank.get("totalLoans")), "orange")
                stat_card("Available Balance", money(bank.get("availableBalance")), "blue")

            ui.label("VDF Summary").classes("text-lg font-bold")
            with ui.row().classes("gap-4 flex-wrap"):
                active = vdf.get("activeFamilies") or vdf.get("activeContributors")
                stat_card(
                    f"Total Families ({format_number(active, self.language)} active)",
                    format_number(vdf.get("totalFamilies"), self.language),
                    "indigo",
                )
                stat_card("Total Collected", money(vdf.get("totalCollected")), "teal")
                stat_card("Total Expenses", money(vdf.get("totalExpenses")), "orange")
                stat_card("VDF Balance", money(vdf.get("currentBalance")), "cyan")
