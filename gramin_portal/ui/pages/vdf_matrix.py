"""Monthly contribution matrix, public read-only and admin editable."""

import logging
from typing import Optional

from nicegui import ui

from gramin_portal.config import settings
from gramin_portal.forms import BulkContributionForm
from gramin_portal.ui.feedback import read_only_banner, show_errors, stat_card
from gramin_portal.ui.pages.base import PortalPage
from gramin_portal.utils.filters import filter_families
from gramin_portal.utils.formatting import format_currency, format_number
from gramin_portal.vdf.matrix import (
    MONTH_LABELS,
    MONTH_NAMES,
    CellState,
    ContributionMatrix,
    FamilyRow,
    year_options,
)

logger = logging.getLogger(__name__)

STATE_COLORS = {
    CellState.PAID.value: "positive",
    CellState.UNPAID.value: "negative",
    CellState.EXEMPT.value: "grey",
}

CELL_SLOT = (
    '<q-td :props="props">'
    '<q-badge :color="{colors}[props.row.m{month}_state]" :label="props.value"{clickable} />'
    '</q-td>'
)


def matrix_rows(matrix: ContributionMatrix, families, language: str = "en") -> list:
    """Table rows for the grid: one per family, label and state per month."""
    rows = []
    for family in families:
        row = {
            "id": family.family_config_id,
            "family": family.family_head_name or "-",
            "member": family.member_name or "-",
            "paid": format_currency(family.total_paid, language),
            "due": format_currency(family.total_due, language),
            "counts": f"{family.paid_count}/{family.pending_count}",
        }
        for cell in family.months:
            row[f"m{cell.month}"] = cell.label
            row[f"m{cell.month}_state"] = cell.state.value
        rows.append(row)
    return rows


class ContributionMatrixPage(PortalPage):
    """Per-family 12-month grid for a selected year.

    The public variant reads the public matrix. The admin variant reads the
    admin matrix and, for full admins, toggles exemptions per cell and opens
    the bulk entry dialog per family.
    """

    def __init__(self, ctx, public: bool = True, scope=None):
        super().__init__(ctx, scope)
        self.public = public
        self.title = "VDF Contributions" if public else "VDF Contribution Entry"
        self.year = year_options(first=settings.ui.first_year)[0]
        self.matrix: Optional[ContributionMatrix] = None

    @property
    def editable(self) -> bool:
        return not self.public and self.caps.can_write

    def build(self):
        self.header("Monthly Contributions" if self.public else "Contribution Entry")
        if not self.public and self.caps.read_only:
            read_only_banner()
        with ui.row().classes("w-full gap-4 mb-4 items-center"):
            ui.select(year_options(first=settings.ui.first_year), value=self.year, label="Year",
                      on_change=self._year_changed).classes("w-32")
            self.search_input = ui.input(placeholder="Search family...").classes("flex-1")
            self.search_input.on("update:model-value", lambda: self._render())
        self.stats_row = ui.row().classes("w-full gap-4 mb-4")
        self.container = ui.column().classes("w-full")
        self.reload()

    def _year_changed(self, e):
        self.year = e.value
        self.reload()

    async def load(self):
        matrix = await self.call(
            self.ctx.vdf_service.fetch_matrix(self.year, public=self.public),
            "Failed to load contribution matrix",
        )
        self.matrix = matrix or ContributionMatrix(year=self.year)
        self._render()

    def _render(self):
        matrix = self.matrix or ContributionMatrix(year=self.year)
        families = filter_families(matrix.families, self.search_input.value or "")

        self.stats_row.clear()
        with self.stats_row:
            stat_card("Families", format_number(len(matrix.families), self.language), "blue")
            stat_card("Total Paid", format_currency(matrix.total_paid, self.language), "green")
            stat_card("Total Due", format_currency(matrix.total_due, self.language), "red")

        self.container.clear()
        with self.container:
            if not families:
                ui.label("No families found").classes("text-gray-500 p-8")
                return

            columns = [{"name": "family", "label": "Family", "field": "family", "sortable": True, "align": "left"}]
            columns += [
                {"name": f"m{n}", "label": MONTH_LABELS[n - 1], "field": f"m{n}", "align": "center"}
                for n in range(1, 13)
            ]
            columns += [
                {"name": "paid", "label": "Paid", "field": "paid", "align": "right"},
                {"name": "due", "label": "Due", "field": "due", "align": "right"},
            ]
            if self.editable:
                columns.append({"name": "actions", "label": "", "field": "actions", "align": "center"})

            table = ui.table(columns=columns, rows=matrix_rows(matrix, families, self.language),
                             row_key="id", pagination={"rowsPerPage": 50}).classes("w-full")
            colors = str(STATE_COLORS)
            for month in range(1, 13):
                clickable = (
                    f' class="cursor-pointer" @click="$parent.$emit(\'cell\', '
                    f'{{id: props.row.id, month: {month}}})"'
                ) if self.editable else ""
                table.add_slot(f"body-cell-m{month}",
                               CELL_SLOT.format(colors=colors, month=month, clickable=clickable))

            if self.editable:
                table.add_slot("body-cell-actions", '''
                    <q-td :props="props">
                        <q-btn flat dense size="sm" icon="edit" @click="$parent.$emit('bulk', props.row)" />
                    </q-td>
                ''')
                table.on("cell", lambda e: self._toggle_exemption(e.args["id"], int(e.args["month"])))
                table.on("bulk", lambda e: self._bulk_dialog(self._find(e.args["id"])))

    def _find(self, family_config_id: str) -> Optional[FamilyRow]:
        if not self.matrix:
            return None
        return next((f for f in self.matrix.families if f.family_config_id == str(family_config_id)), None)

    # ==================== Exemptions ====================

    def _toggle_exemption(self, family_config_id: str, month: int):
        family = self._find(family_config_id)
        if family is None or family.family_config_id is None:
            return
        exempt = not family.cell(month).exempt
        action = "Mark as exempt" if exempt else "Remove exemption"

        with ui.dialog() as dialog, ui.card().classes("p-6 min-w-[360px]"):
            ui.label(f"{action}: {family.family_head_name}").classes("text-lg font-bold")
            ui.label(f"{MONTH_NAMES[month - 1]} {self.year}").classes("text-sm text-gray-600")
            reason = ui.input("Reason (optional)").props("outlined dense").classes("w-full")
            reason.set_visibility(exempt)

            async def apply():
                dialog.close()
                service = self.ctx.vdf_service
                if exempt:
                    done = await self.attempt(
                        service.create_exemption(family.family_config_id, self.year, month, reason.value or ""),
                        "Failed to update exemption",
                    )
                else:
                    done = await self.attempt(
                        service.set_exemption(family.family_config_id, self.year, month, False),
                        "Failed to update exemption",
                    )
                if done:
                    ui.notify("Exemption updated", type="positive")
                    await self.load()

            with ui.row().classes("w-full justify-end gap-2 mt-4"):
                ui.button("Cancel", on_click=dialog.close).props("flat")
                ui.button(action, on_click=apply).props("color=primary")
        dialog.open()

    # ==================== Bulk entry ====================

    async def _bulk_dialog(self, family: Optional[FamilyRow]):
        if family is None or family.family_config_id is None:
            return
        existing = await self.call(
            self.ctx.vdf_service.get_family_contributions(family.family_config_id, self.year),
            "Failed to load existing contributions",
        )
        exempt_months = {cell.month for cell in family.months if cell.exempt}
        form = BulkContributionForm.from_existing(
            family.family_config_id, self.year, existing or [], exempt_months
        )

        with ui.dialog() as dialog, ui.card().classes("p-6 min-w-[560px] max-h-[85vh] overflow-auto"):
            ui.label(f"Contributions: {family.family_head_name}").classes("text-xl font-bold")
            ui.label(f"Year {self.year}. Leave a month blank to skip it; 0 removes it.").classes(
                "text-xs text-gray-500 mb-2")
            inputs = {}
            with ui.grid(columns=3).classes("w-full gap-2"):
                for month in range(1, 13):
                    if month in exempt_months:
                        ui.input(MONTH_NAMES[month - 1], value="Exempt").props("outlined dense disable")
                        continue
                    inputs[month] = ui.input(MONTH_NAMES[month - 1], value=form.amounts.get(month, "")).props(
                        "outlined dense type=number step=0.01")
            payment_date = ui.input("Payment Date", value=form.payment_date).props(
                "outlined dense type=date").classes("w-full")
            notes = ui.textarea("Notes").props("outlined rows=2").classes("w-full")
            total_label = ui.label().classes("font-bold")

            def collect():
                form.amounts = {month: field.value for month, field in inputs.items()}
                form.payment_date = payment_date.value or None
                form.notes = notes.value or ""

            def update_total():
                collect()
                total_label.set_text(f"Total: {format_currency(form.total(), self.language)}")

            for field in inputs.values():
                field.on("update:model-value", lambda: update_total())
            update_total()

            async def save():
                collect()
                errors = form.validate()
                if errors:
                    show_errors(errors, labels={m: MONTH_NAMES[m - 1] for m in range(1, 13)})
                    return
                if not await self.attempt(self.ctx.vdf_service.record_bulk_contributions(form.to_payload()),
                                          "Failed to save contributions"):
                    return
                ui.notify("Contributions saved", type="positive")
                dialog.close()
                await self.load()

            with ui.row().classes("w-full justify-end gap-2 mt-4"):
                ui.button("Cancel", on_click=dialog.close).props("flat")
                ui.button("Save", on_click=save).props("color=primary")
        dialog.open()
