"""VDF family configuration: list, search, summary cards and create/edit dialog."""

import logging
from typing import List, Optional

from nicegui import ui

from gramin_portal.forms import FamilyConfigForm
from gramin_portal.models import FamilyConfig
from gramin_portal.ui.feedback import read_only_banner, show_errors, stat_card
from gramin_portal.ui.pages.base import PortalPage
from gramin_portal.utils.filters import filter_families, member_display_name, sort_members_by_name
from gramin_portal.utils.formatting import format_currency, format_date, format_number
from gramin_portal.vdf.families import parse_families, summarize_families

logger = logging.getLogger(__name__)


class VdfFamiliesPage(PortalPage):
    """Families taking part in the VDF. Operators see the list only."""

    title = "VDF Families"

    def __init__(self, ctx, scope=None):
        super().__init__(ctx, scope)
        self.families: List[FamilyConfig] = []
        self.active_only = False

    def build(self):
        with ui.row().classes("w-full justify-between items-center mb-4"):
            ui.label("VDF Family Management").classes("text-2xl font-bold")
            with ui.row().classes("gap-2"):
                ui.button("Refresh", icon="refresh", on_click=self.reload).props("flat")
                if self.caps.can_manage_families:
                    ui.button("+ Add Family", on_click=lambda: self._family_dialog(None)).props("color=primary")
        if self.caps.read_only:
            read_only_banner()

        with ui.row().classes("w-full gap-4 mb-4 items-center"):
            ui.toggle({False: "All", True: "Active"}, value=False, on_change=self._filter_changed)
            self.search_input = ui.input(placeholder="Search by family head or member name...").classes("flex-1")
            self.search_input.on("update:model-value", lambda: self._render())

        self.stats_row = ui.row().classes("w-full gap-4 mb-4")
        self.container = ui.column().classes("w-full")
        self.reload()

    def _filter_changed(self, e):
        self.active_only = bool(e.value)
        self.reload()

    async def load(self):
        raw = await self.call(self.ctx.vdf_service.get_all_families(self.active_only), "Failed to load families")
        self.families = parse_families(raw or [])
        self._render()

    def _render(self):
        shown = filter_families(self.families, self.search_input.value or "")
        summary = summarize_families(self.families)

        self.stats_row.clear()
        with self.stats_row:
            stat_card("Total Families", format_number(summary.total, self.language), "blue")
            stat_card("Active", format_number(summary.active, self.language), "green")
            stat_card("Collected", format_currency(summary.collected, self.language), "teal")
            stat_card("Dues", format_currency(summary.dues, self.language), "red")

        self.container.clear()
        with self.container:
            if not shown:
                ui.label("No families found").classes("text-gray-500 p-8")
                return
            columns = [
                {"name": "head", "label": "Family Head", "field": "head", "sortable": True, "align": "left"},
                {"name": "member", "label": "Member", "field": "member", "sortable": True, "align": "left"},
                {"name": "monthly", "label": "Monthly", "field": "monthly", "align": "right"},
                {"name": "status", "label": "Status", "field": "status", "align": "center"},
                {"name": "effective", "label": "Effective From", "field": "effective", "align": "left"},
                {"name": "months", "label": "Paid Months", "field": "months", "align": "center"},
                {"name": "paid", "label": "Paid", "field": "paid", "align": "right"},
                {"name": "due", "label": "Due", "field": "due", "align": "right"},
            ]
            rows = [
                {
                    "id": f.id,
                    "head": f.family_head_name or "-",
                    "member": f.member_name or "-",
                    "monthly": format_currency(f.monthly_amount, self.language),
                    "status": "Active" if f.is_contribution_enabled else "Inactive",
                    "effective": format_date(f.effective_from),
                    "months": f"{f.total_paid_months or 0}/12",
                    "paid": format_currency(f.total_amount_paid or 0, self.language),
                    "due": format_currency(f.total_amount_due or 0, self.language),
                }
                for f in shown
            ]
            if self.caps.can_manage_families:
                columns.append({"name": "actions", "label": "Actions", "field": "actions", "align": "center"})
            table = ui.table(columns=columns, rows=rows, row_key="id",
                             pagination={"rowsPerPage": 25}).classes("w-full")
            if self.caps.can_manage_families:
                table.add_slot("body-cell-actions", '''
                    <q-td :props="props">
                        <q-btn flat dense size="sm" icon="edit" @click="$parent.$emit('edit', props.row)" />
                    </q-td>
                ''')
                table.on("edit", lambda e: self._family_dialog(self._find(e.args["id"])))

    def _find(self, family_id: str) -> Optional[FamilyConfig]:
        return next((f for f in self.families if f.id == str(family_id)), None)

    async def _family_dialog(self, family: Optional[FamilyConfig]):
        members = await self.call(self.ctx.admin_service.get_all_members(), "Failed to load members")
        members = sort_members_by_name(members or [])
        if family is None:
            form = FamilyConfigForm()
        else:
            form = FamilyConfigForm.from_family(family.model_dump(by_alias=True))

        options = {str(m.get("id")): member_display_name(m) for m in members}
        if form.member_id and form.member_id not in options:
            options[form.member_id] = family.member_name or form.member_id

        with ui.dialog() as dialog, ui.card().classes("p-6 min-w-[480px]"):
            ui.label("Add Family" if family is None else "Edit Family").classes("text-xl font-bold mb-4")
            member = ui.select(options, value=form.member_id or None, label="Member",
                               with_input=True).classes("w-full")
            head = ui.input("Family Head Name", value=form.family_head_name).props("outlined dense").classes("w-full")

            def member_chosen(e):
                if e.value and not (head.value or "").strip():
                    head.set_value(options.get(e.value, ""))

            member.on_value_change(member_chosen)
            amount = ui.input("Monthly Amount", value=str(form.monthly_amount)).props(
                "outlined dense type=number step=0.01").classes("w-full")
            enabled = ui.checkbox("Contribution enabled", value=form.is_contribution_enabled)
            effective = ui.input("Effective From", value=form.effective_from or "").props(
                "outlined dense type=date").classes("w-full")
            effective.bind_visibility_from(enabled, "value")
            notes = ui.textarea("Notes", value=form.notes).props("outlined rows=2").classes("w-full")

            async def save():
                form.member_id = member.value or ""
                form.family_head_name = head.value or ""
                form.monthly_amount = amount.value
                form.is_contribution_enabled = bool(enabled.value)
                form.effective_from = effective.value or None
                form.notes = notes.value or ""
                errors = form.validate()
                if errors:
                    show_errors(errors)
                    return
                service = self.ctx.vdf_service
                if family is None:
                    action = service.create_family_config(form.to_payload())
                else:
                    action = service.update_family_config(family.id, form.to_payload())
                if not await self.attempt(action, "Failed to save family configuration"):
                    return
                ui.notify(
                    "Family configuration created successfully" if family is None
                    else "Family configuration updated successfully",
                    type="positive",
                )
                dialog.close()
                await self.load()

            with ui.row().classes("w-full justify-end gap-2 mt-4"):
                ui.button("Cancel", on_click=dialog.close).props("flat")
                ui.button("Save", on_click=save).props("color=primary")
        dialog.open()
