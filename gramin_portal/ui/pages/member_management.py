"""Member management: search, create/edit, deactivate, unblock and documents."""

import logging
from typing import List, Optional

from nicegui import ui

from gramin_portal.forms import DocumentUploadForm, MemberForm
from gramin_portal.models import Member
from gramin_portal.ui.feedback import confirm, info_field, read_only_banner, show_errors
from gramin_portal.ui.pages.base import PortalPage
from gramin_portal.ui.pages.documents import document_table, document_url, parse_documents, show_document
from gramin_portal.utils.filters import sort_members_by_name
from gramin_portal.utils.formatting import format_file_size, format_timestamp

logger = logging.getLogger(__name__)


class MemberManagementPage(PortalPage):
    """Bank members. Operators get the list and member details only."""

    title = "Members"

    def __init__(self, ctx, scope=None):
        super().__init__(ctx, scope)
        self.members: List[Member] = []
        self.search = ""

    def build(self):
        read_only = self.caps.read_only
        with ui.row().classes("w-full justify-between items-center mb-4"):
            ui.label("Member Management").classes("text-2xl font-bold")
            if not read_only:
                ui.button("+ Add Member", on_click=lambda: self._member_dialog(None)).props("color=primary")
        if read_only:
            read_only_banner()

        with ui.row().classes("w-full gap-4 mb-4"):
            self.search_input = ui.input(placeholder="Search by name or phone...").classes("flex-1")
            self.search_input.on("keydown.enter", self._apply_search)
            ui.button("Search", on_click=self._apply_search).props("outline")

        self.container = ui.column().classes("w-full")
        self.reload()

    def _apply_search(self):
        self.search = (self.search_input.value or "").strip()
        self.reload()

    async def load(self):
        raw = await self.call(self.ctx.admin_service.get_all_members(self.search), "Failed to load members")
        self.members = [Member.model_validate(m) for m in sort_members_by_name(raw or [])]
        self._render_table()

    def _status(self, member: Member) -> str:
        if member.is_blocked:
            until = f" until {format_timestamp(member.blocked_until)}" if member.blocked_until else ""
            return f"Blocked{until}"
        if member.failed_login_attempts:
            return f"{'Active' if member.is_active else 'Inactive'} ({member.failed_login_attempts}/3 failed)"
        return "Active" if member.is_active else "Inactive"

    def _render_table(self):
        self.container.clear()
        with self.container:
            if not self.members:
                ui.label("No members found").classes("text-gray-500 p-8")
                return

            columns = [
                {"name": "name", "label": "Name", "field": "name", "sortable": True, "align": "left"},
                {"name": "phone", "label": "Phone", "field": "phone", "align": "left"},
                {"name": "role", "label": "Role", "field": "role", "align": "left"},
                {"name": "status", "label": "Status", "field": "status", "align": "left"},
                {"name": "actions", "label": "Actions", "field": "actions", "align": "center"},
            ]
            rows = [
                {
                    "id": m.id,
                    "name": m.full_name or "-",
                    "phone": m.phone or "-",
                    "role": m.role or "MEMBER",
                    "status": self._status(m),
                    "blocked": bool(m.is_blocked),
                    "active": bool(m.is_active),
                }
                for m in self.members
            ]
            table = ui.table(columns=columns, rows=rows, row_key="id",
                             pagination={"rowsPerPage": 25}).classes("w-full")

            if self.caps.read_only:
                table.add_slot("body-cell-actions", '''
                    <q-td :props="props">
                        <q-btn flat dense size="sm" icon="info" @click="$parent.$emit('info', props.row)" />
                    </q-td>
                ''')
            else:
                table.add_slot("body-cell-actions", '''
                    <q-td :props="props">
                        <q-btn flat dense size="sm" icon="info" @click="$parent.$emit('info', props.row)" />
                        <q-btn flat dense size="sm" icon="edit" @click="$parent.$emit('edit', props.row)" />
                        <q-btn flat dense size="sm" icon="upload_file" @click="$parent.$emit('upload', props.row)" />
                        <q-btn v-if="props.row.blocked" flat dense size="sm" icon="lock_open" color="positive"
                               @click="$parent.$emit('unblock', props.row)" />
                        <q-btn flat dense size="sm" icon="person_off" color="negative" :disable="!props.row.active"
                               @click="$parent.$emit('deactivate', props.row)" />
                    </q-td>
                ''')
                table.on("edit", lambda e: self._member_dialog(self._find(e.args["id"])))
                table.on("upload", lambda e: self._upload_dialog(self._find(e.args["id"])))
                table.on("unblock", lambda e: self._unblock(e.args["id"]))
                table.on("deactivate", lambda e: self._confirm_deactivate(e.args["id"], e.args["name"]))
            table.on("info", lambda e: self._info_dialog(e.args["id"]))

    def _find(self, member_id: str) -> Optional[Member]:
        return next((m for m in self.members if m.id == str(member_id)), None)

    # ==================== Actions ====================

    def _confirm_deactivate(self, member_id: str, name: str):
        async def deactivate():
            if await self.attempt(self.ctx.admin_service.deactivate_member(member_id),
                                  "Failed to deactivate member"):
                ui.notify(f"{name} deactivated", type="positive")
                await self.load()

        confirm(f"Deactivate {name}?", deactivate, confirm_label="Deactivate")

    async def _unblock(self, member_id: str):
        if not await self.attempt(self.ctx.admin_service.unblock_member(member_id), "Failed to unblock member"):
            return
        ui.notify("Member unblocked", type="positive")
        await self.load()

    def _member_dialog(self, member: Optional[Member]):
        form = MemberForm() if member is None else MemberForm.from_member(
            member.model_dump(by_alias=True)
        )
        with ui.dialog() as dialog, ui.card().classes("p-6 min-w-[480px]"):
            ui.label("Add Member" if form.is_new else f"Edit {member.full_name}").classes("text-xl font-bold mb-4")
            with ui.row().classes("w-full gap-2"):
                first = ui.input("First Name", value=form.first_name).props("outlined dense").classes("flex-1")
                last = ui.input("Last Name", value=form.last_name).props("outlined dense").classes("flex-1")
            phone = ui.input("Phone", value=form.phone).props("outlined dense maxlength=10").classes("w-full")
            pin = ui.input("PIN" if form.is_new else "New PIN (optional)", password=True).props(
                "outlined dense maxlength=4").classes("w-full")
            role = ui.select(sorted({"MEMBER", "ADMIN", form.role}), value=form.role, label="Role").classes("w-full")
            operator = ui.checkbox("Operator (read-only staff)", value=form.is_operator)

            async def save():
                form.first_name = first.value or ""
                form.last_name = last.value or ""
                form.phone = phone.value or ""
                form.pin = pin.value or ""
                form.role = role.value
                form.is_operator = bool(operator.value)
                errors = form.validate()
                if errors:
                    show_errors(errors)
                    return
                service = self.ctx.admin_service
                if form.is_new:
                    action = service.create_member(form.to_payload())
                else:
                    action = service.update_member(member.id, form.to_payload())
                if not await self.attempt(action, "Failed to save member"):
                    return
                ui.notify("Member saved", type="positive")
                dialog.close()
                await self.load()

            with ui.row().classes("w-full justify-end gap-2 mt-4"):
                ui.button("Cancel", on_click=dialog.close).props("flat")
                ui.button("Save", on_click=save).props("color=primary")
        dialog.open()

    async def _info_dialog(self, member_id: str):
        detail = await self.call(self.ctx.admin_service.get_member_by_id(member_id), "Failed to load member")
        if detail is None:
            return
        docs = await self.call(self.ctx.admin_service.get_member_documents(member_id),
                               "Failed to fetch member documents")
        member = Member.model_validate(detail)

        with ui.dialog() as dialog, ui.card().classes("p-6 min-w-[640px] max-h-[80vh] overflow-auto"):
            ui.label(member.full_name or "Member").classes("text-2xl font-bold mb-4")
            with ui.grid(columns=2).classes("w-full gap-2"):
                info_field("Phone", member.phone)
                info_field("Role", member.role or "MEMBER")
                info_field("Status", self._status(member))
                info_field("Operator", "Yes" if member.is_operator else "No")
            ui.label("Documents").classes("font-bold text-lg mt-4")
            docs_container = ui.column().classes("w-full")

            async def view(document_id):
                body = await self.call(self.ctx.admin_service.get_document_url(document_id),
                                       "Failed to fetch document URL")
                url = document_url(body)
                if url:
                    show_document(url)

            async def delete(document_id):
                if not await self.attempt(self.ctx.admin_service.delete_document(document_id), "Failed to delete"):
                    return
                ui.notify("Deleted", type="positive")
                fresh = await self.call(self.ctx.admin_service.get_member_documents(member_id),
                                        "Failed to fetch member documents")
                render_docs(fresh or [])

            def render_docs(raw):
                docs_container.clear()
                with docs_container:
                    document_table(parse_documents(raw), on_view=view,
                                   on_delete=None if self.caps.read_only else delete)

            render_docs(docs or [])
            with ui.row().classes("w-full justify-end mt-4"):
                ui.button("Close", on_click=dialog.close).props("flat")
        dialog.open()

    async def _upload_dialog(self, member: Optional[Member]):
        if member is None:
            return
        categories = await self.call(self.ctx.admin_service.get_document_categories(),
                                     "Failed to load document categories")
        form = DocumentUploadForm()
        upload = {}

        with ui.dialog() as dialog, ui.card().classes("p-6 min-w-[480px]"):
            ui.label(f"Upload Document for {member.full_name}").classes("text-xl font-bold mb-4")
            category = ui.select(
                {str(c.get("id")): c.get("categoryName") or c.get("name") for c in categories or []},
                label="Document Category",
            ).classes("w-full")
            file_label = ui.label("No file selected").classes("text-sm text-gray-500")

            def received(e):
                upload["name"] = e.name
                upload["type"] = e.type
                upload["content"] = e.content.read()
                file_label.set_text(f"{e.name} ({format_file_size(len(upload['content']))})")

            ui.upload(label="Choose file (JPG or PDF)", auto_upload=True, on_upload=received,
                      max_files=1).props('accept="image/*,application/pdf"').classes("w-full")
            notes = ui.textarea("Notes").props("outlined rows=2").classes("w-full")

            async def submit():
                form.category_id = category.value or ""
                form.filename = upload.get("name", "")
                form.content_type = upload.get("type", "")
                form.notes = notes.value or ""
                errors = form.validate()
                if errors:
                    show_errors(errors)
                    return
                uploaded = await self.attempt(
                    self.ctx.admin_service.upload_document(
                        member.id, form.category_id, form.filename, upload["content"],
                        form.content_type, form.notes,
                    ),
                    "Failed to upload document",
                )
                if not uploaded:
                    return
                ui.notify("Document uploaded successfully", type="positive")
                dialog.close()

            with ui.row().classes("w-full justify-end gap-2 mt-4"):
                ui.button("Cancel", on_click=dialog.close).props("flat")
                ui.button("Upload", on_click=submit).props("color=primary")
        dialog.open()
