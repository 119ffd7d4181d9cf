"""Unified login page for admins, operators and members."""

import logging

from nicegui import ui

from gramin_portal.api.errors import ApiError
from gramin_portal.forms import LoginForm
from gramin_portal.ui.feedback import report_error, show_errors
from gramin_portal.ui.pages.base import PortalPage

logger = logging.getLogger(__name__)


class LoginPage(PortalPage):
    """Admin tab takes phone plus password or PIN; member tab takes phone plus PIN."""

    title = "Login"

    def build(self):
        with ui.column().classes("w-full items-center mt-8"):
            with ui.card().classes("p-6 w-[420px]"):
                ui.label("Login").classes("text-2xl font-bold mb-2")
                with ui.tabs().classes("w-full") as tabs:
                    member_tab = ui.tab("Member")
                    admin_tab = ui.tab("Admin")
                with ui.tab_panels(tabs, value=member_tab).classes("w-full"):
                    with ui.tab_panel(member_tab):
                        self._member_form()
                    with ui.tab_panel(admin_tab):
                        self._admin_form()

    def _member_form(self):
        phone = ui.input("Phone").props("outlined dense").classes("w-full")
        pin = ui.input("PIN", password=True).props("outlined dense maxlength=4").classes("w-full")

        async def submit():
            form = LoginForm(phone=phone.value or "", pin=pin.value or "")
            errors = form.validate()
            if errors:
                show_errors(errors)
                return
            creds = form.credentials()
            try:
                await self.ctx.member.login(creds["phone"], creds["pin"])
            except ApiError as exc:
                report_error(exc, "Login failed")
                return
            if self.ctx.member.is_authenticated:
                ui.notify(f"Welcome {self.ctx.member.member_name or ''}".strip(), type="positive")
                target = "/admin/members" if self.ctx.member.is_operator else "/member/dashboard"
                ui.navigate.to(target)
            else:
                ui.notify("Login failed", type="negative")

        ui.button("Login", on_click=submit).props("color=primary").classes("w-full mt-2")

    def _admin_form(self):
        phone = ui.input("Phone").props("outlined dense").classes("w-full")
        password = ui.input("Password", password=True).props("outlined dense").classes("w-full")
        pin = ui.input("or PIN", password=True).props("outlined dense maxlength=4").classes("w-full")

        async def submit():
            form = LoginForm(
                phone=phone.value or "",
                pin=pin.value or "",
                password=password.value or "",
                as_admin=True,
            )
            errors = form.validate()
            if errors:
                show_errors(errors)
                return
            creds = form.credentials()
            try:
                await self.ctx.admin.login(creds["phone"], pin=creds["pin"], password=creds["password"])
            except ApiError as exc:
                report_error(exc, "Login failed")
                return
            if self.ctx.admin.is_authenticated:
                ui.notify(f"Welcome {self.ctx.admin.username or 'Admin'}", type="positive")
                ui.navigate.to("/admin/members")
            else:
                ui.notify("Login failed", type="negative")

        ui.button("Login as Admin", on_click=submit).props("color=primary").classes("w-full mt-2")
