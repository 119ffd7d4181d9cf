"""Active login sessions with force-logout, refreshed on a fixed interval."""

import logging
from typing import List

from nicegui import ui

from gramin_portal.config import settings
from gramin_portal.models import ActiveSession
from gramin_portal.ui.feedback import confirm, stat_card
from gramin_portal.ui.pages.base import PortalPage
from gramin_portal.utils.filters import group_sessions_by_user
from gramin_portal.utils.formatting import format_number, format_timestamp, time_ago

logger = logging.getLogger(__name__)


class SessionManagementPage(PortalPage):
    title = "Active Sessions"

    def __init__(self, ctx, scope=None):
        super().__init__(ctx, scope)
        self.sessions: List[ActiveSession] = []
        self.stats: dict = {}

    def build(self):
        self.header("Active Sessions")
        self.stats_row = ui.row().classes("w-full gap-4 mb-4")
        self.container = ui.column().classes("w-full gap-4")
        self.scope.every(settings.polling.sessions_seconds, self.load, immediate=True)

    async def load(self):
        sessions = await self.call(self.ctx.admin_service.get_all_active_sessions(), "Failed to load sessions")
        stats = await self.call(self.ctx.admin_service.get_session_stats(), "Failed to load session stats")
        if sessions is not None:
            self.sessions = [ActiveSession.model_validate(s) for s in sessions]
        if stats is not None:
            self.stats = stats
        self.render()

    def render(self):
        self.stats_row.clear()
        with self.stats_row:
            stat_card("Admin Sessions", format_number(self.stats.get("activeAdminSessions") or 0), "blue")
            stat_card("Member Sessions", format_number(self.stats.get("activeMemberSessions") or 0), "green")
            stat_card("Total Active", format_number(self.stats.get("totalActiveSessions") or 0), "purple")

        self.container.clear()
        with self.container:
            groups = group_sessions_by_user(self.sessions)
            if not groups:
                ui.label("No active sessions").classes("text-gray-500 p-8")
                return
            for group in groups:
                self._render_group(group)

    def _render_group(self, group: dict):
        with ui.card().classes("w-full p-4"):
            with ui.row().classes("w-full justify-between items-center"):
                with ui.column().classes("gap-0"):
                    ui.label(group["username"] or "Unknown user").classes("font-bold")
                    count = len(group["sessions"])
                    ui.label(f"{group['user_type'] or '-'} | {count} session{'s' if count != 1 else ''}").classes(
                        "text-xs text-gray-500")
                if self.caps.can_view_sessions and len(group["sessions"]) > 1:
                    ui.button(
                        "Logout All",
                        on_click=lambda g=group: self._confirm_logout_all(g["user_id"], g["user_type"]),
                    ).props("color=negative outline dense")
            for session in group["sessions"]:
                with ui.row().classes("w-full justify-between items-center border-t pt-2 mt-2"):
                    with ui.column().classes("gap-0"):
                        ui.label(session.device_info or "Unknown Device").classes("text-sm font-medium")
                        ui.label(
                            f"IP: {session.ip_address or '-'} | Login: {format_timestamp(session.login_time)}"
                            f" | Last: {time_ago(session.last_activity)}"
                        ).classes("text-xs text-gray-500")
                    if self.caps.can_view_sessions:
                        ui.button(icon="logout", on_click=lambda s=session: self._confirm_logout(s.id)).props(
                            "flat dense color=negative")

    def _confirm_logout(self, session_id: str):
        async def logout():
            if await self.attempt(self.ctx.admin_service.force_logout_session(session_id), "Failed to logout session"):
                ui.notify("Session logged out", type="positive")
                await self.load()

        confirm("Are you sure you want to force logout this session?", logout, confirm_label="Logout")

    def _confirm_logout_all(self, user_id: str, user_type: str):
        async def logout_all():
            if await self.attempt(self.ctx.admin_service.force_logout_all_for_user(user_id, user_type),
                                  "Failed to logout sessions"):
                ui.notify("All sessions logged out", type="positive")
                await self.load()

        confirm("Are you sure you want to force logout all sessions for this user?", logout_all,
                confirm_label="Logout All")
