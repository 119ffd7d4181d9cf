"""Navbar shared by every page: identity, logout, menu and notification badge."""

import logging
from typing import Optional, Tuple

from nicegui import ui

from gramin_portal.api.errors import ApiError
from gramin_portal.config import settings
from gramin_portal.container import PortalContext
from gramin_portal.ui.lifecycle import ViewScope
from gramin_portal.ui.pages.vdf_notifications import NotificationsPanel
from gramin_portal.ui.routes import LOGIN_PATH, ROOT_PATH, Access, menu_routes

logger = logging.getLogger(__name__)

MENU_GROUPS = (
    (Access.PUBLIC, "Public"),
    (Access.MANAGEMENT, "Management"),
    (Access.ADMIN, "Admin"),
    (Access.MEMBER, "My Account"),
)


def identity(ctx: PortalContext) -> Tuple[Optional[str], str]:
    """Which auth domain the navbar shows and the label for it.

    An admin session takes precedence when both domains are signed in.
    """
    if ctx.admin.is_authenticated:
        return "admin", f"Admin: {ctx.admin.username or 'admin'}"
    if ctx.member.is_authenticated:
        return "member", ctx.member.member_name or "Member"
    return None, ""


def logout(ctx: PortalContext, domain: Optional[str]) -> None:
    """Sign out of the displayed domain only."""
    if domain == "admin":
        ctx.admin.logout()
    elif domain == "member":
        ctx.member.logout()
    else:
        return
    logger.info(f"{domain} logged out from navbar")
    ui.navigate.to(LOGIN_PATH)


class PortalLayout:
    """Header bar rendered above each page."""

    def __init__(self, ctx: PortalContext, scope: ViewScope):
        self.ctx = ctx
        self.scope = scope
        self.badge = None
        self.panel: Optional[NotificationsPanel] = None

    def build(self, current_path: str = ROOT_PATH) -> None:
        domain, label = identity(self.ctx)
        caps = self.ctx.capabilities
        routes = menu_routes(caps, self.ctx.admin.is_authenticated, self.ctx.member.is_authenticated)

        with ui.header().classes("items-center justify-between bg-teal-700 px-4"):
            with ui.row().classes("items-center gap-2"):
                with ui.button(icon="menu").props("flat round color=white"):
                    with ui.menu():
                        for access, group in MENU_GROUPS:
                            entries = [r for r in routes if r.access == access]
                            if not entries:
                                continue
                            ui.label(group).classes("text-xs text-gray-500 px-4 pt-2")
                            for route in entries:
                                item = ui.menu_item(route.title, on_click=lambda p=route.path: ui.navigate.to(p))
                                if route.path == current_path:
                                    item.classes("text-teal-700 font-bold")
                            ui.separator()
                ui.link(settings.ui.title, ROOT_PATH).classes("text-xl font-bold text-white no-underline")

            with ui.row().classes("items-center gap-3"):
                if self.ctx.member.is_authenticated and not caps.is_operator:
                    self._notification_bell()
                if domain:
                    ui.label(label).classes("text-white")
                    if caps.is_operator:
                        ui.badge("Operator", color="orange")
                    ui.button("Logout", icon="logout", on_click=lambda: logout(self.ctx, domain)).props(
                        "flat color=white")
                elif current_path != LOGIN_PATH:
                    ui.button("Login", icon="login", on_click=lambda: ui.navigate.to(LOGIN_PATH)).props(
                        "flat color=white")

    def _notification_bell(self) -> None:
        self.panel = NotificationsPanel(self.ctx, self.scope, on_change=self.refresh_badge)
        self.panel.build()
        with ui.button(icon="notifications", on_click=self.panel.open).props("flat round color=white"):
            self.badge = ui.badge("", color="red").props("floating")
        self.badge.set_visibility(False)
        self.scope.every(settings.polling.notifications_seconds, self.refresh_badge, immediate=True)

    async def refresh_badge(self) -> None:
        try:
            count = await self.ctx.notification_service.get_unread_count()
        except ApiError as e:
            logger.warning(f"Could not refresh unread notifications: {e}")
            return
        self.badge.set_text(str(count))
        self.badge.set_visibility(count > 0)
