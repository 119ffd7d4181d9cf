"""Member VDF notifications, opened from the navbar bell."""

import logging
from typing import Awaitable, Callable, List, Optional

from nicegui import ui

from gramin_portal.models import Notification
from gramin_portal.ui.pages.base import PortalPage
from gramin_portal.utils.formatting import time_ago

logger = logging.getLogger(__name__)


class NotificationsPanel(PortalPage):
    """List, mark read, mark all read and delete, inside a dialog."""

    title = "Notifications"

    def __init__(self, ctx, scope=None, on_change: Optional[Callable[[], Awaitable[None]]] = None):
        super().__init__(ctx, scope)
        self.on_change = on_change
        self.notifications: List[Notification] = []
        self.dialog = None

    def build(self):
        with ui.dialog() as self.dialog, ui.card().classes("p-4 w-[440px] max-h-[80vh] overflow-auto"):
            with ui.row().classes("w-full justify-between items-center"):
                ui.label("Notifications").classes("text-lg font-bold")
                with ui.row().classes("gap-1"):
                    ui.button("Mark all read", on_click=self._mark_all).props("flat dense")
                    ui.button(icon="close", on_click=self.dialog.close).props("flat dense")
            self.container = ui.column().classes("w-full gap-2")

    def open(self):
        if self.dialog is None:
            self.build()
        self.dialog.open()
        self.reload()

    async def load(self):
        raw = await self.call(self.ctx.notification_service.get_notifications(), "Failed to load notifications")
        self.notifications = [Notification.model_validate(n) for n in raw or []]
        self._render()

    def _render(self):
        self.container.clear()
        with self.container:
            if not self.notifications:
                ui.label("No notifications").classes("text-gray-500 p-4")
                return
            for notification in self.notifications:
                title, message = notification.localized(self.language)
                color = "bg-white" if notification.is_read else "bg-blue-50"
                with ui.card().classes(f"w-full p-3 {color}"):
                    with ui.row().classes("w-full justify-between items-start no-wrap"):
                        with ui.column().classes("gap-0"):
                            ui.label(title).classes("font-bold text-sm")
                            ui.label(message).classes("text-sm text-gray-700")
                            ui.label(time_ago(notification.created_at)).classes("text-xs text-gray-400")
                        with ui.row().classes("gap-0"):
                            if not notification.is_read:
                                ui.button(icon="done", on_click=lambda n=notification: self._mark(n.id)).props(
                                    "flat dense size=sm")
                            ui.button(icon="delete", on_click=lambda n=notification: self._delete(n.id)).props(
                                "flat dense size=sm color=negative")

    async def _changed(self):
        await self.load()
        if self.on_change:
            await self.on_change()

    async def _mark(self, notification_id: str):
        if await self.attempt(self.ctx.notification_service.mark_as_read(notification_id),
                              "Failed to mark notification as read"):
            await self._changed()

    async def _mark_all(self):
        if await self.attempt(self.ctx.notification_service.mark_all_as_read(), "Failed to mark notifications"):
            await self._changed()

    async def _delete(self, notification_id: str):
        if await self.attempt(self.ctx.notification_service.delete_notification(notification_id),
                              "Failed to delete notification"):
            await self._changed()
