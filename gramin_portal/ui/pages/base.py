"""Shared plumbing for portal pages."""

import logging
from typing import Any, Awaitable, Optional

from nicegui import ui

from gramin_portal.api.errors import ApiError
from gramin_portal.config import settings
from gramin_portal.container import PortalContext
from gramin_portal.session.capabilities import Capabilities
from gramin_portal.ui.feedback import report_error
from gramin_portal.ui.lifecycle import ViewScope

logger = logging.getLogger(__name__)


class PortalPage:
    """A page bound to one browser client.

    Subclasses implement ``build`` (widgets) and usually ``load`` (fetch and
    re-render). Loads run inside the page's ``ViewScope``.
    """

    title = ""

    def __init__(self, ctx: PortalContext, scope: Optional[ViewScope] = None):
        self.ctx = ctx
        self.scope = scope or ViewScope(type(self).__name__)
        self.loading = False
        self.language = settings.ui.language

    @property
    def caps(self) -> Capabilities:
        return self.ctx.capabilities

    def build(self) -> None:
        raise NotImplementedError

    async def load(self) -> None:
        """Fetch data and re-render. Pages without remote data keep this no-op."""

    def reload(self) -> None:
        self.scope.spawn(self.load())

    def header(self, title: str, refresh: bool = True) -> None:
        with ui.row().classes("w-full justify-between items-center mb-4"):
            ui.label(title).classes("text-2xl font-bold")
            if refresh:
                ui.button("Refresh", icon="refresh", on_click=self.reload).props("flat")

    async def call(self, action: Awaitable[Any], fallback: str) -> Any:
        """Await a service call; on ``ApiError`` report it and return None."""
        try:
            return await action
        except ApiError as exc:
            report_error(exc, fallback)
            return None

    async def attempt(self, action: Awaitable[Any], fallback: str) -> bool:
        """Like ``call`` for actions whose body does not matter; True on success."""
        try:
            await action
        except ApiError as exc:
            report_error(exc, fallback)
            return False
        return True
