"""
Main NiceGUI application: one page per route, each guarded and laid out.

Every page load builds a fresh ``PortalContext`` over the browser's
``app.storage.user`` and the process-wide ``ApiClient``, plus a ``ViewScope``
that is closed when the client disconnects.
"""

import logging
from typing import Callable, Dict

from fastapi import Request
from fastapi.responses import RedirectResponse
from nicegui import app, ui

from gramin_portal.api.client import ApiClient
from gramin_portal.config import configure_logging, settings
from gramin_portal.container import PortalContext, build_context
from gramin_portal.ui.guards import guarded
from gramin_portal.ui.layout import PortalLayout
from gramin_portal.ui.lifecycle import ViewScope, bind_to_client
from gramin_portal.ui.pages.bank_pages import (
    AdminLedgerPage,
    GraminBankPage,
    PublicLedgerPage,
    ReportsPage,
    StatementsPage,
)
from gramin_portal.ui.pages.base import PortalPage
from gramin_portal.ui.pages.login_page import LoginPage
from gramin_portal.ui.pages.member_management import MemberManagementPage
from gramin_portal.ui.pages.member_pages import (
    FamilyDetailsPage,
    MemberAccountPage,
    MemberDashboardPage,
    MemberDocumentsPage,
)
from gramin_portal.ui.pages.session_management import SessionManagementPage
from gramin_portal.ui.pages.summary_page import SummaryPage
from gramin_portal.ui.pages.vdf_families import VdfFamiliesPage
from gramin_portal.ui.pages.vdf_ledger import VdfDepositsPage, VdfExpensesPage, VdfLandingPage
from gramin_portal.ui.pages.vdf_matrix import ContributionMatrixPage
from gramin_portal.ui.routes import ROUTES, Route, resolve_path

logger = logging.getLogger(__name__)

# Shared by every page; closed when the server shuts down.
api_client = ApiClient()

PageFactory = Callable[[PortalContext, ViewScope], PortalPage]

PAGES: Dict[str, PageFactory] = {
    # Public
    "/": lambda ctx, scope: SummaryPage(ctx, scope),
    "/deposits": lambda ctx, scope: PublicLedgerPage(ctx, "deposits", scope),
    "/loans": lambda ctx, scope: PublicLedgerPage(ctx, "loans", scope),
    "/vdf": lambda ctx, scope: VdfLandingPage(ctx, scope),
    "/vdf/expenses": lambda ctx, scope: VdfExpensesPage(ctx, public=True, scope=scope),
    "/vdf/deposits": lambda ctx, scope: VdfDepositsPage(ctx, public=True, scope=scope),
    "/vdf/contributions": lambda ctx, scope: ContributionMatrixPage(ctx, public=True, scope=scope),
    "/login": lambda ctx, scope: LoginPage(ctx, scope),

    # Management
    "/admin/gramin-bank": lambda ctx, scope: GraminBankPage(ctx, scope),
    "/admin/members": lambda ctx, scope: MemberManagementPage(ctx, scope),
    "/admin/deposits": lambda ctx, scope: AdminLedgerPage(ctx, "deposits", scope),
    "/admin/loans": lambda ctx, scope: AdminLedgerPage(ctx, "loans", scope),
    "/admin/statements": lambda ctx, scope: StatementsPage(ctx, scope),
    "/admin/vdf/families": lambda ctx, scope: VdfFamiliesPage(ctx, scope),
    "/admin/vdf/contributions": lambda ctx, scope: ContributionMatrixPage(ctx, public=False, scope=scope),
    "/admin/reports": lambda ctx, scope: ReportsPage(ctx, scope),
    "/admin/sessions": lambda ctx, scope: SessionManagementPage(ctx, scope),
    "/admin/vdf/deposits": lambda ctx, scope: VdfDepositsPage(ctx, public=False, scope=scope),
    "/admin/vdf/expenses": lambda ctx, scope: VdfExpensesPage(ctx, public=False, scope=scope),

    # Member
    "/member/dashboard": lambda ctx, scope: MemberDashboardPage(ctx, scope),
    "/member/account": lambda ctx, scope: MemberAccountPage(ctx, scope),
    "/member/family": lambda ctx, scope: FamilyDetailsPage(ctx, scope),
    "/member/documents": lambda ctx, scope: MemberDocumentsPage(ctx, family=False, scope=scope),
    "/member/family-documents": lambda ctx, scope: MemberDocumentsPage(ctx, family=True, scope=scope),
    "/member/bank": lambda ctx, scope: GraminBankPage(ctx, scope),
}


def _register(route: Route) -> None:
    if route.redirect_to:
        @ui.page(route.path)
        def redirect_page():
            return RedirectResponse(route.redirect_to)
        return

    factory = PAGES[route.path]

    @ui.page(route.path, title=f"{route.title} | {settings.ui.title}")
    def page():
        ctx = build_context(app.storage.user, api_client)
        scope = bind_to_client(ViewScope(route.path))
        PortalLayout(ctx, scope).build(route.path)
        with ui.column().classes("w-full max-w-7xl mx-auto p-4"):
            guarded(route, ctx, lambda: factory(ctx, scope).build())


async def redirect_unknown(request: Request, exc: Exception):
    """Send unknown paths to their closest route, or to the summary page."""
    target = resolve_path(request.url.path).path
    logger.info(f"Unknown path {request.url.path}, redirecting to {target}")
    return RedirectResponse(target)


def create_app() -> None:
    """Register every route of the portal with NiceGUI."""
    for route in ROUTES:
        _register(route)

    app.exception_handler(404)(redirect_unknown)
    app.on_shutdown(api_client.aclose)
    logger.info(f"Registered {len(ROUTES)} routes")


def run_app():
    configure_logging()
    create_app()
    ui.run(
        title=settings.ui.title,
        port=settings.ui.port,
        storage_secret=settings.storage.secret,
        reload=False,
    )


if __name__ in {"__main__", "__mp_main__"}:
    run_app()
