"""Route guards for the admin and member auth domains."""

import logging
from enum import Enum
from typing import Callable

from nicegui import ui

from gramin_portal.container import PortalContext
from gramin_portal.ui.routes import LOGIN_PATH, Access, Route, admin_allowed

logger = logging.getLogger(__name__)


class GuardDecision(str, Enum):
    LOADING = "loading"
    REDIRECT = "redirect"
    RENDER = "render"


def guard_decision(loading: bool, is_authenticated: bool) -> GuardDecision:
    """Loading wins over everything; then unauthenticated users are redirected."""
    if loading:
        return GuardDecision.LOADING
    if not is_authenticated:
        return GuardDecision.REDIRECT
    return GuardDecision.RENDER


def decide(route: Route, ctx: PortalContext) -> GuardDecision:
    """Guard decision for opening ``route`` with the sessions in ``ctx``."""
    if route.access == Access.ADMIN:
        return guard_decision(
            ctx.admin.loading,
            ctx.admin.is_authenticated and admin_allowed(route, ctx.capabilities),
        )
    if route.access == Access.MEMBER:
        return guard_decision(ctx.member.loading, ctx.member.is_authenticated)
    if route.access == Access.MANAGEMENT:
        return guard_decision(
            ctx.admin.loading or ctx.member.loading,
            ctx.capabilities.can_view_management,
        )
    return GuardDecision.RENDER


def apply_decision(decision: GuardDecision, render: Callable[[], None], path: str = "") -> GuardDecision:
    """Show a spinner, redirect to login, or render the page unmodified."""
    if decision == GuardDecision.LOADING:
        with ui.row().classes("w-full justify-center p-8"):
            ui.spinner(size="lg")
    elif decision == GuardDecision.REDIRECT:
        logger.info(f"Not authenticated for {path or 'page'}, redirecting to login")
        ui.navigate.to(LOGIN_PATH)
    else:
        render()
    return decision


def guarded(route: Route, ctx: PortalContext, render: Callable[[], None]) -> GuardDecision:
    return apply_decision(decide(route, ctx), render, route.path)


def admin_guard(ctx: PortalContext, render: Callable[[], None]) -> GuardDecision:
    return apply_decision(
        guard_decision(ctx.admin.loading, ctx.admin.is_authenticated and ctx.capabilities.can_write),
        render,
    )


def member_guard(ctx: PortalContext, render: Callable[[], None]) -> GuardDecision:
    return apply_decision(guard_decision(ctx.member.loading, ctx.member.is_authenticated), render)


def management_guard(ctx: PortalContext, render: Callable[[], None]) -> GuardDecision:
    return apply_decision(
        guard_decision(ctx.admin.loading or ctx.member.loading, ctx.capabilities.can_view_management),
        render,
    )
