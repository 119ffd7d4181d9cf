"""Routing surface of the portal and who may open each page."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from gramin_portal.session.capabilities import Capabilities


class Access(str, Enum):
    PUBLIC = "public"
    ADMIN = "admin"            # full admin session, operators excluded
    MEMBER = "member"          # any member session
    MANAGEMENT = "management"  # admin, or operator in read-only mode


@dataclass(frozen=True)
class Route:
    path: str
    title: str
    access: Access = Access.PUBLIC
    redirect_to: Optional[str] = None
    in_menu: bool = True


ROOT_PATH = "/"
LOGIN_PATH = "/login"
SESSIONS_PATH = "/admin/sessions"

ROUTES: List[Route] = [
    # Public
    Route("/", "Summary"),
    Route("/deposits", "Deposits"),
    Route("/loans", "Loans"),
    Route("/vdf", "VDF"),
    Route("/vdf/expenses", "VDF Expenses"),
    Route("/vdf/deposits", "VDF Deposits"),
    Route("/vdf/contributions", "VDF Contributions"),
    Route(LOGIN_PATH, "Login", in_menu=False),

    # Admin, with read-only access for operators
    Route("/admin/gramin-bank", "Gramin Bank", Access.MANAGEMENT),
    Route("/admin/members", "Members", Access.MANAGEMENT),
    Route("/admin/deposits", "Bank Deposits", Access.MANAGEMENT),
    Route("/admin/loans", "Bank Loans", Access.MANAGEMENT),
    Route("/admin/statements", "Statements", Access.MANAGEMENT),
    Route("/admin/vdf/families", "VDF Families", Access.MANAGEMENT),
    Route("/admin/vdf/contributions", "VDF Contribution Entry", Access.MANAGEMENT),

    # Admin only
    Route("/admin/reports", "Reports", Access.ADMIN),
    Route(SESSIONS_PATH, "Sessions", Access.ADMIN),
    Route("/admin/vdf/deposits", "Manage VDF Deposits", Access.ADMIN),
    Route("/admin/vdf/expenses", "Manage VDF Expenses", Access.ADMIN),
    Route("/admin/dashboard", "Dashboard", Access.ADMIN, redirect_to="/admin/members", in_menu=False),

    # Member
    Route("/member/dashboard", "My Dashboard", Access.MEMBER),
    Route("/member/account", "My VDF Account", Access.MEMBER),
    Route("/member/family", "My Family", Access.MEMBER),
    Route("/member/documents", "My Documents", Access.MEMBER),
    Route("/member/family-documents", "Family Documents", Access.MEMBER),
    Route("/member/bank", "Bank", Access.MEMBER),
]

ROUTES_BY_PATH = {route.path: route for route in ROUTES}


def resolve_path(path: str) -> Route:
    """Route for ``path``; redirects are followed and unknown paths fall back to the root."""
    normalized = (path or ROOT_PATH).split("?", 1)[0]
    if len(normalized) > 1:
        normalized = normalized.rstrip("/")
    route = ROUTES_BY_PATH.get(normalized, ROUTES_BY_PATH[ROOT_PATH])
    if route.redirect_to:
        return ROUTES_BY_PATH[route.redirect_to]
    return route


def admin_allowed(route: Route, caps: Capabilities) -> bool:
    """Whether an authenticated admin session may open an admin-only route."""
    if route.path == SESSIONS_PATH:
        return caps.can_view_sessions
    return caps.can_write


def menu_routes(caps: Capabilities, is_admin: bool, is_member: bool) -> List[Route]:
    """Routes the navbar offers for the current sessions."""
    visible = []
    for route in ROUTES:
        if not route.in_menu:
            continue
        if route.access == Access.PUBLIC:
            visible.append(route)
        elif route.access == Access.MANAGEMENT and caps.can_view_management:
            visible.append(route)
        elif route.access == Access.ADMIN and is_admin and admin_allowed(route, caps):
            visible.append(route)
        elif route.access == Access.MEMBER and is_member and not caps.is_operator:
            visible.append(route)
    return visible
