"""Route table, menu visibility and guard decisions."""

from types import SimpleNamespace

import pytest

from conftest import ADMIN_STORAGE, MEMBER_STORAGE, OPERATOR_ADMIN_STORAGE, OPERATOR_MEMBER_STORAGE
from gramin_portal.session.capabilities import Capabilities
from gramin_portal.ui import guards
from gramin_portal.ui.guards import GuardDecision, apply_decision, decide, guard_decision
from gramin_portal.ui.pages.vdf_ledger import VdfDepositsPage, VdfExpensesPage
from gramin_portal.ui.routes import (
    LOGIN_PATH,
    ROUTES,
    ROUTES_BY_PATH,
    Access,
    admin_allowed,
    menu_routes,
    resolve_path,
)


class TestGuardDecision:
    """Loading, redirect or render."""

    @pytest.mark.parametrize("authenticated", [True, False])
    def test_loading_shows_loader(self, authenticated):
        assert guard_decision(True, authenticated) == GuardDecision.LOADING

    def test_unauthenticated_redirects(self):
        assert guard_decision(False, False) == GuardDecision.REDIRECT

    def test_authenticated_renders(self):
        assert guard_decision(False, True) == GuardDecision.RENDER


class TestDecide:
    """Decisions per route access level."""

    def test_public_always_renders(self, make_context):
        assert decide(ROUTES_BY_PATH["/vdf"], make_context()) == GuardDecision.RENDER

    def test_admin_route(self, make_context):
        route = ROUTES_BY_PATH["/admin/sessions"]
        assert decide(route, make_context()) == GuardDecision.REDIRECT
        assert decide(route, make_context(OPERATOR_MEMBER_STORAGE)) == GuardDecision.REDIRECT
        assert decide(route, make_context(ADMIN_STORAGE)) == GuardDecision.RENDER

    def test_management_route(self, make_context):
        route = ROUTES_BY_PATH["/admin/members"]
        assert decide(route, make_context(MEMBER_STORAGE)) == GuardDecision.REDIRECT
        assert decide(route, make_context(OPERATOR_MEMBER_STORAGE)) == GuardDecision.RENDER
        assert decide(route, make_context(ADMIN_STORAGE)) == GuardDecision.RENDER

    def test_member_route(self, make_context):
        route = ROUTES_BY_PATH["/member/account"]
        assert decide(route, make_context(ADMIN_STORAGE)) == GuardDecision.REDIRECT
        assert decide(route, make_context(MEMBER_STORAGE)) == GuardDecision.RENDER

    def test_loading_session(self, make_context):
        ctx = make_context(ADMIN_STORAGE)
        ctx.admin.store.loading = True
        assert decide(ROUTES_BY_PATH["/admin/reports"], ctx) == GuardDecision.LOADING
        assert decide(ROUTES_BY_PATH["/admin/members"], ctx) == GuardDecision.LOADING


class TestApplyDecision:
    """Side effects of a decision."""

    def test_render_calls_page(self):
        rendered = []
        apply_decision(GuardDecision.RENDER, lambda: rendered.append(True))
        assert rendered == [True]

    def test_redirect_navigates_to_login(self, monkeypatch):
        targets = []
        fake_ui = SimpleNamespace(navigate=SimpleNamespace(to=targets.append))
        monkeypatch.setattr(guards, "ui", fake_ui)
        rendered = []

        result = apply_decision(GuardDecision.REDIRECT, lambda: rendered.append(True), "/admin/members")

        assert result == GuardDecision.REDIRECT
        assert targets == [LOGIN_PATH]
        assert rendered == []

    def test_member_guard_redirects_anonymous(self, make_context, monkeypatch):
        targets = []
        monkeypatch.setattr(guards, "ui", SimpleNamespace(navigate=SimpleNamespace(to=targets.append)))
        assert guards.member_guard(make_context(ADMIN_STORAGE), lambda: None) == GuardDecision.REDIRECT
        assert targets == [LOGIN_PATH]

    def test_admin_guard_renders_admin(self, make_context):
        rendered = []
        assert guards.admin_guard(make_context(ADMIN_STORAGE), lambda: rendered.append(1)) == GuardDecision.RENDER
        assert rendered == [1]

    def test_management_guard_renders_operator(self, make_context):
        rendered = []
        decision = guards.management_guard(make_context(OPERATOR_MEMBER_STORAGE), lambda: rendered.append(1))
        assert decision == GuardDecision.RENDER
        assert rendered == [1]


class TestRoutes:
    """Path resolution and the route table."""

    def test_dashboard_redirects_to_members(self):
        assert resolve_path("/admin/dashboard").path == "/admin/members"

    def test_unknown_path_falls_back_to_root(self):
        assert resolve_path("/no/such/page").path == "/"
        assert resolve_path("").path == "/"

    def test_trailing_slash_and_query(self):
        assert resolve_path("/vdf/").path == "/vdf"
        assert resolve_path("/loans?status=active").path == "/loans"

    def test_paths_are_unique(self):
        assert len(ROUTES) == len(ROUTES_BY_PATH)

    def test_access_follows_prefix(self):
        for route in ROUTES:
            if route.path.startswith("/member/"):
                assert route.access == Access.MEMBER
            elif route.path.startswith("/admin/"):
                assert route.access in (Access.ADMIN, Access.MANAGEMENT)
            else:
                assert route.access == Access.PUBLIC


class TestMenu:
    """Menu entries offered per session."""

    def _paths(self, ctx):
        return {r.path for r in menu_routes(ctx.capabilities, ctx.admin.is_authenticated,
                                            ctx.member.is_authenticated)}

    def test_anonymous_sees_public_only(self, make_context):
        paths = self._paths(make_context())
        assert "/" in paths
        assert "/vdf/contributions" in paths
        assert LOGIN_PATH not in paths
        assert not any(p.startswith(("/admin", "/member")) for p in paths)

    def test_admin_menu(self, make_context):
        paths = self._paths(make_context(ADMIN_STORAGE))
        assert "/admin/sessions" in paths
        assert "/admin/members" in paths
        assert "/admin/dashboard" not in paths
        assert "/member/account" not in paths

    def test_operator_menu(self, make_context):
        paths = self._paths(make_context(OPERATOR_MEMBER_STORAGE))
        assert "/admin/members" in paths
        assert "/admin/vdf/contributions" in paths
        assert "/admin/sessions" not in paths
        assert "/member/account" not in paths

    def test_member_menu(self, make_context):
        paths = self._paths(make_context(MEMBER_STORAGE))
        assert "/member/account" in paths
        assert "/member/family-documents" in paths
        assert "/admin/members" not in paths


ADMIN_ONLY_PATHS = ["/admin/sessions", "/admin/reports", "/admin/vdf/expenses", "/admin/vdf/deposits"]


class TestOperatorAdminSession:
    """An admin session flagged as operator stays out of admin-only screens."""

    @pytest.mark.parametrize("path", ADMIN_ONLY_PATHS)
    def test_admin_only_routes_redirect(self, make_context, path):
        ctx = make_context(OPERATOR_ADMIN_STORAGE)
        assert decide(ROUTES_BY_PATH[path], ctx) == GuardDecision.REDIRECT

    @pytest.mark.parametrize("path", ADMIN_ONLY_PATHS)
    def test_full_admin_still_renders(self, make_context, path):
        assert decide(ROUTES_BY_PATH[path], make_context(ADMIN_STORAGE)) == GuardDecision.RENDER

    def test_management_routes_still_render(self, make_context):
        ctx = make_context(OPERATOR_ADMIN_STORAGE)
        assert decide(ROUTES_BY_PATH["/admin/members"], ctx) == GuardDecision.RENDER

    def test_admin_guard_redirects(self, make_context, monkeypatch):
        targets = []
        monkeypatch.setattr(guards, "ui", SimpleNamespace(navigate=SimpleNamespace(to=targets.append)))
        rendered = []

        decision = guards.admin_guard(make_context(OPERATOR_ADMIN_STORAGE), lambda: rendered.append(1))

        assert decision == GuardDecision.REDIRECT
        assert targets == [LOGIN_PATH]
        assert rendered == []

    def test_menu_hides_admin_only_routes(self, make_context):
        ctx = make_context(OPERATOR_ADMIN_STORAGE)
        paths = {r.path for r in menu_routes(ctx.capabilities, ctx.admin.is_authenticated,
                                             ctx.member.is_authenticated)}
        assert "/admin/members" in paths
        assert not paths.intersection(ADMIN_ONLY_PATHS)

    def test_sessions_need_view_permission(self):
        route = ROUTES_BY_PATH["/admin/sessions"]
        assert not admin_allowed(route, Capabilities(can_write=True))
        assert admin_allowed(route, Capabilities(can_write=True, can_view_sessions=True))


class TestLedgerWriteControls:
    """Add, edit and delete appear only for writers on the management variant."""

    @pytest.mark.parametrize("page_class", [VdfExpensesPage, VdfDepositsPage])
    def test_operator_is_read_only(self, make_context, page_class):
        assert not page_class(make_context(OPERATOR_ADMIN_STORAGE), public=False).editable

    @pytest.mark.parametrize("page_class", [VdfExpensesPage, VdfDepositsPage])
    def test_admin_can_edit(self, make_context, page_class):
        assert page_class(make_context(ADMIN_STORAGE), public=False).editable

    @pytest.mark.parametrize("page_class", [VdfExpensesPage, VdfDepositsPage])
    def test_public_listing_never_editable(self, make_context, page_class):
        assert not page_class(make_context(ADMIN_STORAGE), public=True).editable
