"""Navbar identity, logout and page registration."""

import asyncio
from types import SimpleNamespace

from conftest import ADMIN_STORAGE, MEMBER_STORAGE
from gramin_portal.ui import layout
from gramin_portal.ui.layout import identity, logout
from gramin_portal.ui import main_app
from gramin_portal.ui.main_app import PAGES, redirect_unknown
from gramin_portal.ui.routes import LOGIN_PATH, ROUTES


class TestIdentity:
    """Which session the navbar shows."""

    def test_anonymous(self, make_context):
        assert identity(make_context()) == (None, "")

    def test_member(self, make_context):
        assert identity(make_context(MEMBER_STORAGE)) == ("member", "Sita Das")

    def test_admin_takes_precedence(self, make_context):
        ctx = make_context(dict(ADMIN_STORAGE, **MEMBER_STORAGE))
        assert identity(ctx) == ("admin", "Admin: Ramesh")


class TestLogout:
    """Navbar logout signs out of the displayed domain only."""

    def test_admin_logout_keeps_member(self, make_context, monkeypatch):
        targets = []
        monkeypatch.setattr(layout, "ui", SimpleNamespace(navigate=SimpleNamespace(to=targets.append)))
        ctx = make_context(dict(ADMIN_STORAGE, **MEMBER_STORAGE))

        logout(ctx, "admin")

        assert not ctx.admin.is_authenticated
        assert ctx.member.is_authenticated
        assert targets == [LOGIN_PATH]

    def test_nothing_to_logout(self, make_context, monkeypatch):
        targets = []
        monkeypatch.setattr(layout, "ui", SimpleNamespace(navigate=SimpleNamespace(to=targets.append)))
        logout(make_context(), None)
        assert targets == []


class TestPages:
    """Every routed path has a page."""

    def test_every_route_has_a_page(self):
        routed = {r.path for r in ROUTES if not r.redirect_to}
        assert set(PAGES) == routed

    def test_member_bank_reuses_gramin_bank(self, make_context):
        from gramin_portal.ui.lifecycle import ViewScope
        from gramin_portal.ui.pages.bank_pages import GraminBankPage

        page = PAGES["/member/bank"](make_context(MEMBER_STORAGE), ViewScope("test"))
        assert isinstance(page, GraminBankPage)


class FakeApp:
    def __init__(self):
        self.error_handlers = {}
        self.shutdown = []

    def exception_handler(self, status_code):
        def register(handler):
            self.error_handlers[status_code] = handler
            return handler
        return register

    def on_shutdown(self, handler):
        self.shutdown.append(handler)


class TestAppWiring:
    """App-level handlers registered by ``create_app``."""

    def test_shared_client_closed_on_shutdown(self, monkeypatch):
        fake_app = FakeApp()
        monkeypatch.setattr(main_app, "app", fake_app)
        monkeypatch.setattr(main_app, "ui", SimpleNamespace(page=lambda *args, **kwargs: (lambda f: f)))

        main_app.create_app()

        assert fake_app.shutdown == [main_app.api_client.aclose]
        assert fake_app.error_handlers[404] is redirect_unknown

    def test_unknown_path_redirects_to_closest_route(self):
        request = SimpleNamespace(url=SimpleNamespace(path="/vdf/"))
        response = asyncio.run(redirect_unknown(request, None))
        assert response.headers["location"] == "/vdf"

    def test_unknown_path_redirects_to_root(self):
        request = SimpleNamespace(url=SimpleNamespace(path="/no/such/page"))
        response = asyncio.run(redirect_unknown(request, None))
        assert response.headers["location"] == "/"
