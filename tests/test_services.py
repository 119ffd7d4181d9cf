"""Service endpoints and which token authenticates each call."""

import asyncio

from conftest import ADMIN_STORAGE, MEMBER_STORAGE, OPERATOR_MEMBER_STORAGE


def auth_header(backend):
    return backend.last.headers.get("Authorization")


class TestAdminService:
    """Members, ledger, documents and login sessions."""

    def test_member_search(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        backend.respond("GET", "/admin/members", [{"id": 1, "firstName": "Ram"}])
        members = asyncio.run(ctx.admin_service.get_all_members("ram"))
        assert members == [{"id": 1, "firstName": "Ram"}]
        assert backend.last.url.params["search"] == "ram"
        assert auth_header(backend) == "Bearer admin-token"

    def test_blank_search_sends_no_param(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        asyncio.run(ctx.admin_service.get_all_members(""))
        assert "search" not in backend.last.url.params

    def test_operator_uses_member_token(self, make_context, backend):
        ctx = make_context(OPERATOR_MEMBER_STORAGE)
        asyncio.run(ctx.admin_service.get_loans("closed"))
        assert backend.last_path() == "/admin/loans"
        assert backend.last.url.params["status"] == "closed"
        assert auth_header(backend) == "Bearer member-token"

    def test_plain_member_sends_no_admin_token(self, make_context, backend):
        ctx = make_context(MEMBER_STORAGE)
        asyncio.run(ctx.admin_service.get_deposits())
        assert auth_header(backend) is None

    def test_member_writes(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        asyncio.run(ctx.admin_service.create_member({"firstName": "Ram"}))
        assert (backend.last.method, backend.last_path()) == ("POST", "/admin/members")
        assert backend.last_json() == {"firstName": "Ram"}

        asyncio.run(ctx.admin_service.update_member("3", {"phone": "9876543210"}))
        assert (backend.last.method, backend.last_path()) == ("PUT", "/admin/members/3")

        asyncio.run(ctx.admin_service.deactivate_member("3"))
        assert (backend.last.method, backend.last_path()) == ("DELETE", "/admin/members/3")

        asyncio.run(ctx.admin_service.unblock_member("3"))
        assert (backend.last.method, backend.last_path()) == ("PUT", "/admin/members/3/unblock")

    def test_statement_and_report(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        asyncio.run(ctx.admin_service.get_member_statement("5", 2025))
        assert backend.last_path() == "/admin/members/5/statement"
        assert backend.last.url.params["year"] == "2025"

        asyncio.run(ctx.admin_service.get_yearly_report(2024))
        assert backend.last_path() == "/admin/reports/yearly"
        assert backend.last.url.params["year"] == "2024"

    def test_document_upload_is_multipart(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        asyncio.run(ctx.admin_service.upload_document("5", "2", "aadhaar.pdf", b"%PDF", "application/pdf", "front"))
        request = backend.last
        assert backend.last_path() == "/admin/documents/upload"
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert b'name="memberId"' in request.content
        assert b'filename="aadhaar.pdf"' in request.content
        assert b"%PDF" in request.content

    def test_force_logout_all_for_user(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        asyncio.run(ctx.admin_service.force_logout_all_for_user("9", "MEMBER"))
        assert (backend.last.method, backend.last_path()) == ("DELETE", "/admin/sessions/user/9")
        assert backend.last.url.params["userType"] == "MEMBER"

    def test_force_logout_session(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        asyncio.run(ctx.admin_service.force_logout_session("abc"))
        assert (backend.last.method, backend.last_path()) == ("DELETE", "/admin/sessions/abc")


class TestMemberService:
    """Member self-service calls carry the member token."""

    def test_dashboard(self, make_context, backend):
        ctx = make_context(dict(ADMIN_STORAGE, **MEMBER_STORAGE))
        asyncio.run(ctx.member_service.get_dashboard())
        assert backend.last_path() == "/member/dashboard"
        assert auth_header(backend) == "Bearer member-token"

    def test_change_pin(self, make_context, backend):
        ctx = make_context(MEMBER_STORAGE)
        asyncio.run(ctx.member_service.change_pin("1111", "2222"))
        assert (backend.last.method, backend.last_path()) == ("PUT", "/member/change-pin")
        assert backend.last_json() == {"oldPin": "1111", "newPin": "2222"}

    def test_documents(self, make_context, backend):
        ctx = make_context(MEMBER_STORAGE)
        asyncio.run(ctx.member_service.get_family_documents())
        assert backend.last_path() == "/member/documents/family-documents"

        backend.respond("GET", "/member/documents/4/download", content=b"JPEGDATA")
        assert asyncio.run(ctx.member_service.download_document("4")) == b"JPEGDATA"


class TestVdfService:
    """Fund endpoints across the admin, member and public surfaces."""

    def test_families_active_flag(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        asyncio.run(ctx.vdf_service.get_all_families(active_only=True))
        assert backend.last_path() == "/admin/vdf/families"
        assert backend.last.url.params["activeOnly"] == "true"
        assert auth_header(backend) == "Bearer admin-token"

    def test_public_calls_are_anonymous(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        asyncio.run(ctx.vdf_service.get_public_summary())
        assert backend.last_path() == "/public/vdf/summary"
        assert auth_header(backend) is None

    def test_fetch_public_matrix(self, make_context, backend):
        ctx = make_context()
        backend.respond("GET", "/public/vdf/contributions/monthly-matrix", {
            "year": 2025,
            "families": [{"familyConfigId": 3, "familyHeadName": "Das", "paidMonths": [True] + [False] * 11}],
        })
        matrix = asyncio.run(ctx.vdf_service.fetch_matrix(2025, public=True))
        assert backend.last.url.params["year"] == "2025"
        assert matrix.year == 2025
        assert matrix.families[0].family_config_id == "3"
        assert matrix.families[0].cell(1).label == "Paid"

    def test_fetch_admin_matrix(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        asyncio.run(ctx.vdf_service.fetch_matrix(2024))
        assert backend.last_path() == "/admin/vdf/contributions/monthly-matrix"

    def test_bulk_contributions(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        payload = {"familyConfigId": "3", "year": 2025, "contributions": [{"month": 1, "amount": 0.0}]}
        asyncio.run(ctx.vdf_service.record_bulk_contributions(payload))
        assert (backend.last.method, backend.last_path()) == ("POST", "/admin/vdf/contributions/bulk")
        assert backend.last_json() == payload

    def test_create_exemption_with_reason(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        asyncio.run(ctx.vdf_service.create_exemption("3", 2025, 4, "Flood"))
        assert backend.last_path() == "/admin/vdf/family-exemptions"
        assert backend.last_json() == {"familyConfigId": "3", "year": 2025, "month": 4, "reason": "Flood"}

    def test_remove_exemption(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        asyncio.run(ctx.vdf_service.set_exemption("3", 2025, 4, False))
        assert backend.last.method == "DELETE"
        assert dict(backend.last.url.params) == {"familyConfigId": "3", "year": "2025", "month": "4"}

    def test_expenses_paging(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        asyncio.run(ctx.vdf_service.get_all_expenses(page=2, size=20))
        assert dict(backend.last.url.params) == {"page": "2", "size": "20"}

        asyncio.run(ctx.vdf_service.get_expenses_by_category("6"))
        assert backend.last_path() == "/admin/vdf/expenses/category/6"

    def test_deposit_crud(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        asyncio.run(ctx.vdf_service.create_deposit({"amount": 100}))
        assert (backend.last.method, backend.last_path()) == ("POST", "/admin/vdf/deposits")
        asyncio.run(ctx.vdf_service.update_deposit("8", {"amount": 150}))
        assert (backend.last.method, backend.last_path()) == ("PUT", "/admin/vdf/deposits/8")
        asyncio.run(ctx.vdf_service.delete_deposit("8"))
        assert (backend.last.method, backend.last_path()) == ("DELETE", "/admin/vdf/deposits/8")

    def test_member_contributions_use_member_token(self, make_context, backend):
        ctx = make_context(dict(ADMIN_STORAGE, **MEMBER_STORAGE))
        asyncio.run(ctx.vdf_service.get_my_contributions(2025))
        assert backend.last_path() == "/member/vdf/my-contributions"
        assert auth_header(backend) == "Bearer member-token"


class TestNotificationAndPublic:
    """Notification inbox and public bank summary."""

    def test_unread_count(self, make_context, backend):
        ctx = make_context(MEMBER_STORAGE)
        backend.respond("GET", "/member/vdf/notifications/unread", [{"id": 1}, {"id": 2}])
        assert asyncio.run(ctx.notification_service.get_unread_count()) == 2
        assert auth_header(backend) == "Bearer member-token"

    def test_unread_count_empty_body(self, make_context, backend):
        ctx = make_context(MEMBER_STORAGE)
        assert asyncio.run(ctx.notification_service.get_unread_count()) == 0

    def test_mark_all_read(self, make_context, backend):
        ctx = make_context(MEMBER_STORAGE)
        asyncio.run(ctx.notification_service.mark_all_as_read())
        assert (backend.last.method, backend.last_path()) == ("PUT", "/member/vdf/notifications/read-all")

    def test_public_summary(self, ctx, backend):
        backend.respond("GET", "/public/summary", {"totalDeposits": 5000})
        assert asyncio.run(ctx.public_service.get_summary()) == {"totalDeposits": 5000}
        assert auth_header(backend) is None


class TestVdfReports:
    """Reports, single contributions and the member status view."""

    def test_monthly_report_defaults_to_current_year(self, make_context, backend):
        from datetime import datetime

        ctx = make_context(ADMIN_STORAGE)
        asyncio.run(ctx.vdf_service.get_monthly_report())
        assert backend.last_path() == "/admin/vdf/reports/monthly"
        assert backend.last.url.params["year"] == str(datetime.now().year)

    def test_record_contribution(self, make_context, backend):
        ctx = make_context(ADMIN_STORAGE)
        asyncio.run(ctx.vdf_service.record_contribution({"familyConfigId": "3", "month": 1, "amount": 20}))
        assert (backend.last.method, backend.last_path()) == ("POST", "/admin/vdf/contributions")

    def test_public_families(self, make_context, backend):
        ctx = make_context()
        asyncio.run(ctx.vdf_service.get_public_families(active_only=False))
        assert backend.last_path() == "/public/vdf/families"
        assert backend.last.url.params["activeOnly"] == "false"

    def test_my_status(self, make_context, backend):
        ctx = make_context(MEMBER_STORAGE)
        asyncio.run(ctx.vdf_service.get_my_status())
        assert backend.last_path() == "/member/vdf/my-status"
        assert auth_header(backend) == "Bearer member-token"
