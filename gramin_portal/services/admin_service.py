"""Admin endpoints for members, bank ledger, documents and login sessions."""

from typing import Any, Optional

from gramin_portal.api.client import ApiClient
from gramin_portal.session.admin import AdminSessionStore
from gramin_portal.session.capabilities import management_token
from gramin_portal.session.member import MemberSessionStore


class AdminService:
    """Calls authenticated with the admin token.

    Operators who signed in through the member login reach the read-only
    management screens with their member token instead.
    """

    def __init__(self, client: ApiClient, session: AdminSessionStore,
                 operator: Optional[MemberSessionStore] = None):
        self.client = client
        self.session = session
        self.operator = operator

    @property
    def token(self) -> Optional[str]:
        return management_token(self.session, self.operator)

    async def _get(self, path: str, **kwargs) -> Any:
        return await self.client.get(path, token=self.token, **kwargs)

    # ==================== Members ====================

    async def get_all_members(self, search: str = "") -> list:
        return await self._get("/admin/members", params={"search": search or None})

    async def get_member_by_id(self, member_id: str) -> dict:
        return await self._get(f"/admin/members/{member_id}")

    async def create_member(self, data: dict) -> dict:
        return await self.client.post("/admin/members", json=data, token=self.token)

    async def update_member(self, member_id: str, data: dict) -> dict:
        return await self.client.put(f"/admin/members/{member_id}", json=data, token=self.token)

    async def deactivate_member(self, member_id: str) -> Any:
        return await self.client.delete(f"/admin/members/{member_id}", token=self.token)

    async def unblock_member(self, member_id: str) -> Any:
        return await self.client.put(f"/admin/members/{member_id}/unblock", token=self.token)

    # ==================== Statements & Reports ====================

    async def get_member_statement(self, member_id: str, year: Optional[int] = None) -> dict:
        return await self._get(f"/admin/members/{member_id}/statement", params={"year": year})

    async def get_yearly_report(self, year: int) -> dict:
        return await self._get("/admin/reports/yearly", params={"year": year})

    # ==================== Bank Ledger ====================

    async def get_deposits(self, status: str = "active") -> list:
        return await self._get("/admin/deposits", params={"status": status})

    async def get_loans(self, status: str = "active") -> list:
        return await self._get("/admin/loans", params={"status": status})

    # ==================== Documents ====================

    async def get_document_categories(self) -> list:
        return await self._get("/admin/documents/categories")

    async def get_member_documents(self, member_id: str) -> list:
        return await self._get(f"/admin/documents/member/{member_id}")

    async def upload_document(
        self,
        member_id: str,
        category_id: str,
        filename: str,
        content: bytes,
        content_type: str,
        notes: str = "",
    ) -> dict:
        """Multipart upload of one JPG/PDF file for a member."""
        return await self.client.post(
            "/admin/documents/upload",
            data={"memberId": member_id, "categoryId": category_id, "notes": notes or ""},
            files={"file": (filename, content, content_type)},
            token=self.token,
        )

    async def get_document_url(self, document_id: str) -> Any:
        return await self._get(f"/admin/documents/{document_id}/url")

    async def delete_document(self, document_id: str) -> Any:
        return await self.client.delete(f"/admin/documents/{document_id}", token=self.token)

    # ==================== Login Sessions ====================

    async def get_all_active_sessions(self) -> list:
        return await self._get("/admin/sessions/active")

    async def get_session_stats(self) -> dict:
        return await self._get("/admin/sessions/stats")

    async def force_logout_session(self, session_id: str) -> Any:
        return await self.client.delete(f"/admin/sessions/{session_id}", token=self.token)

    async def force_logout_all_for_user(self, user_id: str, user_type: str) -> Any:
        return await self.client.delete(
            f"/admin/sessions/user/{user_id}",
            params={"userType": user_type},
            token=self.token,
        )
