"""Member self-service endpoints, authenticated with the member token."""

from typing import Any

from gramin_portal.api.client import ApiClient
from gramin_portal.session.member import MemberSessionStore


class MemberService:
    """Calls made on behalf of the logged-in member."""

    def __init__(self, client: ApiClient, session: MemberSessionStore):
        self.client = client
        self.session = session

    async def login(self, phone: str, pin: str) -> dict:
        return await self.client.post("/member/auth/login", json={"phone": phone, "pin": pin})

    async def get_dashboard(self) -> dict:
        return await self.client.get("/member/dashboard", token=self.session.token)

    async def get_vdf_account(self) -> dict:
        return await self.client.get("/member/vdf/account", token=self.session.token)

    async def change_pin(self, old_pin: str, new_pin: str) -> Any:
        return await self.client.put(
            "/member/change-pin",
            json={"oldPin": old_pin, "newPin": new_pin},
            token=self.session.token,
        )

    async def get_family_details(self) -> dict:
        return await self.client.get("/member/family-details", token=self.session.token)

    # Documents

    async def get_my_documents(self) -> list:
        return await self.client.get("/member/documents/my-documents", token=self.session.token)

    async def get_family_documents(self) -> list:
        return await self.client.get("/member/documents/family-documents", token=self.session.token)

    async def download_document(self, document_id: str) -> bytes:
        """Fetch the document file itself."""
        return await self.client.get(
            f"/member/documents/{document_id}/download",
            token=self.session.token,
            raw=True,
        )

    async def get_document_url(self, document_id: str) -> Any:
        """Return a viewable URL; the backend answers either ``{"url": ...}`` or the bare URL."""
        return await self.client.get(f"/member/documents/{document_id}/url", token=self.session.token)
