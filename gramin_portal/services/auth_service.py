"""Unified admin/operator login endpoint."""

from typing import Optional

from gramin_portal.api.client import ApiClient


class AuthService:
    """Admin authentication calls."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def login(self, phone: str, pin: Optional[str] = None, password: Optional[str] = None) -> dict:
        """POST phone plus password and/or PIN; password is preferred for ADMIN roles."""
        body = {"phone": phone}
        if password:
            body["password"] = password
        if pin:
            body["pin"] = pin
        return await self.client.post("/admin/auth/login", json=body)
