"""Admin auth domain: persisted admin session plus its login/logout context."""

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from gramin_portal.models import AdminSession
from gramin_portal.session.base import SessionStore, as_bool

if TYPE_CHECKING:
    from gramin_portal.services.auth_service import AuthService

logger = logging.getLogger(__name__)

ADMIN_KEYS = ("authToken", "username", "memberId", "userRole", "isOperator")


class AdminSessionStore(SessionStore):
    """Admin session persisted under the ``admin`` namespace."""

    namespace = "admin"
    keys = ADMIN_KEYS
    token_key = "authToken"

    def _build(self, values: Dict[str, Any]) -> AdminSession:
        member_id = values.get("memberId")
        return AdminSession(
            token=values["authToken"],
            username=values.get("username"),
            role=values.get("userRole"),
            member_id=str(member_id) if member_id is not None else None,
            is_operator=as_bool(values.get("isOperator")),
        )

    def persist_login(self, body: Optional[Dict[str, Any]]) -> bool:
        """Store a login response body; returns False when it carries no token."""
        if not body or not body.get("token"):
            return False
        values = {
            "authToken": body["token"],
            "username": body.get("memberName") or body.get("username"),
            "memberId": body.get("memberId"),
            "userRole": body.get("role"),
        }
        if "isOperator" in body and body["isOperator"] is not None:
            values["isOperator"] = as_bool(body["isOperator"])
        self.save(values)
        return True


class AdminAuthContext:
    """Admin login state exposed to views; injected per browser client."""

    def __init__(self, store: AdminSessionStore, auth_service: "AuthService"):
        self.store = store
        self.auth_service = auth_service

    async def login(self, phone: str, pin: Optional[str] = None, password: Optional[str] = None) -> dict:
        """
        Log in with phone plus password and/or PIN.

        Raises:
            ApiError: when the backend rejects the credentials; the login
                form is responsible for showing the message.
        """
        body = await self.auth_service.login(phone, pin=pin, password=password)
        if self.store.persist_login(body):
            logger.info(f"Admin login succeeded for {self.username}")
        else:
            logger.warning("Admin login response carried no token")
        return body

    def logout(self) -> None:
        """Forget the admin session. No server-side revocation happens here."""
        self.store.clear()

    @property
    def loading(self) -> bool:
        return self.store.loading

    @property
    def is_authenticated(self) -> bool:
        return self.store.is_authenticated

    @property
    def token(self) -> Optional[str]:
        return self.store.token

    @property
    def username(self) -> Optional[str]:
        return self.store.session.username if self.store.session else None

    @property
    def is_operator(self) -> bool:
        return bool(self.store.session and self.store.session.is_operator)
