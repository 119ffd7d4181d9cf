"""Member auth domain: persisted member/operator session plus its context."""

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from gramin_portal.models import MemberSession
from gramin_portal.session.base import SessionStore, as_bool

if TYPE_CHECKING:
    from gramin_portal.services.member_service import MemberService

logger = logging.getLogger(__name__)

MEMBER_KEYS = ("memberToken", "memberId", "memberName", "isOperator")


class MemberSessionStore(SessionStore):
    """Member session persisted under the ``member`` namespace."""

    namespace = "member"
    keys = MEMBER_KEYS
    token_key = "memberToken"

    def _build(self, values: Dict[str, Any]) -> MemberSession:
        member_id = values.get("memberId")
        return MemberSession(
            token=values["memberToken"],
            member_id=str(member_id) if member_id is not None else None,
            member_name=values.get("memberName"),
            is_operator=as_bool(values.get("isOperator")),
        )

    def persist_login(self, body: Optional[Dict[str, Any]]) -> bool:
        """Store a member login response; returns False when it carries no token."""
        if not body or not body.get("token"):
            return False
        self.save({
            "memberToken": body["token"],
            "memberId": body.get("memberId"),
            "memberName": body.get("memberName"),
            "isOperator": as_bool(body.get("isOperator") or False),
        })
        return True


class MemberAuthContext:
    """Member login state exposed to views.

    ``is_operator`` is read once from the login response and trusted for the
    rest of the session. It only gates the UI; the backend enforces access.
    """

    def __init__(self, store: MemberSessionStore, member_service: "MemberService"):
        self.store = store
        self.member_service = member_service

    async def login(self, phone: str, pin: str) -> dict:
        body = await self.member_service.login(phone, pin)
        if self.store.persist_login(body):
            logger.info(f"Member login succeeded for {self.member_name}")
        else:
            logger.warning("Member login response carried no token")
        return body

    def logout(self) -> None:
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
    def member_id(self) -> Optional[str]:
        return self.store.session.member_id if self.store.session else None

    @property
    def member_name(self) -> Optional[str]:
        return self.store.session.member_name if self.store.session else None

    @property
    def is_operator(self) -> bool:
        return bool(self.store.session and self.store.session.is_operator)
