"""Role-derived UI capabilities, computed once per session."""

from dataclasses import dataclass
from typing import Optional

from gramin_portal.session.admin import AdminAuthContext, AdminSessionStore
from gramin_portal.session.member import MemberAuthContext, MemberSessionStore


@dataclass(frozen=True)
class Capabilities:
    """What the current browser session may see and change.

    These flags only gate the UI; the backend authorizes every call.
    """
    can_write: bool = False
    can_manage_families: bool = False
    can_view_sessions: bool = False
    can_view_management: bool = False
    is_operator: bool = False

    @property
    def read_only(self) -> bool:
        return not self.can_write


ANONYMOUS = Capabilities()


def capabilities_for(admin: AdminAuthContext, member: MemberAuthContext) -> Capabilities:
    """Derive capabilities from both auth domains.

    A full admin session wins over everything else. An operator flag on
    either session grants read-only management screens.
    """
    if admin.is_authenticated and not admin.is_operator:
        return Capabilities(
            can_write=True,
            can_manage_families=True,
            can_view_sessions=True,
            can_view_management=True,
        )

    operator = (admin.is_authenticated and admin.is_operator) or (
        member.is_authenticated and member.is_operator
    )
    if operator:
        return Capabilities(can_view_management=True, is_operator=True)

    return ANONYMOUS


def management_token(admin: AdminSessionStore, member: Optional[MemberSessionStore] = None) -> Optional[str]:
    """Token for admin endpoints: the admin session, else an operator's member session."""
    if admin.token:
        return admin.token
    if member is not None and member.session is not None and member.session.is_operator:
        return member.token
    return None
