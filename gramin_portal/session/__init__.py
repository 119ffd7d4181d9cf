"""Admin and member session domains."""

from gramin_portal.session.admin import AdminAuthContext, AdminSessionStore
from gramin_portal.session.capabilities import Capabilities, capabilities_for, management_token
from gramin_portal.session.member import MemberAuthContext, MemberSessionStore

__all__ = [
    "AdminAuthContext",
    "AdminSessionStore",
    "Capabilities",
    "capabilities_for",
    "management_token",
    "MemberAuthContext",
    "MemberSessionStore",
]
