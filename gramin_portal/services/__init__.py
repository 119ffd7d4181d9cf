"""Per-resource wrappers around the REST backend."""

from gramin_portal.services.admin_service import AdminService
from gramin_portal.services.auth_service import AuthService
from gramin_portal.services.member_service import MemberService
from gramin_portal.services.public_service import PublicService
from gramin_portal.services.vdf_notification_service import VdfNotificationService
from gramin_portal.services.vdf_service import VdfService

__all__ = [
    "AdminService",
    "AuthService",
    "MemberService",
    "PublicService",
    "VdfNotificationService",
    "VdfService",
]
