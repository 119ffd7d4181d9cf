"""Per-browser wiring of storage, session contexts and services."""

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Optional

from gramin_portal.api.client import ApiClient
from gramin_portal.services import (
    AdminService,
    AuthService,
    MemberService,
    PublicService,
    VdfNotificationService,
    VdfService,
)
from gramin_portal.session.admin import AdminAuthContext, AdminSessionStore
from gramin_portal.session.capabilities import Capabilities, capabilities_for
from gramin_portal.session.member import MemberAuthContext, MemberSessionStore


@dataclass
class PortalContext:
    """Everything a page needs, built once per browser client.

    Views receive this object instead of reaching for module globals, so
    tests can build one around a plain dict and a fake transport.
    """
    client: ApiClient
    admin: AdminAuthContext
    member: MemberAuthContext
    admin_service: AdminService
    member_service: MemberService
    public_service: PublicService
    vdf_service: VdfService
    notification_service: VdfNotificationService

    @property
    def capabilities(self) -> Capabilities:
        return capabilities_for(self.admin, self.member)

    def hydrate(self) -> None:
        self.admin.store.hydrate()
        self.member.store.hydrate()


def build_context(storage: MutableMapping, client: Optional[ApiClient] = None) -> PortalContext:
    """Assemble a context over one storage mapping and hydrate both sessions."""
    client = client or ApiClient()
    admin_store = AdminSessionStore(storage)
    member_store = MemberSessionStore(storage)
    member_service = MemberService(client, member_store)

    context = PortalContext(
        client=client,
        admin=AdminAuthContext(admin_store, AuthService(client)),
        member=MemberAuthContext(member_store, member_service),
        admin_service=AdminService(client, admin_store, member_store),
        member_service=member_service,
        public_service=PublicService(client),
        vdf_service=VdfService(client, admin_store, member_store),
        notification_service=VdfNotificationService(client, member_store),
    )
    context.hydrate()
    return context
