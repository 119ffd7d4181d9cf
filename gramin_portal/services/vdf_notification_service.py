"""VDF notifications for the logged-in member."""

from typing import Any

from gramin_portal.api.client import ApiClient
from gramin_portal.session.member import MemberSessionStore


class VdfNotificationService:
    """Notification inbox calls, authenticated with the member token."""

    def __init__(self, client: ApiClient, session: MemberSessionStore):
        self.client = client
        self.session = session

    async def get_notifications(self) -> list:
        return await self.client.get("/member/vdf/notifications", token=self.session.token)

    async def get_unread_notifications(self) -> list:
        return await self.client.get("/member/vdf/notifications/unread", token=self.session.token)

    async def get_unread_count(self) -> int:
        """Number of unread notifications, used by the navbar badge."""
        unread = await self.get_unread_notifications()
        return len(unread) if isinstance(unread, list) else 0

    async def mark_as_read(self, notification_id: str) -> Any:
        return await self.client.put(
            f"/member/vdf/notifications/{notification_id}/read", token=self.session.token
        )

    async def mark_all_as_read(self) -> Any:
        return await self.client.put("/member/vdf/notifications/read-all", token=self.session.token)

    async def delete_notification(self, notification_id: str) -> Any:
        return await self.client.delete(
            f"/member/vdf/notifications/{notification_id}", token=self.session.token
        )
