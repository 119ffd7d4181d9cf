"""Unauthenticated bank summary and listings."""

from gramin_portal.api.client import ApiClient


class PublicService:
    """Read-only public mirrors of the bank ledger."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def get_summary(self) -> dict:
        return await self.client.get("/public/summary")

    async def get_deposits(self) -> list:
        return await self.client.get("/public/deposits")

    async def get_loans(self) -> list:
        return await self.client.get("/public/loans")
