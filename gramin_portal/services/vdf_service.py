"""Village Development Fund endpoints: families, contributions, expenses, deposits."""

from datetime import datetime
from typing import Any, Optional

from gramin_portal.api.client import ApiClient
from gramin_portal.session.admin import AdminSessionStore
from gramin_portal.session.capabilities import management_token
from gramin_portal.session.member import MemberSessionStore
from gramin_portal.vdf.matrix import ContributionMatrix, normalize_matrix


def _year(year: Optional[int]) -> int:
    return year or datetime.now().year


class VdfService:
    """VDF calls. Admin endpoints use the admin token (or an operator's member
    token), ``/member`` ones the member token, ``/public`` ones none."""

    def __init__(self, client: ApiClient, admin: AdminSessionStore, member: MemberSessionStore):
        self.client = client
        self.admin = admin
        self.member = member

    async def _admin(self, method: str, path: str, **kwargs) -> Any:
        return await self.client.request(method, path, token=management_token(self.admin, self.member), **kwargs)

    # ==================== Family Configuration ====================

    async def get_all_families(self, active_only: bool = False) -> list:
        return await self._admin("GET", "/admin/vdf/families", params={"activeOnly": str(active_only).lower()})

    async def get_public_families(self, active_only: bool = False) -> list:
        return await self.client.get("/public/vdf/families", params={"activeOnly": str(active_only).lower()})

    async def create_family_config(self, data: dict) -> dict:
        return await self._admin("POST", "/admin/vdf/families", json=data)

    async def update_family_config(self, family_id: str, data: dict) -> dict:
        return await self._admin("PUT", f"/admin/vdf/families/{family_id}", json=data)

    # ==================== Contributions ====================

    async def record_contribution(self, data: dict) -> dict:
        return await self._admin("POST", "/admin/vdf/contributions", json=data)

    async def record_bulk_contributions(self, data: dict) -> Any:
        """Save a family's year of amounts in one call; amount 0 deletes that month."""
        return await self._admin("POST", "/admin/vdf/contributions/bulk", json=data)

    async def get_family_contributions(self, family_config_id: str, year: Optional[int] = None) -> list:
        return await self._admin(
            "GET", f"/admin/vdf/contributions/family/{family_config_id}", params={"year": _year(year)}
        )

    async def get_monthly_contribution_matrix(self, year: Optional[int] = None) -> dict:
        return await self._admin("GET", "/admin/vdf/contributions/monthly-matrix", params={"year": _year(year)})

    async def get_public_monthly_matrix(self, year: Optional[int] = None) -> dict:
        return await self.client.get("/public/vdf/contributions/monthly-matrix", params={"year": _year(year)})

    async def fetch_matrix(self, year: Optional[int] = None, public: bool = False) -> ContributionMatrix:
        """Fetch the matrix and convert it to the canonical cell shape."""
        year = _year(year)
        if public:
            body = await self.get_public_monthly_matrix(year)
        else:
            body = await self.get_monthly_contribution_matrix(year)
        return normalize_matrix(body, year)

    # ==================== Exemptions ====================

    async def create_exemption(self, family_config_id: str, year: int, month: int, reason: str = "") -> Any:
        body = {"familyConfigId": family_config_id, "year": year, "month": month}
        if reason:
            body["reason"] = reason
        return await self._admin("POST", "/admin/vdf/family-exemptions", json=body)

    async def delete_exemption(self, family_config_id: str, year: int, month: int) -> Any:
        return await self._admin(
            "DELETE",
            "/admin/vdf/family-exemptions",
            params={"familyConfigId": family_config_id, "year": year, "month": month},
        )

    async def set_exemption(self, family_config_id: str, year: int, month: int, exempt: bool) -> Any:
        """Create or delete the exemption for one month."""
        if exempt:
            return await self.create_exemption(family_config_id, year, month)
        return await self.delete_exemption(family_config_id, year, month)

    # ==================== Expenses ====================

    async def create_expense(self, data: dict) -> dict:
        return await self._admin("POST", "/admin/vdf/expenses", json=data)

    async def update_expense(self, expense_id: str, data: dict) -> dict:
        return await self._admin("PUT", f"/admin/vdf/expenses/{expense_id}", json=data)

    async def delete_expense(self, expense_id: str) -> Any:
        return await self._admin("DELETE", f"/admin/vdf/expenses/{expense_id}")

    async def get_all_expenses(self, page: int = 0, size: int = 20) -> Any:
        return await self._admin("GET", "/admin/vdf/expenses", params={"page": page, "size": size})

    async def get_expenses_by_category(self, category_id: str) -> list:
        return await self._admin("GET", f"/admin/vdf/expenses/category/{category_id}")

    async def get_expense_categories(self) -> list:
        return await self._admin("GET", "/admin/vdf/expense-categories")

    # ==================== Deposits ====================

    async def get_public_deposits(self, year: Optional[int] = None) -> list:
        return await self.client.get("/public/vdf/deposits", params={"year": year})

    async def get_deposit_categories(self) -> list:
        return await self._admin("GET", "/admin/vdf/deposit-categories")

    async def create_deposit(self, data: dict) -> dict:
        return await self._admin("POST", "/admin/vdf/deposits", json=data)

    async def update_deposit(self, deposit_id: str, data: dict) -> dict:
        return await self._admin("PUT", f"/admin/vdf/deposits/{deposit_id}", json=data)

    async def delete_deposit(self, deposit_id: str) -> Any:
        return await self._admin("DELETE", f"/admin/vdf/deposits/{deposit_id}")

    # ==================== Reports & Summary ====================

    async def get_summary(self) -> dict:
        return await self._admin("GET", "/admin/vdf/summary")

    async def get_monthly_report(self, year: Optional[int] = None) -> dict:
        return await self._admin("GET", "/admin/vdf/reports/monthly", params={"year": _year(year)})

    # ==================== Public APIs ====================

    async def get_public_summary(self) -> dict:
        return await self.client.get("/public/vdf/summary")

    async def get_public_expenses(self, page: int = 0, size: int = 20) -> Any:
        return await self.client.get("/public/vdf/expenses", params={"page": page, "size": size})

    # ==================== Member APIs ====================

    async def get_my_contributions(self, year: Optional[int] = None) -> list:
        return await self.client.get(
            "/member/vdf/my-contributions", params={"year": _year(year)}, token=self.member.token
        )

    async def get_my_status(self) -> dict:
        return await self.client.get("/member/vdf/my-status", token=self.member.token)
