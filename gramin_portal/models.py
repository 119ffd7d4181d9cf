"""Data models for the portal.

The backend is authoritative for everything here; these are transient
client-side views of its JSON bodies. Fields use snake_case in Python and
accept the backend's camelCase names through aliases.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for models parsed from backend bodies."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class AdminSession(BaseModel):
    """Admin (or admin-issued operator) session."""

    token: str
    username: Optional[str] = None
    role: Optional[str] = None
    member_id: Optional[str] = None
    is_operator: bool = False


class MemberSession(BaseModel):
    """Member (or operator) session."""

    token: str
    member_id: Optional[str] = None
    member_name: Optional[str] = None
    is_operator: bool = False


class Member(ApiModel):
    """Bank member record."""

    id: str
    first_name: Optional[str] = ""
    last_name: Optional[str] = ""
    phone: Optional[str] = ""
    role: Optional[str] = None
    pin: Optional[str] = None
    is_active: Optional[bool] = True
    is_blocked: Optional[bool] = False
    is_operator: Optional[bool] = False
    blocked_until: Optional[datetime] = None
    failed_login_attempts: Optional[int] = 0

    @property
    def full_name(self) -> str:
        """Return full name."""
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class FamilyConfig(ApiModel):
    """VDF per-family contribution configuration."""

    id: str
    member_id: Optional[str] = None
    member_name: Optional[str] = None
    family_head_name: Optional[str] = ""
    monthly_amount: Optional[float] = 0.0
    is_contribution_enabled: Optional[bool] = False
    effective_from: Optional[str] = None
    notes: Optional[str] = None
    total_paid_months: Optional[int] = 0
    total_amount_paid: Optional[float] = 0.0
    total_amount_due: Optional[float] = 0.0
    total_paid_all_time: Optional[float] = None
    total_due_all_time: Optional[float] = None

    @property
    def paid_display(self) -> float:
        """All-time paid when reported, this year's otherwise."""
        return self.total_paid_all_time or self.total_amount_paid or 0.0

    @property
    def due_display(self) -> float:
        return self.total_due_all_time or self.total_amount_due or 0.0


class Document(ApiModel):
    """Uploaded member document metadata."""

    id: str
    category_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("documentCategoryName", "categoryName", "category_name")
    )
    file_name: str = Field(
        default="", validation_alias=AliasChoices("fileName", "file_name", "originalFileName")
    )
    member_id: Optional[str] = None
    member_name: Optional[str] = None
    file_size: Optional[int] = None
    content_type: Optional[str] = None
    uploaded_at: Optional[datetime] = None
    notes: Optional[str] = None

    @property
    def is_image(self) -> bool:
        return bool(self.content_type and self.content_type.startswith("image/"))


class Notification(ApiModel):
    """VDF notification shown to a member."""

    id: str
    type: Optional[str] = None
    title: Optional[str] = ""
    title_bn: Optional[str] = None
    message: Optional[str] = ""
    message_bn: Optional[str] = None
    is_read: Optional[bool] = False
    created_at: Optional[datetime] = None

    def localized(self, language: str = "en") -> tuple:
        """Title and message in the display language, falling back to English."""
        if language == "bn":
            return self.title_bn or self.title or "", self.message_bn or self.message or ""
        return self.title or "", self.message or ""


class ActiveSession(ApiModel):
    """A server-side login session listed on the session management screen."""

    id: str
    user_id: Optional[str] = None
    user_type: Optional[str] = None
    user_name: Optional[str] = Field(default=None, validation_alias=AliasChoices("username", "userName", "user_name"))
    device_info: Optional[str] = None
    ip_address: Optional[str] = None
    login_time: Optional[datetime] = None
    last_activity: Optional[datetime] = None
