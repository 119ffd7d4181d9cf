"""Login, member and document form validation."""

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

PHONE_PATTERN = re.compile(r"^\d{10}$")
PIN_PATTERN = re.compile(r"^\d{4}$")
ALLOWED_DOCUMENT_TYPES = ("application/pdf",)


@dataclass
class LoginForm:
    """Unified login: admins may use a password or a PIN, members only a PIN."""
    phone: str = ""
    pin: str = ""
    password: str = ""
    as_admin: bool = False

    def validate(self) -> Dict[str, str]:
        errors = {}
        if not self.phone.strip():
            errors["phone"] = "Phone number is required"
        if self.as_admin:
            if not self.pin.strip() and not self.password:
                errors["password"] = "Enter a password or PIN"
        elif not self.pin.strip():
            errors["pin"] = "PIN is required"
        return errors

    def credentials(self) -> Dict[str, Optional[str]]:
        return {
            "phone": self.phone.strip(),
            "pin": self.pin.strip() or None,
            "password": self.password or None,
        }


@dataclass
class MemberForm:
    """Create/edit a bank member. A PIN is only required when creating."""
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    pin: str = ""
    role: str = "MEMBER"
    is_operator: bool = False
    is_new: bool = True

    @classmethod
    def from_member(cls, member: Dict[str, Any]) -> "MemberForm":
        return cls(
            first_name=member.get("firstName") or "",
            last_name=member.get("lastName") or "",
            phone=member.get("phone") or "",
            role=member.get("role") or "MEMBER",
            is_operator=bool(member.get("isOperator")),
            is_new=False,
        )

    def validate(self) -> Dict[str, str]:
        errors = {}
        if not self.first_name.strip():
            errors["firstName"] = "First name is required"
        if not PHONE_PATTERN.match(self.phone.strip()):
            errors["phone"] = "Phone must be 10 digits"
        if self.is_new and not PIN_PATTERN.match(self.pin.strip()):
            errors["pin"] = "PIN must be 4 digits"
        elif self.pin.strip() and not PIN_PATTERN.match(self.pin.strip()):
            errors["pin"] = "PIN must be 4 digits"
        return errors

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "firstName": self.first_name.strip(),
            "lastName": self.last_name.strip(),
            "phone": self.phone.strip(),
            "role": self.role,
            "isOperator": self.is_operator,
        }
        if self.pin.strip():
            payload["pin"] = self.pin.strip()
        return payload


@dataclass
class ChangePinForm:
    old_pin: str = ""
    new_pin: str = ""
    confirm_pin: str = ""

    def validate(self) -> Dict[str, str]:
        errors = {}
        if not self.old_pin.strip():
            errors["oldPin"] = "Current PIN is required"
        if not PIN_PATTERN.match(self.new_pin.strip()):
            errors["newPin"] = "New PIN must be 4 digits"
        elif self.new_pin.strip() == self.old_pin.strip():
            errors["newPin"] = "New PIN must differ from the current PIN"
        if self.confirm_pin.strip() != self.new_pin.strip():
            errors["confirmPin"] = "PINs do not match"
        return errors


@dataclass
class DocumentUploadForm:
    """Only images and PDF files can be attached to a member."""
    category_id: str = ""
    filename: str = ""
    content_type: str = ""
    notes: str = ""

    def validate(self) -> Dict[str, str]:
        errors = {}
        if not self.category_id:
            errors["categoryId"] = "Please select a document category"
        if not self.filename:
            errors["file"] = "Please select a file to upload"
        elif not is_allowed_document(self.content_type):
            errors["file"] = "Only JPG and PDF files are allowed"
        return errors


def is_allowed_document(content_type: Optional[str]) -> bool:
    if not content_type:
        return False
    return content_type.startswith("image/") or content_type in ALLOWED_DOCUMENT_TYPES
