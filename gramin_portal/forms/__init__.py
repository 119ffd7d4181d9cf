"""Client-side form validation and payload shaping."""

from gramin_portal.forms.member_forms import (
    ChangePinForm,
    DocumentUploadForm,
    LoginForm,
    MemberForm,
)
from gramin_portal.forms.vdf_forms import (
    BulkContributionForm,
    DepositForm,
    ExpenseForm,
    FamilyConfigForm,
)

__all__ = [
    "BulkContributionForm",
    "ChangePinForm",
    "DepositForm",
    "DocumentUploadForm",
    "ExpenseForm",
    "FamilyConfigForm",
    "LoginForm",
    "MemberForm",
]
