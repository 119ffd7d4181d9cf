"""HTTP access to the portal backend."""

from gramin_portal.api.client import ApiClient
from gramin_portal.api.errors import ApiError, error_message

__all__ = ["ApiClient", "ApiError", "error_message"]
