"""Formatting and filtering helpers shared by the views."""

from gramin_portal.utils.filters import filter_by_term, filter_families
from gramin_portal.utils.formatting import format_currency, format_date, format_number

__all__ = ["filter_by_term", "filter_families", "format_currency", "format_date", "format_number"]
