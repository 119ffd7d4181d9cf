"""User-facing feedback: error toasts, confirmations and small display helpers."""

import logging
from typing import Awaitable, Callable, Dict, Optional

from nicegui import ui

from gramin_portal.api.errors import error_message

logger = logging.getLogger(__name__)


def report_error(exc: BaseException, fallback: str = "Something went wrong") -> str:
    """Log a failed action and tell the user; returns the message shown."""
    message = error_message(exc, fallback)
    logger.exception(f"{fallback}: {message}", exc_info=exc)
    ui.notify(message, type="negative")
    return message


def show_errors(errors: Dict, labels: Optional[Dict] = None) -> None:
    """Show form validation errors as one warning toast."""
    if not errors:
        return
    labels = labels or {}
    lines = [f"{labels.get(key, key)}: {msg}" if key != "general" else msg for key, msg in errors.items()]
    ui.notify("; ".join(lines), type="warning", multi_line=True)


def confirm(message: str, on_confirm: Callable[[], Awaitable[None]], title: str = "Please confirm",
            confirm_label: str = "Confirm") -> None:
    """Open a confirmation dialog and await ``on_confirm`` when accepted."""
    with ui.dialog() as dialog, ui.card().classes("p-6 min-w-[360px]"):
        ui.label(title).classes("text-lg font-bold")
        ui.label(message).classes("text-sm text-gray-700")

        async def accept():
            dialog.close()
            await on_confirm()

        with ui.row().classes("w-full justify-end gap-2 mt-4"):
            ui.button("Cancel", on_click=dialog.close).props("flat")
            ui.button(confirm_label, on_click=accept).props("color=negative")

    dialog.open()


def info_field(label: str, value) -> None:
    with ui.column().classes("gap-1"):
        ui.label(label).classes("text-xs font-bold text-gray-500 uppercase")
        ui.label(str(value) if value not in (None, "") else "-").classes("text-sm")


def stat_card(label: str, value: str, color: str = "blue") -> None:
    with ui.card().classes(f"p-4 bg-{color}-50 min-w-[160px]"):
        ui.label(label).classes("text-xs text-gray-500 uppercase")
        ui.label(value).classes(f"text-xl font-bold text-{color}-700")


def read_only_banner() -> None:
    with ui.row().classes("w-full p-2 bg-yellow-50 rounded mb-2"):
        ui.icon("visibility")
        ui.label("Read-only access: changes are disabled for operators").classes("text-sm text-yellow-800")
