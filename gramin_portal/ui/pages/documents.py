"""Document listings shared by the member and admin document screens."""

from typing import Any, Awaitable, Callable, Iterable, List, Optional

from nicegui import ui

from gramin_portal.models import Document
from gramin_portal.utils.formatting import format_date, format_file_size


def document_url(body: Any) -> Optional[str]:
    """URL from a document-url response, which is either a string or ``{"url": ...}``."""
    if isinstance(body, dict):
        return body.get("url")
    if isinstance(body, str) and body:
        return body
    return None


def parse_documents(raw: Iterable[dict]) -> List[Document]:
    return [Document.model_validate(item) for item in raw or []]


def document_table(
    documents: List[Document],
    on_view: Callable[[str], Awaitable[None]],
    on_delete: Optional[Callable[[str], Awaitable[None]]] = None,
    on_download: Optional[Callable[[str], Awaitable[None]]] = None,
    show_member: bool = False,
):
    if not documents:
        ui.label("No documents found").classes("text-gray-500 p-4")
        return None

    columns = [
        {"name": "category", "label": "Category", "field": "category", "sortable": True, "align": "left"},
        {"name": "file", "label": "File", "field": "file", "align": "left"},
        {"name": "size", "label": "Size", "field": "size", "align": "right"},
        {"name": "uploaded", "label": "Uploaded", "field": "uploaded", "sortable": True, "align": "left"},
        {"name": "notes", "label": "Notes", "field": "notes", "align": "left"},
        {"name": "actions", "label": "Actions", "field": "actions", "align": "center"},
    ]
    if show_member:
        columns.insert(0, {"name": "member", "label": "Member", "field": "member", "sortable": True, "align": "left"})

    rows = [
        {
            "id": doc.id,
            "member": doc.member_name or "-",
            "category": doc.category_name or "-",
            "file": doc.file_name or "-",
            "size": format_file_size(doc.file_size),
            "uploaded": format_date(doc.uploaded_at),
            "notes": doc.notes or "-",
        }
        for doc in documents
    ]

    buttons = ['<q-btn flat dense size="sm" icon="visibility" @click="$parent.$emit(\'view\', props.row)" />']
    if on_download:
        buttons.append('<q-btn flat dense size="sm" icon="download" @click="$parent.$emit(\'download\', props.row)" />')
    if on_delete:
        buttons.append(
            '<q-btn flat dense size="sm" icon="delete" color="negative" '
            '@click="$parent.$emit(\'delete\', props.row)" />'
        )

    table = ui.table(columns=columns, rows=rows, row_key="id").classes("w-full")
    table.add_slot("body-cell-actions", f'<q-td :props="props">{"".join(buttons)}</q-td>')
    table.on("view", lambda e: on_view(e.args["id"]))
    if on_download:
        table.on("download", lambda e: on_download(e.args["id"]))
    if on_delete:
        table.on("delete", lambda e: on_delete(e.args["id"]))
    return table


def show_document(url: str, title: str = "Document") -> None:
    """Open a document URL in a dialog, with a link for a new tab."""
    with ui.dialog() as dialog, ui.card().classes("p-4 w-[80vw] h-[80vh]"):
        with ui.row().classes("w-full justify-between items-center"):
            ui.label(title).classes("text-lg font-bold")
            with ui.row().classes("gap-2"):
                ui.link("Open in new tab", url, new_tab=True)
                ui.button(icon="close", on_click=dialog.close).props("flat dense")
        ui.element("iframe").props(f'src="{url}"').classes("w-full flex-grow border-0")
    dialog.open()
