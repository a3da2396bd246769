"""
Rich renderings of the directory view.

Everything here is a pure function of a view snapshot: no I/O, no state.
Wide terminals get the table, narrow ones the cards.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from ready_admin.filtering import format_session_date
from ready_admin.models.session import SessionRecord, SessionStatus
from ready_admin.pagination import Paginator
from ready_admin.view import DirectoryView, Modal, ModalOpen, PageState

TABLE_MIN_WIDTH = 100

STATUS_STYLES = {
    SessionStatus.SCHEDULED: "bold blue",
    SessionStatus.COMPLETED: "dim",
    SessionStatus.CANCELLED: "bold red",
}


def select_layout(width: int) -> str:
    return "table" if width >= TABLE_MIN_WIDTH else "cards"


def format_session_time(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return f"{format_session_date(value)} {value:%H:%M}"


def status_badge(status: SessionStatus) -> Text:
    return Text(status.value, style=STATUS_STYLES.get(status, ""))


def record_actions(record: SessionRecord) -> Text:
    """`edit` always; `open link` only when the record has a link."""
    actions = Text("edit", style="yellow")
    if record.meeting_link:
        actions.append("  ")
        actions.append("open link", style=Style(color="blue", link=record.meeting_link))
    return actions


def _names(record: SessionRecord) -> tuple[str, str]:
    user = record.user.name if record.user else ""
    listener = record.listener.name if record.listener else ""
    return user, listener


def render_table(records: Iterable[SessionRecord]) -> Table:
    table = Table(expand=True)
    table.add_column("ID", style="bold", no_wrap=True)
    table.add_column("User")
    table.add_column("Listener")
    table.add_column("Time", no_wrap=True)
    table.add_column("Topic")
    table.add_column("Status")
    table.add_column("Meeting link", overflow="fold")
    table.add_column("Actions", no_wrap=True)
    for record in records:
        user, listener = _names(record)
        table.add_row(
            record.id,
            user,
            listener,
            format_session_time(record.time),
            record.topic,
            status_badge(record.status),
            record.meeting_link or "",
            record_actions(record),
        )
    return table


def render_card(record: SessionRecord) -> Panel:
    user, listener = _names(record)
    header = Text(user or "(unknown user)", style="bold")
    header.append("  ")
    header.append_text(status_badge(record.status))

    body = Text()
    body.append(f"{format_session_date(record.time)}\n", style="dim")
    body.append(f"Listener: {listener}\n")
    body.append(f"Time:     {format_session_time(record.time)}\n")
    body.append(f"Topic:    {record.topic}\n")
    if record.meeting_link:
        body.append(f"Link:     {record.meeting_link}\n")
    body.append_text(record_actions(record))
    return Panel(Group(header, body), title=record.id, title_align="left")


def render_cards(records: Iterable[SessionRecord]) -> Group:
    return Group(*(render_card(r) for r in records))


def render_page_strip(paginator: Paginator) -> Optional[Text]:
    """Page buttons 1..page_count, current one highlighted. None when total is 0."""
    numbers = paginator.page_numbers()
    if not numbers:
        return None
    strip = Text("Pages: ")
    for n in numbers:
        if n == paginator.page:
            strip.append(f"[{n}]", style="bold blue")
        else:
            strip.append(f" {n} ")
        strip.append(" ")
    strip.rstrip()
    return strip


def render_modal(modal: Modal) -> Optional[Panel]:
    if not isinstance(modal, ModalOpen):
        return None
    field = Text("Meeting link: ")
    field.append(modal.draft or "Enter meeting link", style="underline" if modal.draft else "dim italic")
    actions = Text()
    if modal.submitting:
        actions.append("Updating...", style="dim")
    elif modal.can_submit:
        actions.append("/save Update", style="bold blue")
    actions.append("   ")
    actions.append("/cancel Cancel", style="dim")
    return Panel(
        Group(field, actions),
        title=f"Update Meeting Link: {modal.target_id}",
        border_style="blue",
    )


def render_view(view: DirectoryView, width: int, layout: Optional[str] = None) -> RenderableType:
    parts: list[RenderableType] = [Text("Sessions", style="bold")]
    parts.append(Text(f"Search: {view.search}" if view.search else "Search sessions...", style="dim"))

    if view.page_state is PageState.LOADING:
        parts.append(Text("Loading..."))
    elif view.page_state is PageState.ERROR:
        parts.append(Text(view.error or "", style="red"))
    else:
        if not view.visible:
            parts.append(Text("No sessions to show.", style="dim"))
        elif (layout or select_layout(width)) == "table":
            parts.append(render_table(view.visible))
        else:
            parts.append(render_cards(view.visible))
        modal = render_modal(view.modal)
        if modal is not None:
            parts.append(modal)

    strip = render_page_strip(view.paginator) if view.page_state is not PageState.ERROR else None
    if strip is not None:
        parts.append(strip)
    if view.notice is not None:
        parts.append(Text(view.notice.text, style="bold red" if view.notice.level == "error" else "yellow"))
    return Group(*parts)
