"""CLI: ready-admin sessions list|set-link|browse"""

import asyncio
import json
from typing import Optional

import click
from rich.console import Console

from ready_admin.config import load_config
from ready_admin.render import render_view
from ready_admin.view import DirectoryView, ModalOpen, PageState

console = Console()

BROWSE_HELP = (
    "Type to search the loaded page. Commands: /page N, /edit ID, /link URL, "
    "/save, /cancel, /refresh, /search [term], /quit"
)


def _get_client():
    from ready_admin.cli.main import _get_client
    return _get_client()


def _run(coro):
    from ready_admin.cli.main import _run
    return _run(coro)


def _page_size(option: Optional[int]) -> int:
    return option or load_config().page_size


@click.group()
def sessions():
    """Session directory."""


@sessions.command("list")
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--page-size", default=None, type=int)
@click.option("--search", default="", help="Filter the loaded page by user, listener or date.")
@click.option("--layout", type=click.Choice(["auto", "table", "cards"]), default="auto", show_default=True)
@click.option("--json-output", "--json", is_flag=True)
def sessions_list(page, page_size, search, layout, json_output):
    """List one page of sessions."""

    async def _list():
        client = _get_client()
        try:
            view = client.directory(page_size=_page_size(page_size))
            view.paginator.go_to(page)
            with console.status("Loading sessions..."):
                await view.load()
            view.set_search(search)
        finally:
            await client.close()
        return view

    view = _run(_list())
    if view.page_state is PageState.ERROR:
        console.print(f"[red]{view.error}[/red]")
        raise SystemExit(1)
    if json_output:
        click.echo(json.dumps({
            "page": view.paginator.page,
            "page_size": view.paginator.page_size,
            "total": view.paginator.total,
            "sessions": [r.model_dump(mode="json", by_alias=True) for r in view.visible],
        }, indent=2))
        return
    console.print(render_view(view, console.width, None if layout == "auto" else layout))


@sessions.command("set-link")
@click.argument("session_id")
@click.argument("link")
def sessions_set_link(session_id, link):
    """Set the meeting link of a session."""

    async def _set_link():
        client = _get_client()
        try:
            with console.status("Updating meeting link..."):
                await client.sessions.update_meeting_link(session_id, link)
        finally:
            await client.close()
        console.print(f"[green]Meeting link updated for {session_id}.[/green]")

    _run(_set_link())


async def _handle(view: DirectoryView, line: str) -> bool:
    """Apply one REPL line to the view. Returns False when the user quits."""
    command, _, arg = line.strip().partition(" ")
    arg = arg.strip()

    if not command.startswith("/"):
        view.set_search(line.strip())
    elif command in ("/quit", "/exit"):
        return False
    elif command == "/search":
        view.set_search(arg)
    elif command == "/page":
        if not arg.isdigit() or int(arg) < 1:
            console.print("[yellow]Usage: /page N[/yellow]")
        else:
            await view.go_to(int(arg))
    elif command == "/refresh":
        await view.load()
    elif command == "/edit":
        try:
            view.open_editor(arg)
        except KeyError:
            console.print(f"[yellow]No session {arg!r} on this page.[/yellow]")
    elif command == "/link":
        if not isinstance(view.modal, ModalOpen):
            console.print("[yellow]Open the editor first: /edit ID[/yellow]")
        else:
            view.set_draft(arg)
    elif command == "/save":
        if not isinstance(view.modal, ModalOpen):
            console.print("[yellow]Nothing to save.[/yellow]")
        elif await view.submit_link():
            console.print("[green]Meeting link updated.[/green]")
    elif command == "/cancel":
        view.cancel_editor()
    else:
        console.print(f"[yellow]{BROWSE_HELP}[/yellow]")
    return True


@sessions.command("browse")
@click.option("--page-size", default=None, type=int)
def sessions_browse(page_size):
    """Interactive sessions directory."""

    async def _browse():
        client = _get_client()
        view = client.directory(page_size=_page_size(page_size))
        try:
            await view.load()
            console.print(f"[cyan]{BROWSE_HELP}[/cyan]\n")
            while True:
                console.print(render_view(view, console.width))
                try:
                    line = await asyncio.to_thread(click.prompt, "sessions", default="", show_default=False)
                except (KeyboardInterrupt, EOFError, click.Abort):
                    break
                if not await _handle(view, line):
                    break
        finally:
            view.close()
            await client.close()

    _run(_browse())
