"""
Ready admin CLI — `ready-admin` command.

Commands:
  ready-admin auth login             Email + password login, token saved locally
  ready-admin auth status|logout     Inspect or forget the saved token
  ready-admin sessions list          One page of sessions, optionally searched
  ready-admin sessions set-link      Set one session's meeting link
  ready-admin sessions browse        Interactive directory (search, page, edit)
"""

import asyncio
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from ready_admin import __version__
from ready_admin.client import AsyncReadyAdmin
from ready_admin.config import load_config
from ready_admin.errors import ReadyAdminError
from ready_admin.log import setup_logging

console = Console()


def _new_client(base_url: str, access_token: Optional[str] = None) -> AsyncReadyAdmin:
    return AsyncReadyAdmin(access_token=access_token, base_url=base_url)


def _get_client() -> AsyncReadyAdmin:
    cfg = load_config()
    if not cfg.access_token:
        console.print("[red]Not logged in. Run `ready-admin auth login` first.[/red]")
        raise SystemExit(1)
    return _new_client(cfg.base_url, cfg.access_token)


def _run(coro):
    """Run a command coroutine; API errors become a red message and exit 1."""
    try:
        return asyncio.run(coro)
    except ReadyAdminError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)


@click.group()
@click.version_option(__version__)
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR (default from config).")
def main(log_level: Optional[str]):
    """Ready admin CLI: manage listener sessions."""
    setup_logging(log_level or load_config().log_level)


# Register subcommands from separate modules
from ready_admin.cli.auth import auth  # noqa: E402
from ready_admin.cli.sessions import sessions  # noqa: E402

main.add_command(auth)
main.add_command(sessions)


if __name__ == "__main__":
    main()
