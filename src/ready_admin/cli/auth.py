"""CLI: ready-admin auth login|status|logout"""

from typing import Optional

import click
from rich.console import Console

from ready_admin.config import clear_credentials, load_config, save_config

console = Console()


def _new_client(base_url: str):
    from ready_admin.cli.main import _new_client
    return _new_client(base_url)


def _run(coro):
    from ready_admin.cli.main import _run
    return _run(coro)


@click.group()
def auth():
    """Authentication commands."""


@auth.command("login")
@click.option("--base-url", default=None, help="Ready backend base URL")
@click.option("--email", default=None)
@click.option("--password", default=None)
def auth_login(base_url: Optional[str], email: Optional[str], password: Optional[str]):
    """Log in with admin email and password."""

    async def _login():
        cfg = load_config()
        url = base_url or cfg.base_url
        client = _new_client(url)
        try:
            with console.status("Signing in..."):
                result = await client.auth.login(user_email, user_password)
        finally:
            await client.close()
        save_config(cfg.model_copy(update={
            "access_token": result["accessToken"], "email": user_email, "base_url": url,
        }))
        console.print(f"[green]Logged in as {user_email}[/green]")

    user_email = email or click.prompt("Email")
    user_password = password or click.prompt("Password", hide_input=True)
    _run(_login())


@auth.command("status")
def auth_status():
    """Show current auth status."""
    cfg = load_config()
    if cfg.access_token:
        console.print(f"[green]Logged in[/green] as {cfg.email or 'unknown'} ({cfg.base_url})")
    else:
        console.print("[yellow]Not logged in. Run `ready-admin auth login`.[/yellow]")


@auth.command("logout")
def auth_logout():
    """Clear saved credentials."""
    clear_credentials()
    console.print("[green]Logged out.[/green]")
