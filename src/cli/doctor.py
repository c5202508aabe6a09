"""Doctor command for configuration and connectivity diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import ClientSettings, get_user_env_file, write_user_env_vars
from core.domain.credentials import AccessTokenType

app = typer.Typer(no_args_is_help=True, help="Configuration checks and token setup.")

_console = Console()


async def _check_http(url: str, settings: ClientSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or type(exc).__name__


def _mask(token: str) -> str:
    if len(token) <= 8:
        return "*" * len(token)
    return f"{token[:4]}…{token[-4:]}"


@app.command()
def run() -> None:
    """Show the effective configuration and check that the API host answers."""

    settings = ClientSettings()
    base_url = settings.resolved_base_url()

    table = Table(title="rideshare-sdk Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.access_token:
        table.add_row("Access token", "OK", f"{settings.token_type.value}: {_mask(settings.access_token)}")
    else:
        table.add_row("Access token", "MISSING", "Set RIDESHARE_ACCESS_TOKEN or run `doctor setup-token`")
    table.add_row("Base URL", "OK", base_url)
    table.add_row("API version", "OK", settings.api_version)
    timeout = settings.http_timeout_seconds
    table.add_row("Timeout", "OK", "transport default" if timeout is None else f"{timeout}s")

    ok_http, detail_http = asyncio.run(_check_http(base_url, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)
    _console.print(f"[dim]User config file:[/dim] {get_user_env_file()}")

    if not settings.access_token or not ok_http:
        raise typer.Exit(code=1)


@app.command(name="setup-token")
def setup_token() -> None:
    """Interactive token setup (stores config in the user config .env)."""

    token_type = typer.prompt(
        "Token type (client/server)",
        default=AccessTokenType.CLIENT.value,
        show_default=True,
    ).strip().lower()
    if token_type not in {t.value for t in AccessTokenType}:
        raise typer.BadParameter("token type must be 'client' or 'server'")

    token = typer.prompt("Access token", hide_input=True, confirmation_prompt=False).strip()
    if not token:
        raise typer.BadParameter("token is required")

    sandbox = typer.confirm("Use the sandbox host?", default=False)

    env_path = write_user_env_vars(
        {
            "RIDESHARE_TOKEN_TYPE": token_type,
            "RIDESHARE_ACCESS_TOKEN": token,
            "RIDESHARE_SANDBOX": "true" if sandbox else "false",
        }
    )

    _console.print(f"[green]Saved token config to:[/green] {env_path}")
