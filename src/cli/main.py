"""CLI `rideshare` (Typer + Rich).

Cada comando llama a un método de `RiderService` y presenta el
`Envelope`: tabla en caso de éxito, panel de error (exit code 1) en caso
de fallo de la API. Un fallo de transporte termina con exit code 2.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import typer
from pydantic import BaseModel
from rich.console import Console, RenderableType
from rich.logging import RichHandler

from adapters.rider_service import RiderService
from cli import doctor
from cli.ui_components import (
    build_activity_table,
    build_error_panel,
    build_profile_table,
    build_promotion_applied_table,
    build_promotion_table,
    build_request_map_table,
    build_request_table,
)
from core.config import ClientSettings
from core.domain.envelope import Envelope, Failure, Success
from core.errors import TransportFault

app = typer.Typer(no_args_is_help=True, help="Rider API client (trips, promotions, profile, history).")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@dataclass
class CliOptions:
    json_output: bool = False
    sandbox: bool = False


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def build_service(options: CliOptions) -> RiderService:
    settings = ClientSettings()
    if options.sandbox:
        settings = settings.model_copy(update={"sandbox": True})
    return RiderService.from_settings(settings)


def _envelope_payload(envelope: Envelope[Any]) -> dict[str, Any]:
    if isinstance(envelope, Failure):
        return {"ok": False, "error": envelope.error.to_dict()}
    value = envelope.value
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    return {"ok": True, "value": value}


def _execute(
    ctx: typer.Context,
    call: Callable[[RiderService], Awaitable[Envelope[Any]]],
    render: Callable[[Any], RenderableType],
) -> None:
    options: CliOptions = ctx.obj or CliOptions()
    try:
        service = build_service(options)
    except ValueError as exc:
        _err_console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=2) from exc

    async def _run() -> Envelope[Any]:
        async with service:
            return await call(service)

    try:
        envelope = asyncio.run(_run())
    except TransportFault as exc:
        _err_console.print(f"[red]Transport failure:[/red] {exc}")
        raise typer.Exit(code=2) from exc

    if options.json_output:
        typer.echo(json.dumps(_envelope_payload(envelope), ensure_ascii=False, indent=2))
        if isinstance(envelope, Failure):
            raise typer.Exit(code=1)
        return

    match envelope:
        case Success(value=value):
            _console.print(render(value))
        case Failure(error=error):
            _console.print(build_error_panel(error))
            raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Print the raw result as JSON."),
    sandbox: bool = typer.Option(False, "--sandbox", help="Use the sandbox API host."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP calls (DEBUG)."),
) -> None:
    try:
        level = "DEBUG" if verbose else ClientSettings().log_level
    except ValueError as exc:
        _err_console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    _configure_logging(level)
    ctx.obj = CliOptions(json_output=json_output, sandbox=sandbox)


@app.command()
def profile(ctx: typer.Context) -> None:
    """Show the authorized rider's profile."""

    _execute(ctx, lambda s: s.get_user_profile(), build_profile_table)


@app.command()
def history(
    ctx: typer.Context,
    offset: int = typer.Option(0, min=0, help="Results offset."),
    limit: int = typer.Option(5, min=1, max=50, help="Results limit."),
) -> None:
    """List the rider's past trips."""

    _execute(ctx, lambda s: s.get_user_activity(offset, limit), build_activity_table)


@app.command(name="request-ride")
def request_ride(
    ctx: typer.Context,
    product_id: str = typer.Argument(..., help="Product ID."),
    start_latitude: float = typer.Argument(...),
    start_longitude: float = typer.Argument(...),
    end_latitude: float = typer.Argument(...),
    end_longitude: float = typer.Argument(...),
    surge_confirmation_id: str | None = typer.Option(
        None,
        "--surge-confirmation-id",
        help="Surge pricing confirmation ID.",
    ),
) -> None:
    """Request a pickup."""

    _execute(
        ctx,
        lambda s: s.request_ride(
            product_id,
            start_latitude,
            start_longitude,
            end_latitude,
            end_longitude,
            surge_confirmation_id,
        ),
        build_request_table,
    )


@app.command(name="request-details")
def request_details(ctx: typer.Context, request_id: str = typer.Argument(...)) -> None:
    """Show the status of a ride request."""

    _execute(ctx, lambda s: s.get_request_details(request_id), build_request_table)


@app.command(name="request-map")
def request_map(ctx: typer.Context, request_id: str = typer.Argument(...)) -> None:
    """Show the map link for a ride request."""

    _execute(ctx, lambda s: s.get_request_map(request_id), build_request_map_table)


@app.command()
def cancel(ctx: typer.Context, request_id: str = typer.Argument(...)) -> None:
    """Cancel a ride request."""

    _execute(ctx, lambda s: s.cancel_request(request_id), lambda _: f"Request {request_id} cancelled.")


@app.command()
def promotion(
    ctx: typer.Context,
    start_latitude: float = typer.Argument(...),
    start_longitude: float = typer.Argument(...),
    end_latitude: float = typer.Argument(...),
    end_longitude: float = typer.Argument(...),
) -> None:
    """Show the new-rider promotion available for a trip."""

    _execute(
        ctx,
        lambda s: s.get_promotion(start_latitude, start_longitude, end_latitude, end_longitude),
        build_promotion_table,
    )


@app.command(name="apply-promo")
def apply_promo(ctx: typer.Context, promo_code: str = typer.Argument(...)) -> None:
    """Apply a promotion code to the rider's account."""

    _execute(ctx, lambda s: s.apply_user_promotion(promo_code), build_promotion_applied_table)


def run() -> None:
    app()
