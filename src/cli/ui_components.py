"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.envelope import ErrorInfo
from core.domain.models import (
    Location,
    Promotion,
    PromotionApplied,
    Request,
    RequestDetails,
    RequestMap,
    UserActivity,
    UserProfile,
)


def _fmt(value: Any) -> str:
    if value is None:
        return "-"
    return str(value)


def _fmt_location(location: Location | None) -> str:
    if location is None:
        return "-"
    text = f"{location.latitude}, {location.longitude}"
    if location.eta is not None:
        text += f" (eta {location.eta} min)"
    return text


def _fmt_epoch(value: int | None) -> str:
    if value is None:
        return "-"
    return datetime.fromtimestamp(value, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def _key_value_table(title: str, rows: list[tuple[str, Any]]) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for key, value in rows:
        table.add_row(key, _fmt(value))
    return table


def build_request_table(request: Request) -> Table:
    """Tabla para `Request` y `RequestDetails`."""

    rows: list[tuple[str, Any]] = [
        ("Request ID", request.request_id),
        ("Status", request.status),
        ("Product", request.product_id),
        ("ETA (min)", request.eta),
        ("Surge", request.surge_multiplier),
    ]
    if request.driver is not None:
        rows.append(("Driver", request.driver.name))
        rows.append(("Driver rating", request.driver.rating))
    if request.vehicle is not None:
        vehicle = " ".join(p for p in (request.vehicle.make, request.vehicle.model) if p)
        rows.append(("Vehicle", vehicle or None))
        rows.append(("Plate", request.vehicle.license_plate))
    rows.append(("Location", _fmt_location(request.location)))
    if isinstance(request, RequestDetails):
        rows.append(("Pickup", _fmt_location(request.pickup)))
        rows.append(("Destination", _fmt_location(request.destination)))
    return _key_value_table("Ride Request", rows)


def build_request_map_table(request_map: RequestMap) -> Table:
    return _key_value_table(
        "Request Map",
        [("Request ID", request_map.request_id), ("Map", request_map.href)],
    )


def build_promotion_table(promotion: Promotion) -> Table:
    return _key_value_table(
        "Promotion",
        [
            ("Offer", promotion.display_text),
            ("Value", promotion.localized_value),
            ("Type", promotion.type),
        ],
    )


def build_promotion_applied_table(applied: PromotionApplied) -> Table:
    return _key_value_table(
        "Promotion Applied",
        [("Code", applied.promotion_code), ("Description", applied.description)],
    )


def build_profile_table(profile: UserProfile) -> Table:
    name = " ".join(p for p in (profile.first_name, profile.last_name) if p)
    return _key_value_table(
        "Rider Profile",
        [
            ("UUID", profile.uuid),
            ("Name", name or None),
            ("Email", profile.email),
            ("Promo code", profile.promo_code),
            ("Mobile verified", profile.mobile_verified),
        ],
    )


def build_activity_table(activity: UserActivity) -> Table:
    """Historial de viajes (una fila por viaje)."""

    shown_to = activity.offset + len(activity.history)
    table = Table(title=f"Ride History ({activity.offset}-{shown_to} of {activity.count})")
    table.add_column("Request ID", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("City", style="magenta")
    table.add_column("Distance", style="green", justify="right")
    table.add_column("Requested", style="dim")
    for trip in activity.history:
        table.add_row(
            trip.request_id,
            _fmt(trip.status),
            _fmt(trip.start_city.display_name if trip.start_city else None),
            "-" if trip.distance is None else f"{trip.distance:.2f}",
            _fmt_epoch(trip.request_time),
        )
    return table


def build_error_panel(error: ErrorInfo) -> Panel:
    """Panel para un `Failure` devuelto por la API."""

    body = Text()
    body.append(error.message + "\n")
    body.append(f"\nHTTP status: {error.status_code}", style="dim")
    if error.code:
        body.append(f"\nCode: {error.code}", style="dim")
    for name, detail in error.fields.items():
        body.append(f"\n- {name}: {detail}")

    title = Text(error.kind.value.replace("_", " ").title(), style="bold red")
    return Panel(body, title=title, border_style="red")
