"""Modelos del dominio (Pydantic v2).

Cada modelo refleja el esquema JSON de un endpoint de la API de viajes.
No hay referencias cruzadas entre ellos: cada respuesta se deserializa
por separado.

Nota:
- `extra="ignore"` porque la API añade campos sin versionar.
- Los campos obligatorios (`...`) son los que la API siempre devuelve; si
  faltan, la respuesta se considera malformada.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Location(_ApiModel):
    """Posición geográfica (vehículo, recogida o destino)."""

    latitude: float = Field(..., description="Latitud en grados decimales.")
    longitude: float = Field(..., description="Longitud en grados decimales.")
    bearing: int | None = Field(
        default=None,
        description="Rumbo del vehículo en grados (0-359).",
    )
    eta: int | None = Field(
        default=None,
        description="Minutos estimados hasta esta posición.",
    )


class Driver(_ApiModel):
    name: str | None = None
    phone_number: str | None = None
    sms_number: str | None = None
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    picture_url: str | None = None


class Vehicle(_ApiModel):
    make: str | None = None
    model: str | None = None
    license_plate: str | None = None
    picture_url: str | None = None


class Request(_ApiModel):
    """Respuesta a una solicitud de viaje (POST /requests)."""

    request_id: str = Field(..., min_length=1, description="ID único de la solicitud.")
    status: str = Field(
        ...,
        min_length=1,
        description="Estado ('processing', 'accepted', 'arriving', ...).",
    )
    product_id: str | None = Field(default=None, description="Producto solicitado.")
    eta: int | None = Field(default=None, description="Minutos estimados de llegada.")
    surge_multiplier: float | None = Field(
        default=None,
        description="Multiplicador de tarifa dinámica aplicado.",
    )
    driver: Driver | None = None
    vehicle: Vehicle | None = None
    location: Location | None = None


class RequestDetails(Request):
    """Estado detallado de una solicitud en curso (GET /requests/{id})."""

    pickup: Location | None = Field(default=None, description="Punto de recogida.")
    destination: Location | None = Field(default=None, description="Destino.")


class RequestMap(_ApiModel):
    """Referencia al mapa visual de una solicitud."""

    request_id: str = Field(..., min_length=1)
    href: str = Field(..., min_length=1, description="URL del mapa.")


class Promotion(_ApiModel):
    """Promoción disponible para usuarios nuevos en una zona."""

    display_text: str = Field(..., description="Texto a mostrar al usuario.")
    localized_value: str | None = Field(
        default=None,
        description="Valor de la promoción en la moneda local.",
    )
    type: str | None = Field(default=None, description="Tipo ('trip_credit', ...).")


class PromotionApplied(_ApiModel):
    promotion_code: str = Field(..., min_length=1)
    description: str | None = None


class UserProfile(_ApiModel):
    """Perfil del usuario que autorizó la aplicación."""

    uuid: str = Field(..., min_length=1, description="Identificador único del usuario.")
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    picture: str | None = Field(default=None, description="URL de la foto de perfil.")
    promo_code: str | None = Field(default=None, description="Código promocional propio.")
    rider_id: str | None = None
    mobile_verified: bool | None = None


class City(_ApiModel):
    display_name: str | None = None
    latitude: float | None = None
    longitude: float | None = None


class Trip(_ApiModel):
    """Entrada del historial de actividad."""

    request_id: str = Field(..., min_length=1)
    status: str | None = None
    product_id: str | None = None
    distance: float | None = Field(default=None, ge=0.0, description="Distancia en millas.")
    request_time: int | None = Field(default=None, description="Epoch (segundos).")
    start_time: int | None = Field(default=None, description="Epoch (segundos).")
    end_time: int | None = Field(default=None, description="Epoch (segundos).")
    start_city: City | None = None


class UserActivity(_ApiModel):
    """Página del historial de viajes del usuario."""

    offset: int = Field(..., ge=0)
    limit: int = Field(..., ge=0)
    count: int = Field(..., ge=0, description="Total de viajes del usuario.")
    history: list[Trip] = Field(default_factory=list)


class ApiErrorBody(_ApiModel):
    """Cuerpo estándar de error devuelto por la API (4xx/5xx)."""

    code: str | int | None = None
    message: str | None = None
    fields: dict[str, Any] | None = None
