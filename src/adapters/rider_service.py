"""Fachada pública: un método por endpoint de pasajero.

Responsabilidad:
- Construir ruta, query y cuerpo de cada operación.
- Delegar el envío en `AuthenticatedDispatcher`.

Formato de coordenadas:
- En cuerpos JSON van como texto de punto fijo con 5 decimales
  (requisito de la API).
- En query strings van con su representación natural (`str(float)`).
  La asimetría es intencionada y no se debe unificar.
"""

from __future__ import annotations

import httpx

from adapters.http_client import AuthenticatedDispatcher, build_async_client
from core.config import DEFAULT_API_VERSION, PRODUCTION_BASE_URL, ClientSettings
from core.domain.credentials import AccessTokenType, Credential
from core.domain.envelope import Envelope
from core.domain.models import (
    Promotion,
    PromotionApplied,
    Request,
    RequestDetails,
    RequestMap,
    UserActivity,
    UserProfile,
)
from core.interfaces.rider import RiderAPI


def format_coordinate(value: float) -> str:
    """Coordenada para cuerpos JSON: 5 decimales fijos (`37.775` -> `'37.77500'`)."""

    return f"{value:.5f}"


class RiderService(RiderAPI):
    """Cliente de la API de pasajero.

    Uso típico:

        service = RiderService.from_client_token(token)
        envelope = await service.get_user_profile()

    Dentro de `async with service:` todas las llamadas comparten un único
    `httpx.AsyncClient`; fuera, cada llamada abre el suyo.
    """

    def __init__(
        self,
        credential: Credential,
        *,
        base_url: str = PRODUCTION_BASE_URL,
        version: str = DEFAULT_API_VERSION,
        settings: ClientSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or ClientSettings()
        self._version = version.strip("/")
        self._dispatcher = AuthenticatedDispatcher(
            credential,
            base_url=base_url,
            settings=self._settings,
            client=client,
        )
        self._injected_client = client
        self._owned_client: httpx.AsyncClient | None = None

    @classmethod
    def from_client_token(cls, client_token: str, base_url: str = PRODUCTION_BASE_URL) -> RiderService:
        return cls(
            Credential(token=client_token, token_type=AccessTokenType.CLIENT),
            base_url=base_url,
        )

    @classmethod
    def from_settings(cls, settings: ClientSettings | None = None) -> RiderService:
        """Construye el servicio con token, host y versión de la configuración."""

        settings = settings or ClientSettings()
        if not settings.access_token:
            raise ValueError("access_token is not configured (RIDESHARE_ACCESS_TOKEN)")
        return cls(
            Credential(token=settings.access_token, token_type=settings.token_type),
            base_url=settings.resolved_base_url(),
            version=settings.api_version,
            settings=settings,
        )

    @property
    def version(self) -> str:
        return self._version

    @property
    def base_url(self) -> str:
        return self._dispatcher.base_url

    async def __aenter__(self) -> RiderService:
        if self._injected_client is None and self._owned_client is None:
            self._owned_client = build_async_client(self._settings)
            self._dispatcher = self._dispatcher.with_client(self._owned_client)
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._owned_client is not None:
            await self._owned_client.aclose()
            self._owned_client = None
            self._dispatcher = self._dispatcher.with_client(self._injected_client)

    def _path(self, *segments: str) -> str:
        return "/" + "/".join((self._version, *segments))

    # Requests

    async def request_ride(
        self,
        product_id: str,
        start_latitude: float,
        start_longitude: float,
        end_latitude: float,
        end_longitude: float,
        surge_confirmation_id: str | None = None,
    ) -> Envelope[Request]:
        """Solicita un viaje entre dos puntos."""

        body = {
            "product_id": product_id,
            "start_latitude": format_coordinate(start_latitude),
            "start_longitude": format_coordinate(start_longitude),
            "end_latitude": format_coordinate(end_latitude),
            "end_longitude": format_coordinate(end_longitude),
        }
        if surge_confirmation_id and surge_confirmation_id.strip():
            body["surge_confirmation_id"] = surge_confirmation_id

        return await self._dispatcher.post(self._path("requests"), Request, body)

    async def get_request_details(self, request_id: str) -> Envelope[RequestDetails]:
        return await self._dispatcher.get(self._path("requests", request_id), RequestDetails)

    async def get_request_map(self, request_id: str) -> Envelope[RequestMap]:
        return await self._dispatcher.get(self._path("requests", request_id, "map"), RequestMap)

    async def cancel_request(self, request_id: str) -> Envelope[bool]:
        """`Success(True)` si la API responde con cualquier 2xx."""

        return await self._dispatcher.delete(self._path("requests", request_id))

    # Promotions

    async def get_promotion(
        self,
        start_latitude: float,
        start_longitude: float,
        end_latitude: float,
        end_longitude: float,
    ) -> Envelope[Promotion]:
        """Promoción disponible para usuarios nuevos en el trayecto dado."""

        params = {
            "start_latitude": str(start_latitude),
            "start_longitude": str(start_longitude),
            "end_latitude": str(end_latitude),
            "end_longitude": str(end_longitude),
        }
        return await self._dispatcher.get(self._path("promotions"), Promotion, params=params)

    # Riders

    async def get_user_profile(self) -> Envelope[UserProfile]:
        return await self._dispatcher.get(self._path("me"), UserProfile)

    async def apply_user_promotion(self, promo_code: str) -> Envelope[PromotionApplied]:
        """Aplica un código promocional a la cuenta del usuario."""

        body = {"applied_promotion_codes": promo_code}
        return await self._dispatcher.patch(self._path("me"), PromotionApplied, body)

    async def get_user_activity(self, offset: int, limit: int) -> Envelope[UserActivity]:
        params = {"offset": str(offset), "limit": str(limit)}
        return await self._dispatcher.get(self._path("history"), UserActivity, params=params)
