"""Wrapper de httpx con autenticación.

Responsabilidad:
- Construir el `httpx.AsyncClient` con headers comunes.
- Adjuntar la credencial a cada petición y enviarla.
- Delegar la clasificación de la respuesta en `response_normalizer`.

No hay reintentos, redirecciones propias ni timeout más allá del default
del transporte (salvo que se configure `http_timeout_seconds`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, TypeVar

import httpx
from pydantic import BaseModel

from adapters.response_normalizer import normalize_response, normalize_status
from core.config import PRODUCTION_BASE_URL, ClientSettings
from core.domain.credentials import Credential
from core.domain.envelope import Envelope
from core.errors import TransportFault

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def build_async_client(
    settings: ClientSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los headers comunes de la API."""

    settings = settings or ClientSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)

    kwargs: dict[str, Any] = {"headers": headers}
    if settings.http_timeout_seconds is not None:
        kwargs["timeout"] = httpx.Timeout(settings.http_timeout_seconds)
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(**kwargs)


@dataclass(frozen=True)
class EndpointCall:
    """Descripción de una llamada: verbo, ruta relativa, query y cuerpo."""

    method: str
    path: str
    params: tuple[tuple[str, str], ...] = ()
    body: Mapping[str, str] | None = None


class AuthenticatedDispatcher:
    """Envía peticiones autenticadas contra la URL base configurada.

    Sin estado mutable por llamada: cada verbo construye su `EndpointCall`
    y lo envía. Si no se inyecta `client`, se abre uno efímero por llamada;
    un cliente inyectado nunca se cierra aquí.
    """

    def __init__(
        self,
        credential: Credential,
        *,
        base_url: str = PRODUCTION_BASE_URL,
        settings: ClientSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._credential = credential
        self._base_url = base_url.rstrip("/")
        self._settings = settings or ClientSettings()
        self._client = client

    @property
    def base_url(self) -> str:
        return self._base_url

    def with_client(self, client: httpx.AsyncClient | None) -> AuthenticatedDispatcher:
        """Copia del dispatcher que usa `client` como transporte compartido."""

        return AuthenticatedDispatcher(
            self._credential,
            base_url=self._base_url,
            settings=self._settings,
            client=client,
        )

    async def get(
        self,
        path: str,
        model: type[ModelT],
        *,
        params: Mapping[str, str] | None = None,
    ) -> Envelope[ModelT]:
        call = EndpointCall("GET", path, params=tuple((params or {}).items()))
        return normalize_response(await self.send(call), model)

    async def post(self, path: str, model: type[ModelT], body: Mapping[str, str]) -> Envelope[ModelT]:
        response = await self.send(EndpointCall("POST", path, body=body))
        return normalize_response(response, model)

    async def patch(self, path: str, model: type[ModelT], body: Mapping[str, str]) -> Envelope[ModelT]:
        response = await self.send(EndpointCall("PATCH", path, body=body))
        return normalize_response(response, model)

    async def delete(self, path: str) -> Envelope[bool]:
        response = await self.send(EndpointCall("DELETE", path))
        return normalize_status(response)

    async def send(self, call: EndpointCall) -> httpx.Response:
        """Envía `call` y devuelve la respuesta cruda.

        Lanza `TransportFault` si httpx no obtiene respuesta.
        """

        url = f"{self._base_url}{call.path}"
        kwargs: dict[str, Any] = {
            "headers": {"Authorization": self._credential.authorization_header()},
        }
        if call.params:
            kwargs["params"] = list(call.params)
        if call.body is not None:
            kwargs["json"] = dict(call.body)

        logger.debug("%s %s", call.method, call.path)
        try:
            if self._client is not None:
                response = await self._client.request(call.method, url, **kwargs)
            else:
                async with build_async_client(self._settings) as client:
                    response = await client.request(call.method, url, **kwargs)
        except httpx.TransportError as exc:
            reason = str(exc) or type(exc).__name__
            logger.error("%s %s transport failure: %s", call.method, call.path, reason)
            raise TransportFault(call.method, url, reason) from exc

        logger.debug("%s %s -> HTTP %s", call.method, call.path, response.status_code)
        return response
