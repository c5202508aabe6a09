"""Credenciales de acceso a la API.

Ambos modos (server token y client token) se reducen aquí a una
credencial estática; no hay refresh OAuth en esta capa.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class AccessTokenType(str, Enum):
    """Tipo de token emitido por la plataforma."""

    SERVER = "server"
    CLIENT = "client"

    def scheme(self) -> str:
        """Esquema del header `Authorization` para este tipo de token."""

        return "Token" if self is AccessTokenType.SERVER else "Bearer"


class Credential(BaseModel):
    """Token opaco + tipo. Inmutable."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(
        ...,
        min_length=1,
        repr=False,
        description="Token opaco emitido por la plataforma.",
    )
    token_type: AccessTokenType = Field(
        default=AccessTokenType.CLIENT,
        description="Tipo de token (server o client).",
    )

    def authorization_header(self) -> str:
        return f"{self.token_type.scheme()} {self.token}"

