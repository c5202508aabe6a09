"""Envoltorio uniforme de resultados (`Success` | `Failure`).

Todas las operaciones públicas devuelven un `Envelope[T]`: los errores de
la API (4xx/5xx, cuerpos malformados) son datos, no excepciones. El
llamador decide con `envelope.ok` o con `match`:

    match await service.get_user_profile():
        case Success(value=profile):
            ...
        case Failure(error=error):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Literal, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    API_ERROR = "api_error"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True)
class ErrorInfo:
    """Detalle de un fallo a nivel de API."""

    kind: ErrorKind
    status_code: int
    message: str
    code: str | None = None
    fields: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "status_code": self.status_code,
            "message": self.message,
            "code": self.code,
            "fields": dict(self.fields),
        }


class ApiCallError(Exception):
    """Lanzada solo por `Failure.unwrap()`."""

    def __init__(self, error: ErrorInfo) -> None:
        super().__init__(f"[{error.status_code}] {error.message}")
        self.error = error


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    ok: Literal[True] = field(default=True, init=False)

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: ErrorInfo
    ok: Literal[False] = field(default=False, init=False)

    def unwrap(self) -> Any:
        raise ApiCallError(self.error)


Envelope = Union[Success[T], Failure]
