"""Clasificación de respuestas HTTP en `Success` / `Failure`."""

from __future__ import annotations

import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from core.domain.envelope import Envelope, ErrorInfo, ErrorKind, Failure, Success
from core.domain.models import ApiErrorBody

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _describe_validation_error(exc: ValidationError) -> str:
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<body>"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def _parse_error_body(response: httpx.Response) -> ApiErrorBody | None:
    if not response.content:
        return None
    try:
        return ApiErrorBody.model_validate_json(response.content)
    except ValidationError:
        return None


def api_failure(response: httpx.Response) -> Failure:
    """`Failure` para una respuesta no-2xx.

    El mensaje sale del cuerpo de error si es parseable; si no, se usa
    `HTTP <status> <reason>`.
    """

    body = _parse_error_body(response)
    message = f"HTTP {response.status_code} {response.reason_phrase}".strip()
    code: str | None = None
    fields: dict = {}
    if body is not None:
        if body.message and body.message.strip():
            message = body.message.strip()
        if body.code is not None:
            code = str(body.code)
        fields = dict(body.fields or {})

    logger.warning("API error %s: %s", response.status_code, message)
    return Failure(
        ErrorInfo(
            kind=ErrorKind.API_ERROR,
            status_code=response.status_code,
            message=message,
            code=code,
            fields=fields,
        )
    )


def normalize_response(response: httpx.Response, model: type[ModelT]) -> Envelope[ModelT]:
    """2xx => valida el cuerpo como `model`; resto => error de API."""

    if not response.is_success:
        return api_failure(response)

    try:
        value = model.model_validate_json(response.content)
    except ValidationError as exc:
        detail = _describe_validation_error(exc)
        logger.warning("Malformed %s response: %s", model.__name__, detail)
        return Failure(
            ErrorInfo(
                kind=ErrorKind.MALFORMED_RESPONSE,
                status_code=response.status_code,
                message=f"Malformed {model.__name__} response: {detail}",
            )
        )
    return Success(value)


def normalize_status(response: httpx.Response) -> Envelope[bool]:
    """Solo mira el status: cualquier 2xx es `Success(True)`."""

    if response.is_success:
        return Success(True)
    return api_failure(response)
