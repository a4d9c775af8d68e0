"""Wrapper de httpx para la API de Arpio.

Por qué un wrapper:
- Estandariza URL base, timeouts, TLS, user-agent y la cabecera `X-Api-Key`.
- Traduce el envelope de error del servicio a `ServiceError` y los fallos de
  red a `TransportError`, para que el resto del cliente no conozca httpx.
- Facilita testeo: se inyecta un `httpx.MockTransport` o se sustituye por un
  fake que cumpla `core.interfaces.Transport`.
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from core.config import ArpioSettings
from core.domain.models import ErrorResponse
from core.errors import ConfigurationError, ServiceError, TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_api_key_header(api_key_id: str, api_key_secret: str) -> str:
    """Valor de `X-Api-Key`: mismo formato que HTTP basic auth.

        X-Api-Key := BASE64(api_key_id + ":" + api_key_secret)

    `api_key_id` no puede contener ':'.
    """

    if ":" in api_key_id:
        raise ConfigurationError("api_key_id must not contain a colon")
    token = f"{api_key_id}:{api_key_secret}".encode("utf-8")
    return base64.b64encode(token).decode("ascii")


def build_api_client(
    settings: ArpioSettings,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` autenticado contra `settings.api_url`.

    Los paths relativos se cuelgan de la URL base (`/api` + `/accounts/...`).
    """

    if not settings.api_url:
        raise ConfigurationError("api_url is required")
    if not settings.api_key_id:
        raise ConfigurationError("api_key_id is required")
    if not settings.api_key_secret:
        raise ConfigurationError("api_key_secret is required")

    headers: dict[str, str] = {
        "Accept": "*/*",
        "User-Agent": settings.user_agent,
        "X-Api-Key": build_api_key_header(settings.api_key_id, settings.api_key_secret),
    }
    return httpx.Client(
        base_url=settings.api_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        verify=not settings.tls_insecure_skip_verify,
        headers=headers,
        transport=transport,
    )


def decode_response(adapter: TypeAdapter[T], body: Any, *, what: str) -> T:
    """Valida un body de éxito contra `adapter`.

    Un body que no encaja con el modelo es un `TransportError`, igual que uno que
    no es JSON. `UnknownRuleTypeError` no es un `ValidationError` y se propaga.
    """

    try:
        return adapter.validate_python(body)
    except ValidationError as exc:
        raise TransportError(
            f"unexpected {what} in response body: {exc.error_count()} validation error(s)"
        ) from exc


def _service_error(response: httpx.Response) -> ServiceError:
    # Los errores de la API llegan como {"message", "authenticateUrl"}; si el
    # body no encaja, el texto crudo pasa a ser el mensaje.
    envelope: ErrorResponse | None
    try:
        envelope = ErrorResponse.model_validate_json(response.content)
    except ValidationError as exc:
        logger.warning("Error decoding response body as ErrorResponse: %s", exc)
        envelope = None

    if envelope is not None and envelope.message:
        message = envelope.message
    else:
        message = f"Arpio API error: {response.text}"

    return ServiceError(
        response.status_code,
        message,
        authenticate_url=envelope.authenticate_url if envelope else None,
    )


class HttpxTransport:
    """Implementación de `core.interfaces.Transport` sobre `httpx.Client`."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    @classmethod
    def from_settings(
        cls,
        settings: ArpioSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> HttpxTransport:
        return cls(build_api_client(settings, transport=transport))

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        params: Mapping[str, str] | None = None,
    ) -> Any:
        if json is not None:
            logger.debug("%s %s payload=%s", method, path, json)

        try:
            response = self._client.request(method, path, json=json, params=params)
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        if response.status_code >= 400:
            raise _service_error(response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"{method} {path} returned a non-JSON body") from exc

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
