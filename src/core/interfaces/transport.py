"""Contrato del transporte HTTP autenticado.

Por qué Protocol:
- Las operaciones (apps, recovery points) solo necesitan "haz este request y
  dame el JSON"; URL base, TLS, timeouts y user-agent quedan fuera.
- Los tests sustituyen el transporte por un fake sin levantar servidores.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Contrato mínimo de transporte.

    Reglas de diseño:
    - `path` es relativo a la URL base de la API.
    - Devuelve el body JSON decodificado (o `None` si viene vacío).
    - Status >= 400 => `ServiceError` (sin body de respuesta).
    - Fallo de red => `TransportError`.
    """

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        params: Mapping[str, str] | None = None,
    ) -> Any:
        ...

    def close(self) -> None:
        ...
