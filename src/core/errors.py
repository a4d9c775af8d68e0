"""Errores del cliente Arpio.

Por qué una jerarquía propia:
- Los llamadores capturan `ArpioError` sin conocer httpx ni pydantic.
- Cada condición (servicio, transporte, ambigüedad, deadline) tiene su tipo y
  se puede distinguir sin parsear mensajes.

Nota:
- Un 404 en get/delete NO es un error: se traduce a `None` / éxito en los
  adaptadores.
"""

from __future__ import annotations


class ArpioError(Exception):
    """Base de todos los errores del cliente."""


class ConfigurationError(ArpioError):
    """Faltan datos de conexión (URL, credenciales o cuenta)."""


class TransportError(ArpioError):
    """Fallo de red o respuesta imposible de decodificar. Nunca se reintenta."""


class ServiceError(ArpioError):
    """El servicio respondió con status >= 400."""

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        authenticate_url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.authenticate_url = authenticate_url

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class AmbiguousMatchError(ArpioError):
    """Más de una entidad comparte el nombre buscado."""


class DeadlineExceededError(ArpioError):
    """El polling terminó sin encontrar el recurso."""


class UnknownRuleTypeError(ArpioError):
    """Discriminador de regla de selección desconocido.

    No debe heredar de `ValueError`: pydantic solo envuelve `ValueError` y
    `AssertionError`, y este error tiene que salir de la validación intacto.
    """

    def __init__(self, rule_type: object) -> None:
        super().__init__(f"unhandled selection rule type: {rule_type}")
        self.rule_type = rule_type
