"""Poll-until-found: reintenta una búsqueda hasta que aparece o vence el plazo.

Lo usan `must_get_by_name` (apps) y `must_find_latest` (recovery points): un
recurso recién creado puede tardar en ser visible en los listados.

Reglas:
- Solo se reintenta "todavía no existe" (lookup devuelve `None`).
- Cualquier excepción del lookup (red, servicio) se propaga en el acto.
- `timeout == 0` => exactamente un intento, sin esperas.
- El deadline solo se comprueba entre intentos: un request en curso no se
  interrumpe.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime
from typing import TypeVar

from core.errors import DeadlineExceededError
from core.utils import format_rfc3339

logger = logging.getLogger(__name__)

T = TypeVar("T")


def poll_until_found(
    lookup: Callable[[], T | None],
    *,
    interval: float,
    timeout: float,
    failure_message: str | Callable[[], str],
    sleep: Callable[[float], None] | None = None,
    clock: Callable[[], float] | None = None,
    description: str = "resource",
) -> T:
    """Ejecuta `lookup` hasta obtener un resultado o agotar `timeout` (segundos).

    Lanza `DeadlineExceededError(failure_message)` si no se encontró nada.
    """

    if timeout < 0:
        raise ValueError("timeout must be >= 0")
    if interval < 0:
        raise ValueError("interval must be >= 0")

    sleep = sleep or time.sleep
    clock = clock or time.monotonic

    deadline = clock() + timeout if timeout > 0 else None
    while True:
        result = lookup()
        if result is not None:
            return result
        if deadline is None or clock() >= deadline:
            break
        logger.debug("Waiting for a matching %s to exist", description)
        sleep(interval)

    message = failure_message() if callable(failure_message) else failure_message
    raise DeadlineExceededError(message)


def describe_missing_recovery_point(
    timestamp_min: datetime | None,
    timestamp_max: datetime | None,
) -> str:
    """Mensaje para el operador según qué límites de timestamp se usaron."""

    if timestamp_min is not None and timestamp_max is not None:
        return (
            f'there are no recovery points between "{format_rfc3339(timestamp_min)}" '
            f'and "{format_rfc3339(timestamp_max)}"; change timestamp_min to an '
            "earlier time or remove it from your config to use an older recovery "
            "point, or remove timestamp from your config to use the most recent "
            "recovery point"
        )
    if timestamp_min is not None:
        return (
            f'there are no recovery points on or after "{format_rfc3339(timestamp_min)}"; '
            "change timestamp_min to an earlier time or remove it from your config "
            "to use an older recovery point"
        )
    if timestamp_max is not None:
        return (
            f'there are no recovery points on or before "{format_rfc3339(timestamp_max)}"; '
            "change timestamp to a later time or remove it from your config to use "
            "a newer recovery point"
        )
    return (
        "no recovery points exist for this application yet; please wait for the "
        "first recovery point to be created"
    )
