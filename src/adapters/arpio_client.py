"""Cliente de la API de Arpio.

Por qué una fachada:
- Un único objeto agrupa transporte + cuenta, y expone los recursos por
  namespace (`client.apps`, `client.recovery_points`).
- No guarda estado mutable compartido (sin cachés): es seguro entre hilos en
  la medida en que lo sea el transporte.
"""

from __future__ import annotations

from collections.abc import Callable

import httpx

from adapters.apps import AppsAPI
from adapters.http_client import HttpxTransport
from adapters.recovery_points import RecoveryPointsAPI
from core.config import ArpioSettings
from core.errors import ConfigurationError
from core.interfaces.transport import Transport


class ArpioClient:
    """Cliente síncrono.

    Example:
        >>> with ArpioClient.from_settings() as client:
        ...     app = client.apps.must_get_by_name("payments", timeout=60)
        ...     rp = client.recovery_points.find_latest(app.sync_pair())
    """

    def __init__(
        self,
        transport: Transport,
        account_id: str,
        *,
        app_poll_seconds: float = 5.0,
        recovery_point_poll_seconds: float = 5.0,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        if not account_id:
            raise ConfigurationError("account_id is required")
        self.transport = transport
        self.account_id = account_id
        self.apps = AppsAPI(
            transport,
            account_id,
            poll_interval=app_poll_seconds,
            sleep=sleep,
        )
        self.recovery_points = RecoveryPointsAPI(
            transport,
            account_id,
            poll_interval=recovery_point_poll_seconds,
            sleep=sleep,
        )

    @classmethod
    def from_settings(
        cls,
        settings: ArpioSettings | None = None,
        *,
        http_transport: httpx.BaseTransport | None = None,
    ) -> ArpioClient:
        """Construye el cliente con el transporte httpx configurado por `settings`."""

        settings = settings or ArpioSettings()
        if not settings.account_id:
            raise ConfigurationError("account_id is required")
        transport = HttpxTransport.from_settings(settings, transport=http_transport)
        return cls(
            transport,
            settings.account_id,
            app_poll_seconds=settings.app_poll_seconds,
            recovery_point_poll_seconds=settings.recovery_point_poll_seconds,
        )

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> ArpioClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
