"""Operaciones sobre aplicaciones (`/accounts/{accountId}/applications`)."""

from __future__ import annotations

from collections.abc import Callable

from pydantic import TypeAdapter

from adapters.http_client import decode_response
from core.domain.models import App, AppType
from core.errors import AmbiguousMatchError, ServiceError
from core.interfaces.transport import Transport
from core.services.polling import poll_until_found

_APP = TypeAdapter(App)
_APP_LIST = TypeAdapter(list[App])


class AppsAPI:
    """CRUD de aplicaciones en la cuenta configurada del cliente.

    Example:
        >>> app = client.apps.get_by_name("payments")
        >>> client.apps.delete(app.app_id)
    """

    def __init__(
        self,
        transport: Transport,
        account_id: str,
        *,
        poll_interval: float = 5.0,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._transport = transport
        self._account_id = account_id
        self._poll_interval = poll_interval
        self._sleep = sleep

    def _collection_path(self) -> str:
        return f"/accounts/{self._account_id}/applications"

    def _app_path(self, app_id: str) -> str:
        return f"{self._collection_path()}/{app_id}"

    def new(self) -> App:
        """App sin guardar, tipo Terraform, para la cuenta del cliente (usar `create`)."""

        return App(account_id=self._account_id, app_type=AppType.TERRAFORM.value)

    def create(self, app: App) -> App:
        body = self._transport.request("POST", self._collection_path(), json=app.to_payload())
        return decode_response(_APP, body, what="app")

    def list(self) -> list[App]:
        """Todas las apps de la cuenta, en el orden que devuelve el servicio."""

        body = self._transport.request("GET", self._collection_path())
        return decode_response(_APP_LIST, [] if body is None else body, what="app list")

    def get(self, app_id: str) -> App | None:
        """App por ID, o `None` si no existe (404)."""

        try:
            body = self._transport.request("GET", self._app_path(app_id))
        except ServiceError as exc:
            if exc.is_not_found:
                return None
            raise
        return decode_response(_APP, body, what="app")

    def update(self, app: App) -> App:
        """Actualiza las propiedades mutables de la app (PUT de la entidad completa)."""

        if not app.app_id:
            raise ValueError("app_id is required to update an app")
        body = self._transport.request("PUT", self._app_path(app.app_id), json=app.to_payload())
        return decode_response(_APP, body, what="app")

    def delete(self, app_id: str) -> None:
        """Elimina la app. Si ya no existe (404) no es un error."""

        try:
            self._transport.request("DELETE", self._app_path(app_id))
        except ServiceError as exc:
            if not exc.is_not_found:
                raise

    def get_by_name(self, name: str) -> App | None:
        """La única app con ese nombre; `None` si no hay ninguna.

        Varias apps con el mismo nombre => `AmbiguousMatchError` (el cliente no
        puede decidir cuál es la buena).
        """

        matches = [app for app in self.list() if app.name == name]
        if len(matches) > 1:
            raise AmbiguousMatchError(
                f'more than one Arpio app exists with the name "{name}"; use the '
                "Arpio web interface to rename the unrelated apps, then retry"
            )
        return matches[0] if matches else None

    def must_get_by_name(self, name: str, timeout: float = 0) -> App:
        """Como `get_by_name`, pero reintenta hasta `timeout` segundos y nunca devuelve `None`."""

        return poll_until_found(
            lambda: self.get_by_name(name),
            interval=self._poll_interval,
            timeout=timeout,
            failure_message=f'there is no Arpio application named "{name}"',
            sleep=self._sleep,
            description="app",
        )
