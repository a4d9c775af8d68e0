"""Operaciones sobre recovery points y sus recursos staged.

Los recovery points se direccionan por sync pair:
`/accounts/{acct}/syncPairs/{srcAcct}/{srcRegion}/{tgtAcct}/{tgtRegion}/recoveryPoints`.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from pydantic import TypeAdapter

from adapters.http_client import decode_response
from core.domain.models import RecoveryPoint, StagedResource
from core.domain.sync import SyncPair
from core.errors import ServiceError
from core.interfaces.transport import Transport
from core.services.polling import describe_missing_recovery_point, poll_until_found
from core.utils import ensure_utc, format_rfc3339

_RECOVERY_POINT = TypeAdapter(RecoveryPoint)
_RECOVERY_POINT_LIST = TypeAdapter(list[RecoveryPoint])
_STAGED_RESOURCE_LIST = TypeAdapter(list[StagedResource])


class RecoveryPointsAPI:
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

    def _sync_pair_path(self, sync_pair: SyncPair) -> str:
        return (
            f"/accounts/{self._account_id}/syncPairs/"
            f"{sync_pair.source.account_id}/{sync_pair.source.region}/"
            f"{sync_pair.target.account_id}/{sync_pair.target.region}"
        )

    def _recovery_point_path(self, sync_pair: SyncPair, recovery_point_id: str) -> str:
        return f"{self._sync_pair_path(sync_pair)}/recoveryPoints/{recovery_point_id}"

    def list(
        self,
        sync_pair: SyncPair,
        timestamp_start: datetime | None = None,
        timestamp_end: datetime | None = None,
    ) -> list[RecoveryPoint]:
        """Recovery points del sync pair. Un límite `None` no restringe ese lado."""

        params: dict[str, str] = {}
        if timestamp_start is not None:
            params["timestampStart"] = format_rfc3339(timestamp_start)
        if timestamp_end is not None:
            params["timestampEnd"] = format_rfc3339(timestamp_end)

        body = self._transport.request(
            "GET",
            f"{self._sync_pair_path(sync_pair)}/recoveryPoints",
            params=params or None,
        )
        return decode_response(
            _RECOVERY_POINT_LIST, [] if body is None else body, what="recovery point list"
        )

    def get(self, sync_pair: SyncPair, recovery_point_id: str) -> RecoveryPoint | None:
        try:
            body = self._transport.request("GET", self._recovery_point_path(sync_pair, recovery_point_id))
        except ServiceError as exc:
            if exc.is_not_found:
                return None
            raise
        return decode_response(_RECOVERY_POINT, body, what="recovery point")

    def update(self, sync_pair: SyncPair, recovery_point: RecoveryPoint) -> RecoveryPoint:
        """PUT del objeto completo; el servicio solo respeta cambios en `protected`."""

        body = self._transport.request(
            "PUT",
            self._recovery_point_path(sync_pair, recovery_point.recovery_point_id),
            json=recovery_point.to_payload(),
        )
        return decode_response(_RECOVERY_POINT, body, what="recovery point")

    def list_resources(self, sync_pair: SyncPair, recovery_point: RecoveryPoint) -> list[StagedResource]:
        path = self._recovery_point_path(sync_pair, recovery_point.recovery_point_id)
        body = self._transport.request("GET", f"{path}/resources")
        return decode_response(
            _STAGED_RESOURCE_LIST, [] if body is None else body, what="staged resource list"
        )

    def find_latest(
        self,
        sync_pair: SyncPair,
        timestamp_min: datetime | None = None,
        timestamp_max: datetime | None = None,
    ) -> RecoveryPoint | None:
        """El recovery point más reciente dentro de la ventana, o `None`.

        Con timestamps iguales gana el primero que devolvió el servicio.
        """

        latest: RecoveryPoint | None = None
        for rp in self.list(sync_pair, timestamp_min, timestamp_max):
            if latest is None or ensure_utc(rp.timestamp) > ensure_utc(latest.timestamp):
                latest = rp
        return latest

    def must_find_latest(
        self,
        sync_pair: SyncPair,
        timestamp_min: datetime | None = None,
        timestamp_max: datetime | None = None,
        timeout: float = 0,
    ) -> RecoveryPoint:
        """Como `find_latest`, pero reintenta hasta `timeout` segundos y nunca devuelve `None`."""

        return poll_until_found(
            lambda: self.find_latest(sync_pair, timestamp_min, timestamp_max),
            interval=self._poll_interval,
            timeout=timeout,
            failure_message=lambda: describe_missing_recovery_point(timestamp_min, timestamp_max),
            sleep=self._sleep,
            description="recovery point",
        )

    def protect(self, sync_pair: SyncPair, recovery_point: RecoveryPoint) -> RecoveryPoint:
        """Marca el recovery point como protegido (no se borra por retención)."""

        if recovery_point.protected:
            return recovery_point
        protected = recovery_point.model_copy(update={"protected": True})
        return self.update(sync_pair, protected)
