"""Sync pairs: clave de direccionamiento (origen -> destino) de los recovery points."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SyncEndpoint:
    """Una cuenta AWS en una región."""

    account_id: str
    region: str

    def __str__(self) -> str:
        return f"{self.account_id}/{self.region}"


@dataclass(frozen=True)
class SyncPair:
    """Par (origen, destino). Igualdad estructural; nunca se persiste por sí mismo."""

    source: SyncEndpoint
    target: SyncEndpoint

    @classmethod
    def from_accounts(
        cls,
        source_account_id: str,
        source_region: str,
        target_account_id: str,
        target_region: str,
    ) -> SyncPair:
        return cls(
            source=SyncEndpoint(source_account_id, source_region),
            target=SyncEndpoint(target_account_id, target_region),
        )

    def __str__(self) -> str:
        return f"{self.source}/{self.target}"
