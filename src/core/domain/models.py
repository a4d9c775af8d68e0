"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Los alias camelCase viven en los modelos, así que los adaptadores HTTP solo
  mueven dicts y nunca mapean campos a mano.
- Las listas polimórficas (reglas, extras) se codifican con
  `TaggedUnionCodec` y el modelo expone solo el campo lógico.

Nota:
- Estos modelos describen *qué* es un recurso de Arpio, no *cómo* se obtiene.
- La construcción no valida reglas de negocio: son datos planos.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import Field

from core.domain.base import ArpioModel, StrMap
from core.domain.selection_rules import SelectionRuleList
from core.domain.staged_extras import StagedExtraList
from core.domain.sync import SyncPair

# Valor cero de un timestamp ausente (el servicio nunca lo emite).
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class AppType(str, Enum):
    STANDARD = "standard"
    TERRAFORM = "terraform"


class App(ArpioModel):
    """Aplicación protegida por Arpio.

    Invariante: `app_id` es `None` antes de crearla; lo asigna el servicio en
    `create` y no cambia después.
    """

    account_id: str = Field(
        default="",
        description="Cuenta Arpio propietaria.",
    )
    app_id: str | None = Field(
        default=None,
        description="Identificador asignado por el servicio (ausente hasta crear).",
    )
    app_type: str = Field(
        default=AppType.STANDARD.value,
        alias="type",
        description="Tipo de aplicación: 'standard' o 'terraform'.",
    )
    created_at: datetime | None = Field(
        default=None,
        description="Momento de creación (lo asigna el servicio).",
    )
    name: str = Field(
        default="",
        description="Nombre visible de la aplicación.",
    )
    notification_emails: list[str] | None = Field(
        default=None,
        description="Destinatarios de notificaciones.",
    )
    rpo: int = Field(
        default=0,
        description="Recovery point objective, en la unidad que define el servicio.",
    )
    source_aws_account_id: str = ""
    source_region: str = ""
    sync_phase: str | None = Field(
        default=None,
        description="Fase de sincronización reportada por el servicio.",
    )
    target_aws_account_id: str = ""
    target_region: str = ""
    selection_rules: SelectionRuleList = Field(
        default_factory=list,
        description="Reglas (ARN/tag) que deciden qué recursos se protegen.",
    )

    def sync_pair(self) -> SyncPair:
        return SyncPair.from_accounts(
            self.source_aws_account_id,
            self.source_region,
            self.target_aws_account_id,
            self.target_region,
        )


class RecoveryPoint(ArpioModel):
    """Snapshot restaurable de una aplicación, dentro de un sync pair.

    En la práctica solo `protected` es mutable vía `update`.
    """

    available_at: datetime | None = Field(
        default=None,
        description="Desde cuándo se puede restaurar.",
    )
    protected: bool = Field(
        default=False,
        description="Si es True, el servicio no lo elimina por retención.",
    )
    recovery_point_id: str = Field(
        default="",
        description="Identificador asignado por el servicio.",
    )
    timestamp: datetime = Field(
        default=ZERO_TIME,
        description="Momento lógico (evento) que representa el recovery point.",
    )


class StagedResource(ArpioModel):
    """Recurso materializado dentro de un recovery point."""

    arn: str = ""
    tags: StrMap = Field(default_factory=dict)
    type: str = ""
    extras: StagedExtraList = Field(
        default_factory=list,
        description="Metadata por tipo (vault de backup, snapshots, KMS, ...).",
    )


class ErrorResponse(ArpioModel):
    """Envelope estándar de errores de la API (status >= 400)."""

    message: str = ""
    authenticate_url: str | None = None
