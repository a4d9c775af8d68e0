"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos (Pydantic v2) de la API de Arpio.
- El dominio no conoce HTTP ni CLI: solo aplicaciones, recovery points,
  recursos staged y reglas.
"""

from core.domain.models import App, AppType, ErrorResponse, RecoveryPoint, StagedResource
from core.domain.selection_rules import ArnRule, RuleType, SelectionRule, TagRule
from core.domain.staged_extras import (
    BackupRecoveryPointExtra,
    BackupVaultExtra,
    EC2ImageExtra,
    EC2SnapshotExtra,
    Environment,
    ExtraType,
    KMSKeyExtra,
    RDSDBClusterSnapshotExtra,
    RDSDBSnapshotExtra,
    RDSOptionGroupExtra,
    StagedExtra,
)
from core.domain.sync import SyncEndpoint, SyncPair

__all__ = [
    "App",
    "AppType",
    "ArnRule",
    "BackupRecoveryPointExtra",
    "BackupVaultExtra",
    "EC2ImageExtra",
    "EC2SnapshotExtra",
    "Environment",
    "ErrorResponse",
    "ExtraType",
    "KMSKeyExtra",
    "RDSDBClusterSnapshotExtra",
    "RDSDBSnapshotExtra",
    "RDSOptionGroupExtra",
    "RecoveryPoint",
    "RuleType",
    "SelectionRule",
    "StagedExtra",
    "StagedResource",
    "SyncEndpoint",
    "SyncPair",
    "TagRule",
]
