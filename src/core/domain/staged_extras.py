"""Extras de recursos staged: metadata específica por tipo para restaurar.

Los emite el servicio, que puede introducir tipos nuevos antes de que el
cliente los conozca. Por eso un `type` desconocido se registra en DEBUG y se
descarta, y el resto del array se sigue decodificando.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Literal

from pydantic import Field

from core.domain.base import ArpioModel, StrList, StrMap
from core.domain.tagged_union import TaggedUnionCodec

logger = logging.getLogger(__name__)


class ExtraType(str, Enum):
    BACKUP_RECOVERY_POINT = "backupRecoveryPoint"
    BACKUP_VAULT = "backupVault"
    EC2_IMAGE = "ec2Image"
    EC2_SNAPSHOT = "ec2Snapshot"
    KMS_KEY = "kmsKey"
    RDS_DB_CLUSTER_SNAPSHOT = "rdsDbClusterSnapshot"
    RDS_DB_SNAPSHOT = "rdsDbSnapshot"
    RDS_OPTION_GROUP = "rdsOptionGroup"


class Environment(str, Enum):
    """Lado del sync pair al que pertenece un extra."""

    SOURCE = "source"
    TARGET = "target"


class StagedExtra(ArpioModel):
    type: str
    environment: str = ""

    @property
    def kind(self) -> str:
        return self.type


class BackupRecoveryPointExtra(StagedExtra):
    type: Literal["backupRecoveryPoint"] = "backupRecoveryPoint"
    backup_vault_name: str = ""
    recovery_point_arn: str = ""
    restore_metadata: StrMap = Field(default_factory=dict)


class BackupVaultExtra(StagedExtra):
    type: Literal["backupVault"] = "backupVault"
    backup_vault_name: str = ""


class EC2ImageExtra(StagedExtra):
    type: Literal["ec2Image"] = "ec2Image"
    image_arn: str = ""
    snapshot_arns: StrList = Field(default_factory=list)


class EC2SnapshotExtra(StagedExtra):
    type: Literal["ec2Snapshot"] = "ec2Snapshot"
    snapshot_arn: str = ""


class KMSKeyExtra(StagedExtra):
    type: Literal["kmsKey"] = "kmsKey"
    kms_key_arn: str = ""


class RDSDBClusterSnapshotExtra(StagedExtra):
    type: Literal["rdsDbClusterSnapshot"] = "rdsDbClusterSnapshot"
    db_cluster_snapshot_arn: str = ""


class RDSDBSnapshotExtra(StagedExtra):
    type: Literal["rdsDbSnapshot"] = "rdsDbSnapshot"
    db_snapshot_arn: str = ""


class RDSOptionGroupExtra(StagedExtra):
    type: Literal["rdsOptionGroup"] = "rdsOptionGroup"
    option_group_arn: str = ""


def _skip_unknown_extra(kind: Any, element: Mapping[str, Any]) -> None:
    logger.debug("Ignoring extra with unknown type: %s", kind)


STAGED_EXTRA_CODEC: TaggedUnionCodec[StagedExtra] = TaggedUnionCodec(
    discriminator="type",
    variants={
        ExtraType.BACKUP_RECOVERY_POINT.value: BackupRecoveryPointExtra,
        ExtraType.BACKUP_VAULT.value: BackupVaultExtra,
        ExtraType.EC2_IMAGE.value: EC2ImageExtra,
        ExtraType.EC2_SNAPSHOT.value: EC2SnapshotExtra,
        ExtraType.KMS_KEY.value: KMSKeyExtra,
        ExtraType.RDS_DB_CLUSTER_SNAPSHOT.value: RDSDBClusterSnapshotExtra,
        ExtraType.RDS_DB_SNAPSHOT.value: RDSDBSnapshotExtra,
        ExtraType.RDS_OPTION_GROUP.value: RDSOptionGroupExtra,
    },
    on_unknown=_skip_unknown_extra,
)

AnyStagedExtra = (
    BackupRecoveryPointExtra
    | BackupVaultExtra
    | EC2ImageExtra
    | EC2SnapshotExtra
    | KMSKeyExtra
    | RDSDBClusterSnapshotExtra
    | RDSDBSnapshotExtra
    | RDSOptionGroupExtra
)

StagedExtraList = STAGED_EXTRA_CODEC.annotated(list[AnyStagedExtra])
