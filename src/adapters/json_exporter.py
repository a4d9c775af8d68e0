"""Exportación JSON de entidades.

Por qué JSON wire-format:
- El archivo exportado es exactamente lo que devuelve/acepta la API, así que
  se puede volver a cargar con `Model.model_validate`.
- Útil para inventariar recursos staged antes de un restore.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from core.domain.base import ArpioModel


def dump_models(models: ArpioModel | Iterable[ArpioModel]) -> Any:
    """Payload wire de una entidad o de una lista de entidades."""

    if isinstance(models, ArpioModel):
        return models.to_payload()
    return [model.to_payload() for model in models]


def export_models_json(*, models: ArpioModel | Iterable[ArpioModel], output_path: Path) -> Path:
    """Exporta entidades a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = dump_models(models)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
