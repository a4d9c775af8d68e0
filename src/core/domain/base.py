"""Modelo base para entidades que viajan por la API de Arpio.

Por qué una base común:
- La API usa camelCase; en Python usamos snake_case. El alias generator
  traduce en el borde sin ensuciar el dominio.
- Claves desconocidas del servicio se ignoran (compatibilidad hacia adelante).
- Colecciones `null` en el wire se leen como vacías: el servicio (y clientes
  antiguos) envían `"arns": null` o `"tags": null` sin que sea un error.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


def _null_as_empty_list(value: Any) -> Any:
    return [] if value is None else value


def _null_as_empty_dict(value: Any) -> Any:
    return {} if value is None else value


StrList = Annotated[list[str], BeforeValidator(_null_as_empty_list)]
StrMap = Annotated[dict[str, str], BeforeValidator(_null_as_empty_dict)]


class ArpioModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_payload(self) -> dict[str, Any]:
        """Representación wire (JSON-safe, alias camelCase, sin campos `None`)."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
