"""Reglas de selección: qué recursos cloud protege una aplicación.

Variantes (discriminador wire `ruleType`):
- `arn`: lista de ARNs concretos.
- `tag`: nombre + valor de tag. Un valor vacío significa "el tag existe".

Las reglas las escribe el usuario, así que un `ruleType` desconocido indica
configuración corrupta o un bug: la decodificación falla con
`UnknownRuleTypeError` en vez de descartar el elemento.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, Literal

from pydantic import Field

from core.domain.base import ArpioModel, StrList
from core.domain.tagged_union import TaggedUnionCodec
from core.errors import UnknownRuleTypeError


class RuleType(str, Enum):
    ARN = "arn"
    TAG = "tag"


class SelectionRule(ArpioModel):
    """Campos comunes a todas las reglas (solo el discriminador)."""

    rule_type: str

    @property
    def kind(self) -> str:
        return self.rule_type


class ArnRule(SelectionRule):
    rule_type: Literal["arn"] = "arn"
    arns: StrList = Field(default_factory=list)

    @classmethod
    def matching(cls, arns: Iterable[str]) -> ArnRule:
        """Regla que selecciona exactamente los ARNs indicados."""

        return cls(arns=list(arns))


class TagRule(SelectionRule):
    rule_type: Literal["tag"] = "tag"
    name: str = ""
    value: str = ""

    @classmethod
    def matching(cls, name: str, value: str = "") -> TagRule:
        """Regla por tag; `value` vacío selecciona cualquier valor."""

        return cls(name=name, value=value)


def _reject_unknown_rule(kind: Any, element: Mapping[str, Any]) -> None:
    raise UnknownRuleTypeError(kind)


SELECTION_RULE_CODEC: TaggedUnionCodec[SelectionRule] = TaggedUnionCodec(
    discriminator="ruleType",
    variants={
        RuleType.ARN.value: ArnRule,
        RuleType.TAG.value: TagRule,
    },
    on_unknown=_reject_unknown_rule,
)

SelectionRuleList = SELECTION_RULE_CODEC.annotated(list[ArnRule | TagRule])
