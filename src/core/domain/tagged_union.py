"""Codec genérico para uniones discriminadas (tagged unions) en JSON.

Por qué existe:
- Reglas de selección y "extras" de recursos staged comparten el mismo patrón:
  una lista ordenada de variantes polimórficas con un campo discriminador.
- El campo lógico del modelo (p.ej. `App.selection_rules`) nunca se serializa
  tal cual: el codec lo transforma en un array JSON de objetos etiquetados.

Contrato:
- `encode`: cada elemento se vuelca con sus propios campos (discriminador
  incluido). `None` o vacío => `[]`, nunca `null`.
- `decode`: dos pasadas por elemento (primero el discriminador, luego la
  variante concreta). El orden del array se conserva.
- Discriminador desconocido => se delega en `on_unknown`: si lanza, el error
  se propaga; si retorna, el elemento se descarta (y nunca aparece en la
  salida, ni siquiera como placeholder).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, BeforeValidator, PlainSerializer, SerializationInfo

T = TypeVar("T", bound=BaseModel)

UnknownKindHandler = Callable[[Any, Mapping[str, Any]], None]


class TaggedUnionCodec(Generic[T]):
    """Codifica/decodifica listas de variantes identificadas por un discriminador."""

    def __init__(
        self,
        *,
        discriminator: str,
        variants: Mapping[str, type[T]],
        on_unknown: UnknownKindHandler,
    ) -> None:
        if not variants:
            raise ValueError("a tagged union needs at least one variant")
        self._discriminator = discriminator
        self._variants: dict[str, type[T]] = dict(variants)
        self._variant_types: tuple[type[T], ...] = tuple(self._variants.values())
        self._on_unknown = on_unknown

    @property
    def discriminator(self) -> str:
        """Nombre del campo discriminador en el wire (p.ej. `ruleType`)."""

        return self._discriminator

    @property
    def kinds(self) -> tuple[str, ...]:
        return tuple(self._variants)

    def encode(self, items: Iterable[T] | None) -> list[dict[str, Any]]:
        if items is None:
            return []
        return [item.model_dump(mode="json", by_alias=True) for item in items]

    def _serialize(self, items: Iterable[T] | None, info: SerializationInfo) -> list[dict[str, Any]]:
        # Sigue el modo y los alias del dump que lo invoca; `to_payload` da el wire.
        if items is None:
            return []
        return [
            item.model_dump(mode=info.mode, by_alias=bool(info.by_alias), exclude_none=info.exclude_none)
            for item in items
        ]

    def decode(self, raw: Iterable[Any] | None) -> list[T]:
        if raw is None:
            return []
        if isinstance(raw, (str, bytes, Mapping)):
            raise ValueError(
                f"expected a JSON array of {self._discriminator}-tagged objects, "
                f"got {type(raw).__name__}"
            )

        decoded: list[T] = []
        for element in raw:
            # Instancias ya construidas (p.ej. App(selection_rules=[ArnRule(...)])).
            if isinstance(element, self._variant_types):
                decoded.append(element)
                continue
            if not isinstance(element, Mapping):
                raise ValueError(
                    f"expected a JSON object with a {self._discriminator!r} field, "
                    f"got {type(element).__name__}"
                )

            kind = element.get(self._discriminator)
            variant = self._variants.get(kind) if isinstance(kind, str) else None
            if variant is None:
                self._on_unknown(kind, element)
                continue

            decoded.append(variant.model_validate(element))
        return decoded

    def annotated(self, list_type: Any) -> Any:
        """`Annotated[list_type, ...]` que valida con `decode` y serializa cada variante.

        El modelo declara el campo lógico con este tipo; el wire nunca ve otra cosa
        que el array etiquetado.
        """

        return Annotated[
            list_type,
            BeforeValidator(self.decode),
            PlainSerializer(self._serialize, return_type=list[dict[str, Any]]),
        ]
