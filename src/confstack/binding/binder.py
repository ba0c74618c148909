from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated, Any, List, Optional, Tuple, get_args, get_origin, get_type_hints

from confstack.binding.annotations import BindingDescriptor, Value, parse_binding
from confstack.binding.coercion import coerce
from confstack.errors import BindingError
from confstack.keys import to_env_name
from confstack.store import ConfigStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BoundField:
    name: str
    declared_type: Any
    binding: BindingDescriptor


def _split_value_marker(hint: Any) -> Tuple[Any, Optional[Value]]:
    if get_origin(hint) is not Annotated:
        return hint, None
    base, *metadata = get_args(hint)
    marker = next((m for m in metadata if isinstance(m, Value)), None)
    if marker is None:
        return hint, None
    others = tuple(m for m in metadata if not isinstance(m, Value))
    declared = Annotated[(base, *others)] if others else base
    return declared, marker


def bound_fields(cls: type) -> List[BoundField]:
    """Fields of `cls` (inherited ones included) that carry a Value marker."""
    fields: List[BoundField] = []
    for name, hint in get_type_hints(cls, include_extras=True).items():
        declared, marker = _split_value_marker(hint)
        if marker is None:
            continue
        fields.append(BoundField(name=name, declared_type=declared, binding=parse_binding(marker.expression)))
    return fields


class FieldBinder:
    """Writes store values into `Value`-annotated fields. The store is only read."""

    def __init__(self, store: ConfigStore) -> None:
        self._store = store

    def resolve(self, binding: BindingDescriptor) -> Optional[str]:
        value = self._store.get(binding.key)
        if value is None:
            value = self._store.get(to_env_name(binding.key))
        if value is None:
            value = binding.default
        return value

    def inject(self, target: object) -> Tuple[BindingError, ...]:
        """
        Bind every annotated field of `target`.

        Failures are logged and returned; they never stop sibling fields from binding.
        """
        failures: List[BindingError] = []
        for bound in bound_fields(type(target)):
            try:
                self._bind_one(target, bound)
            except BindingError as exc:
                logger.warning(
                    "binding.field_failed target=%s field=%s error=%s",
                    type(target).__name__,
                    bound.name,
                    exc,
                )
                failures.append(exc)
        return tuple(failures)

    def _bind_one(self, target: object, bound: BoundField) -> None:
        raw = self.resolve(bound.binding)
        if raw is None:
            logger.debug("binding.field_skipped field=%s key=%s", bound.name, bound.binding.key)
            return
        value = coerce(raw, bound.declared_type, field_name=bound.name)
        try:
            setattr(target, bound.name, value)
        except Exception as exc:
            raise BindingError(bound.name, f"Cannot assign field '{bound.name}'. error={exc}") from exc
