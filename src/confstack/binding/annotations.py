from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Value:
    """
    Binds a field to a configuration key.

    Use inside `typing.Annotated`, e.g. `port: Annotated[int, Value("${app.port:8080}")] = 0`.
    The expression grammar is `["${"] key [":" default] ["}"]`.
    """

    expression: str


@dataclass(frozen=True, slots=True)
class BindingDescriptor:
    key: str
    default: Optional[str] = None


def parse_binding(expression: str) -> BindingDescriptor:
    text = expression.strip()
    if text.startswith("${"):
        text = text[2:]
    if text.endswith("}"):
        text = text[:-1]
    text = text.strip()
    key, sep, default = text.partition(":")
    return BindingDescriptor(key=key.strip(), default=default if sep else None)
