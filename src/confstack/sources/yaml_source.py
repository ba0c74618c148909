from __future__ import annotations

from typing import Any, Dict, Mapping, MutableMapping

import yaml

from confstack.errors import SourceParseError


def parse_yaml(text: str, *, source: str = "<string>") -> Dict[str, str]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SourceParseError(source, str(exc)) from exc
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise SourceParseError(source, f"Top-level YAML must be a mapping, got: {type(data).__name__}")
    flat: Dict[str, str] = {}
    flatten_mapping(data, flat)
    return flat


def flatten_mapping(data: Mapping[Any, Any], out: MutableMapping[str, str], prefix: str = "") -> None:
    """Write nested mappings into `out` as dot-joined keys with rendered leaf values."""
    for raw_key, value in data.items():
        segment = render_scalar(raw_key)
        key = f"{prefix}.{segment}" if prefix else segment
        if isinstance(value, Mapping):
            flatten_mapping(value, out, key)
        else:
            out[key] = render_scalar(value)


def render_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(render_scalar(item) for item in value)
    return str(value)
