from __future__ import annotations

from typing import Dict, Iterator, Mapping, Optional, Tuple

from confstack.keys import normalize


class ConfigStore:
    """
    Normalized key -> string value.

    Precedence is expressed only by the order of `put` calls: the last write wins and
    no history is kept. The raw key of the last write is remembered for display.
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._values: Dict[str, str] = {}
        self._raw_keys: Dict[str, str] = {}
        if initial:
            for key, value in initial.items():
                self.put(key, value)

    def put(self, key: str, value: str) -> None:
        normalized = normalize(key)
        self._values[normalized] = str(value)
        self._raw_keys[normalized] = key

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(normalize(key), default)

    def raw_key(self, key: str) -> Optional[str]:
        return self._raw_keys.get(normalize(key))

    def snapshot(self) -> Dict[str, str]:
        """Copy of the normalized mapping."""
        return dict(self._values)

    def replace_value(self, normalized_key: str, value: str) -> None:
        """Overwrite a value in place without touching its display key."""
        if normalized_key not in self._values:
            raise KeyError(normalized_key)
        self._values[normalized_key] = value

    def items(self) -> Iterator[Tuple[str, str]]:
        """Yield (display key, value) pairs in insertion order."""
        for normalized, value in self._values.items():
            yield self._raw_keys[normalized], value

    def clear(self) -> None:
        self._values.clear()
        self._raw_keys.clear()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize(key) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ConfigStore(keys={len(self._values)})"
