from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Mapping, Protocol

SourceFormat = Literal["properties", "yaml"]
SourceKind = Literal[
    "properties-file",
    "yaml-file",
    "profile-properties-file",
    "profile-yaml-file",
    "environment",
    "system-property",
    "command-line",
]

FORMAT_EXTENSIONS: Dict[SourceFormat, str] = {
    "properties": ".properties",
    "yaml": ".yml",
}

# Later ranks overwrite earlier ones.
PRECEDENCE: Dict[SourceKind, int] = {
    "properties-file": 1,
    "yaml-file": 2,
    "profile-properties-file": 3,
    "profile-yaml-file": 4,
    "environment": 5,
    "system-property": 6,
    "command-line": 7,
}


@dataclass(frozen=True, slots=True)
class SourceDescriptor:
    name: str
    kind: SourceKind
    key_count: int = 0

    @property
    def rank(self) -> int:
        return PRECEDENCE[self.kind]


class SourceReader(Protocol):
    def read(self, name: str, fmt: SourceFormat) -> Mapping[str, str]:
        """
        Locate `name` + the format extension and parse it into a flat string map.

        Raises SourceUnavailable when the file cannot be found or read and
        SourceParseError when its content is malformed.
        """
