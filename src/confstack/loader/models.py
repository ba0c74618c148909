from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

from dotenv import dotenv_values

DEFAULT_CONFIG_NAME = "config"


@dataclass(frozen=True, slots=True)
class ConfigLoadRequest:
    """
    Inputs that control where configuration is read from.

    `strict` makes a missing or malformed file source (default or profile) fatal.
    `env_prefix` limits which environment variables are copied into the store.
    """

    base_name: str = DEFAULT_CONFIG_NAME
    search_paths: Sequence[str] = (".",)
    resource_package: Optional[str] = None
    strict: bool = False
    env_prefix: Optional[str] = None
    resolve_placeholders: bool = True


@dataclass(frozen=True, slots=True)
class RuntimeSnapshot:
    """Process state consulted by one load: environment, process properties and arguments."""

    environ: Mapping[str, str] = field(default_factory=dict)
    properties: Mapping[str, str] = field(default_factory=dict)
    argv: Sequence[str] = ()

    @classmethod
    def capture(
        cls,
        argv: Sequence[str] = (),
        properties: Optional[Mapping[str, str]] = None,
        dotenv_path: Optional[str] = None,
    ) -> RuntimeSnapshot:
        environ: Dict[str, str] = dict(os.environ)
        if dotenv_path is not None:
            # Real environment variables win over .env entries.
            environ = {**_read_dotenv_if_present(Path(dotenv_path)), **environ}
        return cls(environ=environ, properties=dict(properties or {}), argv=tuple(argv))


def _read_dotenv_if_present(dotenv_path: Path) -> Dict[str, str]:
    if not dotenv_path.exists():
        return {}
    return {key: value for key, value in dotenv_values(dotenv_path).items() if value is not None}
