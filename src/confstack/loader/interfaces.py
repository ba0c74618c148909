from __future__ import annotations

from typing import Optional, Protocol

from confstack.loader.models import RuntimeSnapshot
from confstack.store import ConfigStore


class ConfigLoader(Protocol):
    """
    Loads the effective configuration store.

    Sources are applied from weakest to strongest: properties file, YAML file, profile
    files, environment variables, process properties, command-line arguments.
    """

    def load_configuration(self, snapshot: Optional[RuntimeSnapshot] = None) -> ConfigStore:
        ...

    def get_property(self, key: str) -> Optional[str]:
        ...
