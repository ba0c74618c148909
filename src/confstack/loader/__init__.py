"""Layered configuration loading."""

from confstack.loader.interfaces import ConfigLoader
from confstack.loader.loader import ConfigurationLoader, parse_command_line, split_profiles
from confstack.loader.models import DEFAULT_CONFIG_NAME, ConfigLoadRequest, RuntimeSnapshot

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "ConfigLoadRequest",
    "ConfigLoader",
    "ConfigurationLoader",
    "RuntimeSnapshot",
    "parse_command_line",
    "split_profiles",
]
