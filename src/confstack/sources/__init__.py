"""File-backed configuration sources."""

from confstack.sources.interfaces import (
    FORMAT_EXTENSIONS,
    PRECEDENCE,
    SourceDescriptor,
    SourceFormat,
    SourceKind,
    SourceReader,
)
from confstack.sources.properties import parse_properties
from confstack.sources.reader import FileSourceReader
from confstack.sources.yaml_source import flatten_mapping, parse_yaml

__all__ = [
    "FORMAT_EXTENSIONS",
    "PRECEDENCE",
    "FileSourceReader",
    "SourceDescriptor",
    "SourceFormat",
    "SourceKind",
    "SourceReader",
    "flatten_mapping",
    "parse_properties",
    "parse_yaml",
]
