"""Layered configuration: files, profiles, environment, process properties and arguments."""

from confstack.binding import FieldBinder, Float32, Float64, Int32, Int64, Value
from confstack.crypto import AesGcmPropertyEncryptor, SecretCodec
from confstack.errors import (
    BindingError,
    ConfigLoadError,
    ConfigurationError,
    DecryptionFailure,
    EncryptionKeyMissing,
    FormatError,
    InvalidEncryptionKeyLength,
    SourceParseError,
    SourceUnavailable,
    UnsupportedFieldType,
)
from confstack.keys import ENCRYPTION_KEY_PROP, PROFILES_ACTIVE_PROP, normalize
from confstack.loader import ConfigLoadRequest, ConfigurationLoader, RuntimeSnapshot
from confstack.placeholders import PlaceholderEngine
from confstack.store import ConfigStore

__all__ = [
    "ENCRYPTION_KEY_PROP",
    "PROFILES_ACTIVE_PROP",
    "AesGcmPropertyEncryptor",
    "BindingError",
    "ConfigLoadError",
    "ConfigLoadRequest",
    "ConfigStore",
    "ConfigurationError",
    "ConfigurationLoader",
    "DecryptionFailure",
    "EncryptionKeyMissing",
    "FieldBinder",
    "Float32",
    "Float64",
    "FormatError",
    "Int32",
    "Int64",
    "InvalidEncryptionKeyLength",
    "PlaceholderEngine",
    "RuntimeSnapshot",
    "SecretCodec",
    "SourceParseError",
    "SourceUnavailable",
    "UnsupportedFieldType",
    "Value",
    "normalize",
]
