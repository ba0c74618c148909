from __future__ import annotations

from typing import Optional


class ConfigurationError(RuntimeError):
    """Base class for every error raised by confstack."""


class SourceUnavailable(ConfigurationError):
    def __init__(self, source: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Configuration source not found: {source}")
        self.source = source


class SourceParseError(ConfigurationError):
    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"Malformed configuration source {source}: {message}")
        self.source = source


class ConfigLoadError(ConfigurationError):
    """
    Raised in strict mode when a source cannot be loaded.

    The underlying SourceUnavailable / SourceParseError is chained as __cause__.
    """

    def __init__(self, source: str, cause: BaseException) -> None:
        super().__init__(f"Unable to load {source}: {cause}")
        self.source = source


class EncryptionKeyMissing(ConfigurationError):
    pass


class DecryptionFailure(ConfigurationError):
    pass


class InvalidEncryptionKeyLength(ConfigurationError, ValueError):
    def __init__(self, required: int, actual: Optional[int]) -> None:
        super().__init__(f"Encryption key must be {required} characters long. got={actual}")
        self.required = required
        self.actual = actual


class BindingError(ConfigurationError):
    def __init__(self, field_name: str, message: str) -> None:
        super().__init__(message)
        self.field_name = field_name


class UnsupportedFieldType(BindingError):
    def __init__(self, field_name: str, field_type: object) -> None:
        super().__init__(field_name, f"Unsupported field type: {field_type!r} (field={field_name})")
        self.field_type = field_type


class FormatError(BindingError, ValueError):
    def __init__(self, field_name: str, raw_value: str, expected: str) -> None:
        super().__init__(
            field_name,
            f"Cannot convert value for field '{field_name}' to {expected}. value={raw_value!r}",
        )
        self.raw_value = raw_value
        self.expected = expected
