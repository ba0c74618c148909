from __future__ import annotations

import logging
import re
from typing import Callable, Optional, Tuple

from confstack.crypto.aes import AesGcmPropertyEncryptor
from confstack.crypto.interfaces import EncryptorFactory, PropertyEncryptor
from confstack.errors import EncryptionKeyMissing

logger = logging.getLogger(__name__)

_WRAPPED = re.compile(r"ENC\(([^()]*)\)")


def is_wrapped(value: str) -> bool:
    return value is not None and _WRAPPED.fullmatch(value) is not None


def unwrap(value: str) -> str:
    match = _WRAPPED.fullmatch(value)
    if match is None:
        raise ValueError("Value is not wrapped in ENC().")
    return match.group(1)


def wrap(payload: str) -> str:
    return f"ENC({payload})"


class SecretCodec:
    """
    Detects ENC(...) values and delegates to a PropertyEncryptor.

    The encryptor is built on first use from the key returned by `key_provider` and
    reused until that key changes.
    """

    def __init__(
        self,
        key_provider: Callable[[], Optional[str]],
        encryptor_factory: EncryptorFactory = AesGcmPropertyEncryptor,
    ) -> None:
        self._key_provider = key_provider
        self._encryptor_factory = encryptor_factory
        self._cached: Optional[Tuple[str, PropertyEncryptor]] = None

    @property
    def encryptor(self) -> PropertyEncryptor:
        key = self._key_provider()
        if not key:
            raise EncryptionKeyMissing(
                "An encryption key is required to handle ENC() values. "
                "Set config.encryption.key or CONFIG_ENCRYPTION_KEY."
            )
        if self._cached is None or self._cached[0] != key:
            self._cached = (key, self._encryptor_factory(key))
            logger.debug("codec.encryptor_created type=%s", type(self._cached[1]).__name__)
        return self._cached[1]

    def decrypt_if_wrapped(self, value: str) -> str:
        if not is_wrapped(value):
            return value
        return self.encryptor.decrypt(unwrap(value))

    def encrypt(self, value: str) -> str:
        """Return `value` encrypted and wrapped as ENC(...)."""
        return wrap(self.encryptor.encrypt(value))
