from __future__ import annotations

from typing import Callable, Protocol


class PropertyEncryptor(Protocol):
    def encrypt(self, value: str) -> str:
        """Return the encoded ciphertext for `value` (without the ENC() wrapper)."""

    def decrypt(self, encrypted_value: str) -> str:
        """Return the plaintext for an encoded ciphertext."""


EncryptorFactory = Callable[[str], PropertyEncryptor]
