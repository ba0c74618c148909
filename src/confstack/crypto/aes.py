from __future__ import annotations

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from confstack.errors import DecryptionFailure, InvalidEncryptionKeyLength

KEY_LENGTH = 16
NONCE_LENGTH = 12


class AesGcmPropertyEncryptor:
    """
    AES-128-GCM encryptor for configuration values.

    The key is a 16 character string. Encoded payloads are base64(nonce + ciphertext + tag).
    """

    def __init__(self, encryption_key: str) -> None:
        if encryption_key is None or len(encryption_key) != KEY_LENGTH:
            raise InvalidEncryptionKeyLength(KEY_LENGTH, None if encryption_key is None else len(encryption_key))
        key_bytes = encryption_key.encode("utf-8")
        if len(key_bytes) != KEY_LENGTH:
            raise InvalidEncryptionKeyLength(KEY_LENGTH, len(key_bytes))
        self._aesgcm = AESGCM(key_bytes)

    def encrypt(self, value: str) -> str:
        if value is None:
            raise TypeError("Cannot encrypt None.")
        nonce = os.urandom(NONCE_LENGTH)
        sealed = self._aesgcm.encrypt(nonce, value.encode("utf-8"), None)
        return base64.b64encode(nonce + sealed).decode("ascii")

    def decrypt(self, encrypted_value: str) -> str:
        if encrypted_value is None:
            raise DecryptionFailure("Cannot decrypt None.")
        try:
            raw = base64.b64decode(encrypted_value.strip(), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecryptionFailure("Encrypted value is not valid base64.") from exc
        if len(raw) <= NONCE_LENGTH:
            raise DecryptionFailure("Encrypted value is too short.")
        try:
            plain = self._aesgcm.decrypt(raw[:NONCE_LENGTH], raw[NONCE_LENGTH:], None)
        except InvalidTag as exc:
            raise DecryptionFailure("Encrypted value failed authentication.") from exc
        try:
            return plain.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecryptionFailure("Decrypted value is not valid UTF-8.") from exc
