"""ENC() value detection and the default AES-GCM encryptor."""

from confstack.crypto.aes import KEY_LENGTH, AesGcmPropertyEncryptor
from confstack.crypto.codec import SecretCodec, is_wrapped, unwrap, wrap
from confstack.crypto.interfaces import EncryptorFactory, PropertyEncryptor

__all__ = [
    "KEY_LENGTH",
    "AesGcmPropertyEncryptor",
    "EncryptorFactory",
    "PropertyEncryptor",
    "SecretCodec",
    "is_wrapped",
    "unwrap",
    "wrap",
]
