"""
RSA key generation and OAEP encryption for text messages.

High-level API:
- RsaEngine(key_size=None): generate() -> KeyPair, load_public_key(text), load_private_key(text),
  encrypt(message, public_key=None) -> str, decrypt(ciphertext, private_key=None) -> str
- bridge.generate(key_size=None) / bridge.encrypt(message, public_key) / bridge.decrypt(ciphertext, private_key):
  coroutines that run one engine operation in an executor

Keys travel as Base64 DER (SubjectPublicKeyInfo / PKCS#8); ciphertext as Base64.
Failures are raised as RSAError subclasses carrying a ``code`` label.
"""

from .config import DEFAULT_KEY_SIZE, PUBLIC_EXPONENT
from .engine import (
    RsaEngine,
    KeyPair,
    max_message_length,
    encode_public_key,
    encode_private_key,
    decode_public_key,
    decode_private_key,
)
from .errors import (
    RSAError,
    UnsupportedAlgorithm,
    KeyEncodingError,
    MalformedKey,
    NoKeyLoaded,
    MessageTooLarge,
    EncryptionFailure,
    DecryptionFailure,
)
from . import bridge

__all__ = [
    "RsaEngine",
    "KeyPair",
    "max_message_length",
    "encode_public_key",
    "encode_private_key",
    "decode_public_key",
    "decode_private_key",
    "RSAError",
    "UnsupportedAlgorithm",
    "KeyEncodingError",
    "MalformedKey",
    "NoKeyLoaded",
    "MessageTooLarge",
    "EncryptionFailure",
    "DecryptionFailure",
    "bridge",
    "DEFAULT_KEY_SIZE",
    "PUBLIC_EXPONENT",
]
