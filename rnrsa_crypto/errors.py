"""
Error kinds raised by the RSA engine.

Every failure carries a stable ``code`` label so that callers on the other
side of an asynchronous boundary can tell the kinds apart without matching
on message text.
"""
from typing import Dict, Optional


class RSAError(Exception):
    """Base class for all engine failures."""

    code = 'Error'
    default_message = 'RSA operation failed'

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, str]:
        return {'code': self.code, 'message': self.message}


class UnsupportedAlgorithm(RSAError):
    """The cryptographic provider has no RSA support."""

    code = 'UnsupportedAlgorithm'
    default_message = 'RSA is not supported by the cryptographic provider'


class KeyEncodingError(RSAError):
    """A generated key could not be serialized."""

    code = 'IOFailure'
    default_message = 'Failed to encode RSA key'


class MalformedKey(RSAError):
    code = 'MalformedKey'
    default_message = 'Key is not a valid encoded RSA key'


class NoKeyLoaded(RSAError):
    code = 'NoKeyLoaded'
    default_message = 'No key loaded'


class MessageTooLarge(RSAError):
    """Plaintext does not fit in a single OAEP block for the loaded key."""

    code = 'MessageTooLarge'
    default_message = 'Message too large for key size'

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"Message is {length} bytes, key allows at most {limit} bytes")


class EncryptionFailure(RSAError):
    code = 'EncryptionFailure'
    default_message = 'Encryption failed'


class DecryptionFailure(RSAError):
    # Always raised with the default message: the reason a ciphertext was
    # rejected must not be observable.
    code = 'DecryptionFailure'
    default_message = 'Decryption failed'
