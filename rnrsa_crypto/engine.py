import logging
from typing import NamedTuple, Optional

from cryptography import exceptions as crypto_exceptions
from cryptography.hazmat.primitives.asymmetric import rsa, padding
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.backends import default_backend

from .config import PUBLIC_EXPONENT, TEXT_ENCODING, default_key_size, validate_key_size
from .encoding import Base64Encoder, is_pem
from .errors import (
    DecryptionFailure,
    EncryptionFailure,
    KeyEncodingError,
    MalformedKey,
    MessageTooLarge,
    NoKeyLoaded,
    UnsupportedAlgorithm,
)

log = logging.getLogger(__name__)

# OAEP overhead is two digests plus two bytes
_OAEP_HASH = hashes.SHA256
_OAEP_OVERHEAD = 2 * _OAEP_HASH.digest_size + 2


class KeyPair(NamedTuple):
    public: str
    private: str


# --- Key helpers ---

def _oaep() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=_OAEP_HASH()),
        algorithm=_OAEP_HASH(),
        label=None,
    )


def _modulus_bytes(key) -> int:
    return (key.key_size + 7) // 8


def max_message_length(key) -> int:
    """Largest plaintext, in bytes, one OAEP block can carry for this key."""
    return _modulus_bytes(key) - _OAEP_OVERHEAD


def encode_public_key(key: rsa.RSAPublicKey) -> str:
    """Base64 of the DER SubjectPublicKeyInfo."""
    der = key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return Base64Encoder.encode(der)


def encode_private_key(key: rsa.RSAPrivateKey) -> str:
    """Base64 of the unencrypted DER PKCS#8 PrivateKeyInfo."""
    der = key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return Base64Encoder.encode(der)


def decode_public_key(text: str) -> rsa.RSAPublicKey:
    """Parse a Base64 DER (or PEM) public key. Raises MalformedKey."""
    if not isinstance(text, str):
        raise MalformedKey("Public key must be a string")
    try:
        if is_pem(text):
            key = serialization.load_pem_public_key(text.strip().encode('ascii'))
        else:
            key = serialization.load_der_public_key(Base64Encoder.decode(text))
    except (ValueError, TypeError, crypto_exceptions.UnsupportedAlgorithm) as e:
        log.warning("Rejected public key: %s", type(e).__name__)
        raise MalformedKey("String does not contain a valid RSA public key") from e

    if not isinstance(key, rsa.RSAPublicKey):
        log.warning("Rejected public key: %s is not RSA", type(key).__name__)
        raise MalformedKey("Public key is not an RSA key")
    return key


def decode_private_key(text: str) -> rsa.RSAPrivateKey:
    """Parse a Base64 DER (or PEM) private key. Raises MalformedKey."""
    if not isinstance(text, str):
        raise MalformedKey("Private key must be a string")
    try:
        if is_pem(text):
            key = serialization.load_pem_private_key(text.strip().encode('ascii'), password=None)
        else:
            key = serialization.load_der_private_key(Base64Encoder.decode(text), password=None)
    except (ValueError, TypeError, crypto_exceptions.UnsupportedAlgorithm) as e:
        # TypeError covers password-protected keys
        log.warning("Rejected private key: %s", type(e).__name__)
        raise MalformedKey("String does not contain a valid RSA private key") from e

    if not isinstance(key, rsa.RSAPrivateKey):
        log.warning("Rejected private key: %s is not RSA", type(key).__name__)
        raise MalformedKey("Private key is not an RSA key")
    return key


# --- Engine ---

class RsaEngine:
    """
    RSA key generation and single-block OAEP(SHA-256) encryption.

    An engine holds at most one public and one private key. Keys are loaded
    independently and are never checked to belong together. Instances are not
    thread-safe; create one per operation.
    """

    def __init__(self, key_size: Optional[int] = None) -> None:
        self._key_size = key_size
        self._public_key: Optional[rsa.RSAPublicKey] = None
        self._private_key: Optional[rsa.RSAPrivateKey] = None

    @property
    def key_size(self) -> int:
        """Size of keys made by generate(); raises ValueError on a bad setting."""
        if self._key_size is None:
            return default_key_size()
        return validate_key_size(self._key_size)

    @property
    def public_key(self) -> Optional[str]:
        if self._public_key is None:
            return None
        return encode_public_key(self._public_key)

    @property
    def private_key(self) -> Optional[str]:
        if self._private_key is None:
            return None
        return encode_private_key(self._private_key)

    @property
    def has_public_key(self) -> bool:
        return self._public_key is not None

    @property
    def has_private_key(self) -> bool:
        return self._private_key is not None

    @property
    def max_message_length(self) -> int:
        return max_message_length(self._require_public())

    def generate(self) -> KeyPair:
        """Generate a fresh key pair, load it into both slots and return it encoded."""
        key_size = self.key_size
        log.debug("Generating %d-bit RSA key pair", key_size)
        try:
            key = rsa.generate_private_key(
                public_exponent=PUBLIC_EXPONENT, key_size=key_size, backend=default_backend()
            )
        except crypto_exceptions.UnsupportedAlgorithm as e:
            raise UnsupportedAlgorithm(str(e) or None) from e

        try:
            pair = KeyPair(public=encode_public_key(key.public_key()), private=encode_private_key(key))
        except (ValueError, TypeError) as e:
            raise KeyEncodingError(f"Failed to encode generated key: {e}") from e

        self._public_key = key.public_key()
        self._private_key = key
        return pair

    def load_public_key(self, public_key: str) -> None:
        key = decode_public_key(public_key)
        self._public_key = key
        log.debug("Loaded %d-bit RSA public key", key.key_size)

    def load_private_key(self, private_key: str) -> None:
        key = decode_private_key(private_key)
        self._private_key = key
        log.debug("Loaded %d-bit RSA private key", key.key_size)

    def encrypt(self, message: str, public_key: Optional[str] = None) -> str:
        """Encrypt a text message, returning Base64 ciphertext.

        When ``public_key`` is given it is loaded first.
        """
        if not isinstance(message, str):
            raise TypeError("message must be str")
        if public_key is not None:
            self.load_public_key(public_key)
        key = self._require_public()

        try:
            data = message.encode(TEXT_ENCODING)
        except UnicodeEncodeError as e:
            raise EncryptionFailure(f"Message is not encodable as {TEXT_ENCODING}") from e

        limit = max_message_length(key)
        if len(data) > limit:
            raise MessageTooLarge(len(data), limit)

        try:
            ciphertext = key.encrypt(data, _oaep())
        except (ValueError, TypeError, crypto_exceptions.UnsupportedAlgorithm) as e:
            raise EncryptionFailure(str(e) or None) from e

        log.debug("Encrypted %d bytes into %d-byte block", len(data), len(ciphertext))
        return Base64Encoder.encode(ciphertext)

    def decrypt(self, ciphertext: str, private_key: Optional[str] = None) -> str:
        """Decrypt Base64 ciphertext back to text.

        Every rejection is reported as the same DecryptionFailure.
        """
        if private_key is not None:
            self.load_private_key(private_key)
        key = self._require_private()

        try:
            data = Base64Encoder.decode(ciphertext)
        except ValueError:
            data = None
        if data is None or len(data) != _modulus_bytes(key):
            raise DecryptionFailure()

        try:
            message = key.decrypt(data, _oaep()).decode(TEXT_ENCODING)
        except ValueError:
            # UnicodeDecodeError is a ValueError too
            message = None
        if message is None:
            raise DecryptionFailure()
        return message

    def _require_public(self) -> rsa.RSAPublicKey:
        if self._public_key is None:
            raise NoKeyLoaded("No public key loaded")
        return self._public_key

    def _require_private(self) -> rsa.RSAPrivateKey:
        if self._private_key is None:
            raise NoKeyLoaded("No private key loaded")
        return self._private_key
