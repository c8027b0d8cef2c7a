import os
import logging

DEFAULT_KEY_SIZE = 2048
MIN_KEY_SIZE = 1024
PUBLIC_EXPONENT = 65537
TEXT_ENCODING = 'utf-8'

# Environment override for the generated key size
KEY_SIZE_ENV = 'RNRSA_KEY_SIZE'

log = logging.getLogger(__name__)


def default_key_size() -> int:
    """Return the key size for new key pairs, honouring $RNRSA_KEY_SIZE when set."""
    raw = os.environ.get(KEY_SIZE_ENV)
    if raw is None or not raw.strip():
        return DEFAULT_KEY_SIZE
    return validate_key_size(raw.strip(), source=KEY_SIZE_ENV)


def validate_key_size(value, source: str = 'key_size') -> int:
    if isinstance(value, (bool, float)):
        raise ValueError(f"{source} must be an integer, got {value!r}")
    try:
        bits = int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{source} must be an integer, got {value!r}") from e
    if bits < MIN_KEY_SIZE:
        raise ValueError(f"{source} must be at least {MIN_KEY_SIZE} bits, got {bits}")
    log.debug("Using RSA key size %d from %s", bits, source)
    return bits
