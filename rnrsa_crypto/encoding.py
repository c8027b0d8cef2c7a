"""Text encoding helpers for keys and ciphertext."""
import base64
import re

_WHITESPACE = re.compile(r'\s+')


class Base64Encoder:
    """Standard-alphabet Base64 encoder/decoder."""

    @staticmethod
    def encode(data: bytes) -> str:
        return base64.b64encode(data).decode('ascii')

    @staticmethod
    def decode(data: str) -> bytes:
        """Decodes Base64 text, ignoring line breaks. Raises ValueError on bad input."""
        if not isinstance(data, str):
            raise ValueError("Base64 input must be text")
        compact = _WHITESPACE.sub('', data)
        if not compact:
            raise ValueError("Base64 input is empty")
        try:
            return base64.b64decode(compact, validate=True)
        except ValueError as e:
            # binascii.Error, or non-ASCII text
            raise ValueError(f"Invalid Base64 data: {e}") from e


def is_pem(text: str) -> bool:
    """True when the text carries PEM armour rather than a bare Base64 body."""
    return text.lstrip().startswith('-----BEGIN ')
