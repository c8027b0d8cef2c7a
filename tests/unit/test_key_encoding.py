"""Tests for loading and exporting encoded keys."""
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from rnrsa_crypto import (
    RsaEngine,
    MalformedKey,
    decode_private_key,
    decode_public_key,
    encode_public_key,
)
from rnrsa_crypto.encoding import Base64Encoder


class TestMalformedKeys:
    """Test suite for keys that must be rejected."""

    @pytest.mark.parametrize("text", [
        "",
        "not base64 at all!",
        "QUJD",  # valid Base64 of b"ABC"
        Base64Encoder.encode(b"\x30\x82\x01\x22" + b"\x00" * 20),
    ])
    def test_invalid_public_key(self, text):
        with pytest.raises(MalformedKey):
            RsaEngine().load_public_key(text)

    @pytest.mark.parametrize("text", ["", "@@@@", "QUJD"])
    def test_invalid_private_key(self, text):
        with pytest.raises(MalformedKey):
            RsaEngine().load_private_key(text)

    def test_truncated_public_key(self, key_pair):
        raw = Base64Encoder.decode(key_pair.public)
        with pytest.raises(MalformedKey):
            RsaEngine().load_public_key(Base64Encoder.encode(raw[:-10]))

    def test_private_key_as_public(self, key_pair):
        with pytest.raises(MalformedKey):
            RsaEngine().load_public_key(key_pair.private)

    def test_public_key_as_private(self, key_pair):
        with pytest.raises(MalformedKey):
            RsaEngine().load_private_key(key_pair.public)

    def test_non_rsa_public_key(self):
        ec_public = ec.generate_private_key(ec.SECP256R1()).public_key()
        der = ec_public.public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        with pytest.raises(MalformedKey, match="not an RSA key"):
            RsaEngine().load_public_key(Base64Encoder.encode(der))

    def test_non_rsa_private_key(self):
        der = ec.generate_private_key(ec.SECP256R1()).private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
        with pytest.raises(MalformedKey, match="not an RSA key"):
            RsaEngine().load_private_key(Base64Encoder.encode(der))

    def test_encrypted_private_key(self, key_pair):
        der = decode_private_key(key_pair.private).private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.BestAvailableEncryption(b"secret"),
        )
        with pytest.raises(MalformedKey):
            RsaEngine().load_private_key(Base64Encoder.encode(der))

    def test_non_string_key(self):
        with pytest.raises(MalformedKey):
            RsaEngine().load_public_key(b"bytes")

    def test_rejection_keeps_slot_empty(self):
        engine = RsaEngine()
        with pytest.raises(MalformedKey):
            engine.load_private_key("QUJD")
        assert not engine.has_private_key


class TestKeyFormats:
    """Test suite for accepted key encodings."""

    def test_public_key_is_spki_der(self, key_pair):
        key = serialization.load_der_public_key(Base64Encoder.decode(key_pair.public))
        assert encode_public_key(key) == key_pair.public

    def test_private_key_is_pkcs8_der(self, key_pair):
        key = serialization.load_der_private_key(Base64Encoder.decode(key_pair.private), password=None)
        der = key.private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
        assert Base64Encoder.encode(der) == key_pair.private

    def test_export_matches_import(self, key_pair):
        engine = RsaEngine()
        engine.load_public_key(key_pair.public)
        engine.load_private_key(key_pair.private)

        assert engine.public_key == key_pair.public
        assert engine.private_key == key_pair.private

    def test_line_wrapped_base64(self, key_pair):
        body = key_pair.public
        wrapped = "\n".join(body[i:i + 64] for i in range(0, len(body), 64))

        engine = RsaEngine()
        engine.load_public_key(wrapped)
        assert engine.public_key == key_pair.public

    def test_pem_public_key(self, key_pair):
        pem = decode_public_key(key_pair.public).public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        ).decode('ascii')

        engine = RsaEngine()
        engine.load_public_key(pem)
        assert engine.public_key == key_pair.public

    def test_pkcs1_pem_public_key(self, key_pair):
        pem = decode_public_key(key_pair.public).public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.PKCS1,
        ).decode('ascii')

        engine = RsaEngine()
        engine.load_public_key(pem)
        assert engine.public_key == key_pair.public

    def test_pkcs1_pem_private_key(self, key_pair):
        pem = decode_private_key(key_pair.private).private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode('ascii')

        engine = RsaEngine()
        engine.load_private_key(pem)
        assert engine.private_key == key_pair.private

    def test_pem_keys_interoperate(self, key_pair):
        public_pem = decode_public_key(key_pair.public).public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        ).decode('ascii')

        ciphertext = RsaEngine().encrypt("via pem", public_pem)
        assert RsaEngine().decrypt(ciphertext, key_pair.private) == "via pem"
