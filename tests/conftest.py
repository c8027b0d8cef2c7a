"""Pytest fixtures for rnrsa tests."""
import pytest

from rnrsa_crypto import RsaEngine


@pytest.fixture(scope='session')
def key_pair():
    """A 2048-bit key pair shared across the session; generation is slow."""
    return RsaEngine(2048).generate()


@pytest.fixture(scope='session')
def other_key_pair():
    """A second, unrelated 2048-bit key pair."""
    return RsaEngine(2048).generate()


@pytest.fixture
def public_engine(key_pair):
    engine = RsaEngine()
    engine.load_public_key(key_pair.public)
    return engine


@pytest.fixture
def private_engine(key_pair):
    engine = RsaEngine()
    engine.load_private_key(key_pair.private)
    return engine


@pytest.fixture(autouse=True)
def _no_key_size_override(monkeypatch):
    monkeypatch.delenv('RNRSA_KEY_SIZE', raising=False)
