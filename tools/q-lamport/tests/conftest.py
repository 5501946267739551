"""Pytest configuration and fixtures for q-lamport tests."""

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from Crypto.Hash import SHAKE256

from q_lamport.keys import PrivateKey, PublicKey, derive_public_key, generate_key_pair


class DeterministicSource:
    """Repeatable random source backed by a SHAKE256 stream."""

    def __init__(self, seed: bytes = b"q-lamport-test") -> None:
        self._shake = SHAKE256.new(seed)
        self.calls = 0

    def __call__(self, n: int) -> bytes:
        self.calls += 1
        return self._shake.read(n)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def deterministic_source() -> DeterministicSource:
    """Seeded random source."""
    return DeterministicSource()


@pytest.fixture
def private_key() -> PrivateKey:
    """Freshly generated private key."""
    return generate_key_pair()


@pytest.fixture
def public_key(private_key: PrivateKey) -> PublicKey:
    """Public key matching the private_key fixture."""
    return derive_public_key(private_key)


@pytest.fixture
def source_factory():
    """Build seeded random sources."""
    return DeterministicSource
