"""Lamport signing.

The message digest is read byte by byte, and within each byte bit by bit
starting from the least-significant bit. For every one of the 256 bits one
secret of a private key pair is revealed: the first secret for a 0 bit, the
second for a 1 bit.

Which pair is used at a given bit is decided by the indexing mode:

- ``GLOBAL`` uses pair ``i`` for digest bit ``i`` (0-255), covering the
  whole key.
- ``LEGACY`` uses pair ``i % 8``, the bit index within its byte. Only the
  first 8 pairs are ever revealed, each one 32 times. This reproduces
  signatures made by older Lamport implementations and is much weaker.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from .bits import BITS_PER_BYTE, get_bit
from .hashing import Message, as_bytes, digest_message
from .keys import KEY_PAIRS, SECRET_SIZE, PrivateKey

log = logging.getLogger(__name__)


class IndexingMode(Enum):
    """How digest bits map to private key pairs."""

    GLOBAL = "global"
    LEGACY = "legacy"

    @classmethod
    def from_string(cls, value: str) -> "IndexingMode":
        """Convert string to indexing mode enum."""
        mapping = {
            "global": cls.GLOBAL,
            "full": cls.GLOBAL,
            "legacy": cls.LEGACY,
            "per-byte": cls.LEGACY,
        }
        try:
            return mapping[value.lower()]
        except KeyError:
            raise ValueError(f"Unsupported indexing mode: {value}") from None


def bit_positions(digest: bytes, indexing: IndexingMode) -> Iterator[Tuple[int, int]]:
    """Yield ``(key_slot, bit)`` for every bit of the digest in signing order.

    Bytes are visited in order, bits within a byte from index 0 (LSB) to 7.
    """
    position = 0
    for byte in digest:
        for index in range(BITS_PER_BYTE):
            bit = int(get_bit(byte, index))
            slot = index if indexing is IndexingMode.LEGACY else position
            yield slot, bit
            position += 1


@dataclass(frozen=True)
class Signature:
    """A Lamport signature: one revealed secret per digest bit."""

    values: Tuple[bytes, ...]

    def __post_init__(self) -> None:
        values = tuple(
            as_bytes(value, f"Signature entry {position}")
            for position, value in enumerate(self.values)
        )
        if len(values) != KEY_PAIRS:
            raise ValueError(f"Signature must have {KEY_PAIRS} entries, got {len(values)}")
        for position, value in enumerate(values):
            if len(value) != SECRET_SIZE:
                raise ValueError(f"Signature entry {position} must be {SECRET_SIZE} bytes")
        object.__setattr__(self, "values", values)

    def replace(self, position: int, value: bytes) -> "Signature":
        """Return a copy with one entry replaced."""
        values = list(self.values)
        values[position] = value
        return Signature(tuple(values))

    def hex(self) -> str:
        return "".join(value.hex() for value in self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, position: int) -> bytes:
        return self.values[position]

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.values)


def sign(
    private_key: PrivateKey,
    message: Message,
    indexing: Optional[IndexingMode] = None,
) -> Signature:
    """Sign a message with a Lamport private key.

    Args:
        private_key: Key to sign with
        message: Message bytes of any length
        indexing: Key slot selection mode, ``IndexingMode.GLOBAL`` if not given

    Returns:
        Signature with 256 revealed secrets

    Raises:
        KeyReuseError: If a single-use key has already signed
        TypeError: If message is not bytes-like
    """
    indexing = indexing or IndexingMode.GLOBAL
    digest = digest_message(private_key.hash_algorithm, message)
    private_key.mark_used()

    values = tuple(
        private_key[slot][bit] for slot, bit in bit_positions(digest, indexing)
    )

    log.debug(
        "Signed %d-byte message (%s, %s indexing)",
        len(message),
        private_key.hash_algorithm.value,
        indexing.value,
    )
    return Signature(values)
