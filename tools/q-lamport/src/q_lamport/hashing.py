"""Hash and randomness collaborators for Lamport signatures.

Both the message digest and the secret commitments go through the same
256-bit hash. The random source is passed in as a plain callable so that
callers (and tests) can substitute it; the default is the system CSPRNG.
"""

from enum import Enum
from typing import Any, Callable, Union

from Crypto.Hash import SHA256, SHA3_256
from Crypto.Random import get_random_bytes

DIGEST_SIZE = 32

# Callable returning exactly ``n`` random bytes.
RandomSource = Callable[[int], bytes]

Message = Union[bytes, bytearray, memoryview]


class HashAlgorithm(Enum):
    """Supported 256-bit hash functions."""

    SHA256 = "sha256"
    SHA3_256 = "sha3-256"

    @classmethod
    def from_string(cls, value: str) -> "HashAlgorithm":
        """Convert string to hash algorithm enum."""
        mapping = {
            "sha256": cls.SHA256,
            "sha-256": cls.SHA256,
            "sha3-256": cls.SHA3_256,
            "sha3_256": cls.SHA3_256,
        }
        try:
            return mapping[value.lower()]
        except KeyError:
            raise ValueError(f"Unsupported hash algorithm: {value}") from None

    def digest(self, data: bytes) -> bytes:
        """Hash ``data`` to a 32-byte digest."""
        if self is HashAlgorithm.SHA3_256:
            return SHA3_256.new(data).digest()
        return SHA256.new(data).digest()


def digest_message(algorithm: HashAlgorithm, message: Message) -> bytes:
    """Compute the 256-bit digest of a message.

    Args:
        algorithm: Hash function to apply
        message: Message bytes

    Returns:
        32-byte digest

    Raises:
        TypeError: If message is not bytes-like
    """
    return algorithm.digest(as_bytes(message, "Message"))


def system_random(n: int) -> bytes:
    """Read ``n`` bytes from the operating system CSPRNG."""
    return get_random_bytes(n)


def read_random(source: RandomSource, n: int) -> bytes:
    """Draw ``n`` bytes from ``source`` and check the length.

    Failures of the source itself are not caught.
    """
    data = source(n)
    if len(data) != n:
        raise ValueError(f"Random source returned {len(data)} bytes, expected {n}")
    return bytes(data)


def as_bytes(value: Any, what: str) -> bytes:
    """Copy a bytes-like value, refusing ints and other types.

    ``bytes(32)`` would silently build 32 zero bytes, so the type is
    checked before conversion.

    Raises:
        TypeError: If value is not bytes, bytearray or memoryview
    """
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{what} must be bytes-like, not {type(value).__name__}")
    return bytes(value)
