"""Lamport private and public keys.

A private key is 256 pairs of 32-byte random secrets, one pair per bit of
a 256-bit digest. The public key holds the hash of every secret at the same
position and bit value. Once derived, the public key is independent of the
private key, which may then be discarded.

A private key must sign at most one message. This is not enforced unless
the key is created with ``single_use=True``.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from .hashing import (
    DIGEST_SIZE,
    HashAlgorithm,
    Message,
    RandomSource,
    as_bytes,
    read_random,
    system_random,
)

log = logging.getLogger(__name__)

KEY_PAIRS = 256
SECRET_SIZE = 32

Pair = Tuple[bytes, bytes]


class KeyReuseError(RuntimeError):
    """Raised when a single-use private key is asked to sign again."""


def _validate_pairs(pairs: Iterable[Sequence[bytes]], size: int, kind: str) -> Tuple[Pair, ...]:
    """Normalize key material to a tuple of byte pairs and check its shape."""
    result = []
    for position, pair in enumerate(pairs):
        if len(pair) != 2:
            raise ValueError(f"{kind} key entry {position} is not a pair")
        first = as_bytes(pair[0], f"{kind} key entry {position}")
        second = as_bytes(pair[1], f"{kind} key entry {position}")
        if len(first) != size or len(second) != size:
            raise ValueError(
                f"{kind} key entry {position} must hold two {size}-byte values"
            )
        result.append((first, second))

    if len(result) != KEY_PAIRS:
        raise ValueError(f"{kind} key must have {KEY_PAIRS} pairs, got {len(result)}")

    return tuple(result)


def _hex_dump(pairs: Sequence[Pair], label: str) -> str:
    """Render all slot-0 values, a newline, then all slot-1 values."""
    slot0 = "".join(first.hex() for first, _ in pairs)
    slot1 = "".join(second.hex() for _, second in pairs)
    return f"{label}0: {slot0}\n{label}1: {slot1}"


class PrivateKey:
    """A Lamport one-time private key."""

    def __init__(
        self,
        pairs: Iterable[Sequence[bytes]],
        hash_algorithm: HashAlgorithm = HashAlgorithm.SHA256,
        single_use: bool = False,
    ) -> None:
        """Initialize private key.

        Args:
            pairs: 256 pairs of 32-byte secrets
            hash_algorithm: Hash used for digests and commitments
            single_use: Refuse to sign more than one message

        Raises:
            ValueError: If the key material is malformed
            TypeError: If a secret is not bytes-like
        """
        self._pairs = _validate_pairs(pairs, SECRET_SIZE, "Private")
        self.hash_algorithm = hash_algorithm
        self.single_use = single_use
        self._used = False
        self._lock = threading.Lock()

    @classmethod
    def generate(
        cls,
        random_source: Optional[RandomSource] = None,
        hash_algorithm: HashAlgorithm = HashAlgorithm.SHA256,
        single_use: bool = False,
    ) -> "PrivateKey":
        """Generate a fresh private key.

        Every one of the 512 secrets is read separately from the random
        source. Errors raised by the source propagate unchanged.

        Args:
            random_source: Callable returning n random bytes (system CSPRNG by default)
            hash_algorithm: Hash used for digests and commitments
            single_use: Refuse to sign more than one message

        Returns:
            New PrivateKey
        """
        source = random_source or system_random
        pairs = [
            (read_random(source, SECRET_SIZE), read_random(source, SECRET_SIZE))
            for _ in range(KEY_PAIRS)
        ]
        log.debug(
            "Generated Lamport private key (%s, single_use=%s)",
            hash_algorithm.value,
            single_use,
        )
        return cls(pairs, hash_algorithm=hash_algorithm, single_use=single_use)

    @property
    def pairs(self) -> Tuple[Pair, ...]:
        return self._pairs

    @property
    def used(self) -> bool:
        """Whether this key has already produced a signature."""
        return self._used

    def mark_used(self) -> None:
        """Record a signing operation.

        Raises:
            KeyReuseError: If the key is single-use and has already signed
        """
        with self._lock:
            if self.single_use and self._used:
                raise KeyReuseError("Single-use private key has already signed a message")
            self._used = True

    def public_key(self) -> "PublicKey":
        """Derive the matching public key."""
        return PublicKey.from_private_key(self)

    def sign(self, message: Message, indexing=None) -> "Signature":
        """Sign a message with this key.

        Args:
            message: Message bytes
            indexing: Key slot selection mode (global by default)

        Returns:
            Signature over the message digest
        """
        from .signer import sign

        return sign(self, message, indexing=indexing)

    def __len__(self) -> int:
        return len(self._pairs)

    def __getitem__(self, position: int) -> Pair:
        return self._pairs[position]

    def __iter__(self) -> Iterator[Pair]:
        return iter(self._pairs)

    def __str__(self) -> str:
        return _hex_dump(self._pairs, "private")

    def __repr__(self) -> str:
        return (
            f"PrivateKey(hash_algorithm={self.hash_algorithm.value!r}, "
            f"single_use={self.single_use}, used={self._used})"
        )


@dataclass(frozen=True)
class PublicKey:
    """A Lamport public key: the hash of every private secret."""

    pairs: Tuple[Pair, ...]
    hash_algorithm: HashAlgorithm = HashAlgorithm.SHA256

    def __post_init__(self) -> None:
        object.__setattr__(self, "pairs", _validate_pairs(self.pairs, DIGEST_SIZE, "Public"))

    @classmethod
    def from_private_key(cls, private_key: PrivateKey) -> "PublicKey":
        """Hash both secrets of every private key pair.

        Args:
            private_key: Key to derive from

        Returns:
            PublicKey using the same hash algorithm
        """
        digest = private_key.hash_algorithm.digest
        pairs = tuple((digest(first), digest(second)) for first, second in private_key)
        return cls(pairs=pairs, hash_algorithm=private_key.hash_algorithm)

    def verify(self, message: Message, signature, indexing=None) -> bool:
        """Verify a signature against this public key.

        Args:
            message: Original message
            signature: Signature to check
            indexing: Key slot selection mode used when signing

        Returns:
            True if the signature is valid
        """
        from .verify import verify

        return verify(self, message, signature, indexing=indexing)

    def fingerprint(self) -> str:
        """Hash of all commitments, for identification."""
        material = b"".join(first + second for first, second in self.pairs)
        return self.hash_algorithm.digest(material).hex()

    def __len__(self) -> int:
        return len(self.pairs)

    def __getitem__(self, position: int) -> Pair:
        return self.pairs[position]

    def __iter__(self) -> Iterator[Pair]:
        return iter(self.pairs)

    def __str__(self) -> str:
        return _hex_dump(self.pairs, "public")

    def __repr__(self) -> str:
        return (
            f"PublicKey(hash_algorithm={self.hash_algorithm.value!r}, "
            f"fingerprint={self.fingerprint()[:16]!r})"
        )


def generate_key_pair(
    random_source: Optional[RandomSource] = None,
    hash_algorithm: HashAlgorithm = HashAlgorithm.SHA256,
    single_use: bool = False,
) -> PrivateKey:
    """Generate a new Lamport private key.

    The public half is obtained with :func:`derive_public_key`.
    """
    return PrivateKey.generate(
        random_source=random_source,
        hash_algorithm=hash_algorithm,
        single_use=single_use,
    )


def derive_public_key(private_key: PrivateKey) -> PublicKey:
    """Derive the public key of ``private_key``. Pure and deterministic."""
    return PublicKey.from_private_key(private_key)
