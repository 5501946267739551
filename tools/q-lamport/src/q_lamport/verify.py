"""Lamport signature verification."""

import hmac
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .hashing import Message, as_bytes, digest_message
from .keys import KEY_PAIRS, PublicKey
from .signer import IndexingMode, bit_positions

log = logging.getLogger(__name__)


@dataclass
class VerificationResult:
    """Result of checking a signature position by position."""

    matched: int = 0
    total: int = KEY_PAIRS
    mismatched_positions: List[int] = field(default_factory=list)
    details: str = ""

    def is_valid(self) -> bool:
        """All 256 positions must match; there is no partial acceptance."""
        return self.total == KEY_PAIRS and self.matched == KEY_PAIRS


def verify_detailed(
    public_key: PublicKey,
    message: Message,
    signature: Iterable[bytes],
    indexing: Optional[IndexingMode] = None,
) -> VerificationResult:
    """Verify a signature and report which positions failed.

    Every position is checked; there is no early exit.

    Args:
        public_key: Public key of the signer
        message: Original message
        signature: Signature (or any sequence of revealed secrets)
        indexing: Key slot selection mode used when signing

    Returns:
        VerificationResult with match count and failing positions
    """
    indexing = indexing or IndexingMode.GLOBAL
    values = tuple(signature)

    if len(values) != KEY_PAIRS:
        return VerificationResult(
            matched=0,
            total=len(values),
            details=f"Signature has {len(values)} entries, expected {KEY_PAIRS}",
        )

    hash_algorithm = public_key.hash_algorithm
    digest = digest_message(hash_algorithm, message)
    result = VerificationResult()

    for position, (slot, bit) in enumerate(bit_positions(digest, indexing)):
        expected = public_key[slot][bit]
        revealed = hash_algorithm.digest(as_bytes(values[position], "Signature entry"))
        if hmac.compare_digest(revealed, expected):
            result.matched += 1
        else:
            result.mismatched_positions.append(position)

    if result.is_valid():
        result.details = f"Valid Lamport signature ({hash_algorithm.value}, {indexing.value} indexing)"
    else:
        result.details = f"{len(result.mismatched_positions)} of {KEY_PAIRS} positions do not match"

    log.debug("Verification: %d/%d positions matched", result.matched, result.total)
    return result


def verify(
    public_key: PublicKey,
    message: Message,
    signature: Iterable[bytes],
    indexing: Optional[IndexingMode] = None,
) -> bool:
    """Verify a Lamport signature.

    A False result is the normal outcome for a forged or tampered
    signature and is never raised as an error.

    Args:
        public_key: Public key of the signer
        message: Original message
        signature: Signature to check
        indexing: Key slot selection mode used when signing

    Returns:
        True iff every one of the 256 positions matches

    Raises:
        TypeError: If the message or a signature entry is not bytes-like
    """
    return verify_detailed(public_key, message, signature, indexing=indexing).is_valid()
