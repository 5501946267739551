"""Lamport one-time signatures.

This package provides:
- Key pair generation from a secure random source
- Signing of message digests by revealing one secret per bit
- Verification against the hashed public key
- A command-line tool for generating and exercising key pairs
"""

__version__ = "0.1.0"

from .bits import BitIndexError, get_bit
from .hashing import HashAlgorithm
from .keys import (
    KeyReuseError,
    PrivateKey,
    PublicKey,
    derive_public_key,
    generate_key_pair,
)
from .signer import IndexingMode, Signature, sign
from .verify import VerificationResult, verify, verify_detailed

__all__ = [
    "BitIndexError",
    "HashAlgorithm",
    "IndexingMode",
    "KeyReuseError",
    "PrivateKey",
    "PublicKey",
    "Signature",
    "VerificationResult",
    "derive_public_key",
    "generate_key_pair",
    "get_bit",
    "sign",
    "verify",
    "verify_detailed",
]
