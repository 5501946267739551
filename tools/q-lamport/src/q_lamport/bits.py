"""Bit extraction shared by signing and verification."""

BITS_PER_BYTE = 8


class BitIndexError(ValueError):
    """Raised when a bit index falls outside 0-7."""


def get_bit(byte: int, index: int) -> bool:
    """Return bit ``index`` of ``byte``, counting from the least-significant bit.

    Args:
        byte: Value in 0..255
        index: Bit index in 0..7

    Returns:
        True if the bit is set

    Raises:
        BitIndexError: If index is not in 0..7
        ValueError: If byte is not in 0..255
    """
    if not 0 <= index < BITS_PER_BYTE:
        raise BitIndexError(f"Bit index out of range: {index}")
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"Not a byte value: {byte}")

    return byte & (1 << index) != 0
