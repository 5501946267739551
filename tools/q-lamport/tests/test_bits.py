"""Tests for the bit extraction helper."""

import pytest

from q_lamport.bits import BitIndexError, get_bit


class TestGetBit:
    """Tests for get_bit."""

    def test_high_bit(self):
        """Index 7 of 0b10000000 is set."""
        assert get_bit(0b10000000, 7) is True

    def test_low_bit_clear(self):
        """Index 0 of 0b10000000 is clear."""
        assert get_bit(0b10000000, 0) is False

    def test_lsb_first(self):
        """Bit 0 is the least-significant bit."""
        assert get_bit(0x01, 0) is True
        assert get_bit(0x01, 1) is False

    def test_all_bits_of_byte(self):
        """Reading all 8 bits reconstructs the byte."""
        for byte in (0x00, 0x5A, 0xA5, 0xFF, 0x13):
            value = sum(1 << i for i in range(8) if get_bit(byte, i))
            assert value == byte

    def test_index_out_of_range(self):
        """Index 8 is rejected."""
        with pytest.raises(BitIndexError):
            get_bit(0b10000000, 8)

    def test_negative_index(self):
        """Negative indices are rejected."""
        with pytest.raises(BitIndexError):
            get_bit(0xFF, -1)

    def test_bit_index_error_is_value_error(self):
        """BitIndexError can be handled as ValueError."""
        with pytest.raises(ValueError):
            get_bit(0, 100)

    def test_byte_out_of_range(self):
        """Values outside 0..255 are not bytes."""
        with pytest.raises(ValueError):
            get_bit(256, 0)
