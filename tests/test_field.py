"""Tests for the BN254 scalar field and bit helpers."""

import pytest

from primitives.field import (
    BN254_SCALAR_MODULUS,
    CAPACITY,
    FF,
    NUM_BITS,
    bits_le_fixed,
    from_bits_le,
    pack_bits_le,
    to_field,
)


class TestFieldConstants:
    """Bit sizes derived from the modulus."""

    def test_num_bits_and_capacity(self) -> None:
        assert NUM_BITS == 254
        assert CAPACITY == 253
        assert 2 ** CAPACITY < BN254_SCALAR_MODULUS < 2 ** NUM_BITS

    def test_field_wraps_at_modulus(self) -> None:
        assert FF(BN254_SCALAR_MODULUS - 1) + FF(1) == FF(0)
        assert to_field(BN254_SCALAR_MODULUS + 5) == 5
        assert to_field(-1) == BN254_SCALAR_MODULUS - 1

    def test_generator_order_divides_group_order(self) -> None:
        g = FF(5)
        assert g ** (BN254_SCALAR_MODULUS - 1) == FF(1)


class TestBitDecomposition:
    """bits_le_fixed / from_bits_le round trip and padding."""

    @pytest.mark.parametrize("value,n", [(0, 1), (1, 1), (684, 16), (2 ** 128 - 1, 128), (BN254_SCALAR_MODULUS - 1, 254)])
    def test_round_trip(self, value: int, n: int) -> None:
        bits = bits_le_fixed(value, n)
        assert len(bits) == n
        assert from_bits_le(bits) == value

    def test_pads_high_bits(self) -> None:
        assert bits_le_fixed(5, 8) == [True, False, True, False, False, False, False, False]

    def test_rejects_oversize_value(self) -> None:
        with pytest.raises(ValueError):
            bits_le_fixed(256, 8)

    def test_rejects_negative_value(self) -> None:
        with pytest.raises(ValueError):
            bits_le_fixed(-1, 8)


class TestPackBits:
    """pack_bits_le chunks CAPACITY bits per element."""

    def test_256_bits_pack_into_two_elements(self) -> None:
        bits = bits_le_fixed(2 ** 255 + 3, 256)
        packed = pack_bits_le(bits)
        assert len(packed) == 2
        assert packed[0] == 3
        assert packed[1] == 1 << (255 - CAPACITY)

    def test_short_input_is_one_element(self) -> None:
        assert pack_bits_le([True, True]) == [3]

    def test_every_chunk_is_a_field_element(self) -> None:
        packed = pack_bits_le([True] * 600)
        assert len(packed) == 3
        assert all(0 <= v < BN254_SCALAR_MODULUS for v in packed)
