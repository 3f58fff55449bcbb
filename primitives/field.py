"""BN254 scalar field GF(r) and bit-level helpers.

Uses galois for the field type. FF is the field class; hot paths (hashing,
constraint evaluation) work on plain Python ints reduced mod BN254_SCALAR_MODULUS.

galois would search for a primitive element by factoring r - 1, which is slow for a
254-bit prime. The multiplicative generator of this field is known (5), so it is
passed in directly and verification is skipped.
"""

from typing import List, Sequence

import galois

# --- Field Construction ---

BN254_SCALAR_MODULUS = 21888242871839275222246405745257275088548364400416034343698204186575808495617
GENERATOR = 5

FF = galois.GF(BN254_SCALAR_MODULUS, primitive_element=GENERATOR, verify=False)
"""Scalar field of the BN254 curve."""

NUM_BITS = BN254_SCALAR_MODULUS.bit_length()
"""Bits needed to represent any field element (254)."""

CAPACITY = NUM_BITS - 1
"""Largest n such that every n-bit string is a distinct field element (253)."""


# --- Conversions ---

def to_field(value: int) -> int:
    """Reduce an integer into [0, r)."""
    return value % BN254_SCALAR_MODULUS


def bits_le_fixed(value: int, n: int) -> List[bool]:
    """Return exactly n bits of value in little-endian order.

    Values shorter than n bits are padded with False at the high end. Values that
    need more than n bits are rejected rather than truncated.

    Raises:
        ValueError: If value is negative or does not fit in n bits
    """
    if value < 0:
        raise ValueError(f"cannot decompose negative value {value}")
    if value.bit_length() > n:
        raise ValueError(f"value needs {value.bit_length()} bits, only {n} available")
    return [bool((value >> i) & 1) for i in range(n)]


def from_bits_le(bits: Sequence[bool]) -> int:
    """Recombine little-endian bits into an integer (weighted sum of 2^i)."""
    acc = 0
    for i, bit in enumerate(bits):
        if bit:
            acc |= 1 << i
    return acc


def pack_bits_le(bits: Sequence[bool]) -> List[int]:
    """Repack a bit sequence into field elements, CAPACITY bits per element.

    Chunk k holds bits[k * CAPACITY:(k + 1) * CAPACITY] with the first bit of the
    chunk as its least significant bit. No reordering, no loss.
    """
    return [
        from_bits_le(bits[start:start + CAPACITY])
        for start in range(0, len(bits), CAPACITY)
    ]
