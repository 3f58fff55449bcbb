"""Field element together with its fixed-length little-endian bit decomposition."""

from typing import Callable, List

from constraints.base import CircuitShapeError, ConstraintSystem
from constraints.boolean import AllocatedBit
from constraints.num import AllocatedNum
from primitives.field import CAPACITY, NUM_BITS
from witness.base import Witness


class CircuitElement:
    """AllocatedNum plus exactly `length` boolean wires that recombine to it.

    Attributes:
        number: The allocated value
        bits_le: Little-endian bits, len(bits_le) == length
        length: Declared bit width, fixed at construction
    """

    def __init__(self, number: AllocatedNum, bits_le: List[AllocatedBit], length: int):
        self.number = number
        self.bits_le = bits_le
        self.length = length

    @classmethod
    def from_fe_with_known_length(
        cls, cs: ConstraintSystem, value_fn: Callable[[], Witness], n: int
    ) -> "CircuitElement":
        """Allocate a value and decompose it into n bits.

        value_fn returns the Witness to allocate; it is called once while the
        circuit is built (it may return an Unknown witness during key generation).

        Raises:
            CircuitShapeError: If n > NUM_BITS
        """
        _check_length(n)
        with cs.namespace("number from field element"):
            number = AllocatedNum.alloc(cs, value_fn())
        with cs.namespace("circuit_element"):
            return cls.from_number_with_known_length(cs, number, n)

    @classmethod
    def from_number_with_known_length(cls, cs: ConstraintSystem, number: AllocatedNum, n: int) -> "CircuitElement":
        """Decompose an allocated number into n bits.

        n <= CAPACITY uses the fixed policy; n == NUM_BITS uses the strict one.

        Raises:
            CircuitShapeError: If n > NUM_BITS
        """
        _check_length(n)
        if n <= CAPACITY:
            with cs.namespace("into_bits_le_fixed"):
                bits = number.into_bits_le_fixed(cs, n)
        else:
            with cs.namespace("into_bits_le_strict"):
                bits = number.into_bits_le_strict(cs)

        assert len(bits) == n
        return cls(number, bits, n)

    def get_bits_le(self) -> List[AllocatedBit]:
        return list(self.bits_le)

    def get_number(self) -> AllocatedNum:
        return self.number


def _check_length(n: int) -> None:
    if not 0 < n <= NUM_BITS:
        raise CircuitShapeError(f"bit length must be in [1, {NUM_BITS}], got {n}")
