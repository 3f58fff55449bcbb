"""Boolean wires."""

from typing import Optional, Sequence

from constraints.base import ConstraintSystem, LinearCombination, Variable
from witness.base import Witness


class AllocatedBit:
    """Variable constrained to {0, 1}, with its witness value."""

    __slots__ = ("variable", "value")

    def __init__(self, variable: Variable, value: Witness):
        self.variable = variable
        self.value = value

    @classmethod
    def alloc(cls, cs: ConstraintSystem, value: Witness) -> "AllocatedBit":
        """Allocate a bit and enforce (1 - b) * b = 0."""
        var = cs.alloc("boolean", lambda: 1 if value.get() else 0)
        cs.enforce("boolean constraint", LinearCombination.constant(1) - var, var, 0)
        return cls(var, value.map(bool))

    @classmethod
    def alloc_conditionally(
        cls, cs: ConstraintSystem, value: Witness, must_be_false: "AllocatedBit"
    ) -> "AllocatedBit":
        """Allocate a bit that must be 0 whenever must_be_false is 1.

        Enforces (1 - must_be_false - a) * a = 0:
            must_be_false = 0:  a is boolean
            must_be_false = 1:  (-a) * a = 0, so a = 0
        """
        var = cs.alloc("boolean", lambda: 1 if value.get() else 0)
        cs.enforce(
            "boolean constraint",
            LinearCombination.constant(1) - must_be_false.variable - var,
            var,
            0,
        )
        return cls(var, value.map(bool))

    @classmethod
    def and_(cls, cs: ConstraintSystem, a: "AllocatedBit", b: "AllocatedBit") -> "AllocatedBit":
        """a AND b, one constraint: a * b = result."""
        value = Witness.apply(lambda x, y: x and y, a.value, b.value)
        var = cs.alloc("and result", lambda: 1 if value.get() else 0)
        cs.enforce("and constraint", a.variable, b.variable, var)
        return cls(var, value)

    def lc(self) -> LinearCombination:
        return LinearCombination.from_variable(self.variable)

    def get_value(self) -> Optional[bool]:
        return self.value.get() if self.value.is_known else None


def pack_bits_lc(bits: Sequence[AllocatedBit]) -> LinearCombination:
    """sum 2^i * bits[i]"""
    lc = LinearCombination.zero()
    coeff = 1
    for bit in bits:
        lc = lc + LinearCombination.from_variable(bit.variable, coeff)
        coeff <<= 1
    return lc
