"""
Allocated numbers and linear-combination numbers.

AllocatedNum is a single variable with a witness value. Num is a linear
combination carried together with its value, so additions and scalings cost no
constraints; a Num becomes a variable again only when it is multiplied or
materialized with into_allocated().

Bit decomposition policies:

    into_bits_le_fixed(n)   n <= CAPACITY; every n-bit string is a distinct
                            field element, so booleanity plus one packing
                            constraint is enough
    into_bits_le_strict()   NUM_BITS bits; some 254-bit strings exceed r - 1,
                            so the bits are also compared against r - 1
"""

from typing import List, Sequence, Tuple

from constraints.base import CircuitShapeError, ConstraintSystem, LinearCombination, Variable
from constraints.boolean import AllocatedBit, pack_bits_lc
from primitives.field import BN254_SCALAR_MODULUS, CAPACITY, NUM_BITS
from witness.base import Witness


def _bit_of(i: int):
    return lambda v: (v >> i) & 1 == 1


def _kary_and(cs: ConstraintSystem, bits: Sequence[AllocatedBit]) -> AllocatedBit:
    """AND of a non-empty run of bits, one constraint per extra bit."""
    assert len(bits) > 0
    cur = bits[0]
    for i, bit in enumerate(bits[1:], start=1):
        with cs.namespace(f"and {i}"):
            cur = AllocatedBit.and_(cs, cur, bit)
    return cur


class AllocatedNum:
    """Field element bound to one variable of the constraint system."""

    __slots__ = ("variable", "value")

    def __init__(self, variable: Variable, value: Witness):
        self.variable = variable
        self.value = value

    # --- Allocation ---

    @classmethod
    def alloc(cls, cs: ConstraintSystem, value: Witness) -> "AllocatedNum":
        """Allocate a private variable holding value."""
        var = cs.alloc("num", lambda: value.get())
        return cls(var, value.map(lambda v: v % BN254_SCALAR_MODULUS))

    @classmethod
    def alloc_input(cls, cs: ConstraintSystem, value: Witness) -> "AllocatedNum":
        """Allocate a public input holding value."""
        var = cs.alloc_input("input variable", lambda: value.get())
        return cls(var, value.map(lambda v: v % BN254_SCALAR_MODULUS))

    def inputize(self, cs: ConstraintSystem) -> "AllocatedNum":
        """Expose this number as a public input: input * 1 = self."""
        value = self.value
        input_var = cs.alloc_input("input variable", lambda: value.get())
        cs.enforce("enforce input is correct", input_var, cs.one(), self.variable)
        return AllocatedNum(input_var, value)

    def lc(self) -> LinearCombination:
        return LinearCombination.from_variable(self.variable)

    # --- Bit Decomposition ---

    def into_bits_le_fixed(self, cs: ConstraintSystem, n: int) -> List[AllocatedBit]:
        """Decompose into exactly n little-endian bits.

        Only bits 0..n-1 of the witness are allocated. A witness wider than n bits
        therefore fails the packing constraint instead of raising.

        Raises:
            CircuitShapeError: If n > CAPACITY
        """
        if n > CAPACITY:
            raise CircuitShapeError(f"fixed decomposition supports at most {CAPACITY} bits, got {n}")

        bits = []
        for i in range(n):
            with cs.namespace(f"bit {i}"):
                bits.append(AllocatedBit.alloc(cs, self.value.map(_bit_of(i))))

        cs.enforce("unpacking constraint", pack_bits_lc(bits), cs.one(), self.variable)
        return bits

    def into_bits_le_strict(self, cs: ConstraintSystem) -> List[AllocatedBit]:
        """Decompose into NUM_BITS little-endian bits whose value is at most r - 1.

        Walks r - 1 from the most significant bit. Inside a run of ones the bit is
        allocated freely and joins the run; at the first zero after a run, the run is
        ANDed (together with the previous run result) into last_run. While last_run
        is 1 the witness equals r - 1 on every bit so far, so a bit where r - 1 has a
        zero must be zero as well.
        """
        modulus_minus_one = BN254_SCALAR_MODULUS - 1

        result: List[AllocatedBit] = []  # big-endian
        last_run = None
        current_run: List[AllocatedBit] = []

        for i in reversed(range(NUM_BITS)):
            a_bit = self.value.map(_bit_of(i))
            if (modulus_minus_one >> i) & 1:
                with cs.namespace(f"bit {i}"):
                    bit = AllocatedBit.alloc(cs, a_bit)
                current_run.append(bit)
                result.append(bit)
            else:
                if current_run:
                    if last_run is not None:
                        current_run.append(last_run)
                    with cs.namespace(f"run ending at {i}"):
                        last_run = _kary_and(cs, current_run)
                    current_run = []
                # r - 1 starts with a one, so last_run is set by now
                with cs.namespace(f"bit {i}"):
                    result.append(AllocatedBit.alloc_conditionally(cs, a_bit, last_run))

        # r is odd, so r - 1 ends in a zero and the last run has been closed
        assert not current_run

        bits_le = result[::-1]
        cs.enforce("unpacking constraint", pack_bits_lc(bits_le), cs.one(), self.variable)
        return bits_le

    # --- Selection ---

    @staticmethod
    def conditionally_reverse(
        cs: ConstraintSystem, a: "AllocatedNum", b: "AllocatedNum", condition: AllocatedBit
    ) -> Tuple["AllocatedNum", "AllocatedNum"]:
        """(a, b) if condition is 0, (b, a) if condition is 1.

        Two constraints:
            (a - b) * condition = a - c
            (b - a) * condition = b - d
        """
        c_value = Witness.apply(lambda cond, x, y: y if cond else x, condition.value, a.value, b.value)
        c = AllocatedNum.alloc_named(cs, "conditional reversal result 1", c_value)
        cs.enforce(
            "first conditional reversal",
            a.lc() - b.variable,
            condition.variable,
            a.lc() - c.variable,
        )

        d_value = Witness.apply(lambda cond, x, y: x if cond else y, condition.value, a.value, b.value)
        d = AllocatedNum.alloc_named(cs, "conditional reversal result 2", d_value)
        cs.enforce(
            "second conditional reversal",
            b.lc() - a.variable,
            condition.variable,
            b.lc() - d.variable,
        )
        return c, d

    @classmethod
    def alloc_named(cls, cs: ConstraintSystem, annotation: str, value: Witness) -> "AllocatedNum":
        var = cs.alloc(annotation, lambda: value.get())
        return cls(var, value)

    def __repr__(self) -> str:
        return f"AllocatedNum({self.variable.kind}[{self.variable.index}], {self.value!r})"


class Num:
    """Linear combination with its witness value; additions are free."""

    __slots__ = ("lc", "value")

    def __init__(self, lc: LinearCombination, value: Witness):
        self.lc = lc
        self.value = value

    @classmethod
    def zero(cls) -> "Num":
        return cls(LinearCombination.zero(), Witness.known(0))

    @classmethod
    def constant(cls, value: int) -> "Num":
        value %= BN254_SCALAR_MODULUS
        return cls(LinearCombination.constant(value), Witness.known(value))

    @classmethod
    def from_allocated(cls, num: AllocatedNum) -> "Num":
        return cls(num.lc(), num.value)

    def __add__(self, other: "Num") -> "Num":
        value = Witness.apply(lambda x, y: (x + y) % BN254_SCALAR_MODULUS, self.value, other.value)
        return Num(self.lc + other.lc, value)

    def __radd__(self, other: int) -> "Num":
        # sum() starts from 0
        if other == 0:
            return self
        return Num.constant(other) + self

    def scale(self, coeff: int) -> "Num":
        value = self.value.map(lambda v: (v * coeff) % BN254_SCALAR_MODULUS)
        return Num(self.lc * coeff, value)

    def mul(self, cs: ConstraintSystem, other: "Num", annotation: str = "product") -> AllocatedNum:
        """Allocate self * other with one constraint."""
        value = Witness.apply(lambda x, y: (x * y) % BN254_SCALAR_MODULUS, self.value, other.value)
        out = AllocatedNum.alloc_named(cs, annotation, value)
        cs.enforce(f"{annotation} constraint", self.lc, other.lc, out.variable)
        return out

    def into_allocated(self, cs: ConstraintSystem, annotation: str = "num") -> AllocatedNum:
        """Materialize as a single variable: lc * 1 = out."""
        out = AllocatedNum.alloc_named(cs, annotation, self.value)
        cs.enforce(f"{annotation} materialization", self.lc, cs.one(), out.variable)
        return out
