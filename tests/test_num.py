"""Tests for AllocatedNum and Num."""

import pytest

from constraints.base import CircuitShapeError, KeygenConstraintSystem, ProvingConstraintSystem
from constraints.boolean import AllocatedBit
from constraints.num import AllocatedNum, Num
from primitives.field import BN254_SCALAR_MODULUS, CAPACITY, NUM_BITS, FF, from_bits_le
from witness.base import UNKNOWN, Witness


def _bit_values(cs: ProvingConstraintSystem, bits) -> list:
    return [cs.value(b.variable) == 1 for b in bits]


class TestIntoBitsLeFixed:
    """Fixed-length decomposition for n <= CAPACITY."""

    @pytest.mark.parametrize("value,n", [(0, 1), (1, 1), (684, 16), (2 ** 128 - 1, 128), (2 ** 200 + 17, CAPACITY)])
    def test_round_trip(self, value: int, n: int) -> None:
        cs = ProvingConstraintSystem()
        num = AllocatedNum.alloc(cs, Witness.known(value))
        bits = num.into_bits_le_fixed(cs, n)

        assert len(bits) == n
        assert from_bits_le(_bit_values(cs, bits)) == value
        assert cs.is_satisfied()

    def test_constraint_count(self) -> None:
        cs = KeygenConstraintSystem()
        AllocatedNum.alloc(cs, UNKNOWN).into_bits_le_fixed(cs, 32)
        # One booleanity constraint per bit plus one packing constraint
        assert cs.num_constraints == 33

    def test_always_exactly_n_bits(self) -> None:
        cs = ProvingConstraintSystem()
        bits = AllocatedNum.alloc(cs, Witness.known(1)).into_bits_le_fixed(cs, 64)
        assert len(bits) == 64
        assert _bit_values(cs, bits) == [True] + [False] * 63

    def test_oversize_witness_is_unsatisfied(self) -> None:
        cs = ProvingConstraintSystem()
        AllocatedNum.alloc(cs, Witness.known(2 ** 16)).into_bits_le_fixed(cs, 16)
        assert cs.which_is_unsatisfied() == "unpacking constraint"

    def test_rejects_length_above_capacity(self) -> None:
        cs = KeygenConstraintSystem()
        num = AllocatedNum.alloc(cs, UNKNOWN)
        with pytest.raises(CircuitShapeError):
            num.into_bits_le_fixed(cs, CAPACITY + 1)


class TestIntoBitsLeStrict:
    """Full-width decomposition bounded by r - 1."""

    @pytest.mark.parametrize("value", [0, 1, 2 ** 253, BN254_SCALAR_MODULUS - 1])
    def test_round_trip(self, value: int) -> None:
        cs = ProvingConstraintSystem()
        num = AllocatedNum.alloc(cs, Witness.known(value))
        bits = num.into_bits_le_strict(cs)

        assert len(bits) == NUM_BITS
        assert from_bits_le(_bit_values(cs, bits)) == value
        assert cs.is_satisfied()

    def test_random_values(self) -> None:
        for value in FF.Random(5, seed=11):
            cs = ProvingConstraintSystem()
            bits = AllocatedNum.alloc(cs, Witness.known(int(value))).into_bits_le_strict(cs)
            assert from_bits_le(_bit_values(cs, bits)) == int(value)
            assert cs.is_satisfied()

    def test_rejects_bits_of_modulus(self) -> None:
        """The bit string of r packs to 0 mod r but exceeds r - 1."""
        cs = ProvingConstraintSystem()
        num = AllocatedNum.alloc(cs, Witness.known(0))
        # Same variable, witness bits taken from r instead of 0
        aliased = AllocatedNum(num.variable, Witness.known(BN254_SCALAR_MODULUS))
        aliased.into_bits_le_strict(cs)

        assert cs.which_is_unsatisfied() == "bit 0/boolean constraint"

    def test_keygen_matches_proving_shape(self) -> None:
        keygen = KeygenConstraintSystem()
        AllocatedNum.alloc(keygen, UNKNOWN).into_bits_le_strict(keygen)

        proving = ProvingConstraintSystem()
        AllocatedNum.alloc(proving, Witness.known(12345)).into_bits_le_strict(proving)

        assert keygen.shape_digest() == proving.shape_digest()


class TestConditionallyReverse:
    """Swap two numbers when the condition bit is set."""

    @pytest.mark.parametrize("condition", [False, True])
    def test_swap(self, condition: bool) -> None:
        cs = ProvingConstraintSystem()
        a = AllocatedNum.alloc(cs, Witness.known(11))
        b = AllocatedNum.alloc(cs, Witness.known(22))
        cond = AllocatedBit.alloc(cs, Witness.known(condition))
        before = cs.num_constraints

        c, d = AllocatedNum.conditionally_reverse(cs, a, b, cond)

        assert cs.num_constraints - before == 2
        expected = (22, 11) if condition else (11, 22)
        assert (cs.value(c.variable), cs.value(d.variable)) == expected
        assert (c.value.get(), d.value.get()) == expected
        assert cs.is_satisfied()

    def test_tampered_output_is_unsatisfied(self) -> None:
        cs = ProvingConstraintSystem()
        a = AllocatedNum.alloc(cs, Witness.known(11))
        b = AllocatedNum.alloc(cs, Witness.known(22))
        cond = AllocatedBit.alloc(cs, Witness.known(False))
        c, _ = AllocatedNum.conditionally_reverse(cs, a, b, cond)

        cs.aux[c.variable.index] = 22
        assert cs.which_is_unsatisfied() == "first conditional reversal"


class TestInputize:
    """Public inputs."""

    def test_inputize_exposes_value(self) -> None:
        cs = ProvingConstraintSystem()
        num = AllocatedNum.alloc(cs, Witness.known(42))
        num.inputize(cs)

        assert cs.public_inputs == [42]
        assert cs.num_inputs == 2
        assert cs.is_satisfied()

    def test_alloc_input(self) -> None:
        cs = ProvingConstraintSystem()
        AllocatedNum.alloc_input(cs, Witness.known(7))
        assert cs.public_inputs == [7]


class TestNum:
    """Linear-combination numbers."""

    def test_additions_are_free(self) -> None:
        cs = ProvingConstraintSystem()
        x = Num.from_allocated(AllocatedNum.alloc(cs, Witness.known(3)))
        y = Num.from_allocated(AllocatedNum.alloc(cs, Witness.known(4)))

        z = (x + y).scale(5) + Num.constant(1)

        assert cs.num_constraints == 0
        assert z.value.get() == 36
        assert z.lc.evaluate(cs.value) == 36

    def test_sum_of_nums(self) -> None:
        nums = [Num.constant(i) for i in range(4)]
        assert sum(nums).value.get() == 6

    def test_mul_and_into_allocated(self) -> None:
        cs = ProvingConstraintSystem()
        x = Num.from_allocated(AllocatedNum.alloc(cs, Witness.known(6)))
        product = x.mul(cs, x + Num.constant(1))
        out = (Num.from_allocated(product) + x).into_allocated(cs)

        assert cs.value(product.variable) == 42
        assert cs.value(out.variable) == 48
        assert cs.num_constraints == 2
        assert cs.is_satisfied()

    def test_unknown_propagates(self) -> None:
        cs = KeygenConstraintSystem()
        x = Num.from_allocated(AllocatedNum.alloc(cs, UNKNOWN))
        assert not (x + Num.constant(1)).value.is_known
