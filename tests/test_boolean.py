"""Tests for boolean wires."""

import pytest

from constraints.base import KeygenConstraintSystem, ProvingConstraintSystem
from constraints.boolean import AllocatedBit, pack_bits_lc
from witness.base import UNKNOWN, Witness


class TestAllocatedBit:
    """Booleanity and AND."""

    @pytest.mark.parametrize("value", [False, True])
    def test_alloc_is_satisfied(self, value: bool) -> None:
        cs = ProvingConstraintSystem()
        bit = AllocatedBit.alloc(cs, Witness.known(value))
        assert cs.is_satisfied()
        assert cs.value(bit.variable) == int(value)
        assert bit.get_value() is value

    def test_non_boolean_assignment_is_unsatisfied(self) -> None:
        cs = ProvingConstraintSystem()
        bit = AllocatedBit.alloc(cs, Witness.known(True))
        cs.aux[bit.variable.index] = 2
        assert cs.which_is_unsatisfied() == "boolean constraint"

    def test_alloc_unknown_in_keygen(self) -> None:
        cs = KeygenConstraintSystem()
        bit = AllocatedBit.alloc(cs, UNKNOWN)
        assert cs.num_constraints == 1
        assert bit.get_value() is None

    @pytest.mark.parametrize("a,b", [(False, False), (False, True), (True, False), (True, True)])
    def test_and(self, a: bool, b: bool) -> None:
        cs = ProvingConstraintSystem()
        x = AllocatedBit.alloc(cs, Witness.known(a))
        y = AllocatedBit.alloc(cs, Witness.known(b))
        z = AllocatedBit.and_(cs, x, y)
        assert cs.is_satisfied()
        assert cs.value(z.variable) == int(a and b)


class TestAllocConditionally:
    """A bit forced to zero when must_be_false is set."""

    @pytest.mark.parametrize("must_be_false,value,ok", [
        (False, False, True),
        (False, True, True),
        (True, False, True),
        (True, True, False),
    ])
    def test_truth_table(self, must_be_false: bool, value: bool, ok: bool) -> None:
        cs = ProvingConstraintSystem()
        guard = AllocatedBit.alloc(cs, Witness.known(must_be_false))
        AllocatedBit.alloc_conditionally(cs, Witness.known(value), guard)
        assert cs.is_satisfied() is ok


def test_pack_bits_lc_weights() -> None:
    """pack_bits_lc weights bit i by 2^i."""
    cs = ProvingConstraintSystem()
    bits = [AllocatedBit.alloc(cs, Witness.known(b)) for b in (True, False, True, True)]
    lc = pack_bits_lc(bits)
    assert lc.evaluate(cs.value) == 0b1101
