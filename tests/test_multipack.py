"""Tests for bit repacking inside the circuit."""

from constraints.base import ProvingConstraintSystem
from constraints.boolean import AllocatedBit
from constraints.multipack import pack_into_witness
from primitives.field import bits_le_fixed, pack_bits_le
from witness.base import Witness


def _alloc_bits(cs, bits):
    return [AllocatedBit.alloc(cs, Witness.known(b)) for b in bits]


def test_packs_like_native() -> None:
    """256 leaf bits pack into the same two elements as pack_bits_le."""
    native_bits = bits_le_fixed(123456789, 128) + bits_le_fixed(684, 128)

    cs = ProvingConstraintSystem()
    packed = pack_into_witness(cs, _alloc_bits(cs, native_bits))

    assert [cs.value(p.variable) for p in packed] == pack_bits_le(native_bits)
    assert cs.is_satisfied()


def test_one_packing_constraint_per_chunk() -> None:
    cs = ProvingConstraintSystem()
    bits = _alloc_bits(cs, [True] * 256)
    before = cs.num_constraints

    packed = pack_into_witness(cs, bits)

    assert len(packed) == 2
    assert cs.num_constraints - before == 2
    assert cs.constraints[-1].annotation == "chunk 1/packing constraint"


def test_tampered_chunk_is_unsatisfied() -> None:
    cs = ProvingConstraintSystem()
    packed = pack_into_witness(cs, _alloc_bits(cs, [True, False, True]))
    cs.aux[packed[0].variable.index] = 4
    assert cs.which_is_unsatisfied() == "chunk 0/packing constraint"
