"""Repack allocated bits into field elements, CAPACITY bits per element."""

from typing import List, Sequence

from constraints.boolean import AllocatedBit, pack_bits_lc
from constraints.base import ConstraintSystem
from constraints.num import AllocatedNum
from primitives.field import CAPACITY, from_bits_le
from witness.base import Witness


def pack_into_witness(cs: ConstraintSystem, bits: Sequence[AllocatedBit]) -> List[AllocatedNum]:
    """In-circuit counterpart of primitives.field.pack_bits_le.

    Chunk i holds bits[i * CAPACITY:(i + 1) * CAPACITY], first bit least
    significant. One variable and one packing constraint per chunk.
    """
    packed = []
    for i, start in enumerate(range(0, len(bits), CAPACITY)):
        chunk = bits[start:start + CAPACITY]
        value = Witness.apply(lambda *bs: from_bits_le(bs), *(bit.value for bit in chunk))
        with cs.namespace(f"chunk {i}"):
            num = AllocatedNum.alloc(cs, value)
            cs.enforce("packing constraint", pack_bits_lc(chunk), cs.one(), num.variable)
        packed.append(num)
    return packed
