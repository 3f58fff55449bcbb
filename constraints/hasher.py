"""
Dual-mode compression hash.

A CompressionHash computes the same function natively (plain integers) and
inside a constraint system (allocated numbers). The tree builds its nodes with
the native mode; the circuit recomputes the path with the constrained mode. Both
must agree on every input, which tests/test_poseidon2.py checks.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from constraints.base import ConstraintSystem
from constraints.boolean import AllocatedBit
from constraints.multipack import pack_into_witness
from constraints.num import AllocatedNum
from constraints.poseidon2 import sponge_hash_in_circuit
from primitives.field import pack_bits_le
from primitives.poseidon2 import Poseidon2Params, sponge_hash


class CompressionHash(ABC):
    """Hash of field elements with a native and a constrained realization."""

    @abstractmethod
    def hash(self, inputs: Sequence[int]) -> int:
        """Native hash of a non-empty sequence of field elements."""
        pass

    @abstractmethod
    def hash_in_circuit(self, cs: ConstraintSystem, inputs: Sequence[AllocatedNum]) -> AllocatedNum:
        """Constrained hash; equals hash() on the witness values."""
        pass

    # --- Derived Operations ---

    def compress(self, left: int, right: int) -> int:
        """Two-to-one compression for inner tree nodes."""
        return self.hash([left, right])

    def compress_in_circuit(self, cs: ConstraintSystem, left: AllocatedNum, right: AllocatedNum) -> AllocatedNum:
        return self.hash_in_circuit(cs, [left, right])

    def hash_bits(self, bits: Sequence[bool]) -> int:
        """Leaf digest: pack bits CAPACITY at a time, then hash."""
        return self.hash(pack_bits_le(bits))

    def hash_bits_in_circuit(self, cs: ConstraintSystem, bits: Sequence[AllocatedBit]) -> AllocatedNum:
        with cs.namespace("pack leaf bits into field elements"):
            packed: List[AllocatedNum] = pack_into_witness(cs, bits)
        with cs.namespace("account leaf content hash"):
            return self.hash_in_circuit(cs, packed)


class Poseidon2Hash(CompressionHash):
    """Poseidon2 sponge in both modes, sharing one Poseidon2Params instance."""

    def __init__(self, params: Poseidon2Params):
        self.params = params

    def hash(self, inputs: Sequence[int]) -> int:
        return sponge_hash(self.params, inputs)

    def hash_in_circuit(self, cs: ConstraintSystem, inputs: Sequence[AllocatedNum]) -> AllocatedNum:
        return sponge_hash_in_circuit(cs, self.params, inputs)
