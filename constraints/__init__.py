"""Constraints - R1CS synthesis core and gadgets."""

from constraints.base import (
    ONE,
    CircuitShapeError,
    Constraint,
    ConstraintSystem,
    KeygenConstraintSystem,
    LinearCombination,
    ProvingConstraintSystem,
    Variable,
    first_unsatisfied,
    shape_digest,
)
from constraints.boolean import AllocatedBit, pack_bits_lc
from constraints.element import CircuitElement
from constraints.hasher import CompressionHash, Poseidon2Hash
from constraints.multipack import pack_into_witness
from constraints.num import AllocatedNum, Num
from constraints.poseidon2 import permute_in_circuit, sponge_hash_in_circuit

__all__ = [
    # Constraint system
    "Variable",
    "ONE",
    "LinearCombination",
    "Constraint",
    "ConstraintSystem",
    "KeygenConstraintSystem",
    "ProvingConstraintSystem",
    "CircuitShapeError",
    "first_unsatisfied",
    "shape_digest",
    # Gadgets
    "AllocatedBit",
    "pack_bits_lc",
    "AllocatedNum",
    "Num",
    "pack_into_witness",
    "CircuitElement",
    # Hashing
    "permute_in_circuit",
    "sponge_hash_in_circuit",
    "CompressionHash",
    "Poseidon2Hash",
]
