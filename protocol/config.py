"""Circuit configuration: tree depth and leaf field widths.

Example:
    config = CircuitConfig.from_json("path/to/circuit.json")
    circuit = MerklePathAuthCircuit.blank(hasher, config)
"""

import json
from dataclasses import asdict, dataclass
from typing import List

from constraints.base import CircuitShapeError
from primitives.field import CAPACITY, NUM_BITS
from primitives.leaf import Leaf

# --- Defaults ---

TREE_DEPTH = 32
ID_BIT_LENGTH = 128
BALANCE_BIT_LENGTH = 128


@dataclass(frozen=True)
class CircuitConfig:
    """Shape parameters of the membership circuit, validated once at construction.

    Attributes:
        tree_depth: Number of tree levels; the position is decomposed into this many
                    bits, so it must fit the fixed decomposition policy
        id_bit_length: Declared width of the leaf id
        balance_bit_length: Declared width of the leaf balance
    """
    tree_depth: int = TREE_DEPTH
    id_bit_length: int = ID_BIT_LENGTH
    balance_bit_length: int = BALANCE_BIT_LENGTH

    def __post_init__(self) -> None:
        if not 1 <= self.tree_depth <= CAPACITY:
            raise CircuitShapeError(f"tree_depth must be in [1, {CAPACITY}], got {self.tree_depth}")
        for name in ("id_bit_length", "balance_bit_length"):
            n = getattr(self, name)
            if not 1 <= n <= NUM_BITS:
                raise CircuitShapeError(f"{name} must be in [1, {NUM_BITS}], got {n}")

    @property
    def leaf_bit_length(self) -> int:
        return self.id_bit_length + self.balance_bit_length

    def leaf_bits(self, leaf: Leaf) -> List[bool]:
        """Native leaf encoding at the configured widths."""
        return leaf.get_bits_le(self.id_bit_length, self.balance_bit_length)

    @classmethod
    def from_json(cls, path: str) -> "CircuitConfig":
        """Load from a JSON object with any subset of the field names.

        Raises:
            CircuitShapeError: If the file is not a JSON object, has unknown keys,
                or holds values that are not integers in range
        """
        with open(path) as f:
            j = json.load(f)

        if not isinstance(j, dict):
            raise CircuitShapeError(f"config must be a JSON object, got {type(j).__name__}")
        unknown = set(j) - set(cls.__dataclass_fields__)
        if unknown:
            raise CircuitShapeError(f"unknown config keys: {sorted(unknown)}")

        values = {}
        for k, v in j.items():
            if isinstance(v, bool) or not isinstance(v, (int, str)):
                raise CircuitShapeError(f"{k} must be an integer, got {v!r}")
            try:
                values[k] = int(v)
            except ValueError as e:
                raise CircuitShapeError(f"{k} must be an integer, got {v!r}") from e
        return cls(**values)

    def to_json(self) -> dict:
        return asdict(self)
