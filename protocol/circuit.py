"""Merkle path authentication circuit.

Statement: the prover knows a leaf {id, balance}, a position and an
authentication path such that hashing the leaf and walking the path from that
position reproduces the public root.

Synthesis order (identical for every witness, so key generation and proving
build the same system):

    1. root        allocated and exposed as the only public input
    2. leaf        id and balance decomposed into their declared widths
    3. path        one variable per level
    4. position    decomposed into tree_depth direction bits
    5. leaf hash   id bits || balance bits, packed, hashed
    6. path loop   per level: conditional swap by the direction bit, compress
    7. binding     calculated_root * 1 = root
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from constraints.base import CircuitShapeError, ConstraintSystem
from constraints.element import CircuitElement
from constraints.hasher import CompressionHash
from constraints.num import AllocatedNum
from protocol.config import CircuitConfig
from witness.base import UNKNOWN, Witness
from witness.leaf import LeafWitness


class Circuit(ABC):
    """Anything that can be synthesized into a constraint system."""

    @abstractmethod
    def synthesize(self, cs: ConstraintSystem) -> None:
        pass


# --- Circuit Leaf ---

@dataclass
class CircuitLeaf:
    id: CircuitElement
    balance: CircuitElement


def get_circuit_leaf_from_witness(
    cs: ConstraintSystem, leaf: LeafWitness, config: CircuitConfig
) -> CircuitLeaf:
    """Allocate both leaf fields with their declared bit widths."""
    with cs.namespace("id"):
        leaf_id = CircuitElement.from_fe_with_known_length(cs, lambda: leaf.id, config.id_bit_length)
    with cs.namespace("balance"):
        balance = CircuitElement.from_fe_with_known_length(cs, lambda: leaf.balance, config.balance_bit_length)
    return CircuitLeaf(leaf_id, balance)


def allocate_numbers_vec(cs: ConstraintSystem, witnesses: List[Witness]) -> List[AllocatedNum]:
    allocated = []
    for i, w in enumerate(witnesses):
        with cs.namespace(f"path element{i}"):
            allocated.append(AllocatedNum.alloc(cs, w))
    return allocated


# --- Merkle Path Circuit ---

class MerklePathAuthCircuit(Circuit):
    """Membership of one leaf in a sparse Merkle tree of fixed depth.

    Args:
        hasher: Dual-mode hash; must be the one the tree was built with
        config: Tree depth and leaf widths
        root: Expected root (also the public input)
        leaf: Leaf witness
        path: Sibling values, leaf level first, exactly config.tree_depth entries
        position: Leaf index

    Raises:
        CircuitShapeError: If len(path) != config.tree_depth
    """

    def __init__(
        self,
        hasher: CompressionHash,
        config: CircuitConfig,
        root: Witness,
        leaf: LeafWitness,
        path: List[Witness],
        position: Witness,
    ):
        if len(path) != config.tree_depth:
            raise CircuitShapeError(f"path must have {config.tree_depth} elements, got {len(path)}")
        self.hasher = hasher
        self.config = config
        self.root = root
        self.leaf = leaf
        self.path = list(path)
        self.position = position

    @classmethod
    def blank(cls, hasher: CompressionHash, config: CircuitConfig) -> "MerklePathAuthCircuit":
        """All-Unknown instance for key generation."""
        return cls(
            hasher,
            config,
            root=UNKNOWN,
            leaf=LeafWitness.unknown(),
            path=[UNKNOWN] * config.tree_depth,
            position=UNKNOWN,
        )

    @property
    def public_input(self) -> Optional[int]:
        """The root, if known."""
        return self.root.get() if self.root.is_known else None

    def synthesize(self, cs: ConstraintSystem) -> None:
        with cs.namespace("root"):
            root = AllocatedNum.alloc(cs, self.root)
            root.inputize(cs)

        with cs.namespace("circuit leaf"):
            leaf = get_circuit_leaf_from_witness(cs, self.leaf, self.config)
        with cs.namespace("path"):
            auth_path = allocate_numbers_vec(cs, self.path)
        with cs.namespace("position"):
            position = CircuitElement.from_fe_with_known_length(
                cs, lambda: self.position, self.config.tree_depth
            )

        leaf_bits = leaf.id.get_bits_le() + leaf.balance.get_bits_le()
        assert len(leaf_bits) == self.config.leaf_bit_length

        cur_hash = self.hasher.hash_bits_in_circuit(cs, leaf_bits)

        for i, direction_bit in enumerate(position.get_bits_le()):
            with cs.namespace(f"from merkle tree hash {i}"):
                # Direction bit set: the running node is the right child, swap it over
                with cs.namespace("conditional reversal of preimage"):
                    xl, xr = AllocatedNum.conditionally_reverse(cs, cur_hash, auth_path[i], direction_bit)
                with cs.namespace(f"hash tree level {i}"):
                    cur_hash = self.hasher.compress_in_circuit(cs, xl, xr)

        calculated_root = cur_hash
        cs.enforce("calculated_root == root", calculated_root.variable, cs.one(), root.variable)
