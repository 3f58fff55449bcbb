"""Build a tree and extract the witness for one leaf's membership proof."""

import random
from typing import Optional, Tuple

from constraints.hasher import CompressionHash
from primitives.field import BN254_SCALAR_MODULUS
from primitives.leaf import Leaf
from primitives.merkle_tree import SparseMerkleTree
from protocol.circuit import MerklePathAuthCircuit
from protocol.config import CircuitConfig
from witness.base import Witness
from witness.leaf import LeafWitness

# --- Type Aliases ---

AccountTree = SparseMerkleTree[Leaf]

DEFAULT_N_LEAVES = 100


def new_account_tree(config: CircuitConfig, hasher: CompressionHash) -> AccountTree:
    """Empty tree whose slots all hold the default leaf Leaf(0, 0)."""
    return SparseMerkleTree(config.tree_depth, hasher, config.leaf_bits, Leaf())


def generate_random_tree(
    config: CircuitConfig,
    hasher: CompressionHash,
    n_leaves: int = DEFAULT_N_LEAVES,
    rng: Optional[random.Random] = None,
) -> AccountTree:
    """Tree with random leaves at indices 0..n_leaves-1.

    Ids and balances are uniform over their configured widths, reduced into the
    field when a width reaches NUM_BITS.
    """
    rng = rng if rng is not None else random.Random()
    tree = new_account_tree(config, hasher)
    for i in range(n_leaves):
        leaf = Leaf(
            id=rng.getrandbits(config.id_bit_length) % BN254_SCALAR_MODULUS,
            balance=rng.getrandbits(config.balance_bit_length) % BN254_SCALAR_MODULUS,
        )
        tree.insert(i, leaf)
    return tree


def generate_witness(
    tree: AccountTree, position: int, hasher: CompressionHash, config: CircuitConfig
) -> Tuple[MerklePathAuthCircuit, int]:
    """Fully known circuit for the leaf at position, and its public input.

    Returns:
        (circuit, root)

    Raises:
        KeyError: If no leaf was inserted at position
    """
    leaf = tree.get(position)
    if leaf is None:
        raise KeyError(f"no leaf at position {position}")

    path = [Witness.known(e) for e in tree.authentication_path(position)]
    root = tree.root()

    circuit = MerklePathAuthCircuit(
        hasher,
        config,
        root=Witness.known(root),
        leaf=LeafWitness.from_leaf(leaf),
        path=path,
        position=Witness.known(position),
    )
    return circuit, root
