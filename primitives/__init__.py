"""Primitives - Field arithmetic, Poseidon2 and the sparse Merkle tree."""

from primitives.field import (
    BN254_SCALAR_MODULUS,
    CAPACITY,
    FF,
    NUM_BITS,
    bits_le_fixed,
    from_bits_le,
    pack_bits_le,
    to_field,
)
from primitives.leaf import Leaf
from primitives.merkle_tree import MerklePath, MerkleRoot, SparseMerkleTree
from primitives.merkle_verifier import compute_merkle_root, verify_merkle_path
from primitives.poseidon2 import Poseidon2Params, permute, sponge_hash

__all__ = [
    # Field
    "FF",
    "BN254_SCALAR_MODULUS",
    "NUM_BITS",
    "CAPACITY",
    "to_field",
    "bits_le_fixed",
    "from_bits_le",
    "pack_bits_le",
    # Poseidon2
    "Poseidon2Params",
    "permute",
    "sponge_hash",
    # Merkle Tree
    "Leaf",
    "SparseMerkleTree",
    "MerkleRoot",
    "MerklePath",
    "compute_merkle_root",
    "verify_merkle_path",
]
