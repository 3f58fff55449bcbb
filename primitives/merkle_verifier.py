"""Native Merkle path verification.

Recomputes a root from a leaf digest, its authentication path and its position,
outside any constraint system. Uses the same left/right convention as
SparseMerkleTree and the in-circuit path loop: bit i of the position set means the
running node is the right child at level i.
"""

from typing import TYPE_CHECKING, Sequence

from primitives.merkle_tree import MerkleRoot

if TYPE_CHECKING:
    from constraints.hasher import CompressionHash


def compute_merkle_root(
    hasher: "CompressionHash", leaf_digest: int, path: Sequence[int], position: int
) -> MerkleRoot:
    """Walk from the leaf digest to the root through len(path) levels.

    Raises:
        ValueError: If position needs more than len(path) bits
    """
    if not 0 <= position < (1 << len(path)):
        raise ValueError(f"position {position} does not fit in {len(path)} direction bits")

    current = leaf_digest
    idx = position
    for sibling in path:
        if idx & 1:
            current = hasher.compress(sibling, current)
        else:
            current = hasher.compress(current, sibling)
        idx >>= 1
    return current


def verify_merkle_path(
    hasher: "CompressionHash", leaf_digest: int, path: Sequence[int], position: int, root: MerkleRoot
) -> bool:
    """Return True if the path recomputes root."""
    return compute_merkle_root(hasher, leaf_digest, path, position) == root
