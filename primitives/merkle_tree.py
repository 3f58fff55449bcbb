"""Sparse binary Merkle tree of fixed depth."""

from typing import TYPE_CHECKING, Callable, Dict, Generic, List, Optional, TypeVar

if TYPE_CHECKING:
    from constraints.hasher import CompressionHash

T = TypeVar("T")

# --- Type Aliases ---

MerkleRoot = int
MerklePath = List[int]


class SparseMerkleTree(Generic[T]):
    """Binary Merkle tree with 2^depth slots, most of them empty.

    Only non-default nodes are stored, keyed by (level, index). Level 0 holds leaf
    digests, level `depth` holds the root. An empty slot hashes as `default`, and an
    empty subtree at level k hashes as default_hashes[k] = H(default_hashes[k-1],
    default_hashes[k-1]).

    Node order: at every level the node at an even index is the left child and its
    parent is H(left, right). Authentication paths list siblings leaf level first.

    The tree is single writer: finish all inserts before extracting paths for proofs.
    """

    def __init__(
        self,
        depth: int,
        hasher: "CompressionHash",
        encode: Callable[[T], List[bool]],
        default: T,
    ):
        if depth < 1:
            raise ValueError(f"depth must be positive, got {depth}")

        self.depth = depth
        self.hasher = hasher
        self.encode = encode
        self.default = default

        self.items: Dict[int, T] = {}
        self.nodes: List[Dict[int, int]] = [{} for _ in range(depth + 1)]
        self.default_hashes = self._compute_default_hashes()

    def _compute_default_hashes(self) -> List[int]:
        hashes = [self.hash_item(self.default)]
        for _ in range(self.depth):
            hashes.append(self.hasher.compress(hashes[-1], hashes[-1]))
        return hashes

    @property
    def capacity(self) -> int:
        """Number of leaf slots."""
        return 1 << self.depth

    # --- Core Operations ---

    def hash_item(self, item: T) -> int:
        """Leaf digest: hash of the item's packed bit encoding."""
        return self.hasher.hash_bits(self.encode(item))

    def insert(self, index: int, item: T) -> None:
        """Store item at index and recompute the hashes on its path to the root."""
        self._check_index(index)
        # Encode before writing: a rejected item leaves the tree untouched
        digest = self.hash_item(item)
        self.items[index] = item
        self.nodes[0][index] = digest

        idx = index
        for level in range(self.depth):
            parent = idx >> 1
            left = self.node(level, parent << 1)
            right = self.node(level, (parent << 1) | 1)
            self.nodes[level + 1][parent] = self.hasher.compress(left, right)
            idx = parent

    def get(self, index: int) -> Optional[T]:
        """Item stored at index, or None if the slot was never written."""
        self._check_index(index)
        return self.items.get(index)

    def node(self, level: int, index: int) -> int:
        """Hash of the node at (level, index), falling back to the empty-subtree hash."""
        return self.nodes[level].get(index, self.default_hashes[level])

    def root(self) -> MerkleRoot:
        """Current root hash."""
        return self.node(self.depth, 0)

    def authentication_path(self, index: int) -> MerklePath:
        """Sibling hashes from the leaf level up to the level below the root.

        Returns:
            List of exactly `depth` field elements; entry i is the sibling of the
            index's ancestor at level i.
        """
        self._check_index(index)
        path: MerklePath = []
        idx = index
        for level in range(self.depth):
            # Sibling index: flip the last bit
            path.append(self.node(level, idx ^ 1))
            idx >>= 1
        return path

    def __len__(self) -> int:
        return len(self.items)

    # --- Private Helpers ---

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.capacity:
            raise IndexError(f"index {index} out of range [0, {self.capacity})")
