"""Account leaf stored in the sparse Merkle tree."""

from dataclasses import dataclass
from typing import List

from primitives.field import BN254_SCALAR_MODULUS, bits_le_fixed


@dataclass(frozen=True)
class Leaf:
    """Leaf record: an identifier and a balance, both field elements.

    The default instance (id=0, balance=0) is the value of every empty slot in the tree.
    """
    id: int = 0
    balance: int = 0

    def __post_init__(self) -> None:
        for name in ("id", "balance"):
            value = getattr(self, name)
            if not 0 <= value < BN254_SCALAR_MODULUS:
                raise ValueError(f"{name} {value} is not a field element")

    def get_bits_le(self, id_bit_length: int, balance_bit_length: int) -> List[bool]:
        """Id bits followed by balance bits, each little-endian and zero padded.

        Raises:
            ValueError: If a field does not fit its declared width
        """
        return bits_le_fixed(self.id, id_bit_length) + bits_le_fixed(self.balance, balance_bit_length)
