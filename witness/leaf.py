"""Leaf witness: both fields Known, or both Unknown."""

from dataclasses import dataclass

from primitives.leaf import Leaf
from witness.base import UNKNOWN, Witness


@dataclass(frozen=True)
class LeafWitness:
    id: Witness = UNKNOWN
    balance: Witness = UNKNOWN

    def __post_init__(self) -> None:
        if self.id.is_known != self.balance.is_known:
            raise ValueError("leaf witness must be fully known or fully unknown")

    @classmethod
    def from_leaf(cls, leaf: Leaf) -> "LeafWitness":
        return cls(id=Witness.known(leaf.id), balance=Witness.known(leaf.balance))

    @classmethod
    def unknown(cls) -> "LeafWitness":
        return cls()

    @property
    def is_known(self) -> bool:
        return self.id.is_known
