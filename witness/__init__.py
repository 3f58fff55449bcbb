"""Witness values consumed by circuit synthesis."""

from witness.base import UNKNOWN, SynthesisError, Witness
from witness.leaf import LeafWitness

__all__ = [
    "Witness",
    "UNKNOWN",
    "SynthesisError",
    "LeafWitness",
]
