"""Keys and proof data structures, with JSON serialization.

The reference backend is transparent: a proof carries the auxiliary assignment
and the verifier re-checks every constraint. It is sound and complete for the
statement, but neither succinct nor zero knowledge.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from constraints.base import Constraint

# --- Key Data Structures ---


@dataclass(frozen=True)
class VerifyingKey:
    """Constraint system shape the verifier checks against.

    Attributes:
        num_inputs: Public inputs including the constant 1
        num_aux: Private variables
        constraints: All a * b = c constraints in synthesis order
        circuit_digest: shape_digest() of the above
    """
    num_inputs: int
    num_aux: int
    constraints: tuple[Constraint, ...]
    circuit_digest: str


@dataclass(frozen=True)
class ProvingKey:
    """Prover's view of the same shape; only the digest is needed to bind proofs."""
    num_inputs: int
    num_aux: int
    num_constraints: int
    circuit_digest: str


@dataclass(frozen=True)
class Parameters:
    """Output of setup: both keys for one circuit shape."""
    pk: ProvingKey
    vk: VerifyingKey


@dataclass
class Proof:
    """Membership proof: auxiliary assignment bound to a circuit shape."""
    circuit_digest: str = ""
    aux: list[int] = field(default_factory=list)


# --- JSON Serialization ---

def proof_to_json(proof: Proof) -> dict[str, Any]:
    """Convert proof to a JSON-serializable dictionary (field elements as decimal strings)."""
    return {
        "circuitDigest": proof.circuit_digest,
        "nAux": len(proof.aux),
        "aux": [str(v) for v in proof.aux],
    }


def proof_from_json(j: dict[str, Any]) -> Proof:
    """Inverse of proof_to_json.

    Raises:
        ValueError: If nAux disagrees with the aux list
    """
    aux = [int(v) for v in j.get("aux", [])]
    if "nAux" in j and int(j["nAux"]) != len(aux):
        raise ValueError(f"nAux is {j['nAux']} but {len(aux)} aux values are present")
    return Proof(circuit_digest=j.get("circuitDigest", ""), aux=aux)


def save_proof(proof: Proof, path: str) -> None:
    with open(path, "w") as f:
        json.dump(proof_to_json(proof), f, indent=2)


def load_proof(path: str) -> Proof:
    """Load proof from JSON file."""
    with open(path) as f:
        data = json.load(f)
    return proof_from_json(data)
