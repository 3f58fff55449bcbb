"""Protocol - Membership circuit, witness generation, setup, proving and verification."""

from protocol.circuit import Circuit, MerklePathAuthCircuit
from protocol.config import CircuitConfig
from protocol.proof import (
    Parameters,
    Proof,
    ProvingKey,
    VerifyingKey,
    load_proof,
    proof_from_json,
    proof_to_json,
    save_proof,
)
from protocol.prover import create_proof, generate_parameters
from protocol.verifier import verify_proof
from protocol.witness_generation import generate_random_tree, generate_witness, new_account_tree

__all__ = [
    # Circuit
    "Circuit",
    "MerklePathAuthCircuit",
    "CircuitConfig",
    # Witness generation
    "new_account_tree",
    "generate_random_tree",
    "generate_witness",
    # Keys and proofs
    "ProvingKey",
    "VerifyingKey",
    "Parameters",
    "Proof",
    "proof_to_json",
    "proof_from_json",
    "save_proof",
    "load_proof",
    # Prover / verifier
    "generate_parameters",
    "create_proof",
    "verify_proof",
]
