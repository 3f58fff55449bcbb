"""Proof verification for the reference backend.

Checks, in order:
1. Shape binding - the proof was made for the verifying key's circuit
2. Public inputs - one value per public input slot, each a field element
3. Assignment size - one value per auxiliary variable
4. Constraints - every a * b = c holds on (1, public_inputs, aux)
"""

from typing import Sequence

from constraints.base import first_unsatisfied
from primitives.field import BN254_SCALAR_MODULUS
from protocol.proof import Proof, VerifyingKey


def verify_proof(vk: VerifyingKey, proof: Proof, public_inputs: Sequence[int]) -> bool:
    """Verify a membership proof.

    Args:
        vk: Verifying key from generate_parameters
        proof: Proof from create_proof (or load_proof)
        public_inputs: Public inputs without the constant 1; for the membership
                       circuit this is [root]

    Returns:
        True if proof is valid, False otherwise
    """
    if proof.circuit_digest != vk.circuit_digest:
        print("ERROR: Proof was created for a different circuit")
        return False

    if len(public_inputs) != vk.num_inputs - 1:
        print(f"ERROR: Expected {vk.num_inputs - 1} public inputs, got {len(public_inputs)}")
        return False

    if any(not 0 <= v < BN254_SCALAR_MODULUS for v in public_inputs):
        print("ERROR: Public input is not a field element")
        return False

    if len(proof.aux) != vk.num_aux:
        print(f"ERROR: Expected {vk.num_aux} aux values, got {len(proof.aux)}")
        return False

    inputs = [1] + list(public_inputs)
    unsatisfied = first_unsatisfied(vk.constraints, inputs, proof.aux)
    if unsatisfied is not None:
        print(f"ERROR: Constraint not satisfied: {unsatisfied}")
        return False

    return True
