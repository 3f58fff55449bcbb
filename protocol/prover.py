"""Setup and proving for the reference backend.

Both entry points synthesize the circuit from scratch: setup against a
KeygenConstraintSystem (no value is read), proving against a
ProvingConstraintSystem (every value is read).
"""

from constraints.base import CircuitShapeError, KeygenConstraintSystem, ProvingConstraintSystem
from protocol.circuit import Circuit
from protocol.proof import Parameters, Proof, ProvingKey, VerifyingKey


def generate_parameters(circuit: Circuit) -> Parameters:
    """Run key generation synthesis and derive both keys.

    The circuit's witness values are never read, so an all-Unknown instance
    (MerklePathAuthCircuit.blank) gives the same keys as a fully known one.
    """
    cs = KeygenConstraintSystem()
    circuit.synthesize(cs)

    digest = cs.shape_digest()
    pk = ProvingKey(
        num_inputs=cs.num_inputs,
        num_aux=cs.num_aux,
        num_constraints=cs.num_constraints,
        circuit_digest=digest,
    )
    vk = VerifyingKey(
        num_inputs=cs.num_inputs,
        num_aux=cs.num_aux,
        constraints=tuple(cs.constraints),
        circuit_digest=digest,
    )
    return Parameters(pk=pk, vk=vk)


def create_proof(circuit: Circuit, params: Parameters) -> Proof:
    """Synthesize with all values and package the assignment.

    A well-shaped but wrong witness still yields a proof; it fails verification.

    Raises:
        SynthesisError: If a witness value the circuit needs is Unknown
        CircuitShapeError: If the circuit does not match the keys
    """
    cs = ProvingConstraintSystem()
    circuit.synthesize(cs)

    digest = cs.shape_digest()
    if digest != params.pk.circuit_digest:
        raise CircuitShapeError(
            f"circuit shape {digest[:16]}... does not match proving key {params.pk.circuit_digest[:16]}..."
        )

    return Proof(circuit_digest=digest, aux=list(cs.aux))
