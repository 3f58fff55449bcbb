"""
Poseidon2 permutation inside the constraint system (constrained mode).

Mirrors primitives/poseidon2.py round for round and reads the same
Poseidon2Params, so the two modes compute the same function. State lanes are Num
values: round constants and both linear layers only rewrite linear combinations.
The only constraints are the S-boxes (3 each for x^5) and one constraint per
materialized output.
"""

from typing import List, Sequence

from constraints.base import CircuitShapeError, ConstraintSystem
from constraints.num import AllocatedNum, Num
from primitives.poseidon2 import Poseidon2Params


def _sbox(cs: ConstraintSystem, x: Num) -> Num:
    """x^5 as x2 = x * x, x4 = x2 * x2, x5 = x4 * x."""
    x2 = Num.from_allocated(x.mul(cs, x, "x2"))
    x4 = Num.from_allocated(x2.mul(cs, x2, "x4"))
    return Num.from_allocated(x4.mul(cs, x, "x5"))


def _matmul_external(state: List[Num]) -> List[Num]:
    total = sum(state)
    return [x + total for x in state]


def _matmul_internal(state: List[Num], diag: Sequence[int]) -> List[Num]:
    total = sum(state)
    return [x.scale(d) + total for x, d in zip(state, diag)]


def _full_round(cs: ConstraintSystem, state: List[Num], constants: Sequence[int]) -> List[Num]:
    out = []
    for i, (x, c) in enumerate(zip(state, constants)):
        with cs.namespace(f"sbox {i}"):
            out.append(_sbox(cs, x + Num.constant(c)))
    return _matmul_external(out)


def permute_in_circuit(cs: ConstraintSystem, params: Poseidon2Params, state: Sequence[Num]) -> List[Num]:
    """
    Constrained Poseidon2 permutation.

    Args:
        cs: Constraint system to synthesize into
        params: Same parameters the native permutation uses
        state: params.width lanes

    Returns:
        params.width lanes as linear combinations (not yet materialized)

    Raises:
        CircuitShapeError: If the S-box exponent is not 5 or the state has the wrong width
    """
    if params.alpha != 5:
        raise CircuitShapeError(f"constrained S-box supports alpha = 5, got {params.alpha}")
    if len(state) != params.width:
        raise CircuitShapeError(f"state must have {params.width} lanes, got {len(state)}")

    half_full_rounds = params.rounds_f // 2
    state = _matmul_external(list(state))

    for r in range(half_full_rounds):
        with cs.namespace(f"full round {r}"):
            state = _full_round(cs, state, params.external_rc[r])

    for r in range(params.rounds_p):
        with cs.namespace(f"partial round {r}"):
            state[0] = _sbox(cs, state[0] + Num.constant(params.internal_rc[r]))
        state = _matmul_internal(state, params.internal_diag)

    for r in range(half_full_rounds, params.rounds_f):
        with cs.namespace(f"full round {r}"):
            state = _full_round(cs, state, params.external_rc[r])

    return state


def sponge_hash_in_circuit(
    cs: ConstraintSystem, params: Poseidon2Params, inputs: Sequence[AllocatedNum]
) -> AllocatedNum:
    """Constrained counterpart of primitives.poseidon2.sponge_hash.

    Raises:
        ValueError: If inputs is empty
    """
    if len(inputs) == 0:
        raise ValueError("cannot hash an empty input")

    rate = params.rate
    state = [Num.zero() for _ in range(params.width)]
    state[rate] = Num.constant(len(inputs))

    for k, offset in enumerate(range(0, len(inputs), rate)):
        chunk = inputs[offset:offset + rate]
        for i, x in enumerate(chunk):
            state[i] = state[i] + Num.from_allocated(x)
        with cs.namespace(f"permutation {k}"):
            state = permute_in_circuit(cs, params, state)

    return state[0].into_allocated(cs, "hash output")
