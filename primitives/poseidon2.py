"""
Poseidon2 permutation over the BN254 scalar field (native mode).

Width 3 (rate 2, capacity 1), S-box x^5, 8 full rounds split 4 + 4 around
56 partial rounds. For widths 2 and 3 both linear layers reduce to
"scale by a diagonal, then add the sum of the state":

    external:  y_i = x_i + sum(x)
    internal:  y_i = d_i * x_i + sum(x)

Round constants are derived from SHA-256 of a domain tag and a counter, reduced
into the field. The same Poseidon2Params instance drives the constrained
implementation in constraints/poseidon2.py, so the two modes cannot drift.
"""

import hashlib
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from primitives.field import BN254_SCALAR_MODULUS, FF

# --- Constants ---

WIDTH = 3
ROUNDS_F = 8
ROUNDS_P = 56
ALPHA = 5
INTERNAL_DIAG = (1, 1, 2)
DOMAIN_TAG = b"poseidon2-bn254-t3"


def _derive_round_constant(tag: bytes, counter: int) -> int:
    """Hash (tag, counter) with SHA-256 and map the digest into the field."""
    digest = hashlib.sha256(tag + counter.to_bytes(4, byteorder="big")).digest()
    return int.from_bytes(digest, byteorder="big") % BN254_SCALAR_MODULUS


# --- Parameters ---

@dataclass(frozen=True)
class Poseidon2Params:
    """Round parameters shared by the native and constrained permutations.

    Build once per process (Poseidon2Params.default()) and pass the instance to
    every hasher. Frozen: nothing mutates it after construction.

    Attributes:
        width: State size t (2 or 3)
        rounds_f: Number of full rounds, applied half before and half after the partial rounds
        rounds_p: Number of partial rounds
        alpha: S-box exponent, must be coprime with r - 1
        external_rc: Per full round, one constant per state lane
        internal_rc: Per partial round, one constant for lane 0
        internal_diag: Diagonal d of the internal matrix diag(d) + J
    """

    width: int
    rounds_f: int
    rounds_p: int
    alpha: int
    external_rc: Tuple[Tuple[int, ...], ...]
    internal_rc: Tuple[int, ...]
    internal_diag: Tuple[int, ...]

    def __post_init__(self) -> None:
        if self.width not in (2, 3):
            raise ValueError(f"width must be 2 or 3, got {self.width}")
        if self.rounds_f % 2 != 0:
            raise ValueError(f"rounds_f must be even, got {self.rounds_f}")
        if len(self.external_rc) != self.rounds_f or any(len(rc) != self.width for rc in self.external_rc):
            raise ValueError(f"external_rc must be {self.rounds_f} rows of {self.width} constants")
        if len(self.internal_rc) != self.rounds_p:
            raise ValueError(f"internal_rc must have {self.rounds_p} constants, got {len(self.internal_rc)}")
        if len(self.internal_diag) != self.width:
            raise ValueError(f"internal_diag must have {self.width} entries, got {len(self.internal_diag)}")
        if math.gcd(self.alpha, BN254_SCALAR_MODULUS - 1) != 1:
            raise ValueError(f"x^{self.alpha} is not a permutation of the field")
        if np.linalg.det(self.external_matrix()) == 0:
            raise ValueError("external matrix is singular")
        if np.linalg.det(self.internal_matrix()) == 0:
            raise ValueError("internal matrix is singular")

    @classmethod
    def default(cls) -> "Poseidon2Params":
        """Width-3 parameters with SHA-256 derived round constants."""
        n_external = ROUNDS_F * WIDTH
        constants = [_derive_round_constant(DOMAIN_TAG, i) for i in range(n_external + ROUNDS_P)]
        external_rc = tuple(
            tuple(constants[r * WIDTH:(r + 1) * WIDTH]) for r in range(ROUNDS_F)
        )
        return cls(
            width=WIDTH,
            rounds_f=ROUNDS_F,
            rounds_p=ROUNDS_P,
            alpha=ALPHA,
            external_rc=external_rc,
            internal_rc=tuple(constants[n_external:]),
            internal_diag=INTERNAL_DIAG,
        )

    @property
    def rate(self) -> int:
        """Lanes absorbed per permutation; the last lane is the capacity."""
        return self.width - 1

    def external_matrix(self) -> FF:
        """External layer as a galois matrix: I + J."""
        ones = np.ones((self.width, self.width), dtype=np.int64)
        return FF((ones + np.eye(self.width, dtype=np.int64)).tolist())

    def internal_matrix(self) -> FF:
        """Internal layer as a galois matrix: diag(d) + J."""
        ones = np.ones((self.width, self.width), dtype=np.int64)
        return FF((ones + np.diag(self.internal_diag)).tolist())


# --- Permutation ---

def _sbox(x: int, alpha: int) -> int:
    return pow(x, alpha, BN254_SCALAR_MODULUS)


def _matmul_external(state: List[int]) -> List[int]:
    """Apply I + J."""
    total = sum(state) % BN254_SCALAR_MODULUS
    return [(x + total) % BN254_SCALAR_MODULUS for x in state]


def _matmul_internal(state: List[int], diag: Sequence[int]) -> List[int]:
    """Apply diag(d) + J."""
    total = sum(state) % BN254_SCALAR_MODULUS
    return [(x * d + total) % BN254_SCALAR_MODULUS for x, d in zip(state, diag)]


def _full_round(state: List[int], constants: Sequence[int], alpha: int) -> List[int]:
    state = [_sbox((x + c) % BN254_SCALAR_MODULUS, alpha) for x, c in zip(state, constants)]
    return _matmul_external(state)


def permute(params: Poseidon2Params, input_data: Sequence[int]) -> List[int]:
    """
    Compute the full Poseidon2 permutation.

    Args:
        params: Round parameters
        input_data: Field elements (as integers), exactly params.width of them

    Returns:
        List of params.width field elements after the permutation
    """
    if len(input_data) != params.width:
        raise ValueError(f"input_data must have {params.width} elements, got {len(input_data)}")

    state = [x % BN254_SCALAR_MODULUS for x in input_data]
    half_full_rounds = params.rounds_f // 2

    # Initial external matrix multiplication
    state = _matmul_external(state)

    for r in range(half_full_rounds):
        state = _full_round(state, params.external_rc[r], params.alpha)

    for r in range(params.rounds_p):
        # Constant and S-box on lane 0 only
        state[0] = _sbox((state[0] + params.internal_rc[r]) % BN254_SCALAR_MODULUS, params.alpha)
        state = _matmul_internal(state, params.internal_diag)

    for r in range(half_full_rounds, params.rounds_f):
        state = _full_round(state, params.external_rc[r], params.alpha)

    return state


def sponge_hash(params: Poseidon2Params, input_data: Sequence[int]) -> int:
    """
    Hash a non-empty sequence of field elements to one field element.

    The capacity lane starts at len(input_data), so inputs of different lengths
    never share a sponge state. Inputs are added into the rate lanes `rate` at a
    time with one permutation per chunk; the digest is lane 0.

    Raises:
        ValueError: If input_data is empty
    """
    if len(input_data) == 0:
        raise ValueError("cannot hash an empty input")

    rate = params.rate
    state = [0] * params.width
    state[rate] = len(input_data) % BN254_SCALAR_MODULUS

    for offset in range(0, len(input_data), rate):
        chunk = input_data[offset:offset + rate]
        for i, x in enumerate(chunk):
            state[i] = (state[i] + x) % BN254_SCALAR_MODULUS
        state = permute(params, state)

    return state[0]
