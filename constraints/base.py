"""Base classes for rank-1 constraint synthesis.

A circuit is synthesized against a ConstraintSystem: it allocates variables and
enforces constraints of the form

    <a, z> * <b, z> = <c, z>

where a, b, c are linear combinations over the assignment vector z. The same gadget
code runs against both realizations:

    KeygenConstraintSystem   records the shape only and never evaluates a value
                             closure (witness values may be Unknown)
    ProvingConstraintSystem  records the shape and the full assignment, so the
                             system can be checked for satisfaction

Example:
    def square(cs: ConstraintSystem, x: Variable) -> Variable:
        y = cs.alloc("y", lambda: values[x] ** 2)
        cs.enforce("y = x * x", x, x, y)
        return y
"""

import hashlib
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from primitives.field import BN254_SCALAR_MODULUS
from witness.base import SynthesisError


class CircuitShapeError(Exception):
    """The circuit is wired wrongly: a bit length above field capacity, a path whose
    length differs from the tree depth, an invalid configuration.

    Not a witness problem. Raised while the circuit is being built and never caught
    inside the library.
    """


# --- Variables ---

INPUT = "input"
AUX = "aux"


@dataclass(frozen=True, order=True)
class Variable:
    """Index into the assignment: public inputs first, then auxiliary wires."""
    kind: str
    index: int


ONE = Variable(INPUT, 0)
"""Input 0 is the constant 1."""


# --- Linear Combinations ---

Term = Union["LinearCombination", Variable, int]


def _terms_of(value: Term) -> Dict[Variable, int]:
    if isinstance(value, LinearCombination):
        return value.terms
    if isinstance(value, Variable):
        return {value: 1}
    return {ONE: value % BN254_SCALAR_MODULUS}


class LinearCombination:
    """Sparse sum of coeff * variable with coefficients in the field.

    Immutable in practice: operators return new instances. Zero coefficients are
    dropped, so two equal combinations have equal term dicts.
    """

    __slots__ = ("terms",)

    def __init__(self, terms: Optional[Dict[Variable, int]] = None):
        self.terms: Dict[Variable, int] = {} if terms is None else terms

    @classmethod
    def zero(cls) -> "LinearCombination":
        return cls()

    @classmethod
    def from_variable(cls, var: Variable, coeff: int = 1) -> "LinearCombination":
        coeff %= BN254_SCALAR_MODULUS
        return cls({var: coeff} if coeff else {})

    @classmethod
    def constant(cls, value: int) -> "LinearCombination":
        return cls.from_variable(ONE, value)

    @classmethod
    def coerce(cls, value: Term) -> "LinearCombination":
        if isinstance(value, LinearCombination):
            return value
        return cls().__add__(value)

    def _merged(self, other: Term, sign: int) -> "LinearCombination":
        terms = dict(self.terms)
        for var, coeff in _terms_of(other).items():
            merged = (terms.get(var, 0) + sign * coeff) % BN254_SCALAR_MODULUS
            if merged:
                terms[var] = merged
            else:
                terms.pop(var, None)
        return LinearCombination(terms)

    def __add__(self, other: Term) -> "LinearCombination":
        return self._merged(other, 1)

    def __radd__(self, other: Term) -> "LinearCombination":
        return self._merged(other, 1)

    def __sub__(self, other: Term) -> "LinearCombination":
        return self._merged(other, -1)

    def __rsub__(self, other: Term) -> "LinearCombination":
        return LinearCombination.coerce(other) - self

    def __mul__(self, scalar: int) -> "LinearCombination":
        scalar %= BN254_SCALAR_MODULUS
        if scalar == 0:
            return LinearCombination()
        return LinearCombination(
            {var: (coeff * scalar) % BN254_SCALAR_MODULUS for var, coeff in self.terms.items()}
        )

    __rmul__ = __mul__

    def __neg__(self) -> "LinearCombination":
        return self * -1

    def __len__(self) -> int:
        return len(self.terms)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinearCombination):
            return NotImplemented
        return self.terms == other.terms

    def __repr__(self) -> str:
        inner = " + ".join(f"{coeff}*{var.kind}[{var.index}]" for var, coeff in sorted(self.terms.items()))
        return f"LinearCombination({inner or '0'})"

    def evaluate(self, lookup: Callable[[Variable], int]) -> int:
        """Value of the combination under an assignment."""
        acc = 0
        for var, coeff in self.terms.items():
            acc += coeff * lookup(var)
        return acc % BN254_SCALAR_MODULUS

    def canonical(self) -> Tuple[Tuple[str, int, int], ...]:
        """Sorted (kind, index, coeff) triples, independent of insertion order."""
        return tuple((var.kind, var.index, coeff) for var, coeff in sorted(self.terms.items()))


@dataclass(frozen=True)
class Constraint:
    """a * b = c, with the namespaced annotation it was enforced under."""
    annotation: str
    a: LinearCombination
    b: LinearCombination
    c: LinearCombination


def first_unsatisfied(
    constraints: Sequence[Constraint], inputs: Sequence[int], aux: Sequence[int]
) -> Optional[str]:
    """Annotation of the first constraint the assignment violates, or None."""
    def lookup(var: Variable) -> int:
        return inputs[var.index] if var.kind == INPUT else aux[var.index]

    for constraint in constraints:
        a = constraint.a.evaluate(lookup)
        b = constraint.b.evaluate(lookup)
        c = constraint.c.evaluate(lookup)
        if (a * b - c) % BN254_SCALAR_MODULUS != 0:
            return constraint.annotation
    return None


def shape_digest(num_inputs: int, num_aux: int, constraints: Sequence[Constraint]) -> str:
    """SHA-256 over the constraint matrices; annotations are not part of the shape."""
    h = hashlib.sha256()
    h.update(f"{num_inputs}:{num_aux}:{len(constraints)}".encode())
    for constraint in constraints:
        for lc in (constraint.a, constraint.b, constraint.c):
            h.update(repr(lc.canonical()).encode())
            h.update(b";")
    return h.hexdigest()


# --- Constraint Systems ---

class ConstraintSystem(ABC):
    """Uniform synthesis interface - works for key generation and proving."""

    def __init__(self) -> None:
        self.constraints: List[Constraint] = []
        self.num_inputs = 1  # ONE
        self.num_aux = 0
        self._path: List[str] = []

    @staticmethod
    def one() -> Variable:
        return ONE

    @contextmanager
    def namespace(self, name: str) -> Iterator["ConstraintSystem"]:
        """Prefix annotations allocated inside the block with `name/`."""
        self._path.append(name)
        try:
            yield self
        finally:
            self._path.pop()

    def annotate(self, annotation: str) -> str:
        return "/".join(self._path + [annotation])

    def alloc(self, annotation: str, value_fn: Callable[[], int]) -> Variable:
        """Allocate a private (auxiliary) variable.

        Args:
            annotation: Name for diagnostics, prefixed by the current namespace
            value_fn: Computes the value; only called when proving

        Returns:
            The new variable
        """
        self._store_aux(self.annotate(annotation), value_fn)
        var = Variable(AUX, self.num_aux)
        self.num_aux += 1
        return var

    def alloc_input(self, annotation: str, value_fn: Callable[[], int]) -> Variable:
        """Allocate a public input variable."""
        self._store_input(self.annotate(annotation), value_fn)
        var = Variable(INPUT, self.num_inputs)
        self.num_inputs += 1
        return var

    def enforce(self, annotation: str, a: Term, b: Term, c: Term) -> None:
        """Add the constraint a * b = c."""
        self.constraints.append(
            Constraint(
                self.annotate(annotation),
                LinearCombination.coerce(a),
                LinearCombination.coerce(b),
                LinearCombination.coerce(c),
            )
        )

    @property
    def num_constraints(self) -> int:
        return len(self.constraints)

    def shape_digest(self) -> str:
        return shape_digest(self.num_inputs, self.num_aux, self.constraints)

    @abstractmethod
    def _store_aux(self, annotation: str, value_fn: Callable[[], int]) -> None:
        pass

    @abstractmethod
    def _store_input(self, annotation: str, value_fn: Callable[[], int]) -> None:
        pass


class KeygenConstraintSystem(ConstraintSystem):
    """Key generation implementation - shape only.

    Value closures are never called, so a circuit whose witness is entirely Unknown
    synthesizes the same constraints as a fully known one.
    """

    def _store_aux(self, annotation: str, value_fn: Callable[[], int]) -> None:
        pass

    def _store_input(self, annotation: str, value_fn: Callable[[], int]) -> None:
        pass


class ProvingConstraintSystem(ConstraintSystem):
    """Proving implementation - evaluates every value closure.

    A closure that reads an Unknown witness raises SynthesisError and the synthesis
    stops there. An assignment that is complete but wrong is recorded as is; use
    is_satisfied() / which_is_unsatisfied() to inspect it.
    """

    def __init__(self) -> None:
        super().__init__()
        self.inputs: List[int] = [1]
        self.aux: List[int] = []

    @staticmethod
    def _evaluate(annotation: str, value_fn: Callable[[], int]) -> int:
        try:
            return value_fn() % BN254_SCALAR_MODULUS
        except SynthesisError as e:
            raise SynthesisError(f"{annotation}: {e}") from e

    def _store_aux(self, annotation: str, value_fn: Callable[[], int]) -> None:
        self.aux.append(self._evaluate(annotation, value_fn))

    def _store_input(self, annotation: str, value_fn: Callable[[], int]) -> None:
        self.inputs.append(self._evaluate(annotation, value_fn))

    def value(self, var: Variable) -> int:
        return self.inputs[var.index] if var.kind == INPUT else self.aux[var.index]

    @property
    def public_inputs(self) -> List[int]:
        """Public inputs without the leading constant 1."""
        return self.inputs[1:]

    def which_is_unsatisfied(self) -> Optional[str]:
        return first_unsatisfied(self.constraints, self.inputs, self.aux)

    def is_satisfied(self) -> bool:
        return self.which_is_unsatisfied() is None
