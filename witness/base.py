"""Two-state witness values.

A Witness is either Unknown or Known(value). Key generation synthesizes the circuit
from Unknown values and never reads them; proving needs every value Known. Reading
an Unknown value raises SynthesisError, which aborts the whole synthesis.
"""

from typing import Any, Callable


class SynthesisError(Exception):
    """A value needed to build the proving assignment is not available."""


class _Unknown:
    __slots__ = ()

    def __repr__(self) -> str:
        return "Unknown"


_UNKNOWN = _Unknown()


class Witness:
    """Value that is Unknown during key generation and Known when proving."""

    __slots__ = ("_value",)

    def __init__(self, value: Any = _UNKNOWN):
        if value is None:
            raise ValueError("use Witness.unknown() for a missing value, not None")
        self._value = value

    @classmethod
    def known(cls, value: Any) -> "Witness":
        return cls(value)

    @classmethod
    def unknown(cls) -> "Witness":
        return cls()

    @property
    def is_known(self) -> bool:
        return self._value is not _UNKNOWN

    def get(self) -> Any:
        """Return the value.

        Raises:
            SynthesisError: If the value is Unknown
        """
        if self._value is _UNKNOWN:
            raise SynthesisError("assignment missing")
        return self._value

    def map(self, fn: Callable[[Any], Any]) -> "Witness":
        """Apply fn to a Known value; Unknown stays Unknown."""
        if self._value is _UNKNOWN:
            return self
        return Witness(fn(self._value))

    @staticmethod
    def apply(fn: Callable[..., Any], *witnesses: "Witness") -> "Witness":
        """Known(fn(*values)) if every witness is Known, otherwise Unknown."""
        if any(w._value is _UNKNOWN for w in witnesses):
            return UNKNOWN
        return Witness(fn(*(w._value for w in witnesses)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Witness):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        if self._value is _UNKNOWN:
            return "Witness.unknown()"
        return f"Witness.known({self._value!r})"


UNKNOWN = Witness()
