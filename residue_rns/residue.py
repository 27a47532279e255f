"""
ResidueTuple: an integer's congruence class mod M, held as one residue per
modulus of a ModulusSet.

    n  ->  (n mod m_1, n mod m_2, ..., n mod m_N)

Addition, subtraction and multiplication act on each residue on its own;
there is no carry between components, so component i of a result depends
only on component i of the operands.  Comparison by magnitude and
division are not available: the tuple order exposed through ``<`` is a
plain lexicographic order kept for sorted containers, and says nothing
about the size of the integers involved.

The represented integer is recomputed by CRT on every decode() call and
never stored.
"""

from dataclasses import dataclass
from functools import total_ordering
from typing import Tuple, Union

import numpy as np

from .errors import InvalidResidues, ModuliMismatch
from .moduli import ModulusSet, default_moduli
from .rns.reference import (
    rns_add, rns_sub, rns_mul, rns_neg, rns_pow,
    rns_encode, crt_reconstruct, crt_reconstruct_signed,
)


Operand = Union["ResidueTuple", int]


@total_ordering
@dataclass(frozen=True, eq=True)
class ResidueTuple:
    """Immutable residue vector over a ModulusSet.

    Direct construction validates the residues: there must be exactly one
    per modulus and each must lie in [0, m_i).  Use encode() to build a
    tuple from an integer.
    """
    residues: Tuple[int, ...]
    moduli: ModulusSet

    def __post_init__(self):
        if not isinstance(self.moduli, ModulusSet):
            raise TypeError(f"moduli must be a ModulusSet, got {type(self.moduli).__name__}")
        for r in self.residues:
            if isinstance(r, bool) or not isinstance(r, (int, np.integer)):
                raise TypeError(f"Residues must be integers, got {r!r}")
        residues = tuple(int(r) for r in self.residues)
        if len(residues) != len(self.moduli):
            raise InvalidResidues(
                f"Got {len(residues)} residues for {len(self.moduli)} moduli"
            )
        for r, m in zip(residues, self.moduli):
            if not 0 <= r < m:
                raise InvalidResidues(f"Residue {r} outside [0, {m})")
        object.__setattr__(self, "residues", residues)

    # -- constructors -------------------------------------------------------

    @classmethod
    def encode(cls, value: int, moduli: ModulusSet) -> "ResidueTuple":
        """Encode ``value`` (any sign) over ``moduli``."""
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise TypeError(f"Can only encode integers, got {type(value).__name__}")
        return cls(tuple(rns_encode(int(value), moduli.moduli)), moduli)

    @classmethod
    def zero(cls, moduli: ModulusSet) -> "ResidueTuple":
        return cls((0,) * len(moduli), moduli)

    @classmethod
    def one(cls, moduli: ModulusSet) -> "ResidueTuple":
        return cls((1,) * len(moduli), moduli)

    # -- accessors ----------------------------------------------------------

    @property
    def dynamic_range(self) -> int:
        return self.moduli.dynamic_range

    def __len__(self) -> int:
        return len(self.residues)

    def to_array(self) -> np.ndarray:
        """Residues as a 1-D numpy array (same dtype rule as the moduli)."""
        return np.array(self.residues, dtype=self.moduli.to_array().dtype)

    # -- decoding -----------------------------------------------------------

    def decode(self) -> int:
        """Representative in [0, M)."""
        return crt_reconstruct(self.residues, self.moduli.moduli)

    def decode_signed(self) -> int:
        """Representative in [-M/2, M/2)."""
        return crt_reconstruct_signed(self.residues, self.moduli.moduli)

    def __int__(self) -> int:
        return self.decode()

    # -- arithmetic ---------------------------------------------------------

    def _coerce(self, other: Operand) -> "ResidueTuple":
        if isinstance(other, ResidueTuple):
            if other.moduli is not self.moduli and other.moduli != self.moduli:
                raise ModuliMismatch(self.moduli, other.moduli)
            return other
        if isinstance(other, (int, np.integer)) and not isinstance(other, bool):
            return ResidueTuple.encode(other, self.moduli)
        return NotImplemented

    def _componentwise(self, other: Operand, op) -> "ResidueTuple":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return ResidueTuple(
            tuple(op(self.residues, other.residues, self.moduli.moduli)),
            self.moduli,
        )

    def __add__(self, other: Operand) -> "ResidueTuple":
        return self._componentwise(other, rns_add)

    def __sub__(self, other: Operand) -> "ResidueTuple":
        return self._componentwise(other, rns_sub)

    def __mul__(self, other: Operand) -> "ResidueTuple":
        return self._componentwise(other, rns_mul)

    def __radd__(self, other: int) -> "ResidueTuple":
        return self._componentwise(other, rns_add)

    def __rmul__(self, other: int) -> "ResidueTuple":
        return self._componentwise(other, rns_mul)

    def __rsub__(self, other: int) -> "ResidueTuple":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other - self

    def __neg__(self) -> "ResidueTuple":
        return ResidueTuple(
            tuple(rns_neg(self.residues, self.moduli.moduli)),
            self.moduli,
        )

    def __pow__(self, exp: int) -> "ResidueTuple":
        if isinstance(exp, bool) or not isinstance(exp, (int, np.integer)):
            return NotImplemented
        if exp < 0:
            raise ValueError("Negative exponents need an inverse; not supported in RNS")
        return ResidueTuple(
            tuple(rns_pow(self.residues, int(exp), self.moduli.moduli)),
            self.moduli,
        )

    # -- ordering -----------------------------------------------------------

    def __lt__(self, other: "ResidueTuple") -> bool:
        """Lexicographic order on (moduli, residues).

        Only for sorted containers and stable output.  It does not follow
        the order of the decoded integers: over the default 3-modulus set
        encode(251) = (0, 251, 251) sorts before encode(250) = (250, 250, 250).
        """
        if not isinstance(other, ResidueTuple):
            return NotImplemented
        return (self.moduli.moduli, self.residues) < (other.moduli.moduli, other.residues)

    # -- output -------------------------------------------------------------

    def __str__(self) -> str:
        parts = ", ".join(f"{r} mod {m}" for r, m in zip(self.residues, self.moduli))
        return f"RNS({parts})"

    def __repr__(self) -> str:
        return f"ResidueTuple(residues={self.residues!r}, moduli={self.moduli!r})"


# ---------------------------------------------------------------------------
# Functional API
# ---------------------------------------------------------------------------

def encode(value: int, moduli: ModulusSet) -> ResidueTuple:
    """Integer -> ResidueTuple over ``moduli``."""
    return ResidueTuple.encode(value, moduli)


def decode(t: ResidueTuple) -> int:
    """ResidueTuple -> integer in [0, M)."""
    return t.decode()


def add(a: ResidueTuple, b: ResidueTuple) -> ResidueTuple:
    _require_same(a, b)
    return a + b


def sub(a: ResidueTuple, b: ResidueTuple) -> ResidueTuple:
    _require_same(a, b)
    return a - b


def mul(a: ResidueTuple, b: ResidueTuple) -> ResidueTuple:
    _require_same(a, b)
    return a * b


def _require_same(a: ResidueTuple, b: ResidueTuple) -> None:
    if not isinstance(a, ResidueTuple) or not isinstance(b, ResidueTuple):
        raise TypeError("add/sub/mul take two ResidueTuple operands")
    if a.moduli is not b.moduli and a.moduli != b.moduli:
        raise ModuliMismatch(a.moduli, b.moduli)


def rns3(value: int) -> ResidueTuple:
    """Encode over the default 3-modulus set (251, 253, 255)."""
    return ResidueTuple.encode(value, default_moduli(3))


def rns4(value: int) -> ResidueTuple:
    """Encode over the default 4-modulus set (251, 253, 255, 256)."""
    return ResidueTuple.encode(value, default_moduli(4))
