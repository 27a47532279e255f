"""
Exception types for the residue_rns package.

Every concrete error subclasses ValueError as well as RnsError, so callers
that already guard numeric input with ``except ValueError`` keep working.
"""

from typing import Optional, Sequence


class RnsError(Exception):
    """Base class for all RNS errors."""


class InvalidConfiguration(RnsError, ValueError):
    """A modulus set (or a single modulus) is unusable.

    Raised for an empty set, a modulus <= 1, a non-integer modulus, or a
    pair of moduli sharing a factor.
    """

    def __init__(self, message: str, pair: Optional[Sequence[int]] = None):
        super().__init__(message)
        self.pair = tuple(pair) if pair is not None else None


class NoInverseExists(RnsError, ValueError):
    """``a`` is not a unit modulo ``m``."""

    def __init__(self, a: int, m: int, gcd: int):
        super().__init__(f"No inverse: gcd({a},{m})={gcd}")
        self.a = a
        self.m = m
        self.gcd = gcd


class ModuliMismatch(RnsError, ValueError):
    """Arithmetic between residue tuples over different modulus sets."""

    def __init__(self, left, right):
        super().__init__(
            f"Moduli mismatch: {tuple(left)} vs {tuple(right)}"
        )
        self.left = left
        self.right = right


class InvalidResidues(RnsError, ValueError):
    """Residues do not fit their modulus set (wrong count or out of range)."""
