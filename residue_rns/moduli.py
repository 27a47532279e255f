"""
Modulus sets for residue arithmetic.

A ModulusSet is an ordered, immutable tuple of pairwise-coprime moduli
(each > 1) together with its dynamic range M = prod(m_i).  Sets are
validated once, at construction, and shared read-only by every
ResidueTuple built over them.

Default sets:
  - N = 3: (251, 253, 255)        M = 16,193,265
  - N = 4: (251, 253, 255, 256)   M = 4,145,475,840
  - any other N: greedy coprime search from 2 upward (see
    generate_coprime_moduli).  The search always terminates but makes no
    attempt to minimise bit-width or maximise M.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Sequence, Tuple
import math

import numpy as np

from .errors import InvalidConfiguration
from .rns.reference import common_factor_pair, generate_primes


DEFAULT_MODULI: Dict[int, Tuple[int, ...]] = {
    3: (251, 253, 255),
    4: (251, 253, 255, 256),
}


@dataclass(frozen=True)
class ModulusSet:
    """Validated, immutable set of pairwise-coprime moduli.

    Build with construct() / default_moduli() / prime_moduli(), or call
    the constructor directly; validation runs in __post_init__ either way.
    """
    moduli: Tuple[int, ...]
    dynamic_range: int = field(init=False, compare=False)

    def __post_init__(self):
        moduli = tuple(self.moduli)
        _validate(moduli)
        moduli = tuple(int(m) for m in moduli)
        M = 1
        for m in moduli:
            M *= m
        object.__setattr__(self, "moduli", moduli)
        object.__setattr__(self, "dynamic_range", M)

    def __len__(self) -> int:
        return len(self.moduli)

    def __iter__(self) -> Iterator[int]:
        return iter(self.moduli)

    def __getitem__(self, i):
        return self.moduli[i]

    def __repr__(self) -> str:
        return f"ModulusSet({self.moduli!r})"

    def bit_length(self) -> int:
        """Bits needed to hold any value in [0, M)."""
        return (self.dynamic_range - 1).bit_length()

    def to_array(self) -> np.ndarray:
        """Moduli as a read-only 1-D numpy array.

        int64 when every modulus fits, object dtype otherwise.
        """
        dtype = np.int64 if max(self.moduli) < (1 << 63) else object
        arr = np.array(self.moduli, dtype=dtype)
        arr.setflags(write=False)
        return arr


def _validate(moduli: Sequence[int]) -> None:
    if len(moduli) == 0:
        raise InvalidConfiguration("At least one modulus is required")
    for m in moduli:
        if isinstance(m, bool) or not isinstance(m, (int, np.integer)):
            raise InvalidConfiguration(f"Modulus must be an integer, got {m!r}")
        if m <= 1:
            raise InvalidConfiguration(f"Modulus must be > 1, got {m}")
    shared = common_factor_pair(moduli)
    if shared is not None:
        a, b, g = shared
        raise InvalidConfiguration(
            f"Moduli must be pairwise coprime: gcd({a},{b})={g}",
            pair=(a, b),
        )


def construct(moduli: Sequence[int]) -> ModulusSet:
    """Validate a list of moduli and freeze it into a ModulusSet.

    Raises:
        InvalidConfiguration: empty list, a modulus <= 1 or not an int,
            or two moduli sharing a factor.
    """
    return ModulusSet(tuple(moduli))


def generate_coprime_moduli(n: int, start: int = 2) -> List[int]:
    """Greedy coprime search.

    Walk the integers from ``start`` upward and keep each candidate that
    is coprime to everything already kept.  Terminates for any n because
    the next prime above all kept moduli is always accepted.

    From start=2 this yields the first n primes.  It is a heuristic, not
    an optimum: it never looks for the largest M at a given per-modulus
    bit-width.
    """
    if n < 1:
        raise InvalidConfiguration(f"Need at least one modulus, got n={n}")
    if start < 2:
        raise InvalidConfiguration(f"Search must start at 2 or above, got {start}")

    result: List[int] = []
    candidate = start
    while len(result) < n:
        if all(math.gcd(candidate, m) == 1 for m in result):
            result.append(candidate)
        candidate += 1
    return result


def default_moduli(n: int) -> ModulusSet:
    """Deterministic default ModulusSet of size n.

    Uses the literal table for n = 3 and n = 4, the greedy search otherwise.
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise InvalidConfiguration(f"Need at least one modulus, got n={n!r}")
    if n in DEFAULT_MODULI:
        return ModulusSet(DEFAULT_MODULI[n])
    return ModulusSet(tuple(generate_coprime_moduli(n)))


def prime_moduli(K: int, near_top: bool = True) -> ModulusSet:
    """ModulusSet of K distinct 31-bit primes (M ~ 2^(31K))."""
    if K < 1:
        raise InvalidConfiguration(f"Need at least one modulus, got K={K}")
    return ModulusSet(tuple(generate_primes(K, near_top=near_top)))
