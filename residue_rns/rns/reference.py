"""
Pure-Python RNS reference implementations.

These are the ground truth for every higher-level type in the package
(ModulusSet, ResidueTuple, RnsBatch) and for correctness testing.

All operations are exact (Python int arithmetic, no floating-point,
no fixed-width accumulators).
"""

from typing import List, Optional, Sequence, Tuple
import math

from ..errors import InvalidConfiguration, InvalidResidues, NoInverseExists


# ---------------------------------------------------------------------------
# Prime generation
# ---------------------------------------------------------------------------

def is_prime(n: int) -> bool:
    """Trial division by 6k +/- 1; fine for 31-bit candidates
    (sqrt ~ 46340 iterations max)."""
    if n < 2:
        return False
    if n == 2 or n == 3:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def generate_primes(K: int, near_top: bool = True) -> List[int]:
    """Generate K distinct 31-bit primes.

    Args:
        K: Number of primes to generate.
        near_top: If True, pick the largest primes below 2^31 (maximises
                  per-modulus capacity).  If False, use a deterministic
                  LCG-based selection spread over [2^30, 2^31).

    Returns:
        Sorted list of K primes, each in [2^30, 2^31).
    """
    PRIME_MAX = (1 << 31) - 1
    PRIME_MIN = 1 << 30

    if K < 0:
        raise InvalidConfiguration(f"Prime count must be non-negative, got {K}")

    if near_top:
        primes: List[int] = []
        candidate = PRIME_MAX
        while len(primes) < K and candidate >= PRIME_MIN:
            if is_prime(candidate):
                primes.append(candidate)
            candidate -= 2  # only odd candidates
        if len(primes) < K:
            raise RuntimeError(
                f"Could not find {K} primes in [{PRIME_MIN}, {PRIME_MAX}]"
            )
        return sorted(primes)

    primes = []
    state = 12345
    while len(primes) < K:
        state = (state * 6364136223846793005 + 1442695040888963407) & ((1 << 64) - 1)
        candidate = (state >> 33) | PRIME_MIN | 1
        if is_prime(candidate) and candidate not in primes:
            primes.append(candidate)
    return sorted(primes)


# ---------------------------------------------------------------------------
# Extended Euclid / modular inverse
# ---------------------------------------------------------------------------

def xgcd(a: int, b: int) -> Tuple[int, int, int]:
    """Extended Euclidean algorithm, iterative.

    Returns (g, x, y) with a*x + b*y == g == gcd(a, b) and g >= 0.
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y
    if old_r < 0:
        old_r, old_x, old_y = -old_r, -old_x, -old_y
    return old_r, old_x, old_y


def inv_mod(a: int, m: int) -> int:
    """Modular inverse a^{-1} mod m via extended Euclid.

    ``a`` may be negative or >= m; it is reduced first.  ``m`` need not be
    prime.

    Raises:
        InvalidConfiguration: if m <= 1.
        NoInverseExists: if gcd(a, m) != 1 (this includes a == 0).
    """
    a, m = int(a), int(m)
    if m <= 1:
        raise InvalidConfiguration(f"Modulus must be > 1, got {m}")
    a_red = a % m
    g, x, _ = xgcd(a_red, m)
    if g != 1:
        raise NoInverseExists(a, m, g)
    return x % m


# ---------------------------------------------------------------------------
# Scalar modular arithmetic
# ---------------------------------------------------------------------------

def add_mod(a: int, b: int, p: int) -> int:
    """(a + b) mod p.  Assumes 0 <= a, b < p."""
    s = a + b
    return s - p if s >= p else s


def sub_mod(a: int, b: int, p: int) -> int:
    """(a - b) mod p.  Assumes 0 <= a, b < p."""
    return (a - b) % p


def mul_mod(a: int, b: int, p: int) -> int:
    """(a * b) mod p."""
    return (a * b) % p


def neg_mod(a: int, p: int) -> int:
    """(-a) mod p."""
    return 0 if a == 0 else p - a


def pow_mod(base: int, exp: int, p: int) -> int:
    """base^exp mod p via Python built-in three-arg pow."""
    return pow(base, exp, p)


# ---------------------------------------------------------------------------
# RNS encode / decode helpers
# ---------------------------------------------------------------------------

def dynamic_range(moduli: Sequence[int]) -> int:
    """Product of all moduli."""
    M = 1
    for m in moduli:
        M *= int(m)
    return M


def rns_encode(x: int, moduli: Sequence[int]) -> List[int]:
    """Encode an integer (any sign) into residues in [0, m_i).

    Python's % already returns a non-negative remainder for m > 0.
    """
    x = int(x)
    return [x % m for m in map(int, moduli)]


def _check_lengths(residues: Sequence[int], moduli: Sequence[int]) -> None:
    if len(residues) != len(moduli):
        raise InvalidResidues(
            f"Got {len(residues)} residues for {len(moduli)} moduli"
        )
    if len(moduli) == 0:
        raise InvalidConfiguration("At least one modulus is required")


def crt_reconstruct(residues: Sequence[int], moduli: Sequence[int]) -> int:
    """Reconstruct x in [0, M) from residues via the CRT sum form.

        x = sum_i r_i * M_i * (M_i^{-1} mod m_i)   (mod M),  M_i = M / m_i

    Each product is reduced mod M straight after the multiplication, so
    the accumulator never holds more than (M - 1)^2 + (M - 1).  Residues
    and moduli are coerced with int() so numpy fixed-width scalars never
    take part in the accumulation.
    """
    _check_lengths(residues, moduli)
    moduli = [int(m) for m in moduli]
    M = dynamic_range(moduli)

    acc = 0
    for r_i, m_i in zip(residues, moduli):
        Mi = M // m_i
        Mi_inv = inv_mod(Mi % m_i, m_i)
        term = (int(r_i) % m_i) * Mi % M
        acc = (acc + term * Mi_inv) % M
    return acc


def crt_reconstruct_garner(residues: Sequence[int], moduli: Sequence[int]) -> int:
    """Reconstruct x in [0, M) with iterative (Garner-style) CRT.

    Same contract as crt_reconstruct; adds one modulus at a time.
    """
    _check_lengths(residues, moduli)
    x = int(residues[0]) % int(moduli[0])
    M = int(moduli[0])

    for i in range(1, len(residues)):
        p_i = int(moduli[i])
        a_i = int(residues[i])

        M_inv = inv_mod(M % p_i, p_i)
        diff = (a_i - x) % p_i
        t = (diff * M_inv) % p_i

        x = x + M * t
        M = M * p_i

    return x


def crt_reconstruct_signed(residues: Sequence[int], moduli: Sequence[int]) -> int:
    """Reconstruct signed integer, assuming result in [-M/2, M/2)."""
    x = crt_reconstruct(residues, moduli)
    M = dynamic_range(moduli)
    if x >= (M + 1) // 2:
        x -= M
    return x


def rns_add(a_res: Sequence[int], b_res: Sequence[int], moduli: Sequence[int]) -> List[int]:
    """Element-wise (a + b) mod m for each modulus."""
    return [add_mod(a, b, m) for a, b, m in zip(a_res, b_res, moduli)]


def rns_mul(a_res: Sequence[int], b_res: Sequence[int], moduli: Sequence[int]) -> List[int]:
    """Element-wise (a * b) mod m for each modulus."""
    return [mul_mod(a, b, m) for a, b, m in zip(a_res, b_res, moduli)]


def rns_sub(a_res: Sequence[int], b_res: Sequence[int], moduli: Sequence[int]) -> List[int]:
    """Element-wise (a - b) mod m for each modulus."""
    return [sub_mod(a, b, m) for a, b, m in zip(a_res, b_res, moduli)]


def rns_neg(a_res: Sequence[int], moduli: Sequence[int]) -> List[int]:
    """Element-wise (-a) mod m for each modulus."""
    return [neg_mod(a, m) for a, m in zip(a_res, moduli)]


def rns_pow(a_res: Sequence[int], exp: int, moduli: Sequence[int]) -> List[int]:
    """Element-wise a^exp mod m for each modulus (exp >= 0)."""
    return [pow_mod(a, exp, m) for a, m in zip(a_res, moduli)]


def common_factor_pair(moduli: Sequence[int]) -> Optional[Tuple[int, int, int]]:
    """First pair (m_i, m_j, gcd) with gcd > 1, or None if pairwise coprime."""
    for i in range(len(moduli)):
        for j in range(i + 1, len(moduli)):
            g = math.gcd(int(moduli[i]), int(moduli[j]))
            if g != 1:
                return moduli[i], moduli[j], g
    return None


def pairwise_coprime(moduli: Sequence[int]) -> bool:
    """True if every pair of moduli has gcd 1."""
    return common_factor_pair(moduli) is None
