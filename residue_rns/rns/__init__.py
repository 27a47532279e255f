"""
Scalar and vector RNS primitives.

reference: pure-Python modular arithmetic, extended Euclid, CRT
           (always importable, no numpy needed).
batch:     numpy (B, N) residue arrays; import from residue_rns.rns.batch.
"""

from .reference import (
    is_prime, generate_primes,
    xgcd, inv_mod,
    add_mod, sub_mod, mul_mod, neg_mod, pow_mod,
    dynamic_range, pairwise_coprime, common_factor_pair,
    rns_encode, rns_add, rns_sub, rns_mul, rns_neg, rns_pow,
    crt_reconstruct, crt_reconstruct_garner, crt_reconstruct_signed,
)

__all__ = [
    "is_prime", "generate_primes",
    "xgcd", "inv_mod",
    "add_mod", "sub_mod", "mul_mod", "neg_mod", "pow_mod",
    "dynamic_range", "pairwise_coprime", "common_factor_pair",
    "rns_encode", "rns_add", "rns_sub", "rns_mul", "rns_neg", "rns_pow",
    "crt_reconstruct", "crt_reconstruct_garner", "crt_reconstruct_signed",
]
