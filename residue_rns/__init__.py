"""
residue_rns: Residue Number System arithmetic.

  n -> (n mod m_1, ..., n mod m_N)     m_i pairwise coprime, M = prod(m_i)

Addition, subtraction and multiplication run independently on every
residue (no carries); integers come back out through the Chinese
Remainder Theorem, exactly, in [0, M).  Magnitude comparison and division
are not supported.
"""

__version__ = "0.1.0"

from .errors import (
    RnsError, InvalidConfiguration, NoInverseExists, ModuliMismatch,
    InvalidResidues,
)
from .rns.reference import inv_mod, xgcd, crt_reconstruct, crt_reconstruct_signed
from .moduli import (
    ModulusSet, DEFAULT_MODULI,
    construct, default_moduli, generate_coprime_moduli, prime_moduli,
)
from .residue import (
    ResidueTuple,
    encode, decode, add, sub, mul,
    rns3, rns4,
)
from .rns.batch import RnsBatch
from .config import RnsConfig, load_config, config_from_dict
from .logging import RunLogger, RunManifest, create_manifest

inverse = inv_mod

__all__ = [
    "RnsError", "InvalidConfiguration", "NoInverseExists", "ModuliMismatch",
    "InvalidResidues",
    "inv_mod", "inverse", "xgcd", "crt_reconstruct", "crt_reconstruct_signed",
    "ModulusSet", "DEFAULT_MODULI",
    "construct", "default_moduli", "generate_coprime_moduli", "prime_moduli",
    "ResidueTuple", "encode", "decode", "add", "sub", "mul", "rns3", "rns4",
    "RnsBatch",
    "RnsConfig", "load_config", "config_from_dict",
    "RunLogger", "RunManifest", "create_manifest",
]
