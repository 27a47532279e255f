"""
Run configuration for residue_rns scripts.

Configs are YAML files whose top-level keys map onto RnsConfig fields:

    n_moduli: 3
    moduli: [251, 253, 255]   # optional; overrides n_moduli
    signed: false
    prime_count: 16
    samples: 200
    seed: 42
    output_dir: runs/validate
"""

from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import warnings

import yaml

from .errors import InvalidConfiguration
from .moduli import ModulusSet, construct, default_moduli, prime_moduli


@dataclass
class RnsConfig:
    """Configuration for a validation / demo run."""
    n_moduli: int = 3                   # Size of the default modulus set
    moduli: Optional[List[int]] = None  # Explicit moduli (overrides n_moduli)
    signed: bool = False                # Decode into [-M/2, M/2)
    prime_count: int = 16               # 31-bit primes for the large-range checks
    samples: int = 200                  # Random values per property check
    seed: int = 42                      # RNG seed for sampled values
    output_dir: str = "runs/validate"   # manifest.json + JSONL logs

    def modulus_set(self) -> ModulusSet:
        """ModulusSet described by this config."""
        if self.moduli is not None:
            return construct(self.moduli)
        return default_moduli(self.n_moduli)

    def prime_set(self) -> ModulusSet:
        return prime_moduli(self.prime_count)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def config_from_dict(raw: Optional[Dict[str, Any]]) -> RnsConfig:
    """Build an RnsConfig from a plain dict, warning on unknown keys."""
    raw = dict(raw or {})
    known = {f.name for f in fields(RnsConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        warnings.warn(f"Ignoring unknown config keys: {unknown}", UserWarning)
    kwargs = {k: v for k, v in raw.items() if k in known}
    if kwargs.get("moduli") is not None:
        if not isinstance(kwargs["moduli"], (list, tuple)):
            raise InvalidConfiguration(
                f"'moduli' must be a list of integers, got {kwargs['moduli']!r}"
            )
        kwargs["moduli"] = list(kwargs["moduli"])
    return RnsConfig(**kwargs)


def load_config(config_path: Union[str, Path]) -> RnsConfig:
    """Load an RnsConfig from a YAML file."""
    with open(config_path, 'r') as f:
        raw = yaml.safe_load(f)
    if raw is not None and not isinstance(raw, dict):
        raise InvalidConfiguration(
            f"{config_path}: expected a mapping at top level, got {type(raw).__name__}"
        )
    return config_from_dict(raw)
