#!/usr/bin/env python3
"""
Validation script for residue_rns.

Runs a sequence of checks:
1. Modulus sets (defaults, coprimality gate, prime sets)
2. Modular inverse
3. Encode / CRT decode roundtrip (incl. negatives and a wide prime set)
4. Componentwise arithmetic homomorphism
5. Batch (numpy) arithmetic against the scalar path

Every check is printed and appended to <output_dir>/checks.jsonl;
manifest.json records the config and environment.

Usage:
    python scripts/validate_rns.py
    python scripts/validate_rns.py --config configs/default.yaml
    python scripts/validate_rns.py --samples 1000 --output-dir runs/v2
"""

import argparse
import random
import sys
import time
import traceback
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from residue_rns import (
    InvalidConfiguration, NoInverseExists,
    construct, default_moduli, encode, inv_mod,
    RnsBatch, RnsConfig, load_config,
    RunLogger, create_manifest,
)


DEFAULT_CONFIG = str(
    Path(__file__).resolve().parent.parent / "configs" / "default.yaml"
)


def section(name: str):
    print(f"\n{'='*60}")
    print(f"  {name}")
    print(f"{'='*60}")


class Checker:
    """Prints checks and mirrors them into the run logger."""

    def __init__(self, logger: RunLogger):
        self.logger = logger
        self.section = ""
        self.results = []

    def start(self, name: str):
        self.section = name
        section(name)

    def check(self, name: str, passed: bool, detail: str = "") -> bool:
        status = "PASS" if passed else "FAIL"
        mark = "✓" if passed else "✗"
        print(f"  [{status}] {mark} {name}" + (f" -- {detail}" if detail else ""))
        self.logger.log_check(self.section, name, passed, detail)
        self.results.append(passed)
        return passed


def check_moduli(c: Checker, config: RnsConfig):
    c.start("1. Modulus Sets")
    ms = config.modulus_set()
    c.check("Configured modulus set", True,
            f"{ms.moduli}, M={ms.dynamic_range} ({ms.bit_length()} bits)")

    c.check("default_moduli(3)", default_moduli(3).moduli == (251, 253, 255))
    c.check("default_moduli(4)", default_moduli(4).moduli == (251, 253, 255, 256))
    c.check("default_moduli(6) generated",
            default_moduli(6).moduli == (2, 3, 5, 7, 11, 13))

    for bad in ([5, 5], [6, 9], [1, 7], []):
        try:
            construct(bad)
            c.check(f"construct({bad}) rejected", False, "no error raised")
        except InvalidConfiguration as e:
            c.check(f"construct({bad}) rejected", True, str(e))

    primes = config.prime_set()
    c.check(f"{len(primes)} prime moduli", len(set(primes.moduli)) == len(primes),
            f"M has {primes.bit_length()} bits")


def check_inverse(c: Checker, config: RnsConfig):
    c.start("2. Modular Inverse")
    c.check("inverse(3, 7) == 5", inv_mod(3, 7) == 5)
    c.check("inverse(-4, 7) == 5", inv_mod(-4, 7) == 5)

    try:
        inv_mod(0, 7)
        c.check("inverse(0, 7) fails", False, "no error raised")
    except NoInverseExists as e:
        c.check("inverse(0, 7) fails", True, str(e))

    rng = random.Random(config.seed)
    m = config.prime_set()[0]
    ok = True
    for _ in range(config.samples):
        a = rng.randint(1, m - 1)
        if (a * inv_mod(a, m)) % m != 1:
            ok = False
            print(f"    FAIL: a={a}, m={m}")
            break
    c.check(f"{config.samples} random inverses mod {m}", ok)


def check_roundtrip(c: Checker, config: RnsConfig):
    c.start("3. Encode / CRT Roundtrip")
    ms = config.modulus_set()
    M = ms.dynamic_range

    ok = True
    for x in [0, 1, 42, M - 1, M, M + 42, -1, -3, -M - 1]:
        t = encode(x, ms)
        if t.decode() != x % M:
            ok = False
            print(f"    FAIL: x={x}, got {t.decode()}")
    c.check("Edge values (incl. negatives, >= M)", ok)

    small = construct([3, 5])
    c.check("encode(-3) == encode(12) over {3, 5}",
            encode(-3, small) == encode(12, small) and encode(12, small).residues == (0, 2))

    wide = config.prime_set()
    rng = random.Random(config.seed + 1)
    ok = True
    t0 = time.time()
    for _ in range(config.samples):
        x = rng.randint(-wide.dynamic_range, 2 * wide.dynamic_range)
        t = encode(x, wide)
        y = t.decode_signed() if config.signed else t.decode()
        want = x % wide.dynamic_range
        if config.signed and want >= (wide.dynamic_range + 1) // 2:
            want -= wide.dynamic_range
        if y != want:
            ok = False
            print(f"    FAIL: x={x}")
            break
    dt = time.time() - t0
    c.check(f"{config.samples} wide-range roundtrips", ok,
            f"{wide.bit_length()}-bit M, {dt:.3f}s")
    c.logger.log_metrics({"check": "wide_roundtrip", "samples": config.samples,
                          "bits": wide.bit_length(), "wall_time_sec": dt})


def check_arithmetic(c: Checker, config: RnsConfig):
    c.start("4. Componentwise Arithmetic")
    ms = default_moduli(3)
    a, b = encode(5, ms), encode(7, ms)
    c.check("5 + 7 == 12", (a + b).decode() == 12)
    c.check("5 * 7 == 35", (a * b).decode() == 35)
    c.check("7 - 5 == 2", (b - a).decode() == 2)

    ms = config.modulus_set()
    M = ms.dynamic_range
    rng = random.Random(config.seed + 2)
    ok = True
    for _ in range(config.samples):
        x = rng.randint(-M, M)
        y = rng.randint(-M, M)
        ex, ey = encode(x, ms), encode(y, ms)
        if ((ex + ey).decode() != (x + y) % M
                or (ex - ey).decode() != (x - y) % M
                or (ex * ey).decode() != (x * y) % M):
            ok = False
            print(f"    FAIL: x={x}, y={y}")
            break
    c.check(f"{config.samples} random add/sub/mul homomorphisms", ok)


def check_batch(c: Checker, config: RnsConfig):
    c.start("5. Batch Arithmetic")
    primes = config.prime_set()
    batch = RnsBatch(primes)
    rng = np.random.default_rng(config.seed)
    xs = rng.integers(-(1 << 62), 1 << 62, size=config.samples, dtype=np.int64)
    ys = rng.integers(-(1 << 62), 1 << 62, size=config.samples, dtype=np.int64)

    t0 = time.time()
    a, b = batch.encode(xs), batch.encode(ys)
    prod = batch.decode(batch.mul(a, b))
    dt = time.time() - t0

    M = primes.dynamic_range
    want = [(int(x) * int(y)) % M for x, y in zip(xs, ys)]
    c.check(f"Batch mul of {config.samples} pairs", prod == want,
            f"{dt:.3f}s")
    c.logger.log_metrics({"check": "batch_mul", "samples": config.samples,
                          "moduli": len(primes), "wall_time_sec": dt})

    scalar = [encode(int(x), primes) for x in xs[:10]]
    c.check("Batch encode matches scalar encode",
            batch.to_tuples(a[:10]) == scalar)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Validate residue_rns")
    parser.add_argument("--config", default=None,
                        help=f"YAML config (default: {DEFAULT_CONFIG} if present)")
    parser.add_argument("--samples", type=int, default=None)
    parser.add_argument("--output-dir", default=None)
    args = parser.parse_args(argv)

    config_path = args.config or (DEFAULT_CONFIG if Path(DEFAULT_CONFIG).exists() else None)
    config = load_config(config_path) if config_path else RnsConfig()
    if args.samples is not None:
        config.samples = args.samples
    if args.output_dir is not None:
        config.output_dir = args.output_dir

    print("residue_rns Validation Suite")
    print(f"Python: {sys.version}")
    print(f"Config: {config_path or '<defaults>'}")

    out = Path(config.output_dir)
    run_id = time.strftime("validate_%Y%m%d_%H%M%S")
    create_manifest(run_id, config.to_dict()).save(out / "manifest.json")

    with RunLogger(out) as logger:
        c = Checker(logger)
        for step in (check_moduli, check_inverse, check_roundtrip,
                     check_arithmetic, check_batch):
            try:
                step(c, config)
            except Exception as e:
                c.check(step.__name__, False, str(e))
                traceback.print_exc()

        section("Summary")
        n_pass = sum(1 for r in c.results if r)
        n_fail = len(c.results) - n_pass
        print(f"\n  {n_pass}/{len(c.results)} checks passed, {n_fail} failed")
        print(f"  Logs: {out}")

    return 0 if n_fail == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
