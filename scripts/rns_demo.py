#!/usr/bin/env python3
"""
Residue Number System demo: parallel arithmetic without carry propagation.

Usage:
    python scripts/rns_demo.py
    python scripts/rns_demo.py 12345 67890 --moduli 251,253,255,256
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from residue_rns import construct, default_moduli, encode


def _parse_moduli(s: str):
    return construct([int(tok) for tok in s.split(",") if tok.strip()])


def main(argv=None):
    parser = argparse.ArgumentParser(description="RNS arithmetic demo")
    parser.add_argument("a", type=int, nargs="?", default=12345)
    parser.add_argument("b", type=int, nargs="?", default=67890)
    parser.add_argument("--moduli", type=_parse_moduli, default=None,
                        help="Comma-separated pairwise-coprime moduli "
                             "(default: 251,253,255)")
    args = parser.parse_args(argv)

    ms = args.moduli or default_moduli(3)
    print("\n=== Residue Number System ===")
    print("Parallel arithmetic without carry propagation\n")
    print(f"Moduli: {ms.moduli}  (M = {ms.dynamic_range})\n")

    rns_a = encode(args.a, ms)
    rns_b = encode(args.b, ms)
    print(f"{args.a} -> {rns_a}")
    print(f"{args.b} -> {rns_b}\n")

    total = rns_a + rns_b
    print(f"Sum:        {total} = {total.decode()}")
    product = rns_a * rns_b
    print(f"Product:    {product} = {product.decode()}")
    diff = rns_a - rns_b
    print(f"Difference: {diff} = {diff.decode()} (signed: {diff.decode_signed()})")

    if abs(args.a * args.b) >= ms.dynamic_range:
        print(f"\nNote: results are exact only mod M = {ms.dynamic_range}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
