#!/usr/bin/env python3
"""
Find (m, d_c) pairs that admit a regular LDPC code for a given block size
and bit degree.

A shape is feasible when n * d_v == m * d_c, d_v <= m and d_c <= n.
With --sample, each feasible shape is also drawn once to confirm that the
sampler finds a simple graph within its budget.

Example:
  python examples/find_valid_sizes.py -n 60 --bit-degree 3
  python examples/find_valid_sizes.py -n 24 --bit-degree 4 --sample --seed 1
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from ldpctools import LDPCError, RegularCodeConfig, TannerGraphSampler


def main() -> int:
    parser = argparse.ArgumentParser(description="List feasible regular LDPC shapes.")
    parser.add_argument("-n", "--block-size", type=int, required=True, help="Number of bits")
    parser.add_argument("--bit-degree", type=int, required=True, help="Checks per bit")
    parser.add_argument("--max-check-degree", type=int, default=0,
                        help="Only report shapes with d_c <= this (0 = no limit)")
    parser.add_argument("--sample", action="store_true", help="Draw one graph per shape")
    parser.add_argument("--seed", type=int, default=None, help="Seed used with --sample")
    args = parser.parse_args()

    n, d_v = args.block_size, args.bit_degree
    if n <= 0 or d_v <= 0:
        raise SystemExit("--block-size and --bit-degree must be positive")

    rng = np.random.default_rng(args.seed)
    edges = n * d_v
    matches = 0
    for d_c in range(1, n + 1):
        if args.max_check_degree and d_c > args.max_check_degree:
            break
        if edges % d_c:
            continue
        config = RegularCodeConfig(n, edges // d_c, d_v, d_c)
        try:
            config.validate()
        except LDPCError:
            continue

        status = ""
        if args.sample:
            try:
                TannerGraphSampler(config).sample(rng)
                status = "  sampled"
            except LDPCError as e:
                status = f"  FAILED ({e})"

        matches += 1
        rate = 1.0 - config.number_of_checks / n
        print(f"n={n:>5} m={config.number_of_checks:>5}  d_v={d_v:>3} d_c={d_c:>4}  "
              f"design rate={rate:.3f}{status}")

    if not matches:
        print("No feasible shapes.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
