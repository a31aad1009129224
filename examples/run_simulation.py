#!/usr/bin/env python3
"""
Example script: Sample a random regular LDPC code and simulate error detection

This script demonstrates how to use ldpctools to sample a code, draw
binary symmetric channel errors for it and measure how often the parity
checks detect them.

Examples:
  python examples/run_simulation.py
  python examples/run_simulation.py -n 96 -m 48 --bit-degree 3 --check-degree 6 -s 20000
  python examples/run_simulation.py --rates 0.01,0.05,0.1 --out results/run.csv --edges results/code.txt
"""

import argparse
import csv
import logging
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from ldpctools import LDPCError, LinearCode, SyndromeSimulator


def _parse_rates_csv(text: str):
    """
    Parse a comma-separated list of floats, e.g. "0.1,0.12,0.2".
    """
    parts = [p.strip() for p in text.split(",") if p.strip()]
    return [float(p) for p in parts]


def main():
    """Sample a code and run the detection experiment."""
    parser = argparse.ArgumentParser(
        description="Sample a random regular LDPC code and simulate error detection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-n", "--block-size", type=int, default=40, help="Number of bits (default: 40)")
    parser.add_argument("-m", "--checks", type=int, default=20, help="Number of checks (default: 20)")
    parser.add_argument("--bit-degree", type=int, default=3, help="Checks per bit (default: 3)")
    parser.add_argument("--check-degree", type=int, default=6, help="Bits per check (default: 6)")
    parser.add_argument("-s", "--shots", type=int, default=5000,
                        help="Total number of shots per flip probability (default: 5000)")
    parser.add_argument("--rates", type=_parse_rates_csv, default=None,
                        help="Comma-separated flip probabilities, e.g. --rates 0.01,0.05,0.1")
    parser.add_argument("--seed", type=int, default=None, help="Seed for code sampling and simulation")
    parser.add_argument("--cores", type=int, default=None, help="Worker processes (default: all but one)")
    parser.add_argument("--out", type=str, default="", help="Optional CSV file for the results")
    parser.add_argument("--edges", type=str, default="", help="Optional file for the sampled edge list")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show sampler debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    rng = np.random.default_rng(args.seed)
    try:
        code = (LinearCode.random_regular_code()
                .block_size(args.block_size)
                .number_of_checks(args.checks)
                .bit_degree(args.bit_degree)
                .check_degree(args.check_degree)
                .sample_with(rng))
    except LDPCError as e:
        raise SystemExit(f"Could not sample code: {e}")

    print(f"Code: n={code.block_size()} m={code.number_of_checks()} "
          f"edges={code.parity_check_matrix.number_of_edges} k={code.dimension()}")

    if args.edges:
        path = Path(args.edges)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(code.parity_check_matrix.to_edge_list(), encoding="utf-8")
        print(f"Saved edge list: {path} (load with block_size={code.block_size()}, "
              f"number_of_checks={code.number_of_checks()})")

    rates = args.rates if args.rates is not None else [0.01, 0.02, 0.05, 0.1, 0.2]
    simulator = SyndromeSimulator(code, num_cores=args.cores, seed=args.seed)
    try:
        results = simulator.run_experiment(rates, total_shots=args.shots, verbose=True)
    except LDPCError as e:
        raise SystemExit(str(e))

    if args.out:
        path = Path(args.out)
        path.parent.mkdir(parents=True, exist_ok=True)
        fields = ["n", "m", "p", "shots", "detected", "undetected",
                  "detection_rate", "undetected_rate", "flip_fraction", "seconds"]
        with path.open("w", newline="", encoding="utf-8") as f:
            w = csv.DictWriter(f, fieldnames=fields)
            w.writeheader()
            for p, r in results.items():
                w.writerow({"n": code.block_size(), "m": code.number_of_checks(), "p": p, **r})
        print(f"Saved: {path}")

    return results


if __name__ == "__main__":
    main()
