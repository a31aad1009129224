#!/usr/bin/env python3
"""
Plot saved detection results.

Reads one or many CSV files written by run_simulation.py --out and plots
the detected and undetected error rates against the channel flip
probability, one curve per (n, m) code shape.

Examples:
  python examples/plot_results.py --csv results/run.csv
  python examples/plot_results.py --all --out-dir results
"""

from __future__ import annotations

import argparse
import csv
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Tuple

import matplotlib.pyplot as plt


def load_csv(path: Path) -> List[Dict[str, str]]:
    with path.open("r", newline="", encoding="utf-8") as f:
        r = csv.DictReader(f)
        return list(r)


def wilson_ci_95(hits: int, shots: int) -> Tuple[float, float]:
    """
    Wilson score interval for a binomial proportion at ~95% confidence.
    Returns (lo, hi). If shots==0, returns (0,0).
    """
    if shots <= 0:
        return 0.0, 0.0
    z = 1.959963984540054  # ~95%
    n = float(shots)
    phat = float(hits) / n
    denom = 1.0 + (z * z) / n
    center = (phat + (z * z) / (2.0 * n)) / denom
    half = (z / denom) * ((phat * (1.0 - phat) / n + (z * z) / (4.0 * n * n)) ** 0.5)
    lo = max(0.0, center - half)
    hi = min(1.0, center + half)
    return lo, hi


def group_by_shape(rows: List[Dict[str, str]]) -> Dict[Tuple[int, int], List[Tuple[float, int, int, int]]]:
    """
    Returns: {(n, m): [(p, detected, undetected, shots), ... sorted by p]}
    For repeated p, the row with the largest shot count wins.
    """
    by = defaultdict(dict)
    for r in rows:
        key = (int(r["n"]), int(r["m"]))
        p = float(r["p"])
        point = (p, int(r["detected"]), int(r["undetected"]), int(r["shots"]))
        cur = by[key].get(p)
        if cur is None or point[3] > cur[3]:
            by[key][p] = point
    return {key: sorted(pts.values()) for key, pts in by.items()}


def _errorbar(points, column, label, fmt):
    xs = [pt[0] for pt in points]
    ys, lo_err, hi_err = [], [], []
    for pt in points:
        shots = pt[3]
        rate = pt[column] / shots if shots else 0.0
        lo, hi = wilson_ci_95(pt[column], shots)
        ys.append(rate)
        lo_err.append(max(0.0, rate - lo))
        hi_err.append(max(0.0, hi - rate))
    plt.errorbar(xs, ys, yerr=[lo_err, hi_err], fmt=fmt, linewidth=1.5,
                 markersize=3, capsize=2, label=label)


def main() -> int:
    parser = argparse.ArgumentParser(description="Plot ldpctools detection results from CSV.")
    parser.add_argument("--csv", type=str, default="", help="Path to a specific results CSV")
    parser.add_argument("--all", action="store_true", help="Plot using ALL *.csv files in the out-dir")
    parser.add_argument("--out-dir", type=str, default="results", help="Output directory for plots (default: results)")
    parser.add_argument("--title", type=str, default="", help="Optional title")
    parser.add_argument("--dpi", type=int, default=200, help="Output DPI for PNG (default: 200)")
    parser.add_argument("--format", type=str, default="png", choices=["png", "pdf", "svg"],
                        help="Output format (default: png)")
    args = parser.parse_args()

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    if args.csv:
        csv_paths = [Path(args.csv)]
    else:
        csv_paths = sorted(out_dir.glob("*.csv"), key=lambda p: p.stat().st_mtime, reverse=True)
        if not csv_paths:
            raise SystemExit(f"No CSV found in {out_dir}. Run examples/run_simulation.py --out first.")
        if not args.all:
            csv_paths = csv_paths[:1]

    rows: List[Dict[str, str]] = []
    for pth in csv_paths:
        rows.extend(load_csv(pth))
    if not rows:
        raise SystemExit("No rows found in selected CSV file(s).")

    plt.figure(figsize=(8, 5))
    for (n, m), pts in sorted(group_by_shape(rows).items()):
        _errorbar(pts, 1, f"detected (n={n}, m={m})", "-o")
        _errorbar(pts, 2, f"undetected (n={n}, m={m})", "--s")

    plt.title(args.title.strip() or "Syndrome detection vs flip probability")
    plt.xlabel("Flip probability p")
    plt.ylabel("Fraction of shots")
    plt.xscale("log")
    plt.grid(True, alpha=0.3)
    plt.legend(fontsize=8)
    plt.tight_layout()

    out = out_dir / f"plot_detection_vs_p.{args.format}"
    plt.savefig(out, dpi=args.dpi if args.format == "png" else None, format=args.format)
    plt.close()
    print(f"Saved: {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
