#!/usr/bin/env python3
"""
Compare truncated Poisson tables against the exact PMF.

The exact probabilities are computed in log space
(log p_k = k*log(lambda) - lambda - lgamma(k+1)), which stays finite for any rate.
Reports, per rate, the table length, the mass folded into the mode, and the
largest absolute CDF difference.

Usage:
  python scripts/compare_poisson_table.py [--lambdas 1 10 50 299 1000]
"""

from __future__ import annotations

import argparse
import math

from sizegen.statistics.poisson import build_poisson_table


def exact_pmf(lambda_: int, k: int) -> float:
    return math.exp(k * math.log(lambda_) - lambda_ - math.lgamma(k + 1))


def compare(lambda_: int) -> dict[str, float]:
    table = build_poisson_table(lambda_)
    exact_cumulative = 0.0
    max_cdf_error = 0.0
    for slot in table.slots:
        exact_cumulative += exact_pmf(lambda_, slot.k)
        max_cdf_error = max(max_cdf_error, abs(slot.cumulative - exact_cumulative))
    folded = table.slots[lambda_].probability - exact_pmf(lambda_, lambda_)
    return {
        "slots": len(table.slots),
        "start": table.start,
        "folded": folded,
        "max_cdf_error": max_cdf_error,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Compare Poisson tables with the exact PMF")
    parser.add_argument("--lambdas", type=int, nargs="+", default=[1, 2, 5, 10, 50, 100, 299])
    args = parser.parse_args()

    print(f"{'lambda':>8} {'slots':>6} {'start':>6} {'folded':>12} {'max |dCDF|':>12}")
    for lambda_ in args.lambdas:
        if lambda_ <= 0:
            continue
        r = compare(lambda_)
        print(
            f"{lambda_:>8} {r['slots']:>6} {r['start']:>6} "
            f"{r['folded']:>12.3e} {r['max_cdf_error']:>12.3e}"
        )


if __name__ == "__main__":
    main()
