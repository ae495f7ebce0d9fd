#!/usr/bin/env python3
"""
Cross-validate and benchmark the A005237 counting algorithms.

Counts n in [1, K] with d(n) == d(n+1) with every algorithm, after checking
that they agree on every K up to validation_max_k.

Usage:
    python run_all.py
    python run_all.py --K 1e5 --algorithms naive block
    python run_all.py --config config/custom.yaml --sweep
"""

import argparse
import math
import sys
import time
from pathlib import Path

from divisor_pairs.benchmark import results_agree, run_benchmark, run_sweep
from divisor_pairs.config import load_config
from divisor_pairs.errors import ConfigError
from divisor_pairs.validation import (
    check_known_values,
    cross_validate,
    verify_divisor_counts,
)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Count n <= K with d(n) = d(n+1)')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to config file (default: built-in defaults)')
    parser.add_argument('--K', type=float, default=None, help='Bound K')
    parser.add_argument('--algorithms', nargs='+', default=None,
                        help='Algorithms to run, in order')
    parser.add_argument('--workers', type=int, default=None,
                        help='Worker processes for the parallel sieve')
    parser.add_argument('--skip-validation', action='store_true',
                        help='Skip the cross-validation step')
    parser.add_argument('--sweep', action='store_true',
                        help='Also run the scaling sweep and plot it')
    parser.add_argument('--output-dir', type=str, default='data/results',
                        help='Where the sweep CSV and figure are written')
    return parser.parse_args(argv)


def bound_from_arg(value: float) -> int:
    """Turn the --K float (so 1e6 works) into an int, rejecting fractions and nan."""
    if not math.isfinite(value) or not value.is_integer():
        raise ConfigError(f"--K must be a whole number, got {value}")
    return int(value)


def validate(config) -> bool:
    """Dense cross-check, known values and divisor arrays. Returns True on success."""
    max_k = config['validation_max_k']
    names = config['algorithms']

    print(f"Cross-validating {', '.join(names)} for K in [1, {max_k:,}]...")
    t0 = time.time()
    mismatches = cross_validate(range(1, max_k + 1), names)
    print(f"  Completed in {time.time() - t0:.1f}s")

    if not mismatches.empty:
        print(f"  ✗ {len(mismatches)} bounds disagree:")
        print(mismatches.head(10).to_string(index=False))
        return False
    print("  ✓ All algorithms agree")

    known = check_known_values(names, max_k=max_k)
    if not known.empty:
        print("  ✗ Known values not reproduced:")
        print(known.to_string(index=False))
        return False
    print("  ✓ Known values reproduced")

    bad_counts = verify_divisor_counts(max_k)
    if not bad_counts.empty:
        print(f"  ✗ {len(bad_counts)} divisor counts differ from trial division:")
        print(bad_counts.head(10).to_string(index=False))
        return False
    print(f"  ✓ Divisor counts match trial division up to {max_k:,}")
    return True


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        overrides = {
            'K': bound_from_arg(args.K) if args.K is not None else None,
            'algorithms': args.algorithms,
            'num_workers': args.workers,
        }
        config = load_config(args.config, overrides)
    except ConfigError as e:
        print(f"Config error: {e}")
        return 1

    K = config['K']

    print("=" * 60)
    print("A005237 - n with d(n) = d(n+1)")
    print("=" * 60)
    print(f"\nConfiguration:")
    print(f"  K = {K:,}")
    print(f"  algorithms = {config['algorithms']}")
    print(f"  validation_max_k = {config['validation_max_k']:,}")
    print(f"  num_workers = {config['num_workers']}")
    print()

    ok = True
    total_start = time.time()

    if not args.skip_validation:
        print("-" * 60)
        print("1. Validation")
        print("-" * 60)
        ok = validate(config) and ok
        print()

    print("-" * 60)
    print(f"2. Benchmark at K = {K:,}")
    print("-" * 60)
    names = [name for name in config['algorithms']
             if not (name in config['slow_algorithms'] and K > config['naive_max_k'])]
    skipped = [name for name in config['algorithms'] if name not in names]
    if skipped:
        print(f"  Skipping {', '.join(skipped)} (K > {config['naive_max_k']:,})")

    df = run_benchmark(K, names, config['num_workers'])
    if df['error'].notna().any():
        ok = False
    if not results_agree(df):
        print("  ✗ Algorithms returned different counts!")
        ok = False
    print()

    if args.sweep:
        from divisor_pairs.plotting import plot_runtime_scaling

        print("-" * 60)
        print("3. Scaling sweep")
        print("-" * 60)
        output_dir = Path(args.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        sweep = run_sweep(config['sweep_grid'], config['algorithms'],
                          config['slow_algorithms'], config['naive_max_k'],
                          config['num_workers'])
        if sweep['error'].notna().any() or not results_agree(sweep):
            ok = False

        sweep.to_csv(output_dir / 'benchmark_sweep.csv', index=False)
        plot_runtime_scaling(sweep, output_dir / 'runtime_scaling.png')
        print(f"\n  Saved {output_dir / 'benchmark_sweep.csv'}")
        print(f"  Saved {output_dir / 'runtime_scaling.png'}")
        print()

    print("=" * 60)
    print("COMPLETE" if ok else "FAILED")
    print("=" * 60)
    print(f"\nTotal runtime: {time.time() - total_start:.1f}s")
    print()
    print(df[['algorithm', 'count', 'elapsed_ms']].to_string(index=False))

    return 0 if ok else 1


if __name__ == '__main__':
    sys.exit(main())
