#!/usr/bin/env python3
"""Smoke test for simulation summaries.

Builds synthetic fixed-length and variable-length records, summarizes
them alone and in comparison, and writes every chart as PNG.

Usage:
    python scripts/smoke_demo.py [--out DIR] [--no-plots]

Exit codes:
    0: All checks passed
    1: Some checks failed
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from cdcat import (  # noqa: E402
    MULTIPLE_RECORDS,
    ComparisonSummary,
    ExamineeTrace,
    FitControl,
    SimulationResult,
    SingleSummary,
    Specifications,
    summarize,
)

# Constants
N_EXAMINEES = 200
N_ATTRIBUTES = 4
N_ITEMS = 60
MAX_ITEMS = 12
MIN_ITEMS = 4
DEFAULT_OUT_DIR = PROJECT_ROOT / "artifacts" / "smoke"

logger = logging.getLogger("smoke_demo")


def simulate(
    reference: np.ndarray,
    model: str,
    fixed_length: bool,
    max_iterations: int | None,
    seed: int,
) -> SimulationResult:
    """Synthetic record whose estimates converge to the reference."""
    rng = np.random.default_rng(seed)
    traces = []
    for truth in reference:
        length = MAX_ITEMS if fixed_length else int(rng.integers(MIN_ITEMS, MAX_ITEMS + 1))
        # Low-index items are favored, as with a real item selection rule
        weights = 1.0 / np.arange(1, N_ITEMS + 1)
        items = rng.choice(N_ITEMS, size=length, replace=False, p=weights / weights.sum())
        estimates = np.empty((length, N_ATTRIBUTES), dtype=int)
        for j in range(length):
            correct = rng.random(N_ATTRIBUTES) < 0.5 + 0.5 * (j + 1) / MAX_ITEMS
            estimates[j] = np.where(correct, truth, 1 - truth)
        traces.append(ExamineeTrace(items=items, estimates=estimates))

    return SimulationResult(
        traces=traces,
        n_items=N_ITEMS,
        specifications=Specifications(
            fixed_length=fixed_length,
            max_items=MAX_ITEMS,
            model=model,
            fit=FitControl(max_iterations=max_iterations),
        ),
    )


def save_figures(figures: dict, out_dir: Path) -> int:
    """Write every non-empty figure as PNG and return how many were written."""
    out_dir.mkdir(parents=True, exist_ok=True)
    written = 0
    for name, fig in figures.items():
        if fig is None:
            continue
        fig.savefig(out_dir / f"{name}.png", dpi=100, bbox_inches="tight")
        written += 1
    return written


def check_single(reference: np.ndarray, produce_plots: bool, out_dir: Path) -> bool:
    """Check a single-record summary."""
    record = simulate(reference, "GDINA", True, 100, seed=1)
    result = summarize(record, reference, produce_plots=produce_plots)

    if not isinstance(result, SingleSummary):
        print(f"FAIL: Expected SingleSummary, got {type(result).__name__}")
        return False
    if result.specifications is not record.specifications:
        print("FAIL: Single summary does not carry the record specifications")
        return False

    print("OK: Single record summarized")
    print(f"    PCV: {result.alpha_recovery.pcv['PCV']:.3f}")
    print(f"    Overlap: {result.item_exposure.stats['overlap']:.3f}")

    if produce_plots:
        written = save_figures(
            {
                "single_exposure": result.item_exposure.plot,
                "single_pcv": result.alpha_recovery.pcv_plot,
                "single_pca": result.alpha_recovery.pca_plot,
            },
            out_dir,
        )
        print(f"    Wrote {written} charts")
    return True


def check_fixed_comparison(reference: np.ndarray, produce_plots: bool, out_dir: Path) -> bool:
    """Check a comparison of fixed-length records."""
    records = [
        simulate(reference, "GDINA", True, 0, seed=2),
        simulate(reference, "GDINA", True, 100, seed=3),
        simulate(reference, "DINA", True, 100, seed=4),
    ]
    result = summarize(records, reference, produce_plots=produce_plots)

    if not isinstance(result, ComparisonSummary):
        print(f"FAIL: Expected ComparisonSummary, got {type(result).__name__}")
        return False
    if result.specifications != MULTIPLE_RECORDS:
        print(f"FAIL: Unexpected specifications: {result.specifications}")
        return False

    expected_rows = MAX_ITEMS * len(records)
    rows = len(result.recovery.by_position)
    if rows != expected_rows:
        print(f"FAIL: Recovery table has {rows} rows, expected {expected_rows}")
        return False

    print(f"OK: Fixed-length comparison of {', '.join(result.labels)}")
    print(result.recovery.pcv.round(3).to_string())

    if produce_plots:
        written = save_figures(
            {
                "fixed_pcv": result.recovery.pcv_plot,
                "fixed_pca": result.recovery.pca_plot,
                "fixed_exposure": result.item_exposure.plot,
            },
            out_dir,
        )
        print(f"    Wrote {written} charts")
    return True


def check_variable_comparison(reference: np.ndarray, produce_plots: bool, out_dir: Path) -> bool:
    """Check a comparison of variable-length records, with duplicated labels."""
    records = [
        simulate(reference, "GDINA", False, 100, seed=5),
        simulate(reference, "GDINA", False, 100, seed=6),
    ]
    result = summarize(records, reference, produce_plots=produce_plots)

    if result.cat_length is None:
        print("FAIL: Variable-length comparison has no length statistics")
        return False
    if not result.diagnostics:
        print("FAIL: Duplicated labels were not reported")
        return False

    print("OK: Variable-length comparison")
    print(result.cat_length.stats.round(2).to_string())
    for diagnostic in result.diagnostics:
        print(f"    Diagnostic: {diagnostic.code}")

    if produce_plots:
        written = save_figures(
            {
                "variable_length": result.cat_length.plot,
                "variable_exposure": result.item_exposure.plot,
            },
            out_dir,
        )
        print(f"    Wrote {written} charts")
    return True


def main() -> int:
    """Run all smoke checks."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--out", type=Path, default=DEFAULT_OUT_DIR, help="chart directory")
    parser.add_argument("--no-plots", action="store_true", help="skip chart construction")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    reference = np.random.default_rng(0).integers(0, 2, size=(N_EXAMINEES, N_ATTRIBUTES))
    produce_plots = not args.no_plots

    print("=" * 60)
    print("Simulation Summary Smoke Test")
    print("=" * 60)

    checks = [
        check_single(reference, produce_plots, args.out),
        check_fixed_comparison(reference, produce_plots, args.out),
        check_variable_comparison(reference, produce_plots, args.out),
    ]

    print("=" * 60)
    if all(checks):
        print("All checks passed!")
        return 0
    print("Some checks failed!")
    return 1


if __name__ == "__main__":
    sys.exit(main())
