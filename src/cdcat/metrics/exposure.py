"""Item exposure metrics.

Metrics:
- exposure rate: share of examinees administered each bank item
- stats: five-number summary of the rates plus the overlap rate
- overlap: expected share of items two random examinees have in common,
  T = (J / L) * var(r) + L / J  (J bank size, L test length)
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from cdcat.metrics.descriptive import five_number_summary
from cdcat.models.domain import SimulationResult

ITEM_COLUMN = "item"
EXPOSURE_COLUMN = "exposure"
OVERLAP_KEY = "overlap"


def compute_exposure_counts(record: SimulationResult) -> np.ndarray:
    """Count how many examinees received each bank item.

    Returns:
        Integer array of length n_items.

    Raises:
        ValueError: If a trace refers to an item outside the bank.
    """
    counts = np.zeros(record.n_items, dtype=int)
    for trace in record.traces:
        if trace.items.min() < 0 or trace.items.max() >= record.n_items:
            raise ValueError(
                f"administered item index out of range for a bank of {record.n_items} items"
            )
        counts[trace.items] += 1
    return counts


def compute_exposure_rates(record: SimulationResult) -> pd.DataFrame:
    """Exposure rate of every bank item.

    Returns:
        DataFrame with columns item (1-based) and exposure in [0, 1].
    """
    counts = compute_exposure_counts(record)
    n = record.n_examinees
    rates = counts / n if n > 0 else np.zeros_like(counts, dtype=float)
    return pd.DataFrame(
        {
            ITEM_COLUMN: np.arange(1, record.n_items + 1),
            EXPOSURE_COLUMN: rates.astype(float),
        }
    )


def compute_overlap_rate(rates: np.ndarray, test_length: float) -> float:
    """Compute the test overlap rate.

    Args:
        rates: Exposure rate of every bank item.
        test_length: Fixed length, or mean achieved length.

    Returns:
        Overlap rate; NaN when the bank or the test is empty.
    """
    n_items = len(rates)
    if n_items == 0 or test_length <= 0:
        return float("nan")
    variance = float(np.var(rates))
    return (n_items / test_length) * variance + test_length / n_items


def compute_exposure_stats(rates: pd.DataFrame, test_length: float) -> pd.Series:
    """Descriptive statistics of exposure rates.

    Args:
        rates: Output of compute_exposure_rates.
        test_length: Length used for the overlap rate.

    Returns:
        Series with the five-number summary columns and "overlap".
    """
    values = rates[EXPOSURE_COLUMN].to_numpy(dtype=float)
    stats = five_number_summary(values)
    stats[OVERLAP_KEY] = compute_overlap_rate(values, test_length)
    return stats
