"""Descriptive statistics shared by the exposure and length metrics."""

from __future__ import annotations

import numpy as np
import pandas as pd

# Minimum, quartiles, mean and maximum (quantiles use linear interpolation)
SUMMARY_COLUMNS = ("min", "q1", "median", "mean", "q3", "max")


def five_number_summary(values) -> pd.Series:
    """Summarize a numeric series.

    Args:
        values: Array-like of numbers.

    Returns:
        Series indexed by SUMMARY_COLUMNS. All NaN for an empty input.
    """
    arr = np.asarray(values, dtype=float).ravel()
    if arr.size == 0:
        return pd.Series(np.nan, index=list(SUMMARY_COLUMNS), dtype=float)

    q1, median, q3 = np.quantile(arr, [0.25, 0.5, 0.75])
    return pd.Series(
        [arr.min(), q1, median, arr.mean(), q3, arr.max()],
        index=list(SUMMARY_COLUMNS),
        dtype=float,
    )
