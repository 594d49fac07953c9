"""Achieved test length metrics for variable-length applications."""

from __future__ import annotations

import numpy as np
import pandas as pd

from cdcat.metrics.descriptive import five_number_summary
from cdcat.models.domain import SimulationResult

LENGTH_COLUMN = "length"
FREQUENCY_COLUMN = "frequency"


def compute_test_lengths(record: SimulationResult) -> np.ndarray:
    """Number of items each examinee received."""
    return np.array([trace.length for trace in record.traces], dtype=int)


def compute_length_frequencies(lengths) -> pd.DataFrame:
    """Tabulate achieved lengths.

    Returns:
        DataFrame with columns length and frequency, sorted by length.
    """
    values, counts = np.unique(np.asarray(lengths, dtype=int), return_counts=True)
    return pd.DataFrame({LENGTH_COLUMN: values, FREQUENCY_COLUMN: counts})


def compute_length_stats(frequencies: pd.DataFrame) -> pd.Series:
    """Five-number summary of lengths given as a length-by-frequency table.

    The table is expanded back to one value per examinee first.
    """
    expanded = np.repeat(
        frequencies[LENGTH_COLUMN].to_numpy(),
        frequencies[FREQUENCY_COLUMN].to_numpy(),
    )
    return five_number_summary(expanded)
