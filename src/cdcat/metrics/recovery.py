"""Attribute classification accuracy against a reference pattern.

Metrics:
- PCV: share of examinees whose whole estimated pattern equals the reference
- PCA: per-attribute share of examinees classified as in the reference
- by position: PCV and mean PCA using the estimate after each item position
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from cdcat.models.domain import SimulationResult

PCV_COLUMN = "PCV"
PCA_COLUMN = "PCA"
PCA_MEAN_KEY = "mean"
POSITION_COLUMN = "item_position"


def attribute_names(n_attributes: int) -> list[str]:
    """Column names K1..KK used for attribute-level tables."""
    return [f"K{k}" for k in range(1, n_attributes + 1)]


def as_reference(reference, n_examinees: int, n_attributes: int) -> np.ndarray:
    """Coerce a reference attribute matrix and check its shape.

    Args:
        reference: Array-like N x K matrix of 0/1 values.
        n_examinees: Expected N.
        n_attributes: Expected K.

    Returns:
        Integer numpy array of shape (N, K).

    Raises:
        ValueError: If the shape does not match the record.
    """
    ref = np.asarray(reference, dtype=int)
    if ref.shape != (n_examinees, n_attributes):
        raise ValueError(
            f"reference pattern has shape {ref.shape}, "
            f"expected ({n_examinees}, {n_attributes})"
        )
    return ref


def final_estimates(record: SimulationResult) -> np.ndarray:
    """Stack each examinee's last estimated pattern into an N x K matrix."""
    if not record.traces:
        return np.zeros((0, 0), dtype=int)
    return np.vstack([trace.final_estimate for trace in record.traces])


def compute_pattern_recovery(estimates: np.ndarray, reference: np.ndarray) -> float:
    """Compute PCV.

    Args:
        estimates: N x K estimated patterns.
        reference: N x K reference patterns.

    Returns:
        Share in [0, 1] of rows matching exactly; 0.0 with no examinees.
    """
    if estimates.shape[0] == 0:
        return 0.0
    return float(np.mean(np.all(estimates == reference, axis=1)))


def compute_attribute_recovery(estimates: np.ndarray, reference: np.ndarray) -> np.ndarray:
    """Compute PCA for every attribute.

    Returns:
        Length-K array of match rates in [0, 1].
    """
    if estimates.shape[0] == 0:
        return np.zeros(reference.shape[1], dtype=float)
    return np.mean(estimates == reference, axis=0).astype(float)


def compute_recovery(
    record: SimulationResult, reference: np.ndarray
) -> tuple[pd.Series, pd.Series]:
    """Compute final PCV and PCA series for a record.

    Returns:
        (pcv, pca): pcv has the single entry "PCV"; pca is indexed
        K1..KK followed by "mean".
    """
    estimates = final_estimates(record)
    pcv = pd.Series({PCV_COLUMN: compute_pattern_recovery(estimates, reference)}, dtype=float)

    per_attribute = compute_attribute_recovery(estimates, reference)
    pca = pd.Series(per_attribute, index=attribute_names(len(per_attribute)), dtype=float)
    pca[PCA_MEAN_KEY] = float(per_attribute.mean()) if per_attribute.size else 0.0
    return pcv, pca


def compute_recovery_by_position(
    record: SimulationResult, reference: np.ndarray, max_items: int
) -> pd.DataFrame:
    """Compute PCV and mean PCA after every item position 1..max_items.

    Args:
        record: Fixed-length simulation result.
        reference: N x K reference patterns.
        max_items: Number of positions to report.

    Returns:
        DataFrame with columns item_position, PCV, PCA.

    Raises:
        ValueError: If a trace is shorter than max_items.
    """
    short = [i for i, trace in enumerate(record.traces) if trace.length < max_items]
    if short:
        raise ValueError(
            f"{len(short)} examinee(s) received fewer than {max_items} items "
            f"(first: examinee {short[0] + 1})"
        )

    rows = []
    for position in range(1, max_items + 1):
        if record.traces:
            estimates = np.vstack([trace.estimates[position - 1] for trace in record.traces])
        else:
            estimates = np.zeros((0, reference.shape[1]), dtype=int)
        per_attribute = compute_attribute_recovery(estimates, reference)
        rows.append(
            {
                POSITION_COLUMN: position,
                PCV_COLUMN: compute_pattern_recovery(estimates, reference),
                PCA_COLUMN: float(per_attribute.mean()) if per_attribute.size else 0.0,
            }
        )

    return pd.DataFrame(rows, columns=[POSITION_COLUMN, PCV_COLUMN, PCA_COLUMN])
