"""RecordSummary assembly from recovery + exposure + length metrics.

This module is the thin orchestrator that:
1. Tabulates each examinee's final attribute estimate
2. Computes item exposure rates and their statistics
3. Tabulates achieved lengths (variable-length records)
4. Scores classifications against a reference pattern, when given
5. Builds the per-record charts, unless plots are disabled
"""

from __future__ import annotations

import logging

import pandas as pd

from cdcat.metrics.exposure import compute_exposure_rates, compute_exposure_stats
from cdcat.metrics.length import (
    LENGTH_COLUMN,
    compute_length_frequencies,
    compute_test_lengths,
)
from cdcat.metrics.recovery import (
    PCA_COLUMN,
    PCV_COLUMN,
    as_reference,
    attribute_names,
    compute_recovery,
    compute_recovery_by_position,
    final_estimates,
)
from cdcat.models.domain import AlphaRecovery, ItemExposure, RecordSummary, SimulationResult
from cdcat.plots.charts import (
    PCA_LABEL,
    PCV_LABEL,
    exposure_chart,
    length_chart,
    recovery_chart,
)

logger = logging.getLogger(__name__)


def _alpha_estimates(record: SimulationResult) -> pd.DataFrame:
    """One row per examinee: final pattern K1..KK and achieved length."""
    estimates = final_estimates(record)
    table = pd.DataFrame(estimates, columns=attribute_names(estimates.shape[1]))
    table[LENGTH_COLUMN] = compute_test_lengths(record)
    table.index.name = "examinee"
    return table


def _item_exposure(record: SimulationResult, produce_plots: bool) -> ItemExposure:
    spec = record.specifications
    rates = compute_exposure_rates(record)

    if spec.fixed_length:
        stats = compute_exposure_stats(rates, test_length=spec.max_items)
        return ItemExposure(
            stats=stats,
            rates=rates,
            plot=exposure_chart(rates) if produce_plots else None,
        )

    # Overlap uses the average achieved length when lengths vary
    lengths = compute_test_lengths(record)
    mean_length = float(lengths.mean()) if lengths.size else 0.0
    stats = compute_exposure_stats(rates, test_length=mean_length)
    frequencies = compute_length_frequencies(lengths)
    return ItemExposure(
        stats=stats,
        rates=rates,
        plot=exposure_chart(rates) if produce_plots else None,
        lengths=frequencies,
        length_plot=length_chart(frequencies) if produce_plots else None,
    )


def _alpha_recovery(record: SimulationResult, reference, produce_plots: bool) -> AlphaRecovery:
    ref = as_reference(reference, record.n_examinees, record.n_attributes)
    pcv, pca = compute_recovery(record, ref)

    if not record.fixed_length:
        return AlphaRecovery(pcv=pcv, pca=pca)

    by_position = compute_recovery_by_position(record, ref, record.specifications.max_items)
    return AlphaRecovery(
        pcv=pcv,
        pca=pca,
        by_position=by_position,
        pcv_plot=recovery_chart(by_position, PCV_COLUMN, PCV_LABEL) if produce_plots else None,
        pca_plot=recovery_chart(by_position, PCA_COLUMN, PCA_LABEL) if produce_plots else None,
    )


def get_record_summary(
    record: SimulationResult,
    reference=None,
    produce_plots: bool = True,
) -> RecordSummary:
    """Summarize a single simulation result.

    Args:
        record: The simulation result.
        reference: Optional N x K reference attribute patterns. Without it
            no recovery results are computed.
        produce_plots: Whether to build the per-record charts.

    Returns:
        RecordSummary; alpha_recovery is None when reference is None.

    Raises:
        ValueError: If the reference shape does not match the record, an
            item index is outside the bank, or a fixed-length trace is
            shorter than max_items.
    """
    spec = record.specifications
    logger.debug(
        f"Summarizing {spec.model} record: {record.n_examinees} examinees, "
        f"{record.n_items} items, fixed_length={spec.fixed_length}"
    )

    alpha_recovery = None
    if reference is not None:
        alpha_recovery = _alpha_recovery(record, reference, produce_plots)

    return RecordSummary(
        alpha_estimates=_alpha_estimates(record),
        item_exposure=_item_exposure(record, produce_plots),
        alpha_recovery=alpha_recovery,
    )
