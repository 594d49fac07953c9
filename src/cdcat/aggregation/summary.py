"""Simulation summary aggregation.

Summarizes one CAT simulation result, or compares several of them
(one per model) through recovery, exposure and length tables and charts.
Domain logic is pure - per-record metrics go through the record summarizer.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

from cdcat.aggregation.errors import (
    EmptyInputError,
    InconsistentModeError,
    LabelLengthMismatchError,
    MissingReferenceError,
    SummaryError,
)
from cdcat.metrics.length import compute_length_stats
from cdcat.metrics.record import get_record_summary
from cdcat.metrics.recovery import PCA_COLUMN, PCV_COLUMN
from cdcat.models.domain import (
    AlphaRecovery,
    ComparisonSummary,
    Diagnostic,
    ExposureComparison,
    LengthComparison,
    RecordSummary,
    RecoveryComparison,
    SimulationResult,
    SingleSummary,
    SummaryResult,
)
from cdcat.plots.charts import (
    PCA_LABEL,
    PCV_LABEL,
    recovery_comparison_chart,
    side_by_side_length_chart,
    stacked_exposure_chart,
)

logger = logging.getLogger(__name__)

# Label of a record fitted with zero iterations (true item parameters)
REFERENCE_LABEL = "TRUE"
LABEL_COLUMN = "label"
DUPLICATED_LABELS = "duplicated_labels"

RecordSummarizer = Callable[[SimulationResult, object, bool], RecordSummary]


@dataclass(frozen=True)
class Single:
    """One record to summarize on its own."""

    record: SimulationResult


@dataclass(frozen=True)
class Many:
    """Ordered records to compare."""

    records: tuple[SimulationResult, ...]


SummaryInput = Single | Many


def as_input(results) -> SummaryInput:
    """Normalize the accepted input shapes into Single or Many.

    A bare SimulationResult is a Single; any other iterable of records is
    a Many, even when it holds one record.
    """
    if isinstance(results, (Single, Many)):
        return results
    if isinstance(results, SimulationResult):
        return Single(results)
    return Many(tuple(results))


def derive_labels(
    records: Sequence[SimulationResult],
    treat_zero_iteration_as_reference: bool = True,
) -> list[str]:
    """Label each record by its model.

    Args:
        records: Records in input order.
        treat_zero_iteration_as_reference: Label records fitted with zero
            iterations as "TRUE" instead of by model.

    Returns:
        One label per record.
    """
    labels = []
    for record in records:
        spec = record.specifications
        if treat_zero_iteration_as_reference and spec.uses_true_parameters:
            labels.append(REFERENCE_LABEL)
        else:
            labels.append(spec.model)
    return labels


def _duplicated(labels: Sequence[str]) -> list[str]:
    counts = Counter(labels)
    return [label for label, count in counts.items() if count > 1]


def _by_label(rows: list[pd.Series], labels: Sequence[str]) -> pd.DataFrame:
    """Stack per-record series into a table with one row per record."""
    table = pd.DataFrame(rows)
    table.index = pd.Index(list(labels), name=LABEL_COLUMN)
    return table


def _require_recovery(summary: RecordSummary, label: str) -> AlphaRecovery:
    if summary.alpha_recovery is None:
        raise SummaryError(
            f"record {label!r} has no recovery results although a reference was given"
        )
    return summary.alpha_recovery


def _exposure_comparison(
    summaries: list[RecordSummary],
    labels: list[str],
    produce_plots: bool,
) -> ExposureComparison:
    stats = _by_label([s.item_exposure.stats for s in summaries], labels)
    per_record = [(label, s.item_exposure.rates) for label, s in zip(labels, summaries)]
    rates = pd.concat(
        [table.assign(**{LABEL_COLUMN: label}) for label, table in per_record],
        ignore_index=True,
    )
    plot = stacked_exposure_chart(per_record) if produce_plots else None
    return ExposureComparison(stats=stats, rates=rates, plot=plot)


def _fixed_recovery(
    recoveries: list[AlphaRecovery],
    labels: list[str],
    max_items: int,
    produce_plots: bool,
) -> RecoveryComparison:
    per_record = []
    for label, recovery in zip(labels, recoveries):
        if recovery.by_position is None:
            raise SummaryError(f"fixed-length record {label!r} has no per-position recovery")
        per_record.append((label, recovery.by_position))

    by_position = pd.concat(
        [table.assign(**{LABEL_COLUMN: label}) for label, table in per_record],
        ignore_index=True,
    )

    pcv_plot = pca_plot = None
    if produce_plots:
        pcv_plot = recovery_comparison_chart(per_record, PCV_COLUMN, PCV_LABEL, max_items)
        pca_plot = recovery_comparison_chart(per_record, PCA_COLUMN, PCA_LABEL, max_items)

    return RecoveryComparison(
        pcv=_by_label([r.pcv for r in recoveries], labels),
        pca=_by_label([r.pca for r in recoveries], labels),
        by_position=by_position,
        pcv_plot=pcv_plot,
        pca_plot=pca_plot,
    )


def _length_comparison(
    summaries: list[RecordSummary],
    labels: list[str],
    produce_plots: bool,
) -> LengthComparison:
    per_record = []
    for label, summary in zip(labels, summaries):
        if summary.item_exposure.lengths is None:
            raise SummaryError(f"variable-length record {label!r} has no length table")
        per_record.append((label, summary.item_exposure.lengths))

    stats = _by_label([compute_length_stats(lengths) for _, lengths in per_record], labels)
    plot = side_by_side_length_chart(per_record) if produce_plots else None
    return LengthComparison(stats=stats, plot=plot)


def _summarize_single(
    record: SimulationResult,
    reference,
    produce_plots: bool,
    summarizer: RecordSummarizer,
) -> SingleSummary:
    summary = summarizer(record, reference, produce_plots)
    return SingleSummary(
        alpha_estimates=summary.alpha_estimates,
        item_exposure=summary.item_exposure,
        alpha_recovery=summary.alpha_recovery,
        specifications=record.specifications,
    )


def _summarize_many(
    records: tuple[SimulationResult, ...],
    reference,
    labels: Sequence[str] | None,
    produce_plots: bool,
    treat_zero_iteration_as_reference: bool,
    summarizer: RecordSummarizer,
) -> ComparisonSummary:
    if reference is None or np.asarray(reference).size == 0:
        raise MissingReferenceError("a reference attribute pattern is required to compare records")

    if not records:
        raise EmptyInputError("at least one record is required")

    if isinstance(labels, str):
        raise TypeError("labels must be a sequence of strings, not a single string")

    if labels is not None and len(labels) != len(records):
        raise LabelLengthMismatchError(
            f"got {len(labels)} labels for {len(records)} records; they must have the same length"
        )

    if len({record.fixed_length for record in records}) != 1:
        raise InconsistentModeError(
            "fixed_length must be True for every record or False for every record"
        )

    if labels is None:
        names = derive_labels(records, treat_zero_iteration_as_reference)
    else:
        names = [str(label) for label in labels]

    diagnostics = []
    duplicates = _duplicated(names)
    if duplicates:
        message = (
            f"Duplicated labels {duplicates}; results keyed ambiguously. "
            "Consider providing different labels"
        )
        logger.warning(message)
        diagnostics.append(Diagnostic(code=DUPLICATED_LABELS, message=message))

    summaries = [summarizer(record, reference, produce_plots) for record in records]
    recoveries = [_require_recovery(s, label) for s, label in zip(summaries, names)]
    exposure = _exposure_comparison(summaries, names, produce_plots)

    fixed_length = records[0].fixed_length
    logger.info(
        f"Comparing {len(records)} {'fixed' if fixed_length else 'variable'}-length "
        f"records: {', '.join(names)}"
    )

    if fixed_length:
        max_items = max(record.specifications.max_items for record in records)
        recovery = _fixed_recovery(recoveries, names, max_items, produce_plots)
        cat_length = None
    else:
        recovery = RecoveryComparison(
            pcv=_by_label([r.pcv for r in recoveries], names),
            pca=_by_label([r.pca for r in recoveries], names),
        )
        cat_length = _length_comparison(summaries, names, produce_plots)

    return ComparisonSummary(
        recovery=recovery,
        item_exposure=exposure,
        cat_length=cat_length,
        labels=tuple(names),
        diagnostics=tuple(diagnostics),
    )


def summarize(
    results,
    reference=None,
    labels: Sequence[str] | None = None,
    produce_plots: bool = True,
    *,
    treat_zero_iteration_as_reference: bool = True,
    summarizer: RecordSummarizer = get_record_summary,
) -> SummaryResult:
    """Summarize one simulation result or compare several.

    Args:
        results: A SimulationResult, a sequence of them, or an explicit
            Single / Many wrapper.
        reference: N x K reference attribute patterns. Optional for a single
            record, required when comparing.
        labels: Display labels, one per record (comparison only). Derived
            from each record's model when omitted.
        produce_plots: Whether to build charts.
        treat_zero_iteration_as_reference: Label derived for records fitted
            with zero iterations is "TRUE" instead of the model name.
        summarizer: Per-record summarizer.

    Returns:
        SingleSummary for a single record, ComparisonSummary otherwise.

    Raises:
        MissingReferenceError: Comparing without a reference pattern.
        EmptyInputError: Comparing an empty sequence.
        LabelLengthMismatchError: Label count differs from record count.
        InconsistentModeError: Records mix fixed and variable length.
        TypeError: labels is a single string rather than a sequence.
    """
    source = as_input(results)
    if isinstance(source, Single):
        return _summarize_single(source.record, reference, produce_plots, summarizer)
    return _summarize_many(
        source.records,
        reference,
        labels,
        produce_plots,
        treat_zero_iteration_as_reference,
        summarizer,
    )
