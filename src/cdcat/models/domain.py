"""Domain models for cdcat.

Pure Python dataclasses for simulation results, the per-record
summary contract, and the comparison tables built from it.
Tables are pandas objects and charts are matplotlib figures.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
import pandas as pd
from matplotlib.figure import Figure

from cdcat.models.types import Specifications

# Stored in ComparisonSummary.specifications instead of a real block
MULTIPLE_RECORDS = "list"


# ============================================================================
# Simulation Domain
# ============================================================================


@dataclass
class ExamineeTrace:
    """One examinee's administration.

    Attributes:
        items: Ordered 0-based bank indices of the administered items.
        estimates: L x K binary matrix; row j is the estimated attribute
            pattern after the (j + 1)-th administered item.
    """

    items: np.ndarray
    estimates: np.ndarray

    def __post_init__(self) -> None:
        self.items = np.asarray(self.items, dtype=int)
        self.estimates = np.asarray(self.estimates, dtype=int)

        if self.items.ndim != 1:
            raise ValueError(f"items must be one-dimensional, got shape {self.items.shape}")
        if self.items.shape[0] == 0:
            raise ValueError("an examinee must receive at least one item")
        if self.estimates.ndim != 2:
            raise ValueError(
                f"estimates must be two-dimensional, got shape {self.estimates.shape}"
            )
        if self.estimates.shape[0] != self.items.shape[0]:
            raise ValueError(
                f"estimates has {self.estimates.shape[0]} rows "
                f"but {self.items.shape[0]} items were administered"
            )
        if len(np.unique(self.items)) != len(self.items):
            raise ValueError("an item was administered more than once")

    @property
    def length(self) -> int:
        return int(self.items.shape[0])

    @property
    def final_estimate(self) -> np.ndarray:
        return self.estimates[-1]


@dataclass
class SimulationResult:
    """One CAT run over a sample of examinees."""

    traces: list[ExamineeTrace]
    n_items: int
    specifications: Specifications

    @property
    def n_examinees(self) -> int:
        return len(self.traces)

    @property
    def n_attributes(self) -> int:
        return int(self.traces[0].estimates.shape[1]) if self.traces else 0

    @property
    def fixed_length(self) -> bool:
        return self.specifications.fixed_length


# ============================================================================
# Per-record Summary Domain
# ============================================================================


@dataclass(frozen=True)
class ItemExposure:
    """Item exposure results of one record.

    Attributes:
        stats: Descriptive statistics of the exposure rates plus overlap rate.
        rates: DataFrame with columns item (1-based) and exposure.
        plot: Exposure rate chart, None when plots are disabled.
        lengths: DataFrame with columns length and frequency
            (variable-length records only).
        length_plot: Length distribution chart (variable-length records only).
    """

    stats: pd.Series
    rates: pd.DataFrame
    plot: Figure | None = None
    lengths: pd.DataFrame | None = None
    length_plot: Figure | None = None


@dataclass(frozen=True)
class AlphaRecovery:
    """Classification accuracy of one record against a reference pattern.

    Attributes:
        pcv: Pattern-level recovery, single entry "PCV".
        pca: Attribute-level recovery per attribute (K1..KK) and their mean.
        by_position: Fixed-length records only; columns item_position,
            PCV and PCA, one row per position 1..max_items.
        pcv_plot: PCV by item position chart (fixed-length only).
        pca_plot: PCA by item position chart (fixed-length only).
    """

    pcv: pd.Series
    pca: pd.Series
    by_position: pd.DataFrame | None = None
    pcv_plot: Figure | None = None
    pca_plot: Figure | None = None


@dataclass(frozen=True)
class RecordSummary:
    """Everything the aggregator needs from one record."""

    alpha_estimates: pd.DataFrame
    item_exposure: ItemExposure
    alpha_recovery: AlphaRecovery | None = None


# ============================================================================
# Comparison Domain
# ============================================================================


@dataclass(frozen=True)
class RecoveryComparison:
    """Recovery tables across records, one row per record."""

    pcv: pd.DataFrame
    pca: pd.DataFrame
    by_position: pd.DataFrame | None = None
    pcv_plot: Figure | None = None
    pca_plot: Figure | None = None


@dataclass(frozen=True)
class ExposureComparison:
    """Exposure tables across records."""

    stats: pd.DataFrame
    rates: pd.DataFrame
    plot: Figure | None = None


@dataclass(frozen=True)
class LengthComparison:
    """Test length statistics across variable-length records."""

    stats: pd.DataFrame
    plot: Figure | None = None


@dataclass(frozen=True)
class Diagnostic:
    """Non-fatal condition found while summarizing."""

    code: str
    message: str


# ============================================================================
# Summary Results
# ============================================================================


@dataclass(frozen=True)
class SingleSummary:
    """Summary of one record, carrying that record's specifications."""

    alpha_estimates: pd.DataFrame
    item_exposure: ItemExposure
    alpha_recovery: AlphaRecovery | None
    specifications: Specifications
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class ComparisonSummary:
    """Summary comparing several records keyed by label."""

    recovery: RecoveryComparison
    item_exposure: ExposureComparison
    cat_length: LengthComparison | None
    labels: tuple[str, ...]
    diagnostics: tuple[Diagnostic, ...] = field(default_factory=tuple)
    specifications: str = MULTIPLE_RECORDS


SummaryResult = SingleSummary | ComparisonSummary
