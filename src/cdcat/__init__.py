"""Summaries of computerized adaptive testing simulations for cognitive diagnosis models.

Structure:
- models/       - specifications (pydantic) and result dataclasses
- metrics/      - recovery, exposure and length metrics; per-record summarizer
- plots/        - matplotlib chart builders
- aggregation/  - single-record summaries and cross-model comparison
"""

from cdcat.aggregation import (
    EmptyInputError,
    InconsistentModeError,
    LabelLengthMismatchError,
    Many,
    MissingReferenceError,
    Single,
    SummaryError,
    summarize,
)
from cdcat.metrics.record import get_record_summary
from cdcat.models.domain import (
    MULTIPLE_RECORDS,
    ComparisonSummary,
    ExamineeTrace,
    SimulationResult,
    SingleSummary,
)
from cdcat.models.types import FitControl, Specifications

__all__ = [
    "MULTIPLE_RECORDS",
    "ComparisonSummary",
    "EmptyInputError",
    "ExamineeTrace",
    "FitControl",
    "InconsistentModeError",
    "LabelLengthMismatchError",
    "Many",
    "MissingReferenceError",
    "Single",
    "SimulationResult",
    "SingleSummary",
    "Specifications",
    "SummaryError",
    "get_record_summary",
    "summarize",
]
