"""Aggregation module for simulation summaries.

- Summarizes one record, or compares several records keyed by label
- Forbidden: running simulations, estimating attribute patterns, file IO
"""

from cdcat.aggregation.errors import (
    EmptyInputError,
    InconsistentModeError,
    LabelLengthMismatchError,
    MissingReferenceError,
    SummaryError,
)
from cdcat.aggregation.summary import Many, Single, as_input, derive_labels, summarize

__all__ = [
    "EmptyInputError",
    "InconsistentModeError",
    "LabelLengthMismatchError",
    "Many",
    "MissingReferenceError",
    "Single",
    "SummaryError",
    "as_input",
    "derive_labels",
    "summarize",
]
