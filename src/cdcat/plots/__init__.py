"""Chart builders for summaries.

Charts are matplotlib Figure objects created without pyplot, so building
them never opens a window or touches global figure state. Callers decide
whether to save or display them.
"""

from cdcat.plots.charts import (
    exposure_chart,
    length_chart,
    recovery_chart,
    recovery_comparison_chart,
    side_by_side_length_chart,
    stacked_exposure_chart,
)

__all__ = [
    "exposure_chart",
    "length_chart",
    "recovery_chart",
    "recovery_comparison_chart",
    "side_by_side_length_chart",
    "stacked_exposure_chart",
]
