"""Charts for per-record and comparison summaries.

Per-record charts:
- exposure_chart: exposure rate of every bank item
- length_chart: achieved test length distribution
- recovery_chart: PCV or PCA by item position

Comparison charts:
- recovery_comparison_chart: one line per record
- stacked_exposure_chart: exposure charts stacked top to bottom
- side_by_side_length_chart: length charts laid out left to right
"""

from __future__ import annotations

import numpy as np
import pandas as pd
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from cdcat.metrics.exposure import EXPOSURE_COLUMN, ITEM_COLUMN
from cdcat.metrics.length import FREQUENCY_COLUMN, LENGTH_COLUMN
from cdcat.metrics.recovery import POSITION_COLUMN

# Axis labels
ITEM_LABEL = "Item"
EXPOSURE_LABEL = "Item exposure rate"
LENGTH_LABEL = "CAT length"
FREQUENCY_LABEL = "Frequency"
POSITION_LABEL = "Until Item Position"
PCV_LABEL = "Pattern Recovery"
PCA_LABEL = "Attribute Recovery"

# Comparison titles
STACKED_TITLE = "Applications from top to bottom:"
STACKED_SUBTITLE = "x-axis: Item, y-axis: Item exposure rate"
SIDE_BY_SIDE_TITLE = "Applications from left to right:"

BAR_COLOR = "#4c72b0"
SINGLE_FIGSIZE = (8.0, 4.5)
PANEL_HEIGHT = 1.8  # Inches per stacked panel
PANEL_WIDTH = 3.5  # Inches per side-by-side panel
RECOVERY_TICKS = np.round(np.arange(0.0, 1.01, 0.1), 1)


def _new_figure(
    nrows: int = 1,
    ncols: int = 1,
    figsize: tuple[float, float] = SINGLE_FIGSIZE,
    **subplot_kw,
) -> tuple[Figure, np.ndarray]:
    """Create a standalone figure with a 2-D grid of axes."""
    fig = Figure(figsize=figsize)
    axes = fig.subplots(nrows, ncols, squeeze=False, **subplot_kw)
    return fig, axes


def _draw_exposure(ax: Axes, rates: pd.DataFrame) -> None:
    ax.bar(rates[ITEM_COLUMN], rates[EXPOSURE_COLUMN], color=BAR_COLOR)
    ax.set_ylim(0.0, 1.0)


def _draw_lengths(ax: Axes, lengths: pd.DataFrame) -> None:
    ax.bar(lengths[LENGTH_COLUMN], lengths[FREQUENCY_COLUMN], color=BAR_COLOR)


def _style_recovery_axes(ax: Axes, max_items: int, ylabel: str) -> None:
    positions = np.arange(1, max_items + 1)
    ax.set_xticks(positions)
    ax.set_xlabel(POSITION_LABEL)
    ax.set_ylim(0.0, 1.0)
    ax.set_yticks(RECOVERY_TICKS)
    ax.set_ylabel(ylabel)
    ax.grid(True, which="major", alpha=0.3)


def exposure_chart(rates: pd.DataFrame) -> Figure:
    """Bar chart of item exposure rates.

    Args:
        rates: DataFrame with columns item and exposure.
    """
    fig, axes = _new_figure()
    ax = axes[0, 0]
    _draw_exposure(ax, rates)
    ax.set_xlabel(ITEM_LABEL)
    ax.set_ylabel(EXPOSURE_LABEL)
    return fig


def length_chart(lengths: pd.DataFrame) -> Figure:
    """Bar chart of achieved test lengths.

    Args:
        lengths: DataFrame with columns length and frequency.
    """
    fig, axes = _new_figure()
    ax = axes[0, 0]
    _draw_lengths(ax, lengths)
    ax.set_xlabel(LENGTH_LABEL)
    ax.set_ylabel(FREQUENCY_LABEL)
    return fig


def recovery_chart(by_position: pd.DataFrame, column: str, ylabel: str) -> Figure:
    """Line chart of one recovery measure by item position.

    Args:
        by_position: DataFrame with item_position and the measure column.
        column: "PCV" or "PCA".
        ylabel: Axis label for the measure.
    """
    fig, axes = _new_figure()
    ax = axes[0, 0]
    ax.plot(by_position[POSITION_COLUMN], by_position[column], marker="o")
    _style_recovery_axes(ax, len(by_position), ylabel)
    return fig


def recovery_comparison_chart(
    series: list[tuple[str, pd.DataFrame]],
    column: str,
    ylabel: str,
    max_items: int,
) -> Figure:
    """Line chart of one recovery measure by item position, one line per record.

    Records sharing a label still get separate lines.

    Args:
        series: (label, by_position table) per record, in input order.
        column: "PCV" or "PCA".
        ylabel: Axis label for the measure.
        max_items: Number of item positions.
    """
    fig, axes = _new_figure()
    ax = axes[0, 0]
    for label, by_position in series:
        ax.plot(by_position[POSITION_COLUMN], by_position[column], marker="o", label=label)
    _style_recovery_axes(ax, max_items, ylabel)
    ax.legend(frameon=False)
    return fig


def stacked_exposure_chart(rates_by_record: list[tuple[str, pd.DataFrame]]) -> Figure:
    """Exposure rate charts stacked vertically under a shared title.

    Args:
        rates_by_record: (label, exposure rates table) per record, top to bottom.
    """
    n = len(rates_by_record)
    fig, axes = _new_figure(
        nrows=n,
        ncols=1,
        figsize=(SINGLE_FIGSIZE[0], PANEL_HEIGHT * n + 1.0),
        sharex=True,
    )
    for ax, (_, rates) in zip(axes[:, 0], rates_by_record):
        _draw_exposure(ax, rates)
        ax.tick_params(axis="x", which="both", length=0, labelbottom=False)

    labels = ", ".join(label for label, _ in rates_by_record)
    fig.suptitle(f"{STACKED_TITLE} {labels}", x=0.02, ha="left", y=0.99)
    fig.text(0.02, 0.99 - 0.35 / fig.get_figheight(), STACKED_SUBTITLE, ha="left", va="top",
             fontsize="small")
    fig.subplots_adjust(top=1.0 - 0.9 / fig.get_figheight())
    return fig


def side_by_side_length_chart(lengths_by_record: list[tuple[str, pd.DataFrame]]) -> Figure:
    """Length distribution charts in a row under a shared title.

    Args:
        lengths_by_record: (label, length frequency table) per record, left to right.
    """
    n = len(lengths_by_record)
    fig, axes = _new_figure(
        nrows=1,
        ncols=n,
        figsize=(PANEL_WIDTH * n, SINGLE_FIGSIZE[1]),
    )
    for ax, (_, lengths) in zip(axes[0, :], lengths_by_record):
        _draw_lengths(ax, lengths)
        ax.tick_params(axis="x", which="both", length=0)

    labels = ", ".join(label for label, _ in lengths_by_record)
    fig.suptitle(f"{SIDE_BY_SIDE_TITLE} {labels}", x=0.02, ha="left", fontsize=10,
                 fontweight="bold")
    return fig
