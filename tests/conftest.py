"""Shared pytest fixtures for cdcat tests."""

import numpy as np
import pytest

from cdcat.models.domain import ExamineeTrace, SimulationResult
from cdcat.models.types import FitControl, Specifications


def simulate_record(
    reference: np.ndarray,
    *,
    model: str = "GDINA",
    fixed_length: bool = True,
    max_items: int = 10,
    n_items: int = 30,
    min_items: int = 3,
    max_iterations: int | None = None,
    seed: int = 0,
) -> SimulationResult:
    """Build a synthetic record whose estimates approach the reference."""
    rng = np.random.default_rng(seed)
    n_attributes = reference.shape[1]
    traces = []
    for truth in reference:
        if fixed_length:
            length = max_items
        else:
            length = int(rng.integers(min_items, max_items + 1))
        items = rng.choice(n_items, size=length, replace=False)
        estimates = np.empty((length, n_attributes), dtype=int)
        for j in range(length):
            correct = rng.random(n_attributes) < (j + 1) / length
            estimates[j] = np.where(correct, truth, 1 - truth)
        traces.append(ExamineeTrace(items=items, estimates=estimates))

    fit = FitControl(max_iterations=max_iterations) if max_iterations is not None else None
    return SimulationResult(
        traces=traces,
        n_items=n_items,
        specifications=Specifications(
            fixed_length=fixed_length,
            max_items=max_items,
            model=model,
            fit=fit,
        ),
    )


@pytest.fixture
def reference() -> np.ndarray:
    """Reference patterns for 40 examinees and 3 attributes."""
    return np.random.default_rng(42).integers(0, 2, size=(40, 3))


@pytest.fixture
def simulate():
    """Factory for synthetic simulation results."""
    return simulate_record


@pytest.fixture
def small_reference() -> np.ndarray:
    """Reference patterns matching small_fixed_record and small_variable_record."""
    return np.array([[1, 0], [0, 1], [1, 1]])


@pytest.fixture
def small_fixed_record() -> SimulationResult:
    """Three examinees, two items each, from a bank of four.

    Final estimates: examinees 1 and 3 exact, examinee 2 wrong on K2.
    After the first item only examinee 1 is wrong (on K1).
    """
    traces = [
        ExamineeTrace(items=[0, 1], estimates=[[0, 0], [1, 0]]),
        ExamineeTrace(items=[0, 2], estimates=[[0, 1], [0, 0]]),
        ExamineeTrace(items=[1, 3], estimates=[[1, 1], [1, 1]]),
    ]
    return SimulationResult(
        traces=traces,
        n_items=4,
        specifications=Specifications(fixed_length=True, max_items=2, model="GDINA"),
    )


@pytest.fixture
def small_variable_record() -> SimulationResult:
    """Three examinees with lengths 1, 2 and 2 from a bank of four."""
    traces = [
        ExamineeTrace(items=[2], estimates=[[1, 0]]),
        ExamineeTrace(items=[0, 2], estimates=[[1, 1], [0, 1]]),
        ExamineeTrace(items=[1, 2], estimates=[[0, 0], [1, 0]]),
    ]
    return SimulationResult(
        traces=traces,
        n_items=4,
        specifications=Specifications(fixed_length=False, max_items=2, model="DINA"),
    )
