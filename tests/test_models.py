"""Tests for specification models and simulation dataclasses.

Tests validate:
1. Specifications creation and validation
2. Zero-iteration detection
3. ExamineeTrace shape checks
4. SimulationResult derived properties
"""

import numpy as np
import pytest
from pydantic import ValidationError

from cdcat.models.domain import ExamineeTrace, SimulationResult
from cdcat.models.types import FitControl, Specifications


class TestSpecifications:
    """Test Specifications model."""

    def test_valid_specifications(self):
        """Valid input should create model."""
        spec = Specifications(fixed_length=True, max_items=10, model="GDINA")
        assert spec.fixed_length is True
        assert spec.max_items == 10
        assert spec.fit is None

    def test_max_items_must_be_positive(self):
        """max_items of zero is rejected."""
        with pytest.raises(ValidationError):
            Specifications(fixed_length=True, max_items=0, model="GDINA")

    def test_negative_iterations_rejected(self):
        """max_iterations cannot be negative."""
        with pytest.raises(ValidationError):
            FitControl(max_iterations=-1)

    def test_specifications_are_frozen(self):
        """Specifications cannot be modified after creation."""
        spec = Specifications(fixed_length=True, max_items=10, model="GDINA")
        with pytest.raises(ValidationError):
            spec.model = "DINA"


class TestUsesTrueParameters:
    """Test zero-iteration detection."""

    def test_zero_iterations(self):
        """A fit with zero iterations uses true parameters."""
        spec = Specifications(
            fixed_length=True, max_items=5, model="GDINA", fit=FitControl(max_iterations=0)
        )
        assert spec.uses_true_parameters is True

    def test_positive_iterations(self):
        """A fit with iterations estimates parameters."""
        spec = Specifications(
            fixed_length=True, max_items=5, model="GDINA", fit=FitControl(max_iterations=50)
        )
        assert spec.uses_true_parameters is False

    def test_no_fit_block(self):
        """Missing fit block is not treated as true parameters."""
        spec = Specifications(fixed_length=True, max_items=5, model="GDINA")
        assert spec.uses_true_parameters is False

    def test_fit_without_iterations(self):
        """Fit block without an iteration count is not treated as true parameters."""
        spec = Specifications(
            fixed_length=True, max_items=5, model="GDINA", fit=FitControl()
        )
        assert spec.uses_true_parameters is False


class TestExamineeTrace:
    """Test ExamineeTrace validation."""

    def test_lists_are_converted_to_arrays(self):
        """Plain lists become numpy arrays."""
        trace = ExamineeTrace(items=[3, 1], estimates=[[0, 1], [1, 1]])
        assert isinstance(trace.items, np.ndarray)
        assert trace.estimates.shape == (2, 2)
        assert trace.length == 2
        np.testing.assert_array_equal(trace.final_estimate, [1, 1])

    def test_row_count_must_match_items(self):
        """One estimate row is required per administered item."""
        with pytest.raises(ValueError, match="rows"):
            ExamineeTrace(items=[0, 1, 2], estimates=[[0, 1], [1, 1]])

    def test_estimates_must_be_matrix(self):
        """Estimates must be two-dimensional."""
        with pytest.raises(ValueError, match="two-dimensional"):
            ExamineeTrace(items=[0, 1], estimates=[0, 1])

    def test_repeated_item_rejected(self):
        """An item cannot be administered twice to one examinee."""
        with pytest.raises(ValueError, match="more than once"):
            ExamineeTrace(items=[2, 2], estimates=[[0], [1]])

    def test_empty_trace_rejected(self):
        """A trace without administered items has no final estimate and is rejected."""
        with pytest.raises(ValueError, match="at least one item"):
            ExamineeTrace(items=[], estimates=np.empty((0, 2)))


class TestSimulationResult:
    """Test SimulationResult derived properties."""

    def test_counts(self, small_fixed_record):
        """Examinee and attribute counts derive from the traces."""
        assert small_fixed_record.n_examinees == 3
        assert small_fixed_record.n_attributes == 2
        assert small_fixed_record.fixed_length is True

    def test_empty_record(self):
        """A record without traces has zero examinees and attributes."""
        record = SimulationResult(
            traces=[],
            n_items=5,
            specifications=Specifications(fixed_length=False, max_items=5, model="DINA"),
        )
        assert record.n_examinees == 0
        assert record.n_attributes == 0
