"""Tests for classification accuracy metrics.

Pure computation tests on small hand-built records plus
range checks on synthetic records.
"""

import numpy as np
import pytest

from cdcat.metrics.recovery import (
    POSITION_COLUMN,
    as_reference,
    attribute_names,
    compute_attribute_recovery,
    compute_pattern_recovery,
    compute_recovery,
    compute_recovery_by_position,
    final_estimates,
)
from cdcat.models.domain import ExamineeTrace


class TestPatternAndAttributeRecovery:
    """Test PCV and PCA on plain matrices."""

    def test_perfect_recovery(self):
        """Identical patterns give PCV and PCA of 1."""
        ref = np.array([[1, 0], [0, 1]])
        assert compute_pattern_recovery(ref, ref) == 1.0
        np.testing.assert_allclose(compute_attribute_recovery(ref, ref), [1.0, 1.0])

    def test_partial_recovery(self):
        """PCV counts exact rows; PCA counts matches per attribute."""
        ref = np.array([[1, 0], [0, 1], [1, 1], [0, 0]])
        est = np.array([[1, 0], [0, 0], [0, 1], [0, 0]])
        assert compute_pattern_recovery(est, ref) == pytest.approx(0.5)
        np.testing.assert_allclose(compute_attribute_recovery(est, ref), [0.75, 0.75])

    def test_no_examinees(self):
        """No examinees gives zero recovery instead of NaN."""
        empty = np.zeros((0, 3), dtype=int)
        assert compute_pattern_recovery(empty, empty) == 0.0
        np.testing.assert_array_equal(compute_attribute_recovery(empty, empty), [0, 0, 0])


class TestAsReference:
    """Test reference shape checks."""

    def test_accepts_nested_lists(self):
        """Nested lists are coerced to an integer matrix."""
        ref = as_reference([[1, 0], [0, 1]], n_examinees=2, n_attributes=2)
        assert ref.shape == (2, 2)

    def test_wrong_shape_rejected(self):
        """A reference with the wrong shape is rejected."""
        with pytest.raises(ValueError, match="expected"):
            as_reference(np.ones((3, 2)), n_examinees=2, n_attributes=2)


class TestRecordRecovery:
    """Test recovery of a whole record."""

    def test_attribute_names(self):
        """Attributes are named K1..KK."""
        assert attribute_names(3) == ["K1", "K2", "K3"]

    def test_final_estimates(self, small_fixed_record):
        """Final estimates are each trace's last row."""
        np.testing.assert_array_equal(
            final_estimates(small_fixed_record), [[1, 0], [0, 0], [1, 1]]
        )

    def test_compute_recovery(self, small_fixed_record, small_reference):
        """PCV and per-attribute PCA with their mean match hand-computed values."""
        pcv, pca = compute_recovery(small_fixed_record, small_reference)
        assert list(pcv.index) == ["PCV"]
        assert pcv["PCV"] == pytest.approx(2 / 3)
        assert list(pca.index) == ["K1", "K2", "mean"]
        assert pca["K1"] == pytest.approx(1.0)
        assert pca["K2"] == pytest.approx(2 / 3)
        assert pca["mean"] == pytest.approx(5 / 6)


class TestRecoveryByPosition:
    """Test per-position recovery of fixed-length records."""

    def test_values(self, small_fixed_record, small_reference):
        """Per-position PCV and PCA match hand-computed values."""
        table = compute_recovery_by_position(small_fixed_record, small_reference, max_items=2)
        assert list(table.columns) == ["item_position", "PCV", "PCA"]
        assert list(table[POSITION_COLUMN]) == [1, 2]
        assert table["PCV"].tolist() == pytest.approx([2 / 3, 2 / 3])
        assert table["PCA"].tolist() == pytest.approx([5 / 6, 5 / 6])

    def test_last_position_matches_final(self, simulate, reference):
        """The last position equals the final recovery."""
        record = simulate(reference, max_items=8)
        table = compute_recovery_by_position(record, reference, max_items=8)
        pcv, pca = compute_recovery(record, reference)
        assert table["PCV"].iloc[-1] == pytest.approx(pcv["PCV"])
        assert table["PCA"].iloc[-1] == pytest.approx(pca["mean"])

    def test_values_in_unit_interval(self, simulate, reference):
        """Every recovery value lies in [0, 1]."""
        record = simulate(reference, max_items=6, seed=3)
        table = compute_recovery_by_position(record, reference, max_items=6)
        assert len(table) == 6
        assert table[["PCV", "PCA"]].to_numpy().min() >= 0.0
        assert table[["PCV", "PCA"]].to_numpy().max() <= 1.0

    def test_short_trace_rejected(self, small_fixed_record, small_reference):
        """A trace shorter than max_items is rejected."""
        small_fixed_record.traces[1] = ExamineeTrace(items=[0], estimates=[[0, 1]])
        with pytest.raises(ValueError, match="fewer than 2 items"):
            compute_recovery_by_position(small_fixed_record, small_reference, max_items=2)
