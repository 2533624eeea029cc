"""
Tests for the magnitude-dependent tolerance model.
"""

import pytest

from tutormath.numeric.tolerance import get_smart_tolerance, within_expected, within_tolerance


class TestSmartTolerance:
    """Test the tolerance bands."""

    @pytest.mark.parametrize(
        "magnitude,expected",
        [
            (0, 0.001),
            (0.5, 0.001),
            (-0.99, 0.001),
            (1, 0.01),
            (9.99, 0.01),
            (10, 0.05),
            (-50, 0.05),
            (100, 0.1),
            (1000, 1.0),
            (-2500, 2.5),
        ],
    )
    def test_bands(self, magnitude, expected):
        """Test each band and the relative tolerance above 100."""
        assert get_smart_tolerance(magnitude) == pytest.approx(expected)


class TestWithinTolerance:
    """Test two-sided comparison."""

    def test_boundary_inclusive(self):
        """Test that a difference equal to the tolerance is accepted."""
        assert within_tolerance(1.0, 1.01)
        assert within_tolerance(0.5, 0.501)

    def test_outside(self):
        """Test that larger differences are rejected."""
        assert not within_tolerance(0.5, 0.502)
        assert not within_tolerance(1000, 1002)

    def test_relative_band(self):
        """Test the relative band for large values."""
        assert within_tolerance(1000, 1001)

    def test_symmetric(self):
        """Test that argument order does not matter."""
        for a, b in [(0.999, 1.0), (9.99, 10.0), (99.95, 100.0), (1.0, 1.0105)]:
            assert within_tolerance(a, b) == within_tolerance(b, a)

    def test_explicit_tolerance(self):
        """Test that an explicit tolerance overrides the smart one."""
        assert within_tolerance(3.0, 3.2, tolerance=0.25)
        assert not within_tolerance(3.0, 3.3, tolerance=0.25)

    @pytest.mark.parametrize("a,b", [(float("nan"), 1.0), (float("inf"), float("inf")), (1.0, float("-inf"))])
    def test_non_finite(self, a, b):
        """Test that non-finite values never match."""
        assert not within_tolerance(a, b)


class TestWithinExpected:
    """Test comparison against an expected value."""

    def test_band_of_expected(self):
        """Test that the band comes from the expected value."""
        assert within_expected(3.009, 3)
        assert not within_expected(3.02, 3)

    def test_explicit_tolerance(self):
        """Test an explicit tolerance."""
        assert within_expected(10.4, 10, tolerance=0.5)
        assert not within_expected(10.6, 10, tolerance=0.5)
