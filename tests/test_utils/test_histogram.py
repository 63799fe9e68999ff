"""Tests for bin width calculation."""

import math

import numpy as np
import pytest

from irteq.utils import SimpleBinCalculation


class TestSimpleBinCalculation:
    """Tests for the fixed-count bin width."""

    def test_bin_width(self):
        """Test that width = (max - min) / bins."""
        calc = SimpleBinCalculation(5)
        for x in (3.0, -2.0, 8.0, 1.5):
            calc.increment(x)

        assert calc.number_of_bins() == 5
        assert calc.bin_width() == pytest.approx(2.0)

    def test_update_array(self, rng):
        """Test batch updates."""
        values = rng.normal(size=100)
        calc = SimpleBinCalculation(10)

        calc.update(values)

        assert calc.n == 100
        assert calc.bin_width() == pytest.approx((values.max() - values.min()) / 10)

    def test_nan_ignored(self):
        """Test that nan values do not affect the range."""
        calc = SimpleBinCalculation(2)
        calc.update([1.0, np.nan, 5.0])
        calc.increment(math.nan)

        assert calc.n == 2
        assert calc.bin_width() == 2.0

    def test_empty(self):
        """Test that the width is nan before any data."""
        assert math.isnan(SimpleBinCalculation().bin_width())

    def test_invalid_bins(self):
        """Test that at least one bin is required."""
        with pytest.raises(ValueError, match="number_of_bins"):
            SimpleBinCalculation(0)
