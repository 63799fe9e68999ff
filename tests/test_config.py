"""Tests for package options."""

import numpy as np
import pytest

from irteq import get_option, get_options, reset_options, set_option
from irteq.constants import DEFAULT_PRECISION, GRADIENT_STEP


class TestOptions:
    """Tests for the option store."""

    def test_defaults(self):
        """Test default option values."""
        assert get_option("precision") == DEFAULT_PRECISION
        assert get_option("gradient_step") == GRADIENT_STEP

    def test_set_and_reset(self):
        """Test that options can be changed and restored."""
        set_option("precision", 5)
        set_option("gradient_step", 1e-4)

        assert get_options() == {"precision": 5, "gradient_step": 1e-4}

        reset_options()

        assert get_option("precision") == DEFAULT_PRECISION

    def test_unknown_option(self):
        """Test that unknown names raise."""
        with pytest.raises(ValueError, match="Unknown option"):
            set_option("backend", "gpu")
        with pytest.raises(ValueError, match="Unknown option"):
            get_option("backend")

    @pytest.mark.parametrize(
        "name, value",
        [("precision", 1.5), ("precision", True), ("precision", "3"), ("gradient_step", 0.0)],
    )
    def test_invalid_values(self, name, value):
        """Test option validation."""
        with pytest.raises(ValueError):
            set_option(name, value)

    def test_precision_accepts_numpy_and_negative_integers(self):
        """Test that precision takes any integer type, including negatives."""
        set_option("precision", np.int64(3))
        assert get_option("precision") == 3
        assert type(get_option("precision")) is int

        set_option("precision", -1)
        assert get_option("precision") == -1
