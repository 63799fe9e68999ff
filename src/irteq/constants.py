"""Constants for numerical stability and default settings.

These are true constants that should not be user-configurable.
For configurable values, use function arguments with defaults or
:func:`irteq._config.set_option`.
"""

import numpy as np

DEFAULT_INTERCEPT: float = 0.0
"""Intercept (B) of the identity transformation."""

DEFAULT_SLOPE: float = 1.0
"""Slope (A) of the identity transformation."""

DEFAULT_PRECISION: int = 2
"""Number of decimal places reported for fitted linking constants."""

GRADIENT_STEP: float = float(np.finfo(np.float64).eps ** (1.0 / 3.0))
"""Relative step for central finite-difference gradients."""

NORMAL_OGIVE_SCALING: float = 1.7
"""Scaling constant D that brings the logistic close to the normal ogive."""
