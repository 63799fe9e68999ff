"""Core utility functions with no internal dependencies.

This module provides fundamental utility functions that are used throughout
the codebase but have no dependencies on other irteq modules, avoiding
circular import issues.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

import numpy as np
from numpy.typing import NDArray


def sigmoid(x: NDArray[np.floating] | float) -> NDArray[np.floating] | float:
    """Compute sigmoid function with numerical stability.

    Uses the identity sigmoid(-x) = 1 - sigmoid(x) to avoid overflow
    for large negative values.

    Parameters
    ----------
    x : array_like or float
        Input values.

    Returns
    -------
    array_like or float
        Sigmoid of input, same shape as input.
    """
    x = np.asarray(x, dtype=np.float64)
    with np.errstate(over="ignore"):
        result = np.where(
            x >= 0, 1.0 / (1.0 + np.exp(-x)), np.exp(x) / (1.0 + np.exp(x))
        )
    return float(result) if result.ndim == 0 else result


def round_half_up(value: float, precision: int) -> float:
    """Round to a number of decimal places, ties away from zero.

    The value is rounded from its shortest decimal representation, so
    ``round_half_up(2.675, 2) == 2.68`` even though the nearest double is
    slightly below 2.675. Non-finite values are returned unchanged.

    Parameters
    ----------
    value : float
        Value to round.
    precision : int
        Number of decimal places. Negative values round to tens, hundreds
        and so on.

    Returns
    -------
    float
        Rounded value.
    """
    value = float(value)
    if not math.isfinite(value):
        return value
    exact = Decimal(repr(value))
    # No digits beyond the requested precision.
    if exact.as_tuple().exponent >= -precision:
        return value
    quantum = Decimal(1).scaleb(-precision)
    rounded = float(exact.quantize(quantum, rounding=ROUND_HALF_UP))
    if rounded == 0.0:
        return math.copysign(0.0, value)
    return rounded
