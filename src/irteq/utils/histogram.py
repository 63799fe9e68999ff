"""Histogram bin width calculation."""

import math
from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray


class SimpleBinCalculation:
    """Bin width from a user-supplied number of bins.

    Observed values are accumulated one at a time (or in batches) and the
    width is ``(max - min) / number_of_bins``. NaN values are ignored.

    Parameters
    ----------
    number_of_bins : int, default=1
        Number of histogram bins.

    Examples
    --------
    >>> calc = SimpleBinCalculation(4)
    >>> calc.update([1.0, 3.0, 9.0])
    >>> calc.bin_width()
    2.0
    """

    def __init__(self, number_of_bins: int = 1) -> None:
        if number_of_bins < 1:
            raise ValueError("number_of_bins must be at least 1")
        self._number_of_bins = int(number_of_bins)
        self._min = math.inf
        self._max = -math.inf
        self._n = 0

    def increment(self, x: float) -> None:
        x = float(x)
        if math.isnan(x):
            return
        self._min = min(self._min, x)
        self._max = max(self._max, x)
        self._n += 1

    def update(self, values: Iterable[float] | NDArray[np.float64]) -> None:
        if not isinstance(values, np.ndarray):
            values = list(values)
        values = np.asarray(values, dtype=np.float64).ravel()
        values = values[~np.isnan(values)]
        if values.size == 0:
            return
        self._min = min(self._min, float(values.min()))
        self._max = max(self._max, float(values.max()))
        self._n += int(values.size)

    def number_of_bins(self) -> int:
        return self._number_of_bins

    @property
    def n(self) -> int:
        return self._n

    @property
    def min(self) -> float:
        return self._min if self._n else math.nan

    @property
    def max(self) -> float:
        return self._max if self._n else math.nan

    def bin_width(self) -> float:
        return (self.max - self.min) / self._number_of_bins

    def __repr__(self) -> str:
        return f"SimpleBinCalculation(number_of_bins={self._number_of_bins}, n={self._n})"
