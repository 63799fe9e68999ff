"""Linear transformation between two ability scales."""

import numpy as np
from numpy.typing import NDArray

from irteq._config import get_option
from irteq._core import round_half_up
from irteq.constants import DEFAULT_INTERCEPT, DEFAULT_SLOPE


class LinearTransformation:
    """Slope and intercept of ``x* = slope * x + intercept``.

    The stored values are kept at full precision. ``intercept`` and ``scale``
    (and their ``get_`` forms) report them rounded half-up to ``precision``
    decimal places; rounding never changes what is stored. A negative
    precision rounds to tens, hundreds and so on.

    Parameters
    ----------
    intercept : float, default=0.0
        Intercept (B).
    scale : float, default=1.0
        Slope (A).
    precision : int, optional
        Decimal places for reported values. Defaults to the ``"precision"``
        option (2 unless changed with :func:`irteq.set_option`).

    Examples
    --------
    >>> lt = LinearTransformation(intercept=0.4567, scale=1.2345)
    >>> lt.get_scale(), lt.get_intercept()
    (1.23, 0.46)
    >>> round(lt.transform(1.0), 4)
    1.6912
    """

    def __init__(
        self,
        intercept: float = DEFAULT_INTERCEPT,
        scale: float = DEFAULT_SLOPE,
        precision: int | None = None,
    ) -> None:
        self._intercept = float(intercept)
        self._slope = float(scale)
        self._precision = 0
        self.set_precision(get_option("precision") if precision is None else precision)

    def set_intercept(self, intercept: float) -> None:
        self._intercept = float(intercept)

    def set_scale(self, scale: float) -> None:
        self._slope = float(scale)

    def set_precision(self, precision: int) -> None:
        if isinstance(precision, bool) or not isinstance(precision, (int, np.integer)):
            raise ValueError(f"precision must be an integer, got {precision!r}")
        self._precision = int(precision)

    def get_intercept(self) -> float:
        return round_half_up(self._intercept, self._precision)

    def get_scale(self) -> float:
        return round_half_up(self._slope, self._precision)

    @property
    def intercept(self) -> float:
        """Intercept rounded to ``precision`` decimals."""
        return self.get_intercept()

    @property
    def scale(self) -> float:
        """Slope rounded to ``precision`` decimals."""
        return self.get_scale()

    @property
    def precision(self) -> int:
        return self._precision

    @property
    def raw_intercept(self) -> float:
        return self._intercept

    @property
    def raw_scale(self) -> float:
        return self._slope

    def transform(
        self, x: float | NDArray[np.float64]
    ) -> float | NDArray[np.float64]:
        """Apply ``slope * x + intercept`` with the unrounded constants."""
        if np.ndim(x) == 0:
            return self._slope * float(x) + self._intercept
        return self._slope * np.asarray(x, dtype=np.float64) + self._intercept

    def __repr__(self) -> str:
        return (
            f"LinearTransformation(intercept={self._intercept!r}, "
            f"scale={self._slope!r}, precision={self._precision})"
        )
