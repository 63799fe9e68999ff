"""Dichotomous IRT items: Rasch, 2PL, 3PL."""

import numpy as np
from numpy.typing import NDArray

from irteq._core import sigmoid
from irteq.models.base import ItemResponseModel


class ThreeParameterLogistic(ItemResponseModel):
    """Three-Parameter Logistic (3PL) item.

    P(X=1|θ) = c + (1 - c) / (1 + exp(-D * a * (θ - b)))

    The lower asymptote ``c`` is not affected by a change of scale, so the
    transformed expected values only rescale ``a`` and ``b``.

    Parameters
    ----------
    discrimination : float, default=1.0
        Item discrimination (a).
    difficulty : float, default=0.0
        Item difficulty (b).
    guessing : float, default=0.0
        Lower asymptote (c), in [0, 1).
    scaling_constant : float, default=1.0
        Scaling constant D; use ``NORMAL_OGIVE_SCALING`` (1.7) for the
        normal-ogive metric.

    Examples
    --------
    >>> item = ThreeParameterLogistic(1.2, -0.5, 0.2)
    >>> round(item.expected_value(-0.5), 4)
    0.6
    """

    model_name = "3PL"

    def __init__(
        self,
        discrimination: float = 1.0,
        difficulty: float = 0.0,
        guessing: float = 0.0,
        scaling_constant: float = 1.0,
    ) -> None:
        guessing = float(guessing)
        if not 0.0 <= guessing < 1.0:
            raise ValueError(f"guessing must be in [0, 1), got {guessing}")
        super().__init__(discrimination, [difficulty], scaling_constant)
        self._guessing = guessing

    @property
    def difficulty(self) -> float:
        return float(self._locations[0])

    @property
    def guessing(self) -> float:
        return self._guessing

    def probability(
        self, theta: float | NDArray[np.float64]
    ) -> float | NDArray[np.float64]:
        """Compute P(X=1|θ)."""
        return self.expected_value(theta)

    def _expected_value(
        self,
        theta: NDArray[np.float64],
        discrimination: float,
        locations: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        z = self.scaling_constant * discrimination * (theta - locations[0])
        c = self._guessing
        return c + (1.0 - c) * sigmoid(z)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"a={self._discrimination:.4f}, "
            f"b={self.difficulty:.4f}, "
            f"c={self._guessing:.4f}, "
            f"D={self.scaling_constant})"
        )


class TwoParameterLogistic(ThreeParameterLogistic):
    """Two-Parameter Logistic (2PL) item.

    P(X=1|θ) = 1 / (1 + exp(-D * a * (θ - b)))
    """

    model_name = "2PL"

    def __init__(
        self,
        discrimination: float = 1.0,
        difficulty: float = 0.0,
        scaling_constant: float = 1.0,
    ) -> None:
        super().__init__(discrimination, difficulty, 0.0, scaling_constant)


class Rasch(ThreeParameterLogistic):
    """Rasch item with unit discrimination.

    A Rasch item rescaled with a slope other than one keeps its logistic form
    but carries discrimination ``1 / A``.
    """

    model_name = "Rasch"

    def __init__(self, difficulty: float = 0.0, scaling_constant: float = 1.0) -> None:
        super().__init__(1.0, difficulty, 0.0, scaling_constant)
