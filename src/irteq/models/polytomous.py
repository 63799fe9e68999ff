"""Polytomous IRT items: GRM, GPCM."""

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray
from scipy.special import softmax

from irteq._core import sigmoid
from irteq.models.base import ItemResponseModel


class GradedResponseModel(ItemResponseModel):
    """Graded Response Model (GRM) item - Samejima (1969).

    The GRM is a cumulative logit model for ordered polytomous responses.
    It models the probability of responding in category k or higher:

    P*(X ≥ k|θ) = 1 / (1 + exp(-D * a * (θ - b_k)))

    The probability of responding in exactly category k is:

    P(X = k|θ) = P*(X ≥ k|θ) - P*(X ≥ k+1|θ)

    With categories scored 0, ..., K-1 the expected score is the sum of the
    cumulative probabilities.

    Parameters
    ----------
    discrimination : float
        Item discrimination (a).
    thresholds : sequence of float
        K-1 strictly increasing category boundaries.
    scaling_constant : float, default=1.0
        Scaling constant D.

    Examples
    --------
    >>> item = GradedResponseModel(1.0, [-1.0, 0.0, 1.0])
    >>> round(item.expected_value(0.0), 6)
    1.5
    """

    model_name = "GRM"

    def __init__(
        self,
        discrimination: float,
        thresholds: Sequence[float] | NDArray[np.float64],
        scaling_constant: float = 1.0,
    ) -> None:
        super().__init__(discrimination, thresholds, scaling_constant)
        if np.any(np.diff(self._locations) <= 0):
            raise ValueError("thresholds must be strictly increasing")

    @property
    def thresholds(self) -> NDArray[np.float64]:
        return self.locations

    def cumulative_probability(
        self, theta: float | NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """Compute P*(X ≥ k|θ) for k = 1, ..., K-1.

        Returns
        -------
        ndarray of shape (n_theta, n_categories - 1)
        """
        theta = np.atleast_1d(np.asarray(theta, dtype=np.float64))
        return self._cumulative(theta, self._discrimination, self._locations)

    def category_probability(
        self, theta: float | NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """Compute P(X = k|θ) for all categories.

        Returns
        -------
        ndarray of shape (n_theta, n_categories)
        """
        cumulative = self.cumulative_probability(theta)
        n_theta = cumulative.shape[0]
        bounded = np.hstack([np.ones((n_theta, 1)), cumulative, np.zeros((n_theta, 1))])
        return bounded[:, :-1] - bounded[:, 1:]

    def _cumulative(
        self,
        theta: NDArray[np.float64],
        discrimination: float,
        locations: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        z = self.scaling_constant * discrimination * (theta[:, None] - locations[None, :])
        return sigmoid(z)

    def _expected_value(
        self,
        theta: NDArray[np.float64],
        discrimination: float,
        locations: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        return self._cumulative(theta, discrimination, locations).sum(axis=1)


class GeneralizedPartialCredit(ItemResponseModel):
    """Generalized Partial Credit Model (GPCM) item - Muraki (1992).

    The GPCM is an adjacent-category logit model:

    P(X = k|θ) = exp(Σ_{v=1}^{k} D a(θ - b_v)) / Σ_{c=0}^{K-1} exp(Σ_{v=1}^{c} D a(θ - b_v))

    where the empty sum for k = 0 is zero. The step parameters b_v are
    locations on the ability scale and transform like difficulties.

    Parameters
    ----------
    discrimination : float
        Item discrimination (a).
    steps : sequence of float
        K-1 step locations.
    scaling_constant : float, default=1.0
        Scaling constant D.
    """

    model_name = "GPCM"

    @property
    def steps(self) -> NDArray[np.float64]:
        return self.locations

    def category_probability(
        self, theta: float | NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """Compute P(X = k|θ) for all categories.

        Returns
        -------
        ndarray of shape (n_theta, n_categories)
        """
        theta = np.atleast_1d(np.asarray(theta, dtype=np.float64))
        return self._category_probability(theta, self._discrimination, self._locations)

    def _category_probability(
        self,
        theta: NDArray[np.float64],
        discrimination: float,
        locations: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        steps = self.scaling_constant * discrimination * (
            theta[:, None] - locations[None, :]
        )
        logits = np.hstack([np.zeros((theta.size, 1)), np.cumsum(steps, axis=1)])
        return softmax(logits, axis=1)

    def _expected_value(
        self,
        theta: NDArray[np.float64],
        discrimination: float,
        locations: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        probs = self._category_probability(theta, discrimination, locations)
        return probs @ np.arange(self.n_categories, dtype=np.float64)
