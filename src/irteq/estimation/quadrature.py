"""Quadrature approximations of ability distributions."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

import numpy as np
from numpy.typing import NDArray
from scipy.special import roots_hermite
from scipy.stats import norm


class DistributionApproximation(ABC):
    """Discrete (point, weight) approximation of an ability distribution.

    Subclasses supply the points and weights through
    :meth:`_compute_quadrature`. Points keep their given order, and weights
    are treated as unnormalized densities by the equating criteria.

    Attributes
    ----------
    points : ndarray of shape (n_points,)
        Quadrature points.
    weights : ndarray of shape (n_points,)
        Density weights.
    n_points : int
        Number of points.
    """

    def __init__(self) -> None:
        points, weights = self._compute_quadrature()
        self._points, self._weights = _validate_quadrature(points, weights)

    @abstractmethod
    def _compute_quadrature(
        self,
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]: ...

    @property
    def n_points(self) -> int:
        """Number of quadrature points."""
        return len(self._weights)

    @property
    def points(self) -> NDArray[np.float64]:
        """Quadrature points."""
        return self._points.copy()

    @property
    def weights(self) -> NDArray[np.float64]:
        """Density weights."""
        return self._weights.copy()

    def point_at(self, index: int) -> float:
        """Return the ability value of quadrature point ``index``."""
        self._check_index(index)
        return float(self._points[index])

    def density_at(self, index: int) -> float:
        """Return the weight of quadrature point ``index``."""
        self._check_index(index)
        return float(self._weights[index])

    def mean(self) -> float:
        """Weighted mean of the points."""
        return float(np.sum(self._weights * self._points) / np.sum(self._weights))

    def sd(self) -> float:
        """Weighted standard deviation of the points."""
        center = self.mean()
        variance = np.sum(self._weights * (self._points - center) ** 2) / np.sum(
            self._weights
        )
        return float(np.sqrt(variance))

    def integrate(self, func: Callable[[NDArray[np.float64]], NDArray]) -> float:
        """Approximate ∫ f(θ) g(θ) dθ as Σ w_i × f(θ_i).

        Parameters
        ----------
        func : callable
            Function accepting an array of shape (n_points,) and returning an
            array of the same shape.

        Returns
        -------
        float
            Approximate integral value.
        """
        values = func(self._points)
        return float(np.sum(self._weights * values))

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= self.n_points:
            raise IndexError(
                f"Quadrature index {index} out of range [0, {self.n_points})"
            )

    def __len__(self) -> int:
        return self.n_points

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(n_points={self.n_points})"


class UserDefinedDistribution(DistributionApproximation):
    """Quadrature with caller-supplied points and weights.

    Parameters
    ----------
    points : array_like of shape (n_points,)
        Ability values.
    weights : array_like of shape (n_points,)
        Non-negative density weights. They need not sum to one.

    Examples
    --------
    >>> dist = UserDefinedDistribution([-1.0, 0.0, 1.0], [0.25, 0.5, 0.25])
    >>> dist.point_at(2), dist.density_at(2)
    (1.0, 0.25)
    """

    def __init__(
        self,
        points: Sequence[float] | NDArray[np.float64],
        weights: Sequence[float] | NDArray[np.float64],
    ) -> None:
        self._given = (points, weights)
        super().__init__()

    def _compute_quadrature(
        self,
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        points, weights = self._given
        return np.array(points, dtype=np.float64), np.array(weights, dtype=np.float64)


class GaussHermiteQuadrature(DistributionApproximation):
    """Gauss-Hermite quadrature for a normal ability distribution.

    Provides nodes and weights such that

        ∫ f(x) × φ(x; μ, σ) dx ≈ Σ w_i × f(x_i)

    Weights sum to one.

    Parameters
    ----------
    n_points : int, default=41
        Number of quadrature points.
    mean : float, default=0.0
        Mean of the normal distribution.
    sd : float, default=1.0
        Standard deviation of the normal distribution.

    Examples
    --------
    >>> quad = GaussHermiteQuadrature(n_points=21)
    >>> round(quad.integrate(lambda x: x**2), 6)
    1.0
    """

    def __init__(self, n_points: int = 41, mean: float = 0.0, sd: float = 1.0) -> None:
        if n_points < 1:
            raise ValueError("n_points must be at least 1")
        if not sd > 0:
            raise ValueError("sd must be positive")

        self.mean_ = float(mean)
        self.sd_ = float(sd)
        self._n_requested = int(n_points)
        super().__init__()

    def _compute_quadrature(
        self,
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Compute quadrature nodes and weights."""
        # scipy's roots_hermite returns physicist's Hermite polynomials
        nodes, weights = roots_hermite(self._n_requested)

        # Physicist: ∫ f(x) exp(-x²) dx
        # Probabilist: ∫ f(x) (1/√(2π)) exp(-x²/2) dx
        nodes = nodes * np.sqrt(2) * self.sd_ + self.mean_
        weights = weights / np.sqrt(np.pi)
        return nodes, weights

    def __repr__(self) -> str:
        return (
            f"GaussHermiteQuadrature(n_points={self.n_points}, "
            f"mean={self.mean_}, sd={self.sd_})"
        )


class NormalDistributionApproximation(DistributionApproximation):
    """Evenly spaced grid weighted by the normal density.

    Alternative to Gauss-Hermite when uniform spacing over a fixed ability
    range is desired. Weights are normalized to sum to one.

    Parameters
    ----------
    n_points : int, default=41
        Number of grid points.
    mean : float, default=0.0
        Mean of the normal density.
    sd : float, default=1.0
        Standard deviation of the normal density.
    theta_range : tuple of float, default=(-4.0, 4.0)
        Range (min, max) of the grid.
    """

    def __init__(
        self,
        n_points: int = 41,
        mean: float = 0.0,
        sd: float = 1.0,
        theta_range: tuple[float, float] = (-4.0, 4.0),
    ) -> None:
        if n_points < 1:
            raise ValueError("n_points must be at least 1")
        if not sd > 0:
            raise ValueError("sd must be positive")
        if theta_range[0] > theta_range[1]:
            raise ValueError("theta_range must be (min, max)")

        self.mean_ = float(mean)
        self.sd_ = float(sd)
        self.theta_range = (float(theta_range[0]), float(theta_range[1]))
        self._n_requested = int(n_points)
        super().__init__()

    def _compute_quadrature(
        self,
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        points = np.linspace(self.theta_range[0], self.theta_range[1], self._n_requested)
        weights = norm.pdf(points, loc=self.mean_, scale=self.sd_)
        weights = weights / weights.sum()
        return points, weights

    def __repr__(self) -> str:
        return (
            f"NormalDistributionApproximation(n_points={self.n_points}, "
            f"mean={self.mean_}, sd={self.sd_}, theta_range={self.theta_range})"
        )


def _validate_quadrature(
    points: NDArray[np.float64],
    weights: NDArray[np.float64],
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    if points.ndim != 1 or weights.ndim != 1:
        raise ValueError("points and weights must be 1D")
    if points.shape != weights.shape:
        raise ValueError(
            f"Length of points ({points.size}) must match weights ({weights.size})"
        )
    if not np.all(np.isfinite(points)) or not np.all(np.isfinite(weights)):
        raise ValueError("points and weights must be finite")
    if np.any(weights < 0):
        raise ValueError("weights must be non-negative")
    return points, weights
