import copy
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Self

import numpy as np
from numpy.typing import NDArray


class ItemResponseModel(ABC):
    """Single calibrated item on a unidimensional logistic scale.

    Every item is described by a discrimination ``a`` and one or more
    location parameters ``b``. A linear change of ability scale
    ``theta* = A * theta + B`` maps the parameters to ``a / A`` and
    ``A * b + B``; the transformed expected values below evaluate the item
    under such a rescaling without changing the stored parameters.

    Parameters
    ----------
    discrimination : float
        Item slope.
    locations : sequence of float
        Item location parameters (difficulty, thresholds or steps).
    scaling_constant : float, default=1.0
        Scaling constant D multiplying the logit.
    """

    model_name: str = "BaseModel"

    def __init__(
        self,
        discrimination: float,
        locations: Sequence[float] | NDArray[np.float64],
        scaling_constant: float = 1.0,
    ) -> None:
        discrimination = float(discrimination)
        locations = np.atleast_1d(np.asarray(locations, dtype=np.float64))

        if not discrimination > 0:
            raise ValueError(f"discrimination must be positive, got {discrimination}")
        if not scaling_constant > 0:
            raise ValueError(
                f"scaling_constant must be positive, got {scaling_constant}"
            )
        if locations.ndim != 1 or locations.size == 0:
            raise ValueError("locations must be a non-empty 1D sequence")
        if not np.all(np.isfinite(locations)):
            raise ValueError("locations must be finite")

        self._discrimination = discrimination
        self._locations = locations
        self.scaling_constant = float(scaling_constant)

    @abstractmethod
    def _expected_value(
        self,
        theta: NDArray[np.float64],
        discrimination: float,
        locations: NDArray[np.float64],
    ) -> NDArray[np.float64]: ...

    @property
    def discrimination(self) -> float:
        return self._discrimination

    @property
    def locations(self) -> NDArray[np.float64]:
        return self._locations.copy()

    @property
    def n_categories(self) -> int:
        return self._locations.size + 1

    @property
    def max_score(self) -> int:
        return self.n_categories - 1

    def expected_value(
        self, theta: float | NDArray[np.float64]
    ) -> float | NDArray[np.float64]:
        """Expected item score at ``theta``."""
        return self._evaluate(theta, self._discrimination, self._locations)

    def t_star_expected_value(
        self,
        theta: float | NDArray[np.float64],
        intercept: float,
        slope: float,
    ) -> float | NDArray[np.float64]:
        """Expected score with parameters moved onto the new scale.

        Used for Form X items: ``a* = a / A`` and ``b* = A * b + B``. A zero
        slope yields inf or nan rather than raising.
        """
        intercept, slope = np.float64(intercept), np.float64(slope)
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._evaluate(
                theta,
                self._discrimination / slope,
                slope * self._locations + intercept,
            )

    def t_sharp_expected_value(
        self,
        theta: float | NDArray[np.float64],
        intercept: float,
        slope: float,
    ) -> float | NDArray[np.float64]:
        """Expected score with parameters moved back onto the old scale.

        Used for Form Y items: ``a# = A * a`` and ``b# = (b - B) / A``.
        """
        intercept, slope = np.float64(intercept), np.float64(slope)
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._evaluate(
                theta,
                self._discrimination * slope,
                (self._locations - intercept) / slope,
            )

    def scaled(self, intercept: float, slope: float) -> Self:
        """Return a copy with parameters linearly transformed to a new scale."""
        if slope == 0:
            raise ValueError("slope must be non-zero")
        new_item = copy.copy(self)
        new_item._discrimination = self._discrimination / slope
        new_item._locations = slope * self._locations + intercept
        return new_item

    def _evaluate(
        self,
        theta: float | NDArray[np.float64],
        discrimination: float,
        locations: NDArray[np.float64],
    ) -> float | NDArray[np.float64]:
        theta_arr = np.asarray(theta, dtype=np.float64)
        values = self._expected_value(theta_arr.ravel(), discrimination, locations)
        if theta_arr.ndim == 0:
            return float(values[0])
        return values.reshape(theta_arr.shape)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"discrimination={self._discrimination:.4f}, "
            f"locations={np.array2string(self._locations, precision=4)}, "
            f"scaling_constant={self.scaling_constant})"
        )


def item_collection(
    names: Sequence[str],
    discrimination: Sequence[float] | NDArray[np.float64],
    difficulty: Sequence[float] | NDArray[np.float64],
    guessing: Sequence[float] | NDArray[np.float64] | None = None,
    scaling_constant: float = 1.0,
) -> dict[str, ItemResponseModel]:
    """Build an ordered form of dichotomous items from parameter arrays.

    Parameters
    ----------
    names : sequence of str
        Unique item identifiers. Their order is the iteration order.
    discrimination : array_like of shape (n_items,)
        Item slopes.
    difficulty : array_like of shape (n_items,)
        Item difficulties.
    guessing : array_like of shape (n_items,), optional
        Lower asymptotes. Defaults to zero (2PL items).
    scaling_constant : float, default=1.0
        Scaling constant D shared by all items.

    Returns
    -------
    dict of str to ItemResponseModel
        Items keyed by name in the given order.
    """
    from irteq.models.dichotomous import ThreeParameterLogistic

    names = list(names)
    disc = np.asarray(discrimination, dtype=np.float64)
    diff = np.asarray(difficulty, dtype=np.float64)
    guess = (
        np.zeros(len(names))
        if guessing is None
        else np.asarray(guessing, dtype=np.float64)
    )

    if len(set(names)) != len(names):
        raise ValueError("Item names must be unique")
    for label, values in (
        ("discrimination", disc),
        ("difficulty", diff),
        ("guessing", guess),
    ):
        if values.shape != (len(names),):
            raise ValueError(
                f"Length of {label} ({values.size}) must match number of names "
                f"({len(names)})"
            )

    return {
        name: ThreeParameterLogistic(
            discrimination=disc[i],
            difficulty=diff[i],
            guessing=guess[i],
            scaling_constant=scaling_constant,
        )
        for i, name in enumerate(names)
    }
