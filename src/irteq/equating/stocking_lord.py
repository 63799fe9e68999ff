"""Stocking-Lord characteristic curve criterion.

The criterion compares the common items' test characteristic curve (TCC)
on one form with the TCC of the other form's calibration after it has been
placed on the same scale by a candidate linear transformation. Following
Kim and Kolen (2007):

    F1 = Σ_i w_i [T_Y(θ_i) - T*(θ_i; A, B)]² / Σ_i w_i     (Form Y scale)
    F2 = Σ_j w_j [T_X(θ_j) - T#(θ_j; A, B)]² / Σ_j w_j     (Form X scale)

where T* restates the Form X items on the Form Y scale and T# restates the
Form Y items on the Form X scale. Criterion Q1 minimizes F1, Q2 minimizes
F2 and Q1Q2 minimizes F1 + F2.
"""

from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray

from irteq._config import get_option
from irteq.equating.criterion import EquatingCriterion
from irteq.equating.transformation import LinearTransformation
from irteq.estimation.quadrature import DistributionApproximation
from irteq.exceptions import DimensionMismatchError
from irteq.typing import CoefficientVector, CriterionLike, ItemCollection


class StockingLordMethod:
    """Stocking-Lord objective for common-item linking of two forms.

    The object is a function of the coefficient vector ``[B, A]``
    (intercept, slope) suitable for black-box and gradient-based optimizers.
    It also records the fitted constants through the
    :class:`~irteq.equating.transformation.LinearTransformation` interface.

    Parameters
    ----------
    item_form_x : mapping of str to ItemResponseModel
        Common items calibrated on Form X.
    item_form_y : mapping of str to ItemResponseModel
        Common items calibrated on Form Y. Its key order is the summation
        order for every true score.
    x_distribution : DistributionApproximation or None
        Ability quadrature on the Form X scale. If None, the criterion is
        forced to Q1.
    y_distribution : DistributionApproximation
        Ability quadrature on the Form Y scale.
    criterion : EquatingCriterion or str, default=EquatingCriterion.Q1Q2
        Discrepancy to minimize.
    gradient_step : float, optional
        Relative step for the finite-difference gradient. Defaults to the
        ``"gradient_step"`` option.

    Raises
    ------
    DimensionMismatchError
        If the two forms do not contain exactly the same item identifiers.

    Notes
    -----
    The common-item identifiers are captured once at construction. Adding or
    removing items from either collection afterwards is not re-validated.

    Examples
    --------
    >>> from irteq.models import item_collection
    >>> from irteq.estimation import GaussHermiteQuadrature
    >>> form_x = item_collection(["i1", "i2"], [1.0, 1.2], [-0.5, 0.5])
    >>> form_y = {k: item.scaled(0.5, 1.2) for k, item in form_x.items()}
    >>> quad = GaussHermiteQuadrature(n_points=11)
    >>> sl = StockingLordMethod(form_x, form_y, quad, quad, "Q1Q2")
    >>> sl.value([0.5, 1.2]) < 1e-20
    True
    """

    def __init__(
        self,
        item_form_x: ItemCollection,
        item_form_y: ItemCollection,
        x_distribution: DistributionApproximation | None,
        y_distribution: DistributionApproximation,
        criterion: CriterionLike = EquatingCriterion.Q1Q2,
        gradient_step: float | None = None,
    ) -> None:
        self._item_form_x = item_form_x
        self._item_form_y = item_form_y
        self._x_distribution = x_distribution
        self._y_distribution = y_distribution

        if x_distribution is None:
            EquatingCriterion.parse(criterion)
            self._criterion = EquatingCriterion.Q1
            self._x_distribution_size = 0
        else:
            self._criterion = EquatingCriterion.parse(criterion)
            self._x_distribution_size = x_distribution.n_points
        self._y_distribution_size = y_distribution.n_points

        if gradient_step is None:
            gradient_step = get_option("gradient_step")
        if not gradient_step > 0:
            raise ValueError(f"gradient_step must be positive, got {gradient_step}")
        self._gradient_step = float(gradient_step)

        self._common_items = self._check_dimensions()
        self._transformation = LinearTransformation()

    @classmethod
    def from_y_distribution(
        cls,
        item_form_x: ItemCollection,
        item_form_y: ItemCollection,
        y_distribution: DistributionApproximation,
        criterion: CriterionLike = EquatingCriterion.Q1,
    ) -> "StockingLordMethod":
        """Build a Form-Y-only objective.

        Without a Form X distribution only F1 can be evaluated, so the
        criterion is always Q1 whatever ``criterion`` requests.
        """
        return cls(item_form_x, item_form_y, None, y_distribution, criterion)

    def _check_dimensions(self) -> tuple[str, ...]:
        """Verify both forms index the same items and return the common keys.

        The Form Y key order is used for every aggregation hereafter.
        """
        keys_x = self._item_form_x.keys()
        keys_y = self._item_form_y.keys()
        if len(keys_x) != len(keys_y):
            raise DimensionMismatchError(len(self._item_form_x), len(self._item_form_y))

        mismatch = sum(1 for key in keys_x if key not in keys_y)
        mismatch += sum(1 for key in keys_y if key not in keys_x)
        if mismatch > 0:
            raise DimensionMismatchError(mismatch, 0)

        return tuple(keys_y)

    @property
    def criterion(self) -> EquatingCriterion:
        return self._criterion

    @property
    def common_items(self) -> tuple[str, ...]:
        return self._common_items

    @property
    def x_distribution(self) -> DistributionApproximation | None:
        return self._x_distribution

    @property
    def y_distribution(self) -> DistributionApproximation:
        return self._y_distribution

    @property
    def transformation(self) -> LinearTransformation:
        return self._transformation

    def value(self, coefficients: CoefficientVector) -> float:
        """Evaluate the criterion at ``coefficients = [B, A]``."""
        if self._criterion is EquatingCriterion.Q1:
            return self.get_f1(coefficients)
        elif self._criterion is EquatingCriterion.Q2:
            return self.get_f2(coefficients)
        elif self._criterion is EquatingCriterion.Q1Q2:
            return self.get_f1(coefficients) + self.get_f2(coefficients)
        raise ValueError(f"Unknown equating criterion: {self._criterion}")

    __call__ = value

    def gradient(self, coefficients: CoefficientVector) -> NDArray[np.float64]:
        """Central finite-difference gradient of :meth:`value`.

        Parameters
        ----------
        coefficients : sequence of float
            ``[B, A]``. Not modified.

        Returns
        -------
        ndarray of shape (2,)
            Partial derivatives with respect to B and A.
        """
        x = np.array(coefficients, dtype=np.float64)
        grad = np.zeros_like(x)

        for j in range(x.size):
            h = self._gradient_step * max(1.0, abs(x[j]))
            forward = x.copy()
            backward = x.copy()
            forward[j] += h
            backward[j] -= h
            grad[j] = (self.value(forward) - self.value(backward)) / (
                forward[j] - backward[j]
            )

        return grad

    def objective_function(self) -> Callable[[CoefficientVector], float]:
        """Return the criterion as a plain callable for an optimizer."""
        return self.value

    def objective_function_gradient(
        self,
    ) -> Callable[[CoefficientVector], NDArray[np.float64]]:
        """Return the gradient as a plain callable for an optimizer."""
        return self.gradient

    def get_f1(self, coefficients: CoefficientVector) -> float:
        """Criterion F1: weighted mean squared TCC difference on the Form Y scale."""
        total = 0.0
        weight_sum = 0.0

        for i in range(self._y_distribution_size):
            theta = self._y_distribution.point_at(i)
            weight = self._y_distribution.density_at(i)
            weight_sum += weight
            dif = self.form_y_tcc_at_theta(theta) - self.t_star_at_theta(
                coefficients, theta
            )
            total += dif**2 * weight

        return _weighted_mean(total, weight_sum)

    def get_f2(self, coefficients: CoefficientVector) -> float:
        """Criterion F2: weighted mean squared TCC difference on the Form X scale."""
        if self._x_distribution is None:
            raise ValueError("F2 requires a Form X ability distribution")

        total = 0.0
        weight_sum = 0.0

        for i in range(self._x_distribution_size):
            theta = self._x_distribution.point_at(i)
            weight = self._x_distribution.density_at(i)
            weight_sum += weight
            dif = self.form_x_tcc_at_theta(theta) - self.t_sharp_at_theta(
                coefficients, theta
            )
            total += dif**2 * weight

        return _weighted_mean(total, weight_sum)

    def form_y_tcc_at_theta(self, theta: float) -> float:
        """True score of the common items under the Form Y calibration."""
        tcc = 0.0
        for key in self._common_items:
            tcc += self._item_form_y[key].expected_value(theta)
        return tcc

    def form_x_tcc_at_theta(self, theta: float) -> float:
        """True score of the common items under the Form X calibration."""
        tcc = 0.0
        for key in self._common_items:
            tcc += self._item_form_x[key].expected_value(theta)
        return tcc

    def t_star_at_theta(self, coefficients: CoefficientVector, theta: float) -> float:
        """Form X true score restated on the Form Y scale."""
        intercept, slope = coefficients[0], coefficients[1]
        t_star = 0.0
        for key in self._common_items:
            t_star += self._item_form_x[key].t_star_expected_value(
                theta, intercept, slope
            )
        return t_star

    def t_sharp_at_theta(self, coefficients: CoefficientVector, theta: float) -> float:
        """Form Y true score restated on the Form X scale."""
        intercept, slope = coefficients[0], coefficients[1]
        t_sharp = 0.0
        for key in self._common_items:
            t_sharp += self._item_form_y[key].t_sharp_expected_value(
                theta, intercept, slope
            )
        return t_sharp

    def set_intercept(self, intercept: float) -> None:
        self._transformation.set_intercept(intercept)

    def set_scale(self, scale: float) -> None:
        self._transformation.set_scale(scale)

    def set_precision(self, precision: int) -> None:
        self._transformation.set_precision(precision)

    def get_intercept(self) -> float:
        return self._transformation.get_intercept()

    def get_scale(self) -> float:
        return self._transformation.get_scale()

    def transform(self, x: float | NDArray[np.float64]) -> float | NDArray[np.float64]:
        return self._transformation.transform(x)

    def __repr__(self) -> str:
        return (
            f"StockingLordMethod(n_common_items={len(self._common_items)}, "
            f"criterion={self._criterion.value}, "
            f"x_points={self._x_distribution_size}, "
            f"y_points={self._y_distribution_size})"
        )


def _weighted_mean(total: float, weight_sum: float) -> float:
    # Zero total weight yields inf or nan rather than raising.
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(total) / np.float64(weight_sum))
