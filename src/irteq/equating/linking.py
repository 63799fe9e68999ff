"""Stocking-Lord linking of two separately calibrated forms.

This module drives :class:`~irteq.equating.stocking_lord.StockingLordMethod`
with :func:`scipy.optimize.minimize` and collects the fitted transformation
constants.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy import optimize

from irteq.equating.criterion import EquatingCriterion
from irteq.equating.stocking_lord import StockingLordMethod
from irteq.equating.transformation import LinearTransformation
from irteq.estimation.quadrature import (
    DistributionApproximation,
    GaussHermiteQuadrature,
)
from irteq.models.base import ItemResponseModel
from irteq.typing import CriterionLike, ItemCollection, OptimizerMethod

_GRADIENT_METHODS = ("BFGS", "L-BFGS-B", "CG")
_DERIVATIVE_FREE_METHODS = ("Nelder-Mead", "Powell")


@dataclass
class LinkingConstants:
    """Linear transformation constants for IRT linking.

    Attributes
    ----------
    A : float
        Slope of linear transformation.
    B : float
        Intercept of linear transformation.
    method : str
        Optimizer used.
    criterion : EquatingCriterion
        Criterion minimized.
    """

    A: float
    B: float
    method: str = ""
    criterion: EquatingCriterion = EquatingCriterion.Q1Q2


@dataclass
class LinkingResult:
    """Result of Stocking-Lord linking.

    Attributes
    ----------
    constants : LinkingConstants
        Transformation constants A and B at full precision.
    transformation : LinearTransformation
        Fitted transformation reporting rounded constants.
    common_items : tuple[str, ...]
        Identifiers of the common items, in summation order.
    criterion_value : float
        Criterion at the fitted constants.
    convergence_info : dict
        Optimization convergence information.
    """

    constants: LinkingConstants
    transformation: LinearTransformation
    common_items: tuple[str, ...]
    criterion_value: float
    convergence_info: dict


def link(
    item_form_x: ItemCollection,
    item_form_y: ItemCollection,
    x_distribution: DistributionApproximation | None = None,
    y_distribution: DistributionApproximation | None = None,
    criterion: CriterionLike = EquatingCriterion.Q1Q2,
    method: OptimizerMethod = "BFGS",
    start: tuple[float, float] = (0.0, 1.0),
    precision: int | None = None,
    max_iter: int = 500,
    tol: float = 1e-6,
    verbose: bool = False,
) -> LinkingResult:
    """Find the Stocking-Lord constants placing Form X on the Form Y scale.

    Finds A and B such that:
        theta_Y = A * theta_X + B
        a_Y = a_X / A
        b_Y = A * b_X + B

    Parameters
    ----------
    item_form_x : mapping of str to ItemResponseModel
        Common items calibrated on Form X.
    item_form_y : mapping of str to ItemResponseModel
        Common items calibrated on Form Y.
    x_distribution : DistributionApproximation, optional
        Form X ability quadrature. Defaults to standard normal Gauss-Hermite
        points, unless the criterion is Q1, in which case it is not needed.
    y_distribution : DistributionApproximation, optional
        Form Y ability quadrature. Defaults to standard normal Gauss-Hermite
        points.
    criterion : EquatingCriterion or str, default="Q1Q2"
        Criterion to minimize.
    method : str, default="BFGS"
        Optimizer passed to :func:`scipy.optimize.minimize`:
        - "BFGS", "L-BFGS-B", "CG": use the objective gradient
        - "Nelder-Mead", "Powell": derivative free
    start : tuple of float, default=(0.0, 1.0)
        Starting values ``(B, A)``.
    precision : int, optional
        Decimal places reported by the returned transformation.
    max_iter : int, default=500
        Maximum optimizer iterations.
    tol : float, default=1e-6
        Optimizer tolerance.
    verbose : bool, default=False
        Whether to print progress information.

    Returns
    -------
    LinkingResult
        Transformation constants and convergence information.

    Examples
    --------
    >>> result = link(form_x, form_y, criterion="Q1")
    >>> A, B = result.constants.A, result.constants.B
    >>> theta_on_y = A * theta_x + B
    """
    criterion = EquatingCriterion.parse(criterion)

    if method not in _GRADIENT_METHODS + _DERIVATIVE_FREE_METHODS:
        raise ValueError(f"Unknown optimization method: {method}")
    if max_iter < 1:
        raise ValueError("max_iter must be at least 1")
    if tol <= 0:
        raise ValueError("tol must be positive")

    if y_distribution is None:
        y_distribution = GaussHermiteQuadrature()
    if x_distribution is None and criterion.uses_x_distribution:
        x_distribution = GaussHermiteQuadrature()

    objective = StockingLordMethod(
        item_form_x, item_form_y, x_distribution, y_distribution, criterion
    )
    if precision is not None:
        objective.set_precision(precision)

    iteration = 0

    def callback(xk: NDArray[np.float64]) -> None:
        nonlocal iteration
        iteration += 1
        if not verbose:
            return
        _log_iteration(verbose, iteration, objective.value(xk), B=xk[0], A=xk[1])

    minimize_kwargs: dict = {
        "method": method,
        "tol": tol,
        "options": {"maxiter": max_iter},
        "callback": callback,
    }
    if method in _GRADIENT_METHODS:
        minimize_kwargs["jac"] = objective.objective_function_gradient()

    result = optimize.minimize(
        objective.objective_function(),
        np.array(start, dtype=np.float64),
        **minimize_kwargs,
    )

    B, A = (float(v) for v in result.x)
    objective.set_intercept(B)
    objective.set_scale(A)

    if verbose:
        print(
            f"Stocking-Lord ({criterion.value}, {method}): "
            f"A = {objective.get_scale()}, B = {objective.get_intercept()}, "
            f"F = {float(result.fun):.6g}, converged = {bool(result.success)}"
        )

    return LinkingResult(
        constants=LinkingConstants(A=A, B=B, method=method, criterion=criterion),
        transformation=objective.transformation,
        common_items=objective.common_items,
        criterion_value=float(result.fun),
        convergence_info={
            "method": method,
            "criterion": criterion.value,
            "success": bool(result.success),
            "fun": float(result.fun),
            "nit": int(getattr(result, "nit", iteration)),
            "nfev": int(result.nfev),
            "message": str(result.message),
        },
    )


def transform_parameters(
    items: ItemCollection,
    A: float,
    B: float,
) -> dict[str, ItemResponseModel]:
    """Apply a linear transformation to every item of a form.

    For discrimination: a_new = a / A
    For locations: b_new = A * b + B

    Parameters
    ----------
    items : mapping of str to ItemResponseModel
        Items to transform. Not modified.
    A : float
        Slope of transformation.
    B : float
        Intercept of transformation.

    Returns
    -------
    dict of str to ItemResponseModel
        Transformed copies in the original order.
    """
    return {name: item.scaled(B, A) for name, item in items.items()}


def transform_theta(
    theta: float | NDArray[np.float64],
    constants: LinkingConstants,
) -> float | NDArray[np.float64]:
    """Place Form X abilities on the Form Y scale: ``A * theta + B``."""
    if np.ndim(theta) == 0:
        return constants.A * float(theta) + constants.B
    return constants.A * np.asarray(theta, dtype=np.float64) + constants.B


def _log_iteration(
    verbose: bool,
    iteration: int,
    criterion_value: float,
    **kwargs: float,
) -> None:
    """Print iteration progress if verbose mode is on."""
    if verbose:
        extras = ", ".join(f"{k}={v:.4f}" for k, v in kwargs.items())
        msg = f"Iteration {iteration:4d}: F = {criterion_value:.6g}"
        if extras:
            msg += f", {extras}"
        print(msg)
