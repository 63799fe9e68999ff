"""Characteristic curve equating for IRT common-item designs.

This module provides Stocking-Lord linking of two separately calibrated
test forms:

- Equating criteria Q1 (Form Y scale), Q2 (Form X scale) and Q1Q2 (both)
- The Stocking-Lord objective and its gradient for external optimizers
- An optimizer driver built on :func:`scipy.optimize.minimize`
- The fitted linear transformation with rounded reporting

Examples
--------
Link two forms sharing common items:

>>> from irteq.equating import link
>>> result = link(form_x, form_y, criterion="Q1Q2")
>>> print(f"A = {result.transformation.get_scale()}, B = {result.transformation.get_intercept()}")

Evaluate the criterion directly:

>>> from irteq.equating import StockingLordMethod
>>> sl = StockingLordMethod(form_x, form_y, x_quad, y_quad, "Q1")
>>> sl.value([0.0, 1.0])
"""

from irteq.equating.criterion import EquatingCriterion
from irteq.equating.linking import (
    LinkingConstants,
    LinkingResult,
    link,
    transform_parameters,
    transform_theta,
)
from irteq.equating.stocking_lord import StockingLordMethod
from irteq.equating.transformation import LinearTransformation

__all__ = [
    # Criterion
    "EquatingCriterion",
    "StockingLordMethod",
    # Linking
    "link",
    "transform_parameters",
    "transform_theta",
    "LinkingConstants",
    "LinkingResult",
    "LinearTransformation",
]
