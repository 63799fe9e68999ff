"""Type definitions for the irteq package."""

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Literal, Union

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from irteq.equating.criterion import EquatingCriterion
    from irteq.models.base import ItemResponseModel

# Coefficient vector: [intercept (B), slope (A)]
CoefficientVector = Union[Sequence[float], NDArray[np.float64]]

# Form item collections keyed by item identifier
ItemCollection = Mapping[str, "ItemResponseModel"]

# Criterion given as an enum member or its name
CriterionLike = Union["EquatingCriterion", Literal["Q1", "Q2", "Q1Q2"], str]

# Optimizer literals
OptimizerMethod = Literal["BFGS", "L-BFGS-B", "CG", "Nelder-Mead", "Powell"]
