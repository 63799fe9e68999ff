"""IRT common-item equating with the Stocking-Lord method."""

from irteq._config import get_option, get_options, reset_options, set_option
from irteq._version import __version__
from irteq.equating import (
    EquatingCriterion,
    LinearTransformation,
    LinkingConstants,
    LinkingResult,
    StockingLordMethod,
    link,
    transform_parameters,
    transform_theta,
)
from irteq.estimation.quadrature import (
    DistributionApproximation,
    GaussHermiteQuadrature,
    NormalDistributionApproximation,
    UserDefinedDistribution,
)
from irteq.exceptions import DimensionMismatchError
from irteq.models import (
    GeneralizedPartialCredit,
    GradedResponseModel,
    ItemResponseModel,
    Rasch,
    ThreeParameterLogistic,
    TwoParameterLogistic,
    item_collection,
)
from irteq.utils.histogram import SimpleBinCalculation

__all__ = [
    "__version__",
    # Configuration
    "set_option",
    "get_option",
    "get_options",
    "reset_options",
    # Equating
    "EquatingCriterion",
    "StockingLordMethod",
    "LinearTransformation",
    "LinkingConstants",
    "LinkingResult",
    "link",
    "transform_parameters",
    "transform_theta",
    "DimensionMismatchError",
    # Quadrature
    "DistributionApproximation",
    "GaussHermiteQuadrature",
    "NormalDistributionApproximation",
    "UserDefinedDistribution",
    # Items
    "ItemResponseModel",
    "item_collection",
    "Rasch",
    "TwoParameterLogistic",
    "ThreeParameterLogistic",
    "GradedResponseModel",
    "GeneralizedPartialCredit",
    # Utilities
    "SimpleBinCalculation",
]
