from irteq.models.base import ItemResponseModel, item_collection
from irteq.models.dichotomous import (
    Rasch,
    ThreeParameterLogistic,
    TwoParameterLogistic,
)
from irteq.models.polytomous import GeneralizedPartialCredit, GradedResponseModel

__all__ = [
    # Base class
    "ItemResponseModel",
    "item_collection",
    # Dichotomous items
    "Rasch",
    "TwoParameterLogistic",
    "ThreeParameterLogistic",
    # Polytomous items
    "GradedResponseModel",
    "GeneralizedPartialCredit",
]
