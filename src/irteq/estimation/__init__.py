from irteq.estimation.quadrature import (
    DistributionApproximation,
    GaussHermiteQuadrature,
    NormalDistributionApproximation,
    UserDefinedDistribution,
)

__all__ = [
    "DistributionApproximation",
    "GaussHermiteQuadrature",
    "NormalDistributionApproximation",
    "UserDefinedDistribution",
]
