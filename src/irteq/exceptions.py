"""Exceptions raised by irteq."""


class DimensionMismatchError(ValueError):
    """Two collections that must be paired have incompatible dimensions.

    Parameters
    ----------
    dimension : int
        Observed dimension (or number of mismatched keys).
    expected : int
        Expected dimension.
    """

    def __init__(self, dimension: int, expected: int) -> None:
        super().__init__(dimension, expected)
        self.dimension = dimension
        self.expected = expected

    def __str__(self) -> str:
        return f"dimension {self.dimension} != {self.expected}"
