"""Equating criteria for characteristic curve linking."""

from enum import Enum


class EquatingCriterion(Enum):
    """Which true-score discrepancy a characteristic curve method minimizes.

    Q1 compares curves on the Form Y scale, Q2 on the Form X scale, and
    Q1Q2 sums both (Kim & Kolen, 2007).
    """

    Q1 = "Q1"
    Q2 = "Q2"
    Q1Q2 = "Q1Q2"

    @classmethod
    def parse(cls, value: "EquatingCriterion | str") -> "EquatingCriterion":
        """Return the member for an enum value or a case-insensitive name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        valid = ", ".join(f"'{m.value}'" for m in cls)
        raise ValueError(f"Unknown equating criterion {value!r}. Must be one of: {valid}")

    @property
    def uses_x_distribution(self) -> bool:
        return self is not EquatingCriterion.Q1
