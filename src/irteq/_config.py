"""Runtime option store for :mod:`irteq`."""

from __future__ import annotations

from typing import Any, Literal

import numpy as np

from irteq.constants import DEFAULT_PRECISION, GRADIENT_STEP

OptionName = Literal["precision", "gradient_step"]

_DEFAULTS: dict[str, Any] = {
    "precision": DEFAULT_PRECISION,
    "gradient_step": GRADIENT_STEP,
}

_OPTIONS: dict[str, Any] = dict(_DEFAULTS)


def set_option(name: OptionName, value: Any) -> None:
    """Set a package-wide default.

    ``precision`` is the number of decimals reported for linking constants
    and must be an integer; negative values round to tens, hundreds and so
    on. ``gradient_step`` is the relative finite-difference step used by
    objective gradients and must be positive.
    """
    if name not in _DEFAULTS:
        valid = ", ".join(f"'{k}'" for k in _DEFAULTS)
        raise ValueError(f"Unknown option '{name}'. Must be one of: {valid}")

    if name == "precision":
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ValueError(f"precision must be an integer, got {value!r}")
        value = int(value)
    elif name == "gradient_step":
        value = float(value)
        if not value > 0:
            raise ValueError(f"gradient_step must be positive, got {value!r}")

    _OPTIONS[name] = value


def get_option(name: OptionName) -> Any:
    """Get the current value of a package-wide default."""
    if name not in _OPTIONS:
        raise ValueError(f"Unknown option '{name}'")
    return _OPTIONS[name]


def get_options() -> dict[str, Any]:
    """Get a copy of all current options."""
    return dict(_OPTIONS)


def reset_options() -> None:
    """Restore every option to its default."""
    _OPTIONS.clear()
    _OPTIONS.update(_DEFAULTS)
