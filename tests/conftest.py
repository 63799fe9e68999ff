"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from irteq import reset_options
from irteq.constants import NORMAL_OGIVE_SCALING
from irteq.estimation import GaussHermiteQuadrature, UserDefinedDistribution
from irteq.models import item_collection


@pytest.fixture(autouse=True)
def _default_options():
    """Restore package options after every test."""
    yield
    reset_options()


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(42)


@pytest.fixture
def item_names():
    """Identifiers of five common items."""
    return ["Item_1", "Item_2", "Item_3", "Item_4", "Item_5"]


@pytest.fixture
def form_x(item_names):
    """Five 3PL common items calibrated on Form X."""
    return item_collection(
        item_names,
        discrimination=[1.0, 1.2, 0.8, 1.5, 1.1],
        difficulty=[-1.5, -0.5, 0.0, 0.5, 1.2],
        guessing=[0.2, 0.15, 0.0, 0.25, 0.1],
        scaling_constant=NORMAL_OGIVE_SCALING,
    )


@pytest.fixture
def linking_constants():
    """True slope and intercept relating the two forms."""
    return {"A": 1.2, "B": 0.5}


@pytest.fixture
def form_y(form_x, linking_constants):
    """The Form X items restated on the Form Y scale."""
    A, B = linking_constants["A"], linking_constants["B"]
    return {name: item.scaled(B, A) for name, item in form_x.items()}


@pytest.fixture
def three_point_distribution():
    """Three-point quadrature at -1, 0, 1."""
    return UserDefinedDistribution([-1.0, 0.0, 1.0], [0.25, 0.5, 0.25])


@pytest.fixture
def normal_quadrature():
    """Standard normal Gauss-Hermite quadrature."""
    return GaussHermiteQuadrature(n_points=21)
