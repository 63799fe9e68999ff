"""Tests for Stocking-Lord linking."""

import numpy as np
import pytest

from irteq.equating import (
    EquatingCriterion,
    LinearTransformation,
    LinkingConstants,
    LinkingResult,
    link,
    transform_parameters,
    transform_theta,
)
from irteq.equating.stocking_lord import StockingLordMethod
from irteq.models import GradedResponseModel


@pytest.fixture
def grm_forms():
    """A pair of GRM forms related by A=0.8, B=-0.3."""
    form_x = {
        "Poly_1": GradedResponseModel(1.0, [-1.5, -0.5, 0.5]),
        "Poly_2": GradedResponseModel(1.2, [-1.0, 0.0, 1.0]),
        "Poly_3": GradedResponseModel(0.8, [-0.5, 0.5, 1.5]),
        "Poly_4": GradedResponseModel(1.5, [-2.0, -1.0, 0.0]),
    }
    form_y = transform_parameters(form_x, 0.8, -0.3)
    return form_x, form_y, 0.8, -0.3


class TestLinkBasic:
    """Basic linking functionality tests."""

    def test_link_returns_result(self, form_x, form_y, normal_quadrature):
        """Test that link returns a LinkingResult."""
        result = link(form_x, form_y, normal_quadrature, normal_quadrature)

        assert isinstance(result, LinkingResult)
        assert isinstance(result.constants, LinkingConstants)
        assert isinstance(result.transformation, LinearTransformation)
        assert result.common_items == tuple(form_y)
        assert result.constants.method == "BFGS"
        assert result.constants.criterion is EquatingCriterion.Q1Q2

    @pytest.mark.parametrize("criterion", ["Q1", "Q2", "Q1Q2"])
    def test_link_recovers_constants(
        self, form_x, form_y, normal_quadrature, linking_constants, criterion
    ):
        """Test that each criterion recovers the true A and B."""
        result = link(
            form_x,
            form_y,
            normal_quadrature,
            normal_quadrature,
            criterion=criterion,
        )

        assert abs(result.constants.A - linking_constants["A"]) < 1e-3
        assert abs(result.constants.B - linking_constants["B"]) < 1e-3
        assert result.criterion_value < 1e-8

    @pytest.mark.parametrize("method", ["BFGS", "L-BFGS-B", "Nelder-Mead", "Powell"])
    def test_link_methods(self, form_x, form_y, normal_quadrature, method):
        """Test that all optimizers reach the true constants."""
        result = link(
            form_x, form_y, normal_quadrature, normal_quadrature, method=method
        )

        assert result.constants.method == method
        assert result.constants.A == pytest.approx(1.2, abs=1e-2)
        assert result.constants.B == pytest.approx(0.5, abs=1e-2)

    def test_default_distributions(self, form_x, form_y):
        """Test that Gauss-Hermite quadrature is used when none is given."""
        result = link(form_x, form_y)

        assert result.constants.A == pytest.approx(1.2, abs=1e-3)
        assert result.constants.B == pytest.approx(0.5, abs=1e-3)

    def test_q1_without_x_distribution(self, form_x, form_y, three_point_distribution):
        """Test Q1 linking with only a Form Y distribution."""
        result = link(form_x, form_y, y_distribution=three_point_distribution, criterion="Q1")

        assert result.constants.criterion is EquatingCriterion.Q1
        assert result.constants.A == pytest.approx(1.2, abs=1e-3)

    def test_reported_constants_rounded(self, form_x, form_y, normal_quadrature):
        """Test that the transformation reports rounded constants."""
        result = link(
            form_x, form_y, normal_quadrature, normal_quadrature, precision=3
        )

        assert result.transformation.get_scale() == 1.2
        assert result.transformation.get_intercept() == 0.5
        assert result.transformation.raw_scale == result.constants.A

    def test_link_polytomous(self, grm_forms, normal_quadrature):
        """Test linking of graded response items."""
        form_x, form_y, A_true, B_true = grm_forms

        result = link(form_x, form_y, normal_quadrature, normal_quadrature)

        assert result.constants.A == pytest.approx(A_true, abs=1e-3)
        assert result.constants.B == pytest.approx(B_true, abs=1e-3)

    def test_convergence_info(self, form_x, form_y, normal_quadrature):
        """Test the convergence information keys."""
        result = link(form_x, form_y, normal_quadrature, normal_quadrature)

        info = result.convergence_info
        assert {"method", "criterion", "success", "fun", "nit", "nfev", "message"} <= set(
            info
        )
        assert info["criterion"] == "Q1Q2"
        assert info["nit"] >= 1

    def test_verbose_output(self, form_x, form_y, normal_quadrature, capsys):
        """Test that verbose mode prints progress."""
        link(form_x, form_y, normal_quadrature, normal_quadrature, verbose=True)

        out = capsys.readouterr().out
        assert "Iteration" in out
        assert "Stocking-Lord (Q1Q2, BFGS)" in out

    def test_quiet_by_default(self, form_x, form_y, normal_quadrature, capsys):
        """Test that nothing is printed without verbose."""
        link(form_x, form_y, normal_quadrature, normal_quadrature)

        assert capsys.readouterr().out == ""

    def test_quiet_callback_skips_evaluation(
        self, form_x, form_y, normal_quadrature, monkeypatch
    ):
        """Test that a quiet run only evaluates the objective for the optimizer."""
        calls = []
        original_value = StockingLordMethod.value

        def counting_value(self, coefficients):
            calls.append(1)
            return original_value(self, coefficients)

        monkeypatch.setattr(StockingLordMethod, "value", counting_value)

        quiet = link(
            form_x, form_y, normal_quadrature, normal_quadrature, method="Nelder-Mead"
        )
        quiet_calls = len(calls)
        calls.clear()
        link(
            form_x,
            form_y,
            normal_quadrature,
            normal_quadrature,
            method="Nelder-Mead",
            verbose=True,
        )

        assert quiet_calls == quiet.convergence_info["nfev"]
        assert len(calls) == quiet_calls + quiet.convergence_info["nit"]


class TestLinkValidation:
    """Validation tests for linking inputs."""

    def test_link_invalid_method(self, form_x, form_y):
        """Test that an invalid method raises."""
        with pytest.raises(ValueError, match="Unknown optimization method"):
            link(form_x, form_y, method="invalid")

    def test_link_invalid_criterion(self, form_x, form_y):
        """Test that an invalid criterion raises."""
        with pytest.raises(ValueError, match="Unknown equating criterion"):
            link(form_x, form_y, criterion="Q4")

    def test_link_invalid_max_iter(self, form_x, form_y):
        """Test that max_iter must be positive."""
        with pytest.raises(ValueError, match="max_iter"):
            link(form_x, form_y, max_iter=0)

    def test_link_mismatched_forms(self, form_x, form_y):
        """Test that mismatched forms raise before optimizing."""
        smaller_y = dict(list(form_y.items())[:3])

        with pytest.raises(ValueError, match="dimension 5 != 3"):
            link(form_x, smaller_y)


class TestTransformParameters:
    """Tests for parameter transformation."""

    def test_transform_creates_copies(self, form_x):
        """Test that items are copied and the form is unchanged."""
        transformed = transform_parameters(form_x, 1.5, -0.3)

        assert list(transformed) == list(form_x)
        for name in form_x:
            assert transformed[name] is not form_x[name]

    def test_transform_formulas(self, form_x):
        """Test that transformation formulas are correct."""
        A, B = 1.5, -0.3

        transformed = transform_parameters(form_x, A, B)

        for name, item in form_x.items():
            assert transformed[name].discrimination == pytest.approx(
                item.discrimination / A
            )
            assert transformed[name].difficulty == pytest.approx(A * item.difficulty + B)
            assert transformed[name].guessing == item.guessing

    def test_transform_theta(self):
        """Test theta transformation for scalars and arrays."""
        constants = LinkingConstants(A=1.2, B=0.5)

        assert transform_theta(1.0, constants) == 1.2 * 1.0 + 0.5
        np.testing.assert_allclose(
            transform_theta(np.array([-1.0, 0.0]), constants), [-0.7, 0.5]
        )
