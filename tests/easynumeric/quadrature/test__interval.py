import math

import numpy as np
import pytest
import scipy.integrate
import torch


class TestIntegrateInterval:
    def test_basic_integration(self):
        """Integrate x^4 from 0 to 1"""
        from easynumeric.quadrature import integrate_interval

        result = integrate_interval(lambda x: x**4, 0, 1)

        assert isinstance(result, torch.Tensor)
        assert result.dtype == torch.float64
        assert abs(result.item() - 0.2) < 1e-12

    @pytest.mark.parametrize("degree", [0, 1, 5, 10, 15, 21])
    def test_polynomial_exact(self, degree):
        """Exact for polynomials of degree <= 21"""
        from easynumeric.quadrature import integrate_interval

        a, b = -1.5, 2.5
        result = integrate_interval(lambda x: x**degree, a, b)
        expected = (b ** (degree + 1) - a ** (degree + 1)) / (degree + 1)

        assert torch.allclose(
            result, torch.tensor(expected, dtype=result.dtype), rtol=1e-12
        )

    @pytest.mark.parametrize("a, b", [(0.0, 1.0), (-3.0, 7.5), (1e3, 1e3 + 0.25)])
    def test_constant(self, a, b):
        """Integral of 1 is the interval width"""
        from easynumeric.quadrature import integrate_interval

        result = integrate_interval(torch.ones_like, a, b)

        assert torch.allclose(
            result, torch.tensor(b - a, dtype=result.dtype), rtol=1e-13
        )

    def test_matches_scipy(self):
        """Compare with scipy.integrate.quad"""
        from easynumeric.quadrature import integrate_interval

        result = integrate_interval(lambda x: torch.exp(-(x**2)), -2, 2)
        expected, _ = scipy.integrate.quad(lambda x: np.exp(-(x**2)), -2, 2)

        assert torch.allclose(
            result, torch.tensor(expected, dtype=result.dtype), rtol=1e-6
        )

    def test_additivity(self):
        """Splitting [a, b] at c gives the same integral"""
        from easynumeric.quadrature import integrate_interval

        a, c, b = 0.0, 0.7, 2.0
        left = integrate_interval(torch.cos, a, c)
        right = integrate_interval(torch.cos, c, b)
        whole = integrate_interval(torch.cos, a, b)

        assert abs((left + right - whole).item()) < 1e-9
        assert abs(whole.item() - math.sin(2.0)) < 1e-12

    def test_reversed_bounds_negate(self):
        from easynumeric.quadrature import integrate_interval

        forward = integrate_interval(torch.exp, 0, 1)
        backward = integrate_interval(torch.exp, 1, 0)

        assert torch.allclose(backward, -forward, rtol=1e-14)

    def test_equal_bounds_zero(self):
        from easynumeric.quadrature import integrate_interval

        result = integrate_interval(torch.exp, 2, 2)

        assert result.item() == 0.0

    def test_nan_propagates(self):
        from easynumeric.quadrature import integrate_interval

        result = integrate_interval(
            lambda x: torch.full_like(x, float("nan")), 0, 1
        )

        assert torch.isnan(result)

    def test_batched_limits(self):
        from easynumeric.quadrature import integrate_interval

        b = torch.linspace(0.5, 3.0, 6, dtype=torch.float64)
        result = integrate_interval(torch.exp, 0, b)

        assert result.shape == (6,)
        assert torch.allclose(result, torch.exp(b) - 1, rtol=1e-12)


class TestIntegrateIntervalErrorEstimate:
    def test_returns_pair(self):
        from easynumeric.quadrature import integrate_interval

        result, error = integrate_interval(
            lambda x: x**4, 0, 1, error_estimate=True
        )

        assert abs(result.item() - 0.2) < 1e-12
        assert error.item() >= 0

    def test_smooth_polynomial_small_error(self):
        from easynumeric.quadrature import integrate_interval

        _, error = integrate_interval(
            lambda x: 3 * x**2 - x + 1, -1, 4, error_estimate=True
        )

        assert error < 1e-8

    def test_high_curvature_large_error(self):
        from easynumeric.quadrature import integrate_interval

        _, smooth_error = integrate_interval(
            lambda x: x**2, 0, 1, error_estimate=True
        )
        _, rough_error = integrate_interval(
            lambda x: torch.sin(50 * x), 0, 1, error_estimate=True
        )

        assert rough_error > 1e-3
        assert rough_error > smooth_error

    def test_same_result_with_and_without_error(self):
        from easynumeric.quadrature import integrate_interval

        result = integrate_interval(torch.sin, 0, 3)
        result_with_error, _ = integrate_interval(
            torch.sin, 0, 3, error_estimate=True
        )

        assert torch.equal(result, result_with_error)

    def test_coarse_rule_skipped_without_error(self, monkeypatch):
        """The embedded Gauss sum is only formed on request"""
        from easynumeric.quadrature import _interval, integrate_interval

        def fail(*args, **kwargs):
            raise AssertionError("error estimate computed")

        monkeypatch.setattr(_interval._RULE, "integrate_with_error", fail)

        result = integrate_interval(lambda x: x**4, 0, 1)

        assert abs(result.item() - 0.2) < 1e-12


class TestIntegrateIntervalGradients:
    def test_gradient_through_closure(self):
        """Gradient flows through closure parameters"""
        from easynumeric.quadrature import integrate_interval

        theta = torch.tensor(3.0, requires_grad=True, dtype=torch.float64)

        # integral of exp(-theta x) from 0 to 1 = (1 - exp(-theta)) / theta
        result = integrate_interval(lambda x: torch.exp(-theta * x), 0, 1)
        result.backward()

        t = 3.0
        expected = (math.exp(-t) * (t + 1) - 1) / t**2
        assert torch.allclose(
            theta.grad, torch.tensor(expected, dtype=torch.float64), rtol=1e-8
        )

    def test_gradcheck_closure(self):
        """Numerical gradient check for closure parameter"""
        from easynumeric.quadrature import integrate_interval

        theta = torch.tensor(2.0, requires_grad=True, dtype=torch.float64)

        def fn(theta_):
            return integrate_interval(lambda x: torch.sin(theta_ * x), 0, 1)

        assert torch.autograd.gradcheck(fn, (theta,), raise_exception=True)
