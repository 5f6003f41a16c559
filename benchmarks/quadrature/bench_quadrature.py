"""Benchmarks for Gauss-Kronrod quadrature functions.

This module times easynumeric's finite and semi-infinite integrators against
scipy.integrate.quad and reports the accuracy of each on known integrals.
"""

from __future__ import annotations

import math
import time
from typing import Any, Callable

import numpy as np
import scipy.integrate
import torch

from easynumeric.quadrature import integrate_interval, integrate_semi_inf


def benchmark(
    func: Callable,
    *args: Any,
    warmup: int = 3,
    iterations: int = 10,
    **kwargs: Any,
) -> dict[str, float]:
    """Run a simple benchmark on a function.

    Parameters
    ----------
    func : callable
        Function to benchmark.
    *args : Any
        Positional arguments to pass to func.
    warmup : int, optional
        Number of warmup iterations. Default is 3.
    iterations : int, optional
        Number of timed iterations. Default is 10.
    **kwargs : Any
        Keyword arguments to pass to func.

    Returns
    -------
    dict
        Dictionary with timing statistics:
        - 'mean': Mean time in seconds
        - 'std': Standard deviation in seconds
    """
    for _ in range(warmup):
        func(*args, **kwargs)

    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        func(*args, **kwargs)
        times.append(time.perf_counter() - start)

    return {
        "mean": np.mean(times),
        "std": np.std(times),
    }


def format_time(seconds: float) -> str:
    """Format time in appropriate units."""
    if seconds < 1e-6:
        return f"{seconds * 1e9:.3f}ns"
    elif seconds < 1e-3:
        return f"{seconds * 1e6:.3f}us"
    elif seconds < 1:
        return f"{seconds * 1e3:.3f}ms"
    else:
        return f"{seconds:.3f}s"


def print_comparison(
    name: str,
    times: dict[str, dict[str, float]],
    errors: dict[str, float],
) -> None:
    """Print timing and absolute error for each method."""
    print(f"\n{name}")
    print("-" * len(name))

    fastest_time = min(t["mean"] for t in times.values())

    for method_name, ts_time in times.items():
        slowdown = ts_time["mean"] / fastest_time
        if slowdown > 1.01:
            suffix = f" ({slowdown:.2f}x slower)"
        else:
            suffix = " (fastest)"
        print(
            f"  {method_name}: {format_time(ts_time['mean'])} +/- "
            f"{format_time(ts_time['std'])}, "
            f"error {errors[method_name]:.2e}{suffix}"
        )


class BenchQuadrature:
    """Benchmarks for quadrature functions."""

    def __init__(self, warmup: int = 3, iterations: int = 10):
        self.warmup = warmup
        self.iterations = iterations

    def _bench(
        self, func: Callable, *args: Any, **kwargs: Any
    ) -> dict[str, float]:
        """Run benchmark with configured settings."""
        return benchmark(
            func,
            *args,
            warmup=self.warmup,
            iterations=self.iterations,
            **kwargs,
        )

    def bench_interval(self) -> None:
        """Integral of exp(-x^2) over [-2, 2]."""
        expected = math.sqrt(math.pi) * math.erf(2.0)

        def ts_fn():
            return integrate_interval(lambda x: torch.exp(-(x**2)), -2, 2)

        def scipy_fn():
            return scipy.integrate.quad(lambda x: np.exp(-(x**2)), -2, 2)[0]

        times = {
            "easynumeric": self._bench(ts_fn),
            "scipy": self._bench(scipy_fn),
        }
        errors = {
            "easynumeric": abs(ts_fn().item() - expected),
            "scipy": abs(scipy_fn() - expected),
        }
        print_comparison("integrate_interval exp(-x^2) on [-2, 2]", times, errors)

    def bench_semi_inf(self, subdivisions: int = 5) -> None:
        """Integral of 1 / (1 + x^2) over [0, inf)."""
        expected = math.pi / 2

        def ts_fn():
            return integrate_semi_inf(
                lambda x: 1 / (1 + x**2), subdivisions=subdivisions
            )

        def scipy_fn():
            return scipy.integrate.quad(lambda x: 1 / (1 + x**2), 0, np.inf)[0]

        times = {
            "easynumeric": self._bench(ts_fn),
            "scipy": self._bench(scipy_fn),
        }
        errors = {
            "easynumeric": abs(ts_fn().item() - expected),
            "scipy": abs(scipy_fn() - expected),
        }
        print_comparison(
            f"integrate_semi_inf 1/(1+x^2) (subdivisions={subdivisions})",
            times,
            errors,
        )

    def run_all(self) -> None:
        """Run all benchmarks."""
        print("=" * 60)
        print("QUADRATURE BENCHMARKS")
        print("=" * 60)

        self.bench_interval()
        self.bench_semi_inf()

    def run_scaling(self) -> None:
        """Run benchmarks with increasing subdivision counts."""
        print("=" * 60)
        print("SCALING BENCHMARKS")
        print("=" * 60)

        for subdivisions in [1, 5, 20, 100]:
            self.bench_semi_inf(subdivisions=subdivisions)


if __name__ == "__main__":
    bench = BenchQuadrature(warmup=3, iterations=10)
    bench.run_all()
    print("\n")
    bench.run_scaling()
