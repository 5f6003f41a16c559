"""easynumeric: Gauss-Kronrod quadrature on finite and semi-infinite intervals, in PyTorch."""

from . import quadrature
from .quadrature import integrate_interval, integrate_semi_inf

__all__ = [
    "integrate_interval",
    "integrate_semi_inf",
    "quadrature",
]

__version__ = "0.1.0"
