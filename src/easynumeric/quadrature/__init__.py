"""
Numerical integration (quadrature) module.

Function-based integration (evaluates callable):
    integrate_interval, integrate_semi_inf, integrate_semi_inf_info

Quadrature rule classes:
    GaussKronrod15

Node/weight computation:
    gauss_kronrod_15_nodes_weights

Variable transforms:
    semi_infinite_transform

Warnings:
    QuadratureWarning
"""

from easynumeric.quadrature._exceptions import QuadratureWarning
from easynumeric.quadrature._interval import integrate_interval
from easynumeric.quadrature._nodes import gauss_kronrod_15_nodes_weights
from easynumeric.quadrature._rules import GaussKronrod15
from easynumeric.quadrature._semi_infinite import (
    integrate_semi_inf,
    integrate_semi_inf_info,
    semi_infinite_transform,
)

__all__ = [
    # Function-based
    "integrate_interval",
    "integrate_semi_inf",
    "integrate_semi_inf_info",
    # Rule classes
    "GaussKronrod15",
    # Node/weight computation
    "gauss_kronrod_15_nodes_weights",
    # Transforms
    "semi_infinite_transform",
    # Warnings
    "QuadratureWarning",
]
