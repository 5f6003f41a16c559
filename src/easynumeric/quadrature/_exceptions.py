"""Warnings for quadrature evaluation."""


class QuadratureWarning(UserWarning):
    """Warning for quadrature issues (e.g., non-finite estimates)."""

    pass
