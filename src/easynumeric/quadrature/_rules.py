"""Gauss-Kronrod 15-point quadrature rule."""

from typing import Callable, Optional, Tuple, Union

import torch
from torch import Tensor

from easynumeric.quadrature._nodes import gauss_kronrod_15_nodes_weights


def _bounds_as_tensors(
    a: Union[float, Tensor],
    b: Union[float, Tensor],
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor]:
    """Convert bounds to broadcast tensors of a common floating dtype."""
    # Infer dtype and device
    if isinstance(a, Tensor):
        dtype = dtype or a.dtype
        device = device or a.device
    elif isinstance(b, Tensor):
        dtype = dtype or b.dtype
        device = device or b.device
    else:
        dtype = dtype or torch.float64
        device = device or torch.device("cpu")

    if not dtype.is_floating_point:
        dtype = torch.float64

    a = torch.as_tensor(a, dtype=dtype, device=device)
    b = torch.as_tensor(b, dtype=dtype, device=device)

    return torch.broadcast_tensors(a, b)


class GaussKronrod15:
    """
    Gauss-Kronrod G7-K15 quadrature rule with embedded error indicator.

    The Kronrod sum over all 15 nodes is the integral estimate. The embedded
    7-point Gauss sum reuses 7 of those function values and is compared with
    the Kronrod sum to produce a heuristic error indicator.

    Exact for polynomials of degree <= 21.

    Examples
    --------
    >>> rule = GaussKronrod15()
    >>> result = rule.integrate(torch.sin, 0, torch.pi)  # approximately 2.0
    >>> result, error = rule.integrate_with_error(torch.sin, 0, torch.pi)

    Attributes
    ----------
    order : int
        Number of Kronrod points.
    neval : int
        Integrand evaluations per interval.
    """

    order = 15
    neval = 15

    def __init__(self):
        self._cache: dict = {}

    def _get_nodes_weights(
        self,
        dtype: torch.dtype,
        device: torch.device,
    ) -> Tuple[Tensor, Tensor, Tensor, Tensor]:
        """Get cached nodes and weights on [-1, 1]."""
        key = (str(dtype), str(device))
        if key not in self._cache:
            self._cache[key] = gauss_kronrod_15_nodes_weights(
                dtype=dtype, device=device
            )
        return self._cache[key]

    def _evaluate(
        self,
        f: Callable[[Tensor], Tensor],
        a: Union[float, Tensor],
        b: Union[float, Tensor],
    ) -> Tuple[Tensor, Tensor]:
        """Sample f on the mapped nodes. Returns (values, half_width)."""
        a, b = _bounds_as_tensors(a, b)
        nodes, _, _, _ = self._get_nodes_weights(a.dtype, a.device)

        # x' = (b - a) / 2 * x + (a + b) / 2
        half_width = (b - a) / 2
        center = (a + b) / 2

        # (*batch, 1) * (15,) -> (*batch, 15)
        points = half_width.unsqueeze(-1) * nodes + center.unsqueeze(-1)

        return f(points), half_width

    def nodes_and_weights(
        self,
        a: Union[float, Tensor] = -1.0,
        b: Union[float, Tensor] = 1.0,
        *,
        dtype: Optional[torch.dtype] = None,
        device: Optional[torch.device] = None,
    ) -> Tuple[Tensor, Tensor]:
        """
        Return Kronrod nodes and weights scaled to [a, b].

        Parameters
        ----------
        a, b : float or Tensor
            Integration bounds. Can be batched.
        dtype : torch.dtype, optional
            Output dtype. Inferred from a/b if not specified.
        device : torch.device, optional
            Output device. Inferred from a/b if not specified.

        Returns
        -------
        nodes : Tensor
            Shape (*batch, 15).
        weights : Tensor
            Shape (*batch, 15).
        """
        a, b = _bounds_as_tensors(a, b, dtype=dtype, device=device)
        base_nodes, base_weights, _, _ = self._get_nodes_weights(
            a.dtype, a.device
        )

        half_width = ((b - a) / 2).unsqueeze(-1)
        center = ((a + b) / 2).unsqueeze(-1)

        return half_width * base_nodes + center, half_width * base_weights

    def integrate(
        self,
        f: Callable[[Tensor], Tensor],
        a: Union[float, Tensor],
        b: Union[float, Tensor],
    ) -> Tensor:
        """
        Integrate f from a to b using the Kronrod sum only.

        The embedded Gauss sum is not formed.

        Parameters
        ----------
        f : callable
            Integrand function. Takes tensor of shape (*batch, 15), returns same.
        a, b : float or Tensor
            Integration bounds.

        Returns
        -------
        Tensor
            Kronrod approximation. Shape matches broadcast(a, b).
        """
        values, half_width = self._evaluate(f, a, b)
        _, k_weights, _, _ = self._get_nodes_weights(
            half_width.dtype, half_width.device
        )

        return (values * k_weights).sum(dim=-1) * half_width

    def integrate_with_error(
        self,
        f: Callable[[Tensor], Tensor],
        a: Union[float, Tensor],
        b: Union[float, Tensor],
    ) -> Tuple[Tensor, Tensor]:
        """
        Integrate f from a to b with an error indicator.

        Parameters
        ----------
        f : callable
            Integrand function.
        a, b : float or Tensor
            Integration bounds.

        Returns
        -------
        result : Tensor
            Kronrod approximation.
        error : Tensor
            Error indicator ``(200 * |gauss - kronrod|) ** 1.5``.

        Notes
        -----
        The indicator is the QUADPACK-style heuristic, not a bound on the
        true error. It grows monotonically with the disagreement between
        the two embedded rules.
        """
        values, half_width = self._evaluate(f, a, b)
        _, k_weights, g_weights, g_indices = self._get_nodes_weights(
            half_width.dtype, half_width.device
        )

        kronrod_result = (values * k_weights).sum(dim=-1) * half_width

        gauss_values = values[..., g_indices]
        gauss_result = (gauss_values * g_weights).sum(dim=-1) * half_width

        error = torch.pow(200 * torch.abs(gauss_result - kronrod_result), 1.5)

        return kronrod_result, error
