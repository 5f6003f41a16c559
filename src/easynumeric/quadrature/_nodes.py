"""Node and weight table for the 15-point Gauss-Kronrod rule."""

from typing import Optional, Tuple

import torch
from torch import Tensor

# G7-K15 data on [-1, 1], from QUADPACK (qk15).
#
# Only the non-negative half is stored:
# - positive_nodes: non-negative nodes, ascending, starting at 0
# - positive_k_weights: Kronrod weights for positive_nodes
# - positive_g_weights: weights of the embedded 7-point Gauss rule
# - gauss_mask: which positive_nodes are also Gauss nodes
#
# The rule is symmetric about 0; the full set is rebuilt by reflection.

_GK15_POSITIVE_NODES = (
    0.000000000000000000000000000000000,
    0.207784955007898467600689403773245,
    0.405845151377397166906606412076961,
    0.586087235467691130294144838258730,
    0.741531185599394439863864773280788,
    0.864864423359769072789712788640926,
    0.949107912342758524526189684047851,
    0.991455371120812639206854697526329,
)

_GK15_POSITIVE_K_WEIGHTS = (
    0.209482141084727828012999174891714,
    0.204432940075298892414161999234649,
    0.190350578064785409913256402421014,
    0.169004726639267902826583426598550,
    0.140653259715525918745189590510238,
    0.104790010322250183839876322541518,
    0.063092092629978553290700663189204,
    0.022935322010529224963732008058970,
)

# G7 weights, for the Gauss nodes 0, 0.406, 0.742, 0.949
_GK15_POSITIVE_G_WEIGHTS = (
    0.417959183673469387755102040816327,
    0.381830050505118944950369775488975,
    0.279705391489276667901467771423780,
    0.129484966168869693270611432679082,
)

_GK15_GAUSS_MASK = (True, False, True, False, True, False, True, False)


def gauss_kronrod_15_nodes_weights(
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor, Tensor, Tensor]:
    """
    Build the G7-K15 nodes and weights on [-1, 1].

    Parameters
    ----------
    dtype : torch.dtype
        Data type for output tensors.
    device : torch.device, optional
        Device for output tensors.

    Returns
    -------
    nodes : Tensor
        Kronrod nodes, shape (15,), sorted ascending.
    kronrod_weights : Tensor
        Kronrod weights, shape (15,).
    gauss_weights : Tensor
        Weights of the embedded Gauss rule, shape (7,).
    gauss_indices : Tensor
        Indices into ``nodes`` of the Gauss nodes, shape (7,), ascending.

    Notes
    -----
    The 7 Gauss nodes are a subset of the 15 Kronrod nodes, so one set of
    function values serves both rules. The Gauss weights are their own
    weights, not a subset of the Kronrod weights.

    All nodes lie strictly inside (-1, 1); the interval end points are
    never sampled.

    References
    ----------
    Piessens, R., et al. (1983). QUADPACK: A subroutine package for automatic integration.
    """
    pos_nodes = torch.tensor(_GK15_POSITIVE_NODES, dtype=dtype, device=device)
    pos_k_weights = torch.tensor(
        _GK15_POSITIVE_K_WEIGHTS, dtype=dtype, device=device
    )

    # full = [-pos[7], ..., -pos[1], 0, pos[1], ..., pos[7]]
    nodes = torch.cat([-pos_nodes[1:].flip(0), pos_nodes])
    k_weights = torch.cat([pos_k_weights[1:].flip(0), pos_k_weights])

    # Positive index i sits at n_neg + i in the full array, its mirror at n_neg - i
    n_neg = len(_GK15_POSITIVE_NODES) - 1
    pairs = []
    gauss_pos_indices = [i for i, m in enumerate(_GK15_GAUSS_MASK) if m]
    for idx, w in zip(gauss_pos_indices, _GK15_POSITIVE_G_WEIGHTS):
        if idx == 0:
            pairs.append((n_neg, w))
        else:
            pairs.append((n_neg - idx, w))
            pairs.append((n_neg + idx, w))

    pairs.sort(key=lambda x: x[0])
    g_indices = torch.tensor(
        [p[0] for p in pairs], dtype=torch.long, device=device
    )
    g_weights = torch.tensor([p[1] for p in pairs], dtype=dtype, device=device)

    return nodes, k_weights, g_weights, g_indices
