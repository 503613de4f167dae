"""
Seam computation by dynamic programming over forward energy.

Each call searches one vertical seam at the current width given by the
index tracker. The cost and parent matrices are scratch buffers rebuilt on
every call; only the tracker carries state between seams.
"""

import torch
from typing import Tuple

from .energy import pixel_energy, current_intensity, transition_costs

# Cost of a predecessor that lies outside the image.
UNAVAILABLE = torch.iinfo(torch.int64).max


def cost_matrix(intensity: torch.Tensor, mask: torch.Tensor,
                index: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Build the cumulative cost and parent matrices at the current width.

    M(0, x) = E(0, x)
    M(y, x) = E(y, x) + min(M(y-1, x+1) + C_R,  M(y-1, x) + C_V,  M(y-1, x-1) + C_L)

    Ties are broken right-diagonal first, then vertical, then
    left-diagonal. Rows depend on the previous row and are processed top
    to bottom; all columns of a row are evaluated at once.

    Args:
        intensity: Intensity field in original coordinates (H, W)
        mask: Protection mask in original coordinates (H, W)
        index: Index tracker tensor (H, w)

    Returns:
        cost: Cumulative cost (H, w), int64
        parent: Column of the predecessor in row y-1 (H, w), int64
    """
    H, w = index.shape
    device = index.device

    energy = pixel_energy(intensity, mask, index)
    c_right, c_vertical, c_left = transition_costs(current_intensity(intensity, index))

    cols = torch.arange(w, dtype=torch.long, device=device)
    cost = torch.zeros(H, w, dtype=torch.long, device=device)
    parent = torch.zeros(H, w, dtype=torch.long, device=device)

    # Row 0 has no predecessor: all candidates are 0, so the
    # right-diagonal tie-break applies (the value is never followed).
    cost[0] = energy[0]
    parent[0] = cols + 1

    for y in range(1, H):
        prev = cost[y - 1]

        from_right = torch.full((w,), UNAVAILABLE, dtype=torch.long, device=device)
        from_right[:-1] = prev[1:] + c_right[y, :-1]

        from_vertical = prev + c_vertical[y]

        from_left = torch.full((w,), UNAVAILABLE, dtype=torch.long, device=device)
        from_left[1:] = prev[:-1] + c_left[y, 1:]

        best = torch.min(torch.min(from_right, from_vertical), from_left)

        parent[y] = torch.where(best == from_right, cols + 1,
                                torch.where(best == from_vertical, cols, cols - 1))
        cost[y] = energy[y] + best

    return cost, parent


def min_index(cost: torch.Tensor) -> int:
    """Column of the smallest cost in the last row (first one on ties)."""
    last = cost[-1]
    return int(torch.nonzero(last == last.min())[0, 0])


def backtrack(cost: torch.Tensor, parent: torch.Tensor) -> torch.Tensor:
    """
    Recover the seam ending at the cheapest entry of the last row.

    Args:
        cost: Cumulative cost (H, w)
        parent: Parent matrix (H, w)

    Returns:
        Seam positions in current coordinates, one per row (H,)
    """
    H = cost.shape[0]
    seam = torch.zeros(H, dtype=torch.long, device=cost.device)

    x = min_index(cost)
    for y in range(H - 1, -1, -1):
        seam[y] = x
        x = int(parent[y, x])

    return seam


def find_seam(intensity: torch.Tensor, mask: torch.Tensor,
              index: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Find the cheapest vertical seam at the current width.

    Returns:
        positions: Seam in current coordinates (H,)
        columns: Seam in original coordinates (H,)
    """
    cost, parent = cost_matrix(intensity, mask, index)
    positions = backtrack(cost, parent)
    rows = torch.arange(index.shape[0], device=index.device)
    return positions, index[rows, positions]
