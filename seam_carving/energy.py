"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

Energies are evaluated at the current (virtually carved) width: every
lookup goes through the index tracker, so neighbors are the pixels that
are adjacent after the previous seams were removed.
"""

import torch

# Added to the energy of masked pixels so seams are drawn through them.
MASK_PENALTY = -(2 ** 31)


def current_intensity(intensity: torch.Tensor, index: torch.Tensor) -> torch.Tensor:
    """
    Gather the intensity field into current space.

    Args:
        intensity: Intensity field in original coordinates (H, W)
        index: Index tracker tensor (H, w)

    Returns:
        cur (H, w) with cur[y, x] = intensity[y, index[y, x]]
    """
    return torch.gather(intensity, 1, index)


def current_mask(mask: torch.Tensor, index: torch.Tensor) -> torch.Tensor:
    """Gather the protection mask into current space (H, w)."""
    return torch.gather(mask, 1, index)


def pixel_energy(intensity: torch.Tensor, mask: torch.Tensor,
                 index: torch.Tensor) -> torch.Tensor:
    """
    Gradient energy of every pixel at the current width.

    E(y, x) = |I(y, x_r) - I(y, x)| + |I(y_r, x) - I(y, x)| + penalty

    where x_r is the right neighbor (left neighbor in the last column) and
    y_r the row below (row above in the last row). Masked pixels get
    MASK_PENALTY added, which is a soft bias, not a hard constraint.

    Args:
        intensity: Intensity field in original coordinates (H, W), int64
        mask: Protection mask in original coordinates (H, W), bool
        index: Index tracker tensor (H, w), w >= 2

    Returns:
        Energy map (H, w), int64
    """
    cur = current_intensity(intensity, index)

    # I(y, x_r): right neighbor, wrapping to the left one at the edge
    right = torch.empty_like(cur)
    right[:, :-1] = cur[:, 1:]
    right[:, -1] = cur[:, -2]

    # I(y_r, x): row below, the row above for the last row
    below = torch.empty_like(cur)
    below[:-1] = cur[1:]
    below[-1] = cur[-2]

    e1 = torch.abs(right - cur)
    e2 = torch.abs(below - cur)
    e3 = torch.where(current_mask(mask, index),
                     torch.full_like(cur, MASK_PENALTY),
                     torch.zeros_like(cur))

    return e1 + e2 + e3


def transition_costs(cur: torch.Tensor):
    """Forward-energy transition costs (Rubinstein et al. 2008).

    Removing pixel (y, x) makes its left and right neighbors adjacent, and
    depending on which pixel of row y-1 the seam came from, also joins
    pixel (y-1, x) with one of them:

      C_V = |I(y, x-1) - I(y, x+1)|
      C_R = C_V + |I(y-1, x) - I(y, x+1)|
      C_L = C_V + |I(y-1, x) - I(y, x-1)|

    C_V is zero in the first and last column. C_R is only meaningful for
    x < w-1 and C_L only for x > 0; the other entries are left at zero.
    Row 0 has no predecessor and is all zeros.

    Args:
        cur: Intensity at the current width (H, w)

    Returns:
        (c_right, c_vertical, c_left), each (H, w)
    """
    lr = torch.zeros_like(cur)
    lr[:, 1:-1] = torch.abs(cur[:, :-2] - cur[:, 2:])

    # I(y-1, x): shift down
    above = torch.zeros_like(cur)
    above[1:] = cur[:-1]

    c_right = torch.zeros_like(cur)
    c_right[:, :-1] = torch.abs(above[:, :-1] - cur[:, 1:]) + lr[:, :-1]

    c_left = torch.zeros_like(cur)
    c_left[:, 1:] = torch.abs(above[:, 1:] - cur[:, :-1]) + lr[:, 1:]

    c_vertical = lr.clone()

    c_right[0] = 0
    c_vertical[0] = 0
    c_left[0] = 0

    return c_right, c_vertical, c_left
