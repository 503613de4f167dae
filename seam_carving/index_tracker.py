"""
Bookkeeping between current and original column positions.

Seams are searched on a virtually shrinking image: after each seam the image
is one column narrower, but nothing is ever copied. Instead every row keeps
an ordered list of the original columns that are still present, so current
position x in row y maps to original column index[y, x].
"""

import torch


class IndexTracker:
    """
    Per-row map from current column position to original column index.

    Stored as an (H, w) long tensor, so all rows always have the same
    length w = W - (seams removed so far).
    """

    def __init__(self, height: int, width: int, device='cpu'):
        self.index = torch.arange(width, dtype=torch.long, device=device) \
            .unsqueeze(0).expand(height, width).clone()

    @property
    def height(self) -> int:
        return self.index.shape[0]

    @property
    def width(self) -> int:
        return self.index.shape[1]

    def original(self, y: int, x: int) -> int:
        """Original column of current position x in row y."""
        return int(self.index[y, x])

    def row(self, y: int) -> torch.Tensor:
        return self.index[y]

    def remove(self, positions: torch.Tensor) -> torch.Tensor:
        """
        Remove one entry per row, shifting later entries left by one.

        Args:
            positions: Current positions to remove, one per row (H,)

        Returns:
            Original columns of the removed entries (H,)
        """
        positions = torch.as_tensor(positions, dtype=torch.long,
                                    device=self.index.device)
        if positions.shape != (self.height,):
            raise IndexError(f"Expected {self.height} positions, "
                             f"got shape {tuple(positions.shape)}")
        if (positions < 0).any() or (positions >= self.width).any():
            raise IndexError(f"Positions out of range [0, {self.width})")

        rows = torch.arange(self.height, device=self.index.device)
        removed = self.index[rows, positions].clone()

        keep = torch.ones_like(self.index, dtype=torch.bool)
        keep[rows, positions] = False
        self.index = self.index[keep].view(self.height, self.width - 1)

        return removed

    def __repr__(self):
        return f"IndexTracker(height={self.height}, width={self.width})"
