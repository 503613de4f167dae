"""
High-level carving functions that orchestrate the seam carving workflow.

All seams are searched first, on a virtually shrinking copy of the image
(see IndexTracker), and expressed in original column coordinates. The
output image and mask are then rebuilt from the untouched source in one
pass: shrinking keeps the surviving columns, growing doubles every seam
pixel.
"""

import enum
import logging
import torch
from typing import Optional, Sequence, Tuple, Union

from .errors import ImageTooSmallError, TooManySeamsError
from .index_tracker import IndexTracker
from .intensity import RGBWeights, to_intensity
from .seam import find_seam

log = logging.getLogger(__name__)


class ResizeMode(enum.Enum):
    SHRINK = 'shrink'
    GROW = 'grow'
    IDENTITY = 'identity'


def _log(logger: Optional[logging.Logger], message: str, *args):
    (logger or log).info("Seam carving: " + message, *args)


def accumulate_seams(intensity: torch.Tensor, mask: torch.Tensor, n_seams: int,
                     logger: Optional[logging.Logger] = None
                     ) -> Tuple[torch.Tensor, IndexTracker]:
    """
    Find n_seams seams one at a time at successively smaller widths.

    Seam i is searched at width W - i. After each seam its pixels are
    removed from the index tracker, so the next search runs on the
    remaining columns only.

    Args:
        intensity: Intensity field (H, W)
        mask: Protection mask (H, W)
        n_seams: Number of seams to find
        logger: Optional logger for progress messages

    Returns:
        seams: Original column per row for every seam (n_seams, H)
        tracker: Index tracker after all removals (width W - n_seams)
    """
    H, W = intensity.shape
    tracker = IndexTracker(H, W, device=intensity.device)
    seams = torch.zeros(n_seams, H, dtype=torch.long, device=intensity.device)

    for i in range(n_seams):
        positions, columns = find_seam(intensity, mask, tracker.index)
        seams[i] = columns
        tracker.remove(positions)
        (logger or log).debug("Seam carving: seam %d/%d found at width %d",
                              i + 1, n_seams, W - i)

    return seams, tracker


def _gather_columns(image: torch.Tensor, columns: torch.Tensor) -> torch.Tensor:
    """Pick image[..., y, columns[y, x]] for every output position."""
    if image.dim() == 2:
        return torch.gather(image, 1, columns)
    C = image.shape[0]
    return torch.gather(image, 2, columns.unsqueeze(0).expand(C, -1, -1))


def _grow_columns(seams: torch.Tensor, width: int) -> torch.Tensor:
    """
    Source column of every output pixel when each seam pixel is doubled.

    Returns:
        columns: (H, width + n_seams), each seam column appears twice in a row
    """
    n_seams, H = seams.shape
    device = seams.device
    base = torch.arange(width, dtype=torch.long, device=device)

    rows = []
    for y in range(H):
        repeats = torch.ones(width, dtype=torch.long, device=device)
        repeats[seams[:, y]] = 2
        rows.append(torch.repeat_interleave(base, repeats))

    return torch.stack(rows)


class SeamCarver:
    """
    Content-aware width resizing of one image.

    Validates its inputs and computes the intensity field on construction;
    seams are searched lazily on first use and reused afterwards.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        out_width: Requested output width
        weights: Channel weights for the intensity field
        mask: Protection mask (H, W); True pixels are preferred for removal
    """

    def __init__(self, image: torch.Tensor, out_width: int,
                 weights: Optional[RGBWeights] = None,
                 mask: Optional[torch.Tensor] = None):
        if image.dim() not in (2, 3):
            raise ValueError(f"Invalid image shape: {tuple(image.shape)}")

        self.image = image
        self.in_height, self.in_width = image.shape[-2:]

        if self.in_width < 2 or self.in_height < 2:
            raise ImageTooSmallError(
                f"Can not apply seam carving: image of size "
                f"{self.in_height}x{self.in_width} is too small")

        if int(out_width) != out_width or out_width < 1:
            raise ValueError(f"Invalid output width: {out_width!r}")
        self.out_width = int(out_width)
        self.num_seams = abs(self.out_width - self.in_width)

        if self.num_seams > self.in_width // 2:
            raise TooManySeamsError(
                f"Can not apply seam carving: {self.num_seams} seams requested, "
                f"at most {self.in_width // 2} allowed")

        if mask is None:
            mask = torch.zeros(self.in_height, self.in_width, dtype=torch.bool,
                               device=image.device)
        elif tuple(mask.shape) != (self.in_height, self.in_width):
            raise ValueError(f"Invalid mask shape: {tuple(mask.shape)}, "
                             f"expected {(self.in_height, self.in_width)}")
        self.mask = mask.to(dtype=torch.bool, device=image.device)

        if self.out_width > self.in_width:
            self.mode = ResizeMode.GROW
        elif self.out_width < self.in_width:
            self.mode = ResizeMode.SHRINK
        else:
            self.mode = ResizeMode.IDENTITY

        self.intensity = to_intensity(image, weights)
        self._seams = None
        self._tracker = None

    def seams(self, logger: Optional[logging.Logger] = None) -> torch.Tensor:
        """
        All seams in original column coordinates, in the order found.

        Returns:
            (num_seams, H) long tensor
        """
        if self._seams is None:
            _log(logger, "preliminary calculations were ended.")
            self._seams, self._tracker = accumulate_seams(
                self.intensity, self.mask, self.num_seams, logger=logger)
            _log(logger, "found %d seams", self.num_seams)
        return self._seams

    def _output_columns(self, logger: Optional[logging.Logger]) -> torch.Tensor:
        seams = self.seams(logger)
        if self.mode is ResizeMode.SHRINK:
            return self._tracker.index
        return _grow_columns(seams, self.in_width)

    def resize(self, logger: Optional[logging.Logger] = None) -> torch.Tensor:
        """
        Build the resized image.

        Returns:
            New tensor (C, H, out_width) or (H, out_width), same dtype as input
        """
        if self.mode is ResizeMode.IDENTITY:
            return self.image.clone()

        resized = _gather_columns(self.image, self._output_columns(logger))

        if self.mode is ResizeMode.SHRINK:
            _log(logger, "the image has been reduced by %d seams", self.num_seams)
        else:
            _log(logger, "the image has been increased by %d seams", self.num_seams)
        return resized

    def mask_after_carving(self, logger: Optional[logging.Logger] = None) -> torch.Tensor:
        """
        Carry the protection mask over to the output geometry.

        Inserted pixels are never masked.

        Returns:
            (H, out_width) bool tensor
        """
        if self.mode is ResizeMode.IDENTITY:
            return self.mask.clone()

        columns = self._output_columns(logger)
        out_mask = torch.gather(self.mask, 1, columns)

        if self.mode is ResizeMode.GROW:
            # The second copy of a doubled column is the inserted pixel
            inserted = torch.zeros_like(out_mask)
            inserted[:, 1:] = columns[:, 1:] == columns[:, :-1]
            out_mask = out_mask & ~inserted

        return out_mask

    def show_seams(self, color: Union[float, Sequence[float], torch.Tensor],
                   logger: Optional[logging.Logger] = None) -> torch.Tensor:
        """
        Paint every seam onto a copy of the source image.

        Args:
            color: Seam color in the image's value range. A single value
                   paints all channels; a sequence paints the leading
                   channels (e.g. RGB on an RGBA image), the rest are kept.

        Returns:
            Copy of the image with seam pixels set to color
        """
        color = torch.as_tensor(color, dtype=self.image.dtype,
                                device=self.image.device).reshape(-1)
        n_channels = 1 if self.image.dim() == 2 else self.image.shape[0]
        if color.numel() == 0 or color.numel() > n_channels:
            raise ValueError(f"Invalid color with {color.numel()} values "
                             f"for an image with {n_channels} channels")

        seams = self.seams(logger)
        painted = self.image.clone()

        rows = torch.arange(self.in_height, device=seams.device).repeat(seams.shape[0])
        cols = seams.reshape(-1)

        if painted.dim() == 2:
            painted[rows, cols] = color
        elif color.numel() == 1:
            painted[:, rows, cols] = color
        else:
            painted[:color.numel(), rows, cols] = color.reshape(-1, 1)

        _log(logger, "the seams are colored")
        return painted


def carve(image: torch.Tensor, out_width: int,
          weights: Optional[RGBWeights] = None,
          mask: Optional[torch.Tensor] = None,
          logger: Optional[logging.Logger] = None) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Resize image to out_width by seam carving.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        out_width: Requested output width
        weights: Channel weights for the intensity field
        mask: Protection mask (H, W)
        logger: Optional logger for progress messages

    Returns:
        (resized image, resized mask)
    """
    carver = SeamCarver(image, out_width, weights=weights, mask=mask)
    return carver.resize(logger), carver.mask_after_carving(logger)
