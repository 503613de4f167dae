"""
Single-channel intensity field used by the energy model.

The carver never looks at color directly: every pixel is reduced once to an
integer intensity in [0, 255] using a weighted average of its RGB channels.
"""

import torch
from typing import NamedTuple, Optional


class RGBWeights(NamedTuple):
    """Per-channel weights for the grayscale conversion."""
    red: float = 1.0
    green: float = 1.0
    blue: float = 1.0

    @property
    def total(self) -> float:
        return self.red + self.green + self.blue


def _to_255_scale(image: torch.Tensor) -> torch.Tensor:
    """Return a float64 copy of image on the 0..255 scale."""
    if image.is_floating_point():
        # Quantize like a float -> uint8 conversion would
        return (image.double() * 255.0).round()
    return image.double()


def to_intensity(image: torch.Tensor,
                 weights: Optional[RGBWeights] = None) -> torch.Tensor:
    """
    Convert an image to an integer intensity field.

    intensity = (r * w_r + g * w_g + b * w_b) / (w_r + w_g + w_b)

    Float images are assumed to be in [0, 1] and are quantized to [0, 255]
    before weighting. The weighted average is truncated to an integer.

    Args:
        image: RGB image tensor (3, H, W), single channel (1, H, W)
               or grayscale (H, W)
        weights: Channel weights (default: equal weights)

    Returns:
        Intensity field (H, W), dtype int64, values in [0, 255]
    """
    if weights is None:
        weights = RGBWeights()
    if min(weights) < 0 or weights.total <= 0:
        raise ValueError(f"Invalid RGB weights: {tuple(weights)}")

    scaled = _to_255_scale(image)

    if scaled.dim() == 2:
        gray = scaled
    elif scaled.dim() == 3 and scaled.shape[0] == 1:
        gray = scaled[0]
    elif scaled.dim() == 3 and scaled.shape[0] >= 3:
        gray = (weights.red * scaled[0]
                + weights.green * scaled[1]
                + weights.blue * scaled[2]) / weights.total
    else:
        raise ValueError(f"Invalid image shape: {tuple(image.shape)}")

    # Absorb float error in the weighted sum before truncating
    return (gray + 1e-9).floor().clamp(0, 255).long()
