"""
Basic seam carving example.

Resizes an image to a new width, writes the result, the carried-over mask
and a copy of the input with all seams painted red.

    python basic_seam_carving.py input.jpg --width 300 --out output/
    python basic_seam_carving.py input.jpg --width 600 --mask mask.png --show
"""

import argparse
import logging
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import numpy as np
from PIL import Image
import matplotlib.pyplot as plt

from seam_carving import RGBWeights, SeamCarver


def load_image(path: str, device='cpu'):
    """Load image as a uint8 torch tensor (3, H, W)."""
    img = Image.open(path).convert('RGB')
    img_array = np.array(img, dtype=np.uint8)
    return torch.from_numpy(img_array).permute(2, 0, 1).contiguous().to(device)


def load_mask(path: str, device='cpu'):
    """Load a mask image; any non-black pixel is masked."""
    img = Image.open(path).convert('L')
    return torch.from_numpy(np.array(img) > 0).to(device)


def save_image(tensor: torch.Tensor, path: str):
    """Save a uint8 torch tensor (3, H, W) or (H, W) as an image."""
    if tensor.dim() == 3:
        tensor = tensor.permute(1, 2, 0)
    img = Image.fromarray(tensor.cpu().numpy())
    img.save(path)
    print(f"Saved: {path}")


def main():
    parser = argparse.ArgumentParser(description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('image', help='input image')
    parser.add_argument('--width', type=int, required=True, help='output width')
    parser.add_argument('--mask', help='mask image, non-black pixels are masked')
    parser.add_argument('--weights', type=float, nargs=3, default=(1.0, 1.0, 1.0),
                        metavar=('R', 'G', 'B'), help='grayscale channel weights')
    parser.add_argument('--out', default='output', help='output directory')
    parser.add_argument('--show', action='store_true', help='display the results')
    parser.add_argument('--log-level', default='INFO')
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format='%(message)s')
    logger = logging.getLogger('basic_seam_carving')

    image = load_image(args.image)
    C, H, W = image.shape
    print(f"Image shape: {C} x {H} x {W}")

    mask = load_mask(args.mask) if args.mask else None
    carver = SeamCarver(image, args.width, weights=RGBWeights(*args.weights), mask=mask)

    resized = carver.resize(logger)
    out_mask = carver.mask_after_carving(logger)
    with_seams = carver.show_seams((255, 0, 0), logger)

    os.makedirs(args.out, exist_ok=True)
    save_image(resized, os.path.join(args.out, 'resized.png'))
    save_image(out_mask.to(torch.uint8) * 255, os.path.join(args.out, 'mask.png'))
    save_image(with_seams, os.path.join(args.out, 'seams.png'))

    if args.show:
        fig, axes = plt.subplots(1, 3, figsize=(15, 5))
        axes[0].imshow(image.permute(1, 2, 0).cpu().numpy())
        axes[0].set_title(f'Original ({W}px)')
        axes[1].imshow(with_seams.permute(1, 2, 0).cpu().numpy())
        axes[1].set_title(f'{carver.num_seams} seams')
        axes[2].imshow(resized.permute(1, 2, 0).cpu().numpy())
        axes[2].set_title(f'Resized ({args.width}px)')
        for ax in axes:
            ax.axis('off')
        plt.tight_layout()
        plt.show()


if __name__ == '__main__':
    main()
