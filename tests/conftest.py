"""Shared test fixtures for the seam carving test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest


def make_uniform_image(H, W, value=100, channels=3):
    """Solid uint8 image."""
    if channels > 0:
        return torch.full((channels, H, W), value, dtype=torch.uint8)
    return torch.full((H, W), value, dtype=torch.uint8)


def make_random_image(H, W, channels=3, seed=0):
    """Random uint8 image, reproducible per seed."""
    gen = torch.Generator().manual_seed(seed)
    if channels > 0:
        return torch.randint(0, 256, (channels, H, W), dtype=torch.uint8, generator=gen)
    return torch.randint(0, 256, (H, W), dtype=torch.uint8, generator=gen)


def make_edge_image(H, W, edge_col, low=0, high=200):
    """Grayscale image: low left of edge_col, high from edge_col on."""
    img = torch.full((H, W), low, dtype=torch.long)
    img[:, edge_col:] = high
    return img


@pytest.fixture
def random_image():
    """Random 3-channel 12x16 image."""
    return make_random_image(12, 16, seed=42)


@pytest.fixture
def no_mask():
    return torch.zeros(12, 16, dtype=torch.bool)
