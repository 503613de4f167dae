"""Tests for energy functions."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seam_carving.energy import (MASK_PENALTY, current_intensity, current_mask,
                                 pixel_energy, transition_costs)
from seam_carving.index_tracker import IndexTracker


def _identity_index(H, W):
    return IndexTracker(H, W).index


class TestPixelEnergy:
    def test_uniform_is_zero(self):
        intensity = torch.full((5, 6), 100, dtype=torch.long)
        mask = torch.zeros(5, 6, dtype=torch.bool)
        energy = pixel_energy(intensity, mask, _identity_index(5, 6))
        assert energy.shape == (5, 6)
        assert (energy == 0).all()

    def test_known_values(self):
        """Right neighbor plus row below; edges wrap to the other neighbor."""
        intensity = torch.tensor([[0, 10, 30],
                                  [5, 5, 5]])
        mask = torch.zeros(2, 3, dtype=torch.bool)
        energy = pixel_energy(intensity, mask, _identity_index(2, 3))
        assert energy.tolist() == [[15, 25, 45],
                                   [5, 5, 25]]

    def test_mask_adds_penalty(self):
        intensity = torch.tensor([[0, 10, 30],
                                  [5, 5, 5]])
        mask = torch.zeros(2, 3, dtype=torch.bool)
        mask[0, 1] = True
        energy = pixel_energy(intensity, mask, _identity_index(2, 3))
        assert energy[0, 1].item() == 25 + MASK_PENALTY
        assert energy[0, 0].item() == 15

    def test_neighbors_follow_tracker(self):
        """After removing column 1, columns 0 and 2 become neighbors."""
        intensity = torch.tensor([[0, 10, 30],
                                  [5, 5, 5]])
        mask = torch.zeros(2, 3, dtype=torch.bool)
        tracker = IndexTracker(2, 3)
        tracker.remove(torch.tensor([1, 1]))
        energy = pixel_energy(intensity, mask, tracker.index)
        # (0, 0): |30 - 0| + |5 - 0|
        assert energy[0, 0].item() == 35
        # (0, 1) is original column 2, wraps left: |0 - 30| + |5 - 30|
        assert energy[0, 1].item() == 55

    def test_row_below_read_through_its_own_tracker_row(self):
        """Rows that lost different columns are compared position by position."""
        intensity = torch.tensor([[10, 20, 40, 80],
                                  [5, 15, 35, 75],
                                  [1, 2, 4, 8]])
        mask = torch.zeros(3, 4, dtype=torch.bool)
        tracker = IndexTracker(3, 4)
        tracker.remove(torch.tensor([0, 2, 3]))
        # Current rows: [20, 40, 80], [5, 15, 75], [1, 2, 4]
        energy = pixel_energy(intensity, mask, tracker.index)
        assert energy.tolist() == [[35, 65, 45],
                                   [14, 73, 131],
                                   [5, 15, 73]]

    def test_mask_follows_tracker(self):
        intensity = torch.zeros(2, 4, dtype=torch.long)
        mask = torch.zeros(2, 4, dtype=torch.bool)
        mask[:, 3] = True
        tracker = IndexTracker(2, 4)
        tracker.remove(torch.tensor([0, 0]))
        energy = pixel_energy(intensity, mask, tracker.index)
        assert (energy[:, 2] == MASK_PENALTY).all()
        assert (energy[:, :2] == 0).all()


class TestCurrentSpace:
    def test_gather(self):
        intensity = torch.arange(8).reshape(2, 4)
        mask = intensity % 2 == 0
        tracker = IndexTracker(2, 4)
        tracker.remove(torch.tensor([0, 3]))
        assert current_intensity(intensity, tracker.index).tolist() == [[1, 2, 3],
                                                                        [4, 5, 6]]
        assert current_mask(mask, tracker.index).tolist() == [[False, True, False],
                                                              [True, False, True]]


class TestTransitionCosts:
    def test_known_values(self):
        cur = torch.tensor([[0, 10, 30],
                            [5, 7, 9]])
        c_right, c_vertical, c_left = transition_costs(cur)

        # Row 0 has no predecessor
        assert c_right[0].tolist() == [0, 0, 0]
        assert c_vertical[0].tolist() == [0, 0, 0]
        assert c_left[0].tolist() == [0, 0, 0]

        # |I(y, x-1) - I(y, x+1)| only in interior columns
        assert c_vertical[1].tolist() == [0, 4, 0]
        # |I(y-1, x) - I(y, x+1)| + C_V, undefined in the last column
        assert c_right[1, :2].tolist() == [7, 5]
        # |I(y-1, x) - I(y, x-1)| + C_V, undefined in the first column
        assert c_left[1, 1:].tolist() == [9, 23]

    def test_row_above_read_through_its_own_tracker_row(self):
        """Diagonal terms use I(y-1, x) at the same current position."""
        intensity = torch.tensor([[10, 20, 40, 80],
                                  [5, 15, 35, 75],
                                  [1, 2, 4, 8]])
        tracker = IndexTracker(3, 4)
        tracker.remove(torch.tensor([0, 2, 3]))
        cur = current_intensity(intensity, tracker.index)
        assert cur.tolist() == [[20, 40, 80], [5, 15, 75], [1, 2, 4]]

        c_right, c_vertical, c_left = transition_costs(cur)
        assert c_vertical[1:].tolist() == [[0, 70, 0], [0, 3, 0]]
        assert c_right[1:, :2].tolist() == [[5, 105], [3, 14]]
        assert c_left[1:, 1:].tolist() == [[105, 65], [17, 73]]

    def test_uniform_has_no_cost(self):
        cur = torch.full((4, 5), 42, dtype=torch.long)
        for c in transition_costs(cur):
            assert (c == 0).all()

    def test_edge_crossing_costs_more(self):
        """Removing a pixel next to a vertical edge joins dark and bright."""
        cur = torch.zeros(6, 8, dtype=torch.long)
        cur[:, 4:] = 200
        _, c_vertical, _ = transition_costs(cur)
        assert (c_vertical[1:, 3] == 200).all()
        assert (c_vertical[1:, 4] == 200).all()
        assert (c_vertical[1:, 1] == 0).all()
