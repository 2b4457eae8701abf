"""Tests for energy functions."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import math

import torch
import pytest
from seamgraph.grid import PixelGrid
from seamgraph.energy import (blue_energy, brightness_energy, energy_map,
                              blue_energy_map, brightness_energy_map)

from conftest import make_random_grid


def brightness_at(grid, x, y):
    return grid[grid.pixel_at(x, y)].brightness


class TestBlueEnergy:
    @pytest.mark.parametrize('color,expected', [
        ((0, 0, 255), 0.0),
        ((255, 0, 0), 255.0),
        ((100, 100, 100), 155.0),
        ((0, 0, 0), 255.0),
        ((255, 255, 255), 0.0),
    ])
    def test_values(self, color, expected):
        grid = PixelGrid.build([color], 1, 1)
        assert blue_energy(grid, grid.head) == expected

    def test_ignores_neighbors(self, color_grid):
        blue = color_grid.pixel_at(2, 1)
        assert blue_energy(color_grid, blue) == 0.0


class TestBrightnessEnergy:
    def test_uniform_image_is_zero_everywhere(self):
        """Border substitution uses the center, so uniform images have no gradient."""
        grid = PixelGrid.build([(40, 80, 120)] * 9, 3, 3)
        for row in grid.rows():
            for handle in row:
                assert brightness_energy(grid, handle) == 0.0

    def test_single_pixel_is_zero(self):
        grid = PixelGrid.build([(200, 10, 30)], 1, 1)
        assert brightness_energy(grid, grid.head) == 0.0

    def test_top_left_corner(self, color_grid):
        A = brightness_at(color_grid, 0, 0)
        B = brightness_at(color_grid, 1, 0)
        D = brightness_at(color_grid, 0, 1)
        E = brightness_at(color_grid, 1, 1)
        # Missing neighbors take the corner pixel's own brightness
        expected = math.sqrt((4 * A - (A + 2 * D + E)) ** 2 + (4 * A - (A + 2 * B + E)) ** 2)
        assert brightness_energy(color_grid, color_grid.head) == pytest.approx(expected)
        assert brightness_energy(color_grid, color_grid.head) == pytest.approx(97.78093429248419)

    def test_center(self, color_grid):
        b = [[brightness_at(color_grid, x, y) for x in range(3)] for y in range(3)]
        (A, B, C), (D, _, F), (G, H, I) = b
        expected = math.sqrt((A + 2 * B + C - (G + 2 * H + I)) ** 2
                             + (A + 2 * D + G - (C + 2 * F + I)) ** 2)
        center = color_grid.pixel_at(1, 1)
        assert brightness_energy(color_grid, center) == pytest.approx(expected)
        assert brightness_energy(color_grid, center) == pytest.approx(203.59273071502332)

    def test_bottom_right_corner(self, color_grid):
        E = brightness_at(color_grid, 1, 1)
        F = brightness_at(color_grid, 2, 1)
        H = brightness_at(color_grid, 1, 2)
        I = brightness_at(color_grid, 2, 2)
        expected = math.sqrt((E + 2 * F + I - 4 * I) ** 2 + (E + 2 * H + I - 4 * I) ** 2)
        assert brightness_energy(color_grid, color_grid.pixel_at(2, 2)) == pytest.approx(expected)

    def test_vertical_edge_has_energy(self):
        colors = [(0, 0, 0) if x < 3 else (255, 255, 255) for y in range(4) for x in range(6)]
        grid = PixelGrid.build(colors, 6, 4)
        emap = energy_map(grid, brightness_energy)
        assert emap[:, 2:4].min() > 0
        assert emap[:, 0].max() == 0
        assert emap[:, 5].max() == 0

    def test_energy_nonnegative(self, random_grid):
        emap = energy_map(random_grid, brightness_energy)
        assert (emap >= 0).all()


class TestEnergyMaps:
    def test_energy_map_shape(self, random_grid):
        emap = energy_map(random_grid, blue_energy)
        assert emap.shape == (random_grid.height, random_grid.width)
        assert emap.dtype == torch.float64

    def test_blue_map_matches_per_pixel(self, random_grid):
        expected = energy_map(random_grid, blue_energy)
        actual = blue_energy_map(random_grid.to_tensor())
        assert torch.equal(actual, expected)

    def test_blue_map_float_input(self):
        image = torch.zeros(3, 2, 2)
        image[2, 0, 0] = 1.0
        emap = blue_energy_map(image)
        assert emap[0, 0] == 0.0
        assert emap[1, 1] == 255.0

    @pytest.mark.parametrize('H,W', [(1, 1), (1, 5), (5, 1), (3, 3), (9, 12)])
    def test_brightness_map_matches_per_pixel(self, H, W):
        grid = make_random_grid(H, W, seed=H * 31 + W)
        expected = energy_map(grid, brightness_energy)
        actual = brightness_energy_map(grid.to_tensor())
        assert torch.allclose(actual, expected, atol=1e-9)

    def test_brightness_map_uniform_is_zero(self):
        image = torch.full((3, 5, 7), 90, dtype=torch.uint8)
        assert brightness_energy_map(image).abs().max() == 0
