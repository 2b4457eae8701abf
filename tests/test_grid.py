"""Tests for the pixel grid: construction, traversal, export."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamgraph.grid import Pixel, PixelGrid
from seamgraph.errors import InvalidGeometryError

from conftest import COLOR_ROWS, RED, ORANGE, GREEN, BLACK, CYAN, color_rows


class TestPixel:
    def test_default_color_is_black(self):
        pixel = Pixel()
        assert pixel.color == (0, 0, 0)
        assert pixel.brightness == 0.0

    def test_brightness_is_channel_mean(self):
        assert Pixel((255, 255, 255)).brightness == 255.0
        assert Pixel((128, 128, 128)).brightness == 128.0
        assert Pixel((255, 175, 175)).brightness == (255 + 175 + 175) / 3

    def test_brightness_follows_color_changes(self):
        pixel = Pixel((0, 0, 0))
        pixel.color = (30, 60, 90)
        assert pixel.color == (30, 60, 90)
        assert pixel.brightness == 60.0
        assert pixel.blue == 90

    def test_new_pixel_has_no_neighbors(self):
        pixel = Pixel(RED)
        assert pixel.left is None and pixel.right is None
        assert pixel.up is None and pixel.down is None

    def test_rejects_out_of_range_channels(self):
        with pytest.raises(ValueError):
            Pixel((256, 0, 0))
        with pytest.raises(ValueError):
            Pixel((0, -1, 0))

    def test_rejects_wrong_channel_count(self):
        with pytest.raises(ValueError):
            Pixel((1, 2))


class TestBuild:
    def test_dimensions(self, color_grid):
        assert color_grid.width == 3
        assert color_grid.height == 3

    def test_head_is_top_left(self, color_grid):
        assert color_grid[color_grid.head].color == RED

    def test_links_follow_positions(self, color_grid):
        head = color_grid[color_grid.head]
        assert color_grid[head.right].color == ORANGE
        assert color_grid[head.down].color == GREEN
        center = color_grid[color_grid[head.down].right]
        assert center.color == BLACK
        assert color_grid[color_grid[center.down].right].color == CYAN

    def test_border_links_are_absent(self, color_grid):
        for y, row in enumerate(color_grid.rows()):
            assert color_grid[row[0]].left is None
            assert color_grid[row[-1]].right is None
            for handle in row:
                if y == 0:
                    assert color_grid[handle].up is None
                if y == color_grid.height - 1:
                    assert color_grid[handle].down is None

    def test_validate_passes_on_fresh_grid(self, color_grid, random_grid):
        color_grid.validate()
        random_grid.validate()

    def test_single_pixel_grid(self):
        grid = PixelGrid.build([RED], 1, 1)
        grid.validate()
        assert grid.to_row_major_colors() == [RED]

    def test_from_callable(self):
        grid = PixelGrid.build(lambda x, y: (x * 10, y * 10, 0), 4, 2)
        assert grid[grid.pixel_at(3, 1)].color == (30, 10, 0)
        grid.validate()

    @pytest.mark.parametrize('width,height', [(0, 3), (3, 0), (-1, 2), (2, -5)])
    def test_rejects_non_positive_dimensions(self, width, height):
        with pytest.raises(InvalidGeometryError):
            PixelGrid.build([RED] * 9, width, height)

    def test_rejects_color_count_mismatch(self):
        with pytest.raises(InvalidGeometryError):
            PixelGrid.build([RED] * 5, 3, 2)


class TestTraversal:
    def test_row_major_colors(self, color_grid):
        expected = [c for row in COLOR_ROWS for c in row]
        assert color_grid.to_row_major_colors() == expected

    def test_rows(self, color_grid):
        assert color_rows(color_grid) == COLOR_ROWS

    def test_pixel_at(self, color_grid):
        assert color_grid[color_grid.pixel_at(0, 0)].color == RED
        assert color_grid[color_grid.pixel_at(2, 2)].color == CYAN
        with pytest.raises(IndexError):
            color_grid.pixel_at(3, 0)

    def test_validate_detects_broken_link(self, color_grid):
        center = color_grid.pixel_at(1, 1)
        color_grid[center].up = None
        with pytest.raises(InvalidGeometryError):
            color_grid.validate()

    def test_validate_detects_short_row(self, color_grid):
        color_grid[color_grid.pixel_at(1, 2)].right = None
        with pytest.raises(InvalidGeometryError):
            color_grid.validate()


class TestTensorConversion:
    def test_to_tensor_layout(self, color_grid):
        image = color_grid.to_tensor()
        assert image.shape == (3, 3, 3)
        assert image.dtype == torch.uint8
        assert image[:, 0, 0].tolist() == list(RED)
        assert image[:, 2, 2].tolist() == list(CYAN)

    def test_from_uint8_tensor(self):
        image = torch.arange(3 * 4 * 5, dtype=torch.uint8).reshape(3, 4, 5)
        grid = PixelGrid.from_tensor(image)
        assert grid.width == 5 and grid.height == 4
        assert torch.equal(grid.to_tensor(), image)

    def test_from_float_tensor(self):
        image = torch.zeros(3, 2, 2)
        image[2] = 1.0
        image[0, 1, 1] = 0.5
        grid = PixelGrid.from_tensor(image)
        assert grid[grid.pixel_at(0, 0)].color == (0, 0, 255)
        assert grid[grid.pixel_at(1, 1)].color == (128, 0, 255)

    def test_from_grayscale_tensor(self):
        image = torch.full((2, 3), 7, dtype=torch.uint8)
        grid = PixelGrid.from_tensor(image)
        assert grid.to_row_major_colors() == [(7, 7, 7)] * 6

    def test_rejects_bad_shape(self):
        with pytest.raises(InvalidGeometryError):
            PixelGrid.from_tensor(torch.zeros(4, 2, 2, dtype=torch.uint8))
