"""Shared test fixtures for the seamgraph test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamgraph.grid import PixelGrid

RED = (255, 0, 0)
ORANGE = (255, 200, 0)
YELLOW = (255, 255, 0)
GREEN = (0, 255, 0)
BLACK = (0, 0, 0)
BLUE = (0, 0, 255)
MAGENTA = (255, 0, 255)
PINK = (255, 175, 175)
CYAN = (0, 255, 255)

COLOR_ROWS = [
    [RED, ORANGE, YELLOW],
    [GREEN, BLACK, BLUE],
    [MAGENTA, PINK, CYAN],
]


@pytest.fixture
def color_grid():
    """3x3 grid where every pixel is a different color."""
    return PixelGrid.build([c for row in COLOR_ROWS for c in row], 3, 3)


@pytest.fixture
def random_grid():
    """Seeded 12x9 grid of random colors."""
    return make_random_grid(9, 12, seed=42)


def make_random_grid(H, W, seed=0):
    generator = torch.Generator().manual_seed(seed)
    image = torch.randint(0, 256, (3, H, W), generator=generator, dtype=torch.uint8)
    return PixelGrid.from_tensor(image)


def color_rows(grid):
    """Current grid colors as a list of rows."""
    return [[grid[h].color for h in row] for row in grid.rows()]
