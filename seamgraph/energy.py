"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

An energy function is any callable ``energy(grid, pixel) -> float`` that
returns a non-negative score for one pixel, reading its neighbors through
the grid's current links. The ``*_map`` variants compute the same scores
for a whole (3, H, W) image tensor at once.
"""

import math
from typing import Callable, Optional

import torch
import torch.nn.functional as F

from .grid import PixelGrid

EnergyFunction = Callable[[PixelGrid, int], float]


def blue_energy(grid: PixelGrid, pixel: int) -> float:
    """
    How far a pixel is from fully blue: ``255 - blue``.

    Pure blue (or white) pixels score 0 and are the cheapest to remove;
    pixels with no blue at all score 255.
    """
    return 255.0 - grid[pixel].blue


def brightness_energy(grid: PixelGrid, pixel: int) -> float:
    """
    Sobel gradient magnitude of brightness around a pixel.

    The pixel and its eight neighbors form a 3x3 neighborhood

        A | B | C
        D | E | F
        G | H | I

    where E is the pixel itself. Diagonals are reached through the parent
    and child (A is the parent's left neighbor, and so on). Any neighbor
    missing at the image border takes E's own brightness.

        Gx = (A + 2D + G) - (C + 2F + I)
        Gy = (A + 2B + C) - (G + 2H + I)
        energy = sqrt(Gx^2 + Gy^2)

    Args:
        grid: Grid the pixel belongs to
        pixel: Handle of the pixel

    Returns:
        Non-negative energy
    """
    center = grid[pixel]
    up, down = center.up, center.down

    def brightness(handle: Optional[int]) -> float:
        return center.brightness if handle is None else grid[handle].brightness

    a = brightness(None if up is None else grid[up].left)
    b = brightness(up)
    c = brightness(None if up is None else grid[up].right)
    d = brightness(center.left)
    f = brightness(center.right)
    g = brightness(None if down is None else grid[down].left)
    h = brightness(down)
    i = brightness(None if down is None else grid[down].right)

    horizontal = (a + 2 * d + g) - (c + 2 * f + i)
    vertical = (a + 2 * b + c) - (g + 2 * h + i)

    return math.sqrt(horizontal ** 2 + vertical ** 2)


def energy_map(grid: PixelGrid, energy: EnergyFunction) -> torch.Tensor:
    """
    Evaluate a per-pixel energy function over the whole live grid.

    Returns:
        Energy map (H, W), float64
    """
    values = [energy(grid, handle) for row in grid.rows() for handle in row]
    return torch.tensor(values, dtype=torch.float64).reshape(grid.height, grid.width)


def _channels(image: torch.Tensor) -> torch.Tensor:
    """(3, H, W) image as float64 channel values on the 0-255 scale."""
    if image.dim() == 2:
        image = image.unsqueeze(0).expand(3, -1, -1)
    if image.is_floating_point():
        return image.double() * 255.0
    return image.double()


def blue_energy_map(image: torch.Tensor) -> torch.Tensor:
    """
    Blue-deficiency energy for every pixel of an image.

    Args:
        image: RGB image tensor (3, H, W); uint8 in [0, 255] or float in [0, 1]

    Returns:
        Energy map (H, W)
    """
    return 255.0 - _channels(image)[2]


def brightness_energy_map(image: torch.Tensor) -> torch.Tensor:
    """
    Brightness gradient energy for every pixel of an image.

    Matches ``brightness_energy`` on a freshly built grid: neighbors that
    fall outside the image are replaced by the center pixel's brightness
    (not zero-padded, not mirrored).

    Args:
        image: RGB image tensor (3, H, W) or grayscale (H, W)

    Returns:
        Energy map (H, W)
    """
    # Integer channel sums divided once, like Pixel.brightness
    gray = _channels(image).sum(dim=0) / 3
    H, W = gray.shape

    # Unfold 3x3 neighborhoods; out-of-image entries are NaN until replaced
    padded = F.pad(gray.view(1, 1, H, W), (1, 1, 1, 1), value=float('nan'))
    patches = F.unfold(padded, kernel_size=3).view(9, H, W)
    patches = torch.where(torch.isnan(patches), gray.expand(9, H, W), patches)

    sobel_x = torch.tensor([1, 0, -1,
                            2, 0, -2,
                            1, 0, -1], dtype=gray.dtype).view(9, 1, 1)
    sobel_y = torch.tensor([ 1,  2,  1,
                             0,  0,  0,
                            -1, -2, -1], dtype=gray.dtype).view(9, 1, 1)

    grad_x = (patches * sobel_x).sum(dim=0)
    grad_y = (patches * sobel_y).sum(dim=0)

    return torch.sqrt(grad_x ** 2 + grad_y ** 2)
