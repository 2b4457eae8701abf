"""
Reading and writing image files as tensors and grids.
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np
import torch
from PIL import Image

from .errors import ExportError, ImageLoadError, InvalidStateError
from .grid import PixelGrid

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_image(path: PathLike) -> torch.Tensor:
    """Load an image file as a (3, H, W) uint8 tensor."""
    try:
        with Image.open(path) as img:
            img_array = np.array(img.convert('RGB'), dtype=np.uint8)
    except (OSError, ValueError) as exc:
        raise ImageLoadError(f"Could not read image {path}: {exc}") from exc
    return torch.from_numpy(img_array).permute(2, 0, 1).contiguous()


def save_image(tensor: torch.Tensor, path: PathLike):
    """Save a (3, H, W) tensor as an image. Float tensors are taken as [0, 1]."""
    if tensor.is_floating_point():
        tensor = (tensor * 255).round().clamp(0, 255)
    img_array = tensor.to(torch.uint8).permute(1, 2, 0).contiguous().cpu().numpy()
    Image.fromarray(img_array).save(path)


def load_grid(path: PathLike) -> PixelGrid:
    grid = PixelGrid.from_tensor(load_image(path))
    logger.info("Loaded %s (%dx%d)", path, grid.width, grid.height)
    return grid


def export_grid(grid: PixelGrid, path: PathLike) -> Path:
    """
    Write the grid's current image to a file.

    The format follows the file extension.

    Raises:
        InvalidStateError: if the grid has no pixels
        ExportError: if the image could not be encoded or written
    """
    if grid.width == 0 or grid.height == 0:
        raise InvalidStateError("Cannot save an empty image.")

    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        save_image(grid.to_tensor(), path)
    except (OSError, ValueError) as exc:
        raise ExportError(f"Failed to export image to {path}: {exc}") from exc

    logger.info("Saved %s", path)
    return path
