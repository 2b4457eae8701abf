"""
Pixel grid: a mutable, four-connected graph of pixels.

Pixels live in an arena and are addressed by integer handles. Each pixel
holds handles to its left, right, up and down neighbors (``None`` at the
image border). Seams are removed and reinserted by rewriting these links
along one path per row, so the width of the grid changes without ever
copying a row or column.

    None      None      None
     |         |         |
    head ---- px ------ px ---- None
     |         |         |
    px ------ px ------ px ---- None
     |         |         |
    None      None      None
"""

from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

import torch

from .errors import InvalidGeometryError

Color = Tuple[int, int, int]
ColorSource = Union[Sequence[Color], Callable[[int, int], Color]]


def _as_color(value) -> Color:
    color = tuple(int(channel) for channel in value)
    if len(color) != 3:
        raise ValueError(f"Expected 3 color channels, got {len(color)}")
    if any(channel < 0 or channel > 255 for channel in color):
        raise ValueError(f"Color channels must be in [0, 255], got {color}")
    return color


class Pixel:
    """
    A single node of the grid.

    ``up`` is the pixel's parent (row above) and ``down`` its child (row
    below). Brightness is the mean of the three channels and is recomputed
    whenever the color changes.
    """

    __slots__ = ('_color', '_brightness', 'left', 'right', 'up', 'down')

    def __init__(self, color: Color = (0, 0, 0)):
        self.left: Optional[int] = None
        self.right: Optional[int] = None
        self.up: Optional[int] = None
        self.down: Optional[int] = None
        self.color = color

    @property
    def color(self) -> Color:
        return self._color

    @color.setter
    def color(self, value):
        self._color = _as_color(value)
        r, g, b = self._color
        self._brightness = (r + g + b) / 3

    @property
    def brightness(self) -> float:
        return self._brightness

    @property
    def blue(self) -> int:
        return self._color[2]

    def __repr__(self):
        return (f"Pixel(color={self._color}, left={self.left}, right={self.right}, "
                f"up={self.up}, down={self.down})")


class PixelGrid:
    """
    Arena-backed pixel graph anchored at ``head`` (the top-left pixel).

    ``height`` never changes. ``width`` is decremented by a seam removal
    and incremented by a width-affecting reinsertion. Pixels that are
    spliced out stay in the arena so a later reinsertion can restore them.
    """

    def __init__(self, height: int):
        if height <= 0:
            raise InvalidGeometryError(f"Grid height must be positive, got {height}")
        self._height = height
        self._pixels: List[Pixel] = []
        self.width = 0
        self.head: Optional[int] = None

    @classmethod
    def build(cls, colors: ColorSource, width: int, height: int) -> 'PixelGrid':
        """
        Build a fully wired grid in one pass.

        Args:
            colors: Row-major sequence of ``width * height`` (r, g, b) colors,
                    or a callable ``colors(x, y)`` returning the color at a
                    column/row position.
            width: Number of columns (> 0)
            height: Number of rows (> 0)

        Returns:
            The new grid. Pixel handles are assigned row-major, so the pixel
            at (x, y) initially has handle ``y * width + x``.
        """
        if width <= 0 or height <= 0:
            raise InvalidGeometryError(
                f"Grid dimensions must be positive, got {width}x{height}")

        if callable(colors):
            get_color = colors
        else:
            if len(colors) != width * height:
                raise InvalidGeometryError(
                    f"Expected {width * height} colors for a {width}x{height} grid, "
                    f"got {len(colors)}")
            get_color = lambda x, y: colors[y * width + x]

        grid = cls(height)
        for y in range(height):
            for x in range(width):
                handle = grid.add_pixel(get_color(x, y))
                pixel = grid._pixels[handle]
                if x > 0:
                    pixel.left = handle - 1
                    grid._pixels[handle - 1].right = handle
                if y > 0:
                    pixel.up = handle - width
                    grid._pixels[handle - width].down = handle

        grid.width = width
        grid.head = 0
        return grid

    @classmethod
    def from_tensor(cls, image: torch.Tensor) -> 'PixelGrid':
        """
        Build a grid from an image tensor.

        Args:
            image: RGB tensor (3, H, W) or grayscale (H, W). Integer tensors are
                   taken as 0-255 channel values, floating tensors as [0, 1].

        Returns:
            PixelGrid with the same width and height as the image
        """
        if image.dim() == 2:
            image = image.unsqueeze(0).expand(3, -1, -1)
        elif image.dim() != 3 or image.shape[0] != 3:
            raise InvalidGeometryError(
                f"Expected a (3, H, W) or (H, W) image, got shape {tuple(image.shape)}")

        if image.is_floating_point():
            image = (image * 255.0).round().clamp(0, 255)
        image = image.to(torch.uint8)

        _, H, W = image.shape
        colors = [tuple(c) for c in image.permute(1, 2, 0).reshape(-1, 3).tolist()]
        return cls.build(colors, W, H)

    @property
    def height(self) -> int:
        return self._height

    @property
    def arena_size(self) -> int:
        """Number of pixels ever allocated, reachable or not."""
        return len(self._pixels)

    def __getitem__(self, handle: int) -> Pixel:
        return self._pixels[handle]

    def add_pixel(self, color: Color) -> int:
        """Allocate an unlinked pixel and return its handle."""
        self._pixels.append(Pixel(color))
        return len(self._pixels) - 1

    def rows(self) -> Iterator[List[int]]:
        """Yield the handles of each row, top to bottom, left to right."""
        row_start = self.head
        for _ in range(self._height):
            row = []
            handle = row_start
            for _ in range(self.width):
                row.append(handle)
                if handle is not None:
                    handle = self._pixels[handle].right
            yield row
            if row_start is not None:
                row_start = self._pixels[row_start].down

    def pixel_at(self, x: int, y: int) -> int:
        """Handle of the pixel currently at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self._height):
            raise IndexError(f"({x}, {y}) is outside a {self.width}x{self._height} grid")
        handle = self.head
        for _ in range(y):
            handle = self._pixels[handle].down
        for _ in range(x):
            handle = self._pixels[handle].right
        return handle

    def to_row_major_colors(self) -> List[Color]:
        return [self._pixels[h].color for row in self.rows() for h in row]

    def to_tensor(self) -> torch.Tensor:
        """Current image as a (3, H, W) uint8 tensor."""
        colors = self.to_row_major_colors()
        if not colors:
            return torch.zeros(3, self._height, self.width, dtype=torch.uint8)
        flat = torch.tensor(colors, dtype=torch.uint8)
        return flat.reshape(self._height, self.width, 3).permute(2, 0, 1).contiguous()

    def validate(self):
        """
        Check that every reachable pixel's links match its row/column position.

        Raises:
            InvalidGeometryError: describing the first inconsistency found
        """
        rows = list(self.rows())
        for y, row in enumerate(rows):
            if None in row:
                raise InvalidGeometryError(
                    f"Row {y} ends after {row.index(None)} pixels, expected {self.width}")

        seen = set()
        for y, row in enumerate(rows):
            for x, handle in enumerate(row):
                if handle in seen:
                    raise InvalidGeometryError(f"Pixel {handle} is reachable twice")
                seen.add(handle)
                pixel = self._pixels[handle]

                expected_left = row[x - 1] if x > 0 else None
                expected_right = row[x + 1] if x < self.width - 1 else None
                expected_up = rows[y - 1][x] if y > 0 else None
                expected_down = rows[y + 1][x] if y < self._height - 1 else None

                if pixel.left != expected_left or pixel.right != expected_right:
                    raise InvalidGeometryError(
                        f"Horizontal links of pixel {handle} at ({x}, {y}) are inconsistent")
                if y > 0 and self._pixels[expected_up].down != handle:
                    raise InvalidGeometryError(
                        f"Pixel above ({x}, {y}) does not link down to it")
                if y < self._height - 1 and self._pixels[expected_down].up != handle:
                    raise InvalidGeometryError(
                        f"Pixel below ({x}, {y}) does not link up to it")
                if pixel.up != expected_up or pixel.down != expected_down:
                    raise InvalidGeometryError(
                        f"Vertical links of pixel {handle} at ({x}, {y}) are inconsistent")

        if len(seen) != self.width * self._height:
            raise InvalidGeometryError(
                f"Found {len(seen)} reachable pixels, expected {self.width * self._height}")

    def __repr__(self):
        return f"PixelGrid(width={self.width}, height={self._height})"
