"""
Seam computation and seam splicing on a pixel grid.

A seam is a chain of SeamNodes starting at the bottom row and following
``previous`` links up to the top row. Each node records how the node above
it sits relative to itself (straight up, one column left, one column right)
and that relation drives how the grid is relinked when the seam is removed
or reinserted.
"""

from enum import Enum
from typing import Iterator, Optional

import torch

from .energy import EnergyFunction
from .errors import InvalidGeometryError
from .grid import Color, PixelGrid


class Relation(Enum):
    """Position of a seam node's predecessor in the row above.

        DIAGONAL_LEFT     STRAIGHT_UP       DIAGONAL_RIGHT
        | prev |   |      |   | prev |      |   |   | prev |
        |      | X |      |   |  X   |      |   | X |      |
    """
    STRAIGHT_UP = 'straight-up'
    DIAGONAL_LEFT = 'diagonal-left'
    DIAGONAL_RIGHT = 'diagonal-right'


class SeamNode:
    """
    One row of a seam.

    Args:
        pixel: Handle of the grid pixel on this row
        cost: Cumulative energy of this node and every node above it
        previous: The node one row above, None on the top row
        relation: Where ``previous`` sits relative to this node
    """

    def __init__(self, pixel: int, cost: float, previous: Optional['SeamNode'] = None,
                 relation: Relation = Relation.STRAIGHT_UP):
        self.pixel = pixel
        self.previous = previous
        self.relation = relation
        self._cost = cost

    @property
    def cost(self) -> float:
        return self._cost

    def __iter__(self) -> Iterator['SeamNode']:
        node = self
        while node is not None:
            yield node
            node = node.previous

    def __len__(self):
        return sum(1 for _ in self)

    def __repr__(self):
        return (f"SeamNode(pixel={self.pixel}, cost={self._cost:.4f}, "
                f"relation={self.relation.value})")


def _check_grid(grid: PixelGrid, operation: str):
    if grid.width < 1 or grid.height < 1:
        raise InvalidGeometryError(
            f"Cannot {operation} on a {grid.width}x{grid.height} grid")


def _check_seam(grid: PixelGrid, seam: SeamNode):
    length = len(seam)
    if length != grid.height:
        raise InvalidGeometryError(
            f"Seam has {length} nodes but the grid has {grid.height} rows")


def find_seam(grid: PixelGrid, energy: EnergyFunction) -> SeamNode:
    """
    Find the minimum-cost vertical seam with dynamic programming.

    Rows are processed top to bottom. Each pixel extends the cheapest of
    the up to three seams ending directly above, up-left and up-right of it.
    The straight-up seam is the default; the up-left seam replaces it only
    if strictly cheaper, and the up-right seam then replaces the running
    best only if strictly cheaper still. On the bottom row the first seam
    with the lowest cost wins.

    Args:
        grid: Grid to search (width >= 1)
        energy: Per-pixel energy function

    Returns:
        Bottom node of the cheapest seam
    """
    _check_grid(grid, "find a seam")

    rows = grid.rows()
    previous_row = [SeamNode(pixel, energy(grid, pixel)) for pixel in next(rows)]
    last_col = grid.width - 1

    for row in rows:
        current_row = []
        for col, pixel in enumerate(row):
            best = previous_row[col]
            relation = Relation.STRAIGHT_UP

            if col > 0 and previous_row[col - 1].cost < best.cost:
                best = previous_row[col - 1]
                relation = Relation.DIAGONAL_LEFT
            if col < last_col and previous_row[col + 1].cost < best.cost:
                best = previous_row[col + 1]
                relation = Relation.DIAGONAL_RIGHT

            current_row.append(SeamNode(pixel, best.cost + energy(grid, pixel), best, relation))
        previous_row = current_row

    best = previous_row[0]
    for node in previous_row:
        if node.cost < best.cost:
            best = node
    return best


def highlight_seam(grid: PixelGrid, seam: SeamNode, color: Color) -> SeamNode:
    """
    Replace every pixel of a seam with a new pixel of a single color.

    The new pixels take over all four links of the pixels they replace,
    so the width does not change. The replaced pixels keep their own links
    and can be put back with ``insert_seam(grid, seam, False)``.

    Args:
        grid: Grid containing the seam
        seam: Seam to highlight
        color: (r, g, b) highlight color

    Returns:
        A parallel seam (same costs and relations) over the new pixels
    """
    _check_grid(grid, "highlight a seam")
    _check_seam(grid, seam)

    new_nodes = []
    for node in seam:
        old = grid[node.pixel]
        new_handle = grid.add_pixel(color)
        new = grid[new_handle]

        if old.right is not None:
            grid[old.right].left = new_handle
        if old.left is not None:
            grid[old.left].right = new_handle
        if old.up is not None:
            grid[old.up].down = new_handle
        if old.down is not None:
            grid[old.down].up = new_handle

        new.left, new.right, new.up, new.down = old.left, old.right, old.up, old.down

        if grid.head == node.pixel:
            grid.head = new_handle

        new_nodes.append(SeamNode(new_handle, node.cost, None, node.relation))

    for below, above in zip(new_nodes, new_nodes[1:]):
        below.previous = above
    return new_nodes[0]


def remove_seam(grid: PixelGrid, seam: SeamNode) -> SeamNode:
    """
    Splice a seam out of the grid, shrinking the width by one.

    Each seam pixel's left and right neighbors are joined. A diagonal
    relation means the pixel above the removed one must now sit over the
    neighbor that slides into its column; straight-up needs no vertical
    repair because both ends of that edge are removed together.

    Args:
        grid: Grid containing the seam
        seam: Seam whose pixels are all live in the grid

    Returns:
        The same seam, unchanged, for later reinsertion
    """
    _check_grid(grid, "remove a seam")
    _check_seam(grid, seam)

    for node in seam:
        pixel = grid[node.pixel]

        if grid.head == node.pixel:
            grid.head = pixel.right

        if pixel.left is not None:
            grid[pixel.left].right = pixel.right
        if pixel.right is not None:
            grid[pixel.right].left = pixel.left

        if node.relation is Relation.DIAGONAL_LEFT:
            grid[pixel.up].down = pixel.left
            grid[pixel.left].up = pixel.up
        elif node.relation is Relation.DIAGONAL_RIGHT:
            grid[pixel.up].down = pixel.right
            grid[pixel.right].up = pixel.up

    grid.width -= 1
    return seam


def insert_seam(grid: PixelGrid, seam: SeamNode, affected_width: bool) -> SeamNode:
    """
    Splice a previously removed or replaced seam back into the grid.

    This is the inverse of ``remove_seam`` and of ``highlight_seam``: the
    seam pixels still hold their old links, so every neighbor is pointed
    back at them.

    Args:
        grid: Grid the seam was taken from
        seam: Seam to reinsert
        affected_width: True when undoing a removal (width grows by one),
                        False when undoing a highlight

    Returns:
        The same seam, unchanged
    """
    if grid.height < 1:
        raise InvalidGeometryError("Cannot insert a seam into a grid with no rows")
    _check_seam(grid, seam)

    for node in seam:
        handle = node.pixel
        pixel = grid[handle]

        if pixel.left is not None:
            grid[pixel.left].right = handle
        if pixel.right is not None:
            grid[pixel.right].left = handle

        if node.relation is Relation.DIAGONAL_LEFT:
            grid[pixel.up].down = handle
            grid[pixel.left].up = node.previous.pixel
        elif node.relation is Relation.DIAGONAL_RIGHT:
            grid[pixel.up].down = handle
            grid[pixel.right].up = node.previous.pixel
        elif pixel.up is not None:
            grid[pixel.up].down = handle
        elif pixel.left is None:
            # Top row, first column
            grid.head = handle

    if affected_width:
        grid.width += 1
    return seam


def seam_columns(grid: PixelGrid, seam: SeamNode) -> torch.Tensor:
    """
    Column index of each seam pixel, top row first.

    Columns are counted along the seam pixels' left links, so this works
    for live seams and for seams that were just removed or replaced.

    Returns:
        Seam indices (H,) with the column per row
    """
    columns = []
    for node in seam:
        col = 0
        left = grid[node.pixel].left
        while left is not None:
            col += 1
            left = grid[left].left
        columns.append(col)
    return torch.tensor(columns[::-1], dtype=torch.long)
