"""
Undoable edit history for a pixel grid.

Every edit is recorded as the seam that undo must splice back in, plus
whether that reinsertion grows the width. A highlight followed by a
delete collapses into a single edit whose undo restores the original,
un-highlighted pixels.
"""

import logging
from typing import List, NamedTuple, Optional

from .config import BLUE, RED
from .energy import EnergyFunction, blue_energy, brightness_energy
from .errors import InvalidStateError
from .grid import Color, PixelGrid
from .seam import SeamNode, find_seam, highlight_seam, insert_seam, remove_seam

logger = logging.getLogger(__name__)


class Edit(NamedTuple):
    """A reversible edit.

    ``seam`` holds the original pixels that undo reinserts. For a pending
    highlight, ``highlighted_seam`` holds the colored replacement pixels
    that a delete removes.
    """
    seam: SeamNode
    affected_width: bool
    highlighted_seam: Optional[SeamNode] = None


class EditHistory:
    """
    LIFO log of seam edits on one grid.

    Args:
        grid: Grid to edit in place
        bluest_color: Color used to highlight the bluest seam
        lowest_energy_color: Color used to highlight the lowest-energy seam
    """

    def __init__(self, grid: PixelGrid, bluest_color: Color = BLUE,
                 lowest_energy_color: Color = RED):
        self.grid = grid
        self.bluest_color = bluest_color
        self.lowest_energy_color = lowest_energy_color
        self._edits: List[Edit] = []
        self._highlighted = False

    @property
    def highlighted(self) -> bool:
        """Whether the latest edit is a highlight awaiting delete or undo."""
        return self._highlighted

    @property
    def can_undo(self) -> bool:
        return bool(self._edits)

    def __len__(self):
        return len(self._edits)

    def highlight_bluest(self) -> SeamNode:
        return self._highlight(blue_energy, self.bluest_color, "bluest")

    def highlight_lowest_energy(self) -> SeamNode:
        return self._highlight(brightness_energy, self.lowest_energy_color, "lowest-energy")

    def _highlight(self, energy: EnergyFunction, color: Color, name: str) -> SeamNode:
        seam = find_seam(self.grid, energy)
        highlighted = highlight_seam(self.grid, seam, color)
        self._edits.append(Edit(seam, False, highlighted))
        self._highlighted = True
        logger.debug("Highlighted %s seam with cost %.3f", name, seam.cost)
        return highlighted

    def delete_highlighted(self) -> SeamNode:
        """
        Remove the pending highlighted seam from the grid.

        The highlight edit is replaced by a single delete edit so that one
        undo restores the image as it was before the highlight.

        Returns:
            The original (pre-highlight) seam

        Raises:
            InvalidStateError: if the latest edit is not a highlight, or the
                               grid has a single column left
        """
        if not self._highlighted:
            raise InvalidStateError("The previous edit was not a highlight; nothing was deleted.")
        if self.grid.width <= 1:
            raise InvalidStateError("Cannot delete the last remaining column.")

        pending = self._edits.pop()
        remove_seam(self.grid, pending.highlighted_seam)
        self._edits.append(Edit(pending.seam, True))
        self._highlighted = False
        logger.debug("Deleted highlighted seam, width is now %d", self.grid.width)
        return pending.seam

    def undo(self) -> Edit:
        """
        Reverse the most recent edit.

        Returns:
            The edit that was undone

        Raises:
            InvalidStateError: if there is nothing to undo
        """
        if not self._edits:
            raise InvalidStateError("There are no edits to undo.")

        edit = self._edits.pop()
        insert_seam(self.grid, edit.seam, edit.affected_width)
        self._highlighted = False
        logger.debug("Undid edit (affected_width=%s), width is now %d",
                     edit.affected_width, self.grid.width)
        return edit
