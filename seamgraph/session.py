"""
An editing session over one image file.

Wraps an EditHistory and writes a numbered snapshot of the image after
every edit, then the final image when the session ends.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import SessionConfig
from .history import EditHistory
from .io import PathLike, export_grid, load_grid

logger = logging.getLogger(__name__)


class ImageSession:
    """
    Load an image and edit it through an undoable history.

    Args:
        path: Image file to load
        config: Output locations and highlight colors
    """

    def __init__(self, path: PathLike, config: Optional[SessionConfig] = None):
        self.config = config or SessionConfig()
        self.grid = load_grid(path)
        self.history = EditHistory(self.grid,
                                   bluest_color=self.config.bluest_color,
                                   lowest_energy_color=self.config.lowest_energy_color)
        self._snapshot_counter = 1

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def highlighted(self) -> bool:
        return self.history.highlighted

    @property
    def can_delete(self) -> bool:
        return self.history.highlighted and self.grid.width > 1

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    def highlight_bluest(self):
        self.history.highlight_bluest()
        self.save_snapshot()

    def highlight_lowest_energy(self):
        self.history.highlight_lowest_energy()
        self.save_snapshot()

    def delete_highlighted(self):
        self.history.delete_highlighted()
        self.save_snapshot()

    def undo(self):
        self.history.undo()
        self.save_snapshot()

    def save_snapshot(self) -> Optional[Path]:
        if not self.config.save_snapshots:
            return None
        path = export_grid(self.grid, self.config.snapshot_path(self._snapshot_counter))
        self._snapshot_counter += 1
        return path

    def finish(self) -> Path:
        """Write the final image."""
        path = export_grid(self.grid, self.config.final_path())
        logger.info("Final image is %dx%d", self.grid.width, self.grid.height)
        return path
