"""
Content-aware image resizing on a linked pixel graph.

Vertical seams are found with dynamic programming, then highlighted,
removed or reinserted by relinking pixels in place. Edits go through an
undoable history.
"""

__version__ = "0.1.0"

from .errors import (SeamGraphError, InvalidStateError, InvalidGeometryError,
                     ExportError, ImageLoadError)
from .grid import Pixel, PixelGrid
from .energy import (blue_energy, brightness_energy, energy_map,
                     blue_energy_map, brightness_energy_map)
from .seam import (Relation, SeamNode, find_seam, highlight_seam, remove_seam,
                   insert_seam, seam_columns)
from .history import Edit, EditHistory
from .config import SessionConfig
from .io import load_image, save_image, load_grid, export_grid
from .session import ImageSession

__all__ = [
    'SeamGraphError',
    'InvalidStateError',
    'InvalidGeometryError',
    'ExportError',
    'ImageLoadError',
    'Pixel',
    'PixelGrid',
    'blue_energy',
    'brightness_energy',
    'energy_map',
    'blue_energy_map',
    'brightness_energy_map',
    'Relation',
    'SeamNode',
    'find_seam',
    'highlight_seam',
    'remove_seam',
    'insert_seam',
    'seam_columns',
    'Edit',
    'EditHistory',
    'SessionConfig',
    'load_image',
    'save_image',
    'load_grid',
    'export_grid',
    'ImageSession',
]
