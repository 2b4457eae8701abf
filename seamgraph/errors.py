"""
Exceptions raised by the pixel grid, seam operations and edit history.
"""


class SeamGraphError(Exception):
    """Base class for all seamgraph errors."""


class InvalidStateError(SeamGraphError, RuntimeError):
    """An operation was requested that the current edit state does not allow.

    Raised before anything is mutated, so the caller can simply re-prompt.
    """


class InvalidGeometryError(SeamGraphError, ValueError):
    """Grid dimensions, colors or a seam do not fit the grid they are used on."""


class ExportError(SeamGraphError, OSError):
    """Writing an image to disk failed. The in-memory grid is untouched."""


class ImageLoadError(SeamGraphError, OSError):
    """Reading or decoding an image from disk failed."""
