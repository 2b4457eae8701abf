"""
Session defaults: highlight colors and where images are written.
"""

from dataclasses import dataclass
from pathlib import Path

from .grid import Color

BLUE: Color = (0, 0, 255)
RED: Color = (255, 0, 0)

DEFAULT_OUTPUT_DIR = 'output'
SNAPSHOT_PATTERN = 'tempIMG_{}.png'
FINAL_IMAGE_NAME = 'newImg.png'


@dataclass
class SessionConfig:
    """Settings for an interactive editing session.

    A snapshot of the image is written after every edit, numbered from 1,
    unless ``save_snapshots`` is off. The final image is always written.
    """
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    snapshot_pattern: str = SNAPSHOT_PATTERN
    final_name: str = FINAL_IMAGE_NAME
    bluest_color: Color = BLUE
    lowest_energy_color: Color = RED
    save_snapshots: bool = True

    def __post_init__(self):
        self.output_dir = Path(self.output_dir)

    def snapshot_path(self, number: int) -> Path:
        return self.output_dir / self.snapshot_pattern.format(number)

    def final_path(self) -> Path:
        return self.output_dir / self.final_name
