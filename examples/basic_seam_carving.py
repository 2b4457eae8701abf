"""
Basic seam carving example.

Removes the lowest-energy seam from an image several times, saving the
image with each seam highlighted along the way, then undoes every removal
to show the original comes back untouched.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import argparse
from pathlib import Path

import torch

from seamgraph.config import RED
from seamgraph.energy import brightness_energy_map
from seamgraph.history import EditHistory
from seamgraph.io import export_grid, load_grid, load_image, save_image


def save_energy(image: torch.Tensor, path: Path):
    """Save the brightness energy of an image as a grayscale picture."""
    energy = brightness_energy_map(image)
    energy = energy / energy.max().clamp(min=1e-8)
    save_image(energy.float().unsqueeze(0).expand(3, -1, -1), path)
    print(f"Saved: {path}")


def main():
    parser = argparse.ArgumentParser(description='Remove and restore seams')
    parser.add_argument('image', help='Input image')
    parser.add_argument('--seams', type=int, default=20, help='Number of seams to remove')
    parser.add_argument('--output-dir', default='../output', help='Where to write results')
    args = parser.parse_args()

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    print("Loading image...")
    image = load_image(args.image)
    C, H, W = image.shape
    print(f"Image shape: {C} x {H} x {W}")

    save_energy(image, output_dir / 'energy.png')

    grid = load_grid(args.image)
    history = EditHistory(grid, lowest_energy_color=RED)

    n_seams = min(args.seams, W - 1)
    print(f"Carving image (removing {n_seams} seams)...")
    for i in range(n_seams):
        history.highlight_lowest_energy()
        if i == 0:
            export_grid(grid, output_dir / 'first_seam.png')
        history.delete_highlighted()
        if (i + 1) % 10 == 0:
            print(f"  Removed {i + 1}/{n_seams} seams")

    export_grid(grid, output_dir / 'carved.png')
    print(f"Carved shape: {C} x {grid.height} x {grid.width}")

    print("Undoing all removals...")
    while history.can_undo:
        history.undo()

    restored = grid.to_tensor()
    print(f"Restored matches original: {torch.equal(restored, image)}")


if __name__ == '__main__':
    main()
