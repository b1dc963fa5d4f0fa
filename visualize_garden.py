#!/usr/bin/env python3
"""
Visualize a generated garden.
Plots every flower as a dot coloured by species, with hidden message
flowers outlined, next to the raw text mask of the first message.
"""

import sys
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

sys.path.append(str(Path(__file__).parent))

from py_garden.config.flower_catalog import FLOWER_SPECIES
from py_garden.config.message_sets import MESSAGE_SETS
from py_garden.core.garden_layout import generate_garden
from py_garden.core.species import parse_variant, summarize_species
from py_garden.core.text_mask import build_text_mask

SPECIES_COLORS = {
    "forgetmenot": "#6fa8dc",
    "lily": "#f4f1de",
    "peony": "#e07a9f",
    "rose": "#d1495b",
    "tulip": "#f28f3b",
    "sunflower": "#ffd166",
}


def visualize_garden(count=3000):
    """
    Generate and plot a garden.

    Args:
        count: Number of days to plant
    """
    print(f"Generating garden with {count} flowers...")
    flowers = generate_garden(count, MESSAGE_SETS)

    counts = summarize_species(flower.variant for flower in flowers)
    print("\nSpecies distribution:")
    for species in FLOWER_SPECIES:
        print(f"  {species:12s} {counts.get(species, 0)}")

    message_flowers = [f for f in flowers if f.is_message]
    print(f"\nMessage flowers: {len(message_flowers)}")

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(16, 8))

    # Left plot: garden, depth order so message flowers land on top
    ordered = sorted(flowers, key=lambda f: f.depth)
    xs = np.array([f.x for f in ordered])
    ys = np.array([f.y for f in ordered])
    colors = [SPECIES_COLORS.get(parse_variant(f.variant).species, "gray") for f in ordered]
    edges = ["black" if f.is_message else "none" for f in ordered]
    ax1.scatter(xs, ys, c=colors, edgecolors=edges, s=12, linewidths=0.4)
    ax1.set_facecolor("#3a5a40")
    ax1.set_xlim(0, 100)
    ax1.set_ylim(100, 0)
    ax1.set_aspect("equal")
    ax1.set_title(f"Garden - {count} days")

    # Right plot: the first message's mask
    if MESSAGE_SETS:
        message = MESSAGE_SETS[0]
        mask = build_text_mask(message.lines, message.mask_options)
        ax2.imshow(mask.mask, cmap="Greens", interpolation="nearest")
        ax2.set_title(f"Mask - {message.label}\n{mask.rows}x{mask.cols}, {int(mask.mask.sum())} lit cells")
    ax2.set_xticks([])
    ax2.set_yticks([])

    plt.tight_layout()

    output_file = f"garden_{count}.png"
    plt.savefig(output_file, dpi=200, bbox_inches="tight")
    print(f"\nVisualization saved to: {output_file}")

    plt.show()


if __name__ == "__main__":
    visualize_garden(int(sys.argv[1]) if len(sys.argv) > 1 else 3000)
