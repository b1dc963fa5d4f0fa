#!/usr/bin/env python3
"""
Simple demo script showing garden generation capabilities.
"""

from py_garden.core import (
    GardenLayoutConfig, MessageBounds, MessageConfig, TextMaskOptions,
    build_message_points, build_text_mask, generate_garden, summarize_species,
)
from py_garden.core.text_mask import render_mask_ascii
from py_garden.config.message_sets import MESSAGE_SETS


def main():
    """Demonstrate garden generation."""
    print("Py-Garden Demo")
    print("=" * 40)

    # Rasterize a message
    print("\nText mask for 'HELLO':")
    print("-" * 30)
    mask = build_text_mask(["HELLO"], TextMaskOptions(char_spacing=1))
    print(render_mask_ascii(mask))
    print(f"  Size: {mask.rows}x{mask.cols}, lit cells: {int(mask.mask.sum())}")

    # Plant a small garden with a custom message
    message = MessageConfig(
        id="demo",
        label="Demo",
        lines=["HELLO"],
        start_day=20,
        bounds=MessageBounds(width=70, height=20),
        density=1.0,
        jitter=0.15,
        seed=7,
        mask_options=TextMaskOptions(char_spacing=1),
        line_species=[["rose", "tulip", "lily"]],
    )
    _, points = build_message_points(message)
    count = message.start_day + len(points) + 50

    print(f"\nGarden of {count} days with a hidden message:")
    print("-" * 30)
    flowers = generate_garden(count, [message], layout=GardenLayoutConfig(cols=16, rows=12))
    message_flowers = [f for f in flowers if f.is_message]
    print(f"  Total flowers: {len(flowers)}")
    print(f"  Message flowers: {len(message_flowers)} (days {message_flowers[0].id}-{message_flowers[-1].id})")
    print(f"  Last day: {flowers[-1].date}")

    print("  Species:")
    for species, n in summarize_species(f.variant for f in flowers).items():
        bar = "#" * max(1, n // 4)
        print(f"    {species:12s} {bar} ({n})")

    # Registered messages
    print("\n\nRegistered hidden messages:")
    print("-" * 30)
    for registered in MESSAGE_SETS:
        _, registered_points = build_message_points(registered)
        print(f"  - {registered.label}: {' / '.join(registered.lines)}")
        print(f"    day {registered.start_day}, {len(registered_points)} flowers")


if __name__ == "__main__":
    main()
