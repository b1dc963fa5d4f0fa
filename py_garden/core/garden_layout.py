"""
Garden layout generation.

One flower is planted per elapsed day. Ordinary flowers consume cells of a
coarse grid in a fixed shuffled order; hidden message flowers are
pre-computed and take over the days they are scheduled for. Because the
shuffle and the message schedule never depend on the requested count,
``generate_garden(n)`` is always a prefix of ``generate_garden(n + 1)``.
"""

import math
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence
from dataclasses import dataclass
import structlog

from ..config.flower_catalog import FLOWER_CATALOG
from .calendar import date_for_day
from .messages import MessageConfig, build_message_points
from .mulberry_prng import Mulberry32PRNG
from .spawn_points import SpawnPoint
from .species import build_species_variants, variants_for

logger = structlog.get_logger()

GRID_COLS = 64
GRID_ROWS = 56
GRID_SEED = 20201027
GARDEN_START_DATE = date(2017, 10, 27)

MESSAGE_DEPTH_OFFSET = 200
MESSAGE_SCALE = 1.05

EMOJI_SEED = 8888
EMOJI_DEPTH_OFFSET = 150


@dataclass(frozen=True)
class GardenLayoutConfig:
    """Grid resolution, shuffle seed and calendar epoch."""

    cols: int = GRID_COLS
    rows: int = GRID_ROWS
    grid_seed: int = GRID_SEED
    start_date: date = GARDEN_START_DATE

    @property
    def total_cells(self) -> int:
        return self.cols * self.rows


@dataclass(frozen=True)
class Placement:
    """One planted flower."""

    id: int
    x: float
    y: float
    variant: str
    scale: float
    rotation: float
    depth: int
    day_number: int
    date: str
    message_id: Optional[str] = None

    @property
    def is_message(self) -> bool:
        return self.message_id is not None


@dataclass(frozen=True)
class MessageSlot:
    """A pre-computed message flower waiting for its day."""

    day_index: int
    point: SpawnPoint
    message_id: str
    variant: str


@dataclass(frozen=True)
class EmojiPlacement:
    """A decorative emoji scattered over the garden."""

    id: int
    emoji: str
    x: float
    y: float
    rotation: float
    scale: float
    depth: int
    always_show: bool


def precompute_message_slots(
    message_configs: Sequence[MessageConfig],
    species_variants: Mapping[str, Sequence[str]],
    fallback_variants: Sequence[str],
) -> Dict[int, MessageSlot]:
    """
    Schedule every message flower on its day.

    The Nth point of a message lands on ``start_day + N``. When two
    messages claim the same day, the one configured later wins.
    """
    slots: Dict[int, MessageSlot] = {}
    for config in message_configs:
        _, points = build_message_points(config)
        collisions = 0
        for index, point in enumerate(points):
            variants = variants_for(species_variants, point.species) or fallback_variants
            day_index = config.start_day + index
            if day_index in slots:
                collisions += 1
            slots[day_index] = MessageSlot(
                day_index=day_index,
                point=point,
                message_id=config.id,
                variant=variants[index % len(variants)],
            )
        if collisions:
            logger.warning(
                "Message days overlap an earlier message",
                message_id=config.id,
                overlapping_days=collisions,
            )
        logger.debug(
            "Scheduled message",
            message_id=config.id,
            start_day=config.start_day,
            flowers=len(points),
        )
    return slots


def generate_garden(
    count: int,
    message_configs: Sequence[MessageConfig] = (),
    catalog: Sequence[str] = FLOWER_CATALOG,
    species_variants: Optional[Mapping[str, Sequence[str]]] = None,
    layout: Optional[GardenLayoutConfig] = None,
) -> List[Placement]:
    """
    Plant ``count`` flowers, one per day, starting at day 0.

    Args:
        count: Number of placements; zero or less yields an empty list
        message_configs: Hidden messages, in priority order (later wins)
        catalog: Flat list of drawable variant identifiers
        species_variants: Species -> variants table; grouped from
            ``catalog`` when omitted
        layout: Grid resolution, seed and epoch

    Returns:
        Placements with ids 0..count-1
    """
    if count <= 0:
        return []
    if not catalog:
        raise ValueError("Flower catalog must contain at least one variant")

    layout = layout or GardenLayoutConfig()
    if species_variants is None:
        species_variants = build_species_variants(catalog)

    prng = Mulberry32PRNG(layout.grid_seed)
    total_cells = layout.total_cells
    indices = prng.shuffled_indices(total_cells)

    message_slots = precompute_message_slots(message_configs, species_variants, catalog)

    logger.info(
        "Generating garden",
        count=count,
        messages=len(message_configs),
        message_flowers=len(message_slots),
    )

    flowers: List[Placement] = []
    cell_w = 100 / layout.cols
    cell_h = 100 / layout.rows
    grid_cells_used = 0

    for i in range(max(count, 0)):
        date_str = date_for_day(layout.start_date, i)

        slot = message_slots.get(i)
        if slot is not None:
            flowers.append(
                Placement(
                    id=i,
                    x=slot.point.x,
                    y=slot.point.y,
                    variant=slot.variant,
                    scale=MESSAGE_SCALE,
                    rotation=0.0,
                    depth=MESSAGE_DEPTH_OFFSET + slot.point.row,
                    day_number=i + 1,
                    date=date_str,
                    message_id=slot.message_id,
                )
            )
            continue

        if grid_cells_used < total_cells:
            cell_index = indices[grid_cells_used]
            grid_cells_used += 1
            col = cell_index % layout.cols
            row = cell_index // layout.cols
            x = col * cell_w + prng.random() * cell_w
            y = row * cell_h + prng.random() * cell_h
        else:
            # Grid is full, overlapping is allowed from here on
            x = prng.random() * 100
            y = prng.random() * 100

        variant = catalog[int(prng.random() * len(catalog))]
        scale = 0.8 + prng.random() * 0.4
        rotation = -15 + prng.random() * 30
        flowers.append(
            Placement(
                id=i,
                x=x,
                y=y,
                variant=variant,
                scale=scale,
                rotation=rotation,
                depth=math.floor(y),
                day_number=i + 1,
                date=date_str,
            )
        )

    if grid_cells_used >= total_cells and count > 0:
        logger.info("Garden grid exhausted", grid_cells=total_cells, count=count)

    return flowers


def grid_cell_of(placement: Placement, layout: Optional[GardenLayoutConfig] = None) -> int:
    """Grid cell index an ordinary placement falls in."""
    layout = layout or GardenLayoutConfig()
    col = min(int(placement.x / (100 / layout.cols)), layout.cols - 1)
    row = min(int(placement.y / (100 / layout.rows)), layout.rows - 1)
    return row * layout.cols + col


def generate_emojis(
    always_emojis: Sequence[str],
    rotating_emojis: Sequence[str] = (),
    seed: int = EMOJI_SEED,
) -> List[EmojiPlacement]:
    """
    Scatter decorative emojis over the garden.

    The first ``always_emojis`` entries are flagged ``always_show``; the
    rest are rotated in and out by the presentation layer.
    """
    emojis = list(always_emojis) + list(rotating_emojis)
    if not emojis:
        return []

    prng = Mulberry32PRNG(seed)
    items: List[EmojiPlacement] = []
    for i, emoji in enumerate(emojis):
        x = 2 + prng.random() * 96
        y = 2 + prng.random() * 96
        rotation = -45 + prng.random() * 90
        scale = 0.8 + prng.random() * 0.5
        depth = EMOJI_DEPTH_OFFSET + math.floor(prng.random() * 50)
        items.append(
            EmojiPlacement(
                id=i,
                emoji=emoji,
                x=x,
                y=y,
                rotation=rotation,
                scale=scale,
                depth=depth,
                always_show=i < len(always_emojis),
            )
        )
    return items
