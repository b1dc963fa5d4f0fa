"""Spawn point generation from rasterized text masks."""

import math
from typing import List, Optional
from dataclasses import dataclass, replace
import structlog

from .mulberry_prng import Mulberry32PRNG
from .text_mask import NO_LETTER, TextMaskResult

logger = structlog.get_logger()

DEFAULT_SPAWN_SEED = 2025
DEFAULT_JITTER = 0.15


@dataclass
class MaskBounds:
    """Placement box for a mask, in canvas percentages."""

    width: float
    height: float
    offset_x: Optional[float] = None  # None centers the box
    offset_y: Optional[float] = None
    seed: int = DEFAULT_SPAWN_SEED
    jitter: float = DEFAULT_JITTER

    def resolved_offsets(self) -> tuple:
        offset_x = self.offset_x if self.offset_x is not None else (100 - self.width) / 2
        offset_y = self.offset_y if self.offset_y is not None else (100 - self.height) / 2
        return offset_x, offset_y


@dataclass(frozen=True)
class SpawnPoint:
    """A candidate flower position derived from one lit mask cell."""

    x: float
    y: float
    row: int
    col: int
    pixel_index: int
    letter_index: int
    line_index: int
    letter_char: str
    species: Optional[str] = None

    def with_species(self, species: str) -> "SpawnPoint":
        return replace(self, species=species)


def generate_flower_positions_from_mask(
    mask_result: TextMaskResult,
    bounds: MaskBounds,
    density: float,
) -> List[SpawnPoint]:
    """
    Convert a text mask into jittered spawn points.

    Cells are scanned row-major. Each lit cell takes one draw to resolve the
    fractional part of ``density`` (the draw is taken even for whole
    densities so the stream stays aligned), then two draws per copy for the
    x/y jitter. Output order is row-major, then copy index.

    Args:
        mask_result: Output of build_text_mask
        bounds: Box the mask is stretched over, plus seed and jitter
        density: Average points per lit cell, may be fractional

    Returns:
        Spawn points in generation order
    """
    mask = mask_result.mask
    letter_map = mask_result.letter_map
    rows, cols = mask_result.rows, mask_result.cols
    if not rows or not cols:
        return []

    offset_x, offset_y = bounds.resolved_offsets()
    cell_w = bounds.width / cols
    cell_h = bounds.height / rows
    jitter = bounds.jitter
    prng = Mulberry32PRNG(bounds.seed)

    base_copies = math.floor(density)
    fractional = max(0.0, min(1.0, density - base_copies))

    points: List[SpawnPoint] = []
    for row, col in zip(*mask.nonzero()):
        row, col = int(row), int(col)
        extra = 1 if prng.random() < fractional else 0
        total_copies = base_copies + extra
        if total_copies <= 0:
            continue

        letter_index = int(letter_map[row, col])
        meta = mask_result.meta_for(letter_index)
        for _ in range(total_copies):
            jx = (prng.random() - 0.5) * jitter
            jy = (prng.random() - 0.5) * jitter
            if letter_index == NO_LETTER:
                # Lit cell with no owner; drop the remaining copies
                break
            points.append(
                SpawnPoint(
                    x=offset_x + (col + 0.5 + jx) * cell_w,
                    y=offset_y + (row + 0.5 + jy) * cell_h,
                    row=row,
                    col=col,
                    pixel_index=len(points),
                    letter_index=letter_index,
                    line_index=meta.line_index if meta else 0,
                    letter_char=meta.char if meta else "",
                )
            )

    logger.debug(
        "Generated spawn points",
        points=len(points),
        density=density,
        seed=bounds.seed,
    )
    return points
