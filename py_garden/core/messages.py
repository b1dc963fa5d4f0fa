"""Hidden message configuration and the per-message spawn pipeline."""

from typing import List, Optional, Tuple
from dataclasses import dataclass, field
import structlog

from .text_mask import TextMaskOptions, TextMaskResult, build_text_mask
from .spawn_points import MaskBounds, SpawnPoint, generate_flower_positions_from_mask
from .species import assign_species_to_points, flatten_line_species

logger = structlog.get_logger()


@dataclass(frozen=True)
class MessageBounds:
    """Box a message is drawn into, in canvas percentages."""

    width: float
    height: float
    offset_x: Optional[float] = None
    offset_y: Optional[float] = None


@dataclass
class MessageConfig:
    """A hidden message planted into the garden from ``start_day`` on."""

    id: str
    label: str
    lines: List[str]
    start_day: int
    bounds: MessageBounds
    density: float = 1.0
    jitter: float = 0.15
    seed: int = 2025
    mask_options: TextMaskOptions = field(default_factory=TextMaskOptions)
    line_species: List[List[str]] = field(default_factory=list)

    def mask_bounds(self) -> MaskBounds:
        return MaskBounds(
            width=self.bounds.width,
            height=self.bounds.height,
            offset_x=self.bounds.offset_x,
            offset_y=self.bounds.offset_y,
            seed=self.seed,
            jitter=self.jitter,
        )


def build_message_points(
    config: MessageConfig,
) -> Tuple[TextMaskResult, List[SpawnPoint]]:
    """
    Run mask -> spawn points -> species for one message.

    The enabled species pool is every species named in the line palettes,
    in first-seen order.

    Returns:
        The mask and the species-assigned spawn points, in planting order
    """
    mask_result = build_text_mask(config.lines, config.mask_options)
    spawn_points = generate_flower_positions_from_mask(
        mask_result, config.mask_bounds(), config.density
    )
    assigned = assign_species_to_points(
        spawn_points,
        mask_result,
        flatten_line_species(config.line_species),
        config.line_species,
    )
    logger.debug(
        "Built message points",
        message_id=config.id,
        letters=len(mask_result.letters),
        points=len(assigned),
    )
    return mask_result, assigned
