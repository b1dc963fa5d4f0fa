"""
Core garden layout functionality.
"""

from .mulberry_prng import Mulberry32PRNG
from .text_mask import PIXEL_FONT, TextMaskOptions, TextMaskResult, build_text_mask
from .spawn_points import MaskBounds, SpawnPoint, generate_flower_positions_from_mask
from .species import (
    DEFAULT_SPECIES, FlowerVariant, assign_species_to_points,
    build_species_variants, parse_variant, summarize_species,
)
from .messages import MessageBounds, MessageConfig, build_message_points
from .garden_layout import (
    GardenLayoutConfig, Placement, EmojiPlacement, generate_garden, generate_emojis,
)

__all__ = ['Mulberry32PRNG', 'PIXEL_FONT', 'TextMaskOptions', 'TextMaskResult', 'build_text_mask',
           'MaskBounds', 'SpawnPoint', 'generate_flower_positions_from_mask',
           'DEFAULT_SPECIES', 'FlowerVariant', 'assign_species_to_points',
           'build_species_variants', 'parse_variant', 'summarize_species',
           'MessageBounds', 'MessageConfig', 'build_message_points',
           'GardenLayoutConfig', 'Placement', 'EmojiPlacement', 'generate_garden', 'generate_emojis']
