"""
Species handling for garden flowers.

Two concerns live here:

1. Parsing the flat asset catalog (``species-theme`` identifiers) into a
   species -> variants table at the boundary.
2. Assigning species to message spawn points so that every letter shows a
   small rotating palette instead of a single colour.
"""

from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence
import structlog

from .spawn_points import SpawnPoint
from .text_mask import TextMaskResult

logger = structlog.get_logger()

DEFAULT_SPECIES = ("forgetmenot", "lily", "peony", "rose", "tulip", "sunflower")

# Too visually dominant to read as part of a letter
EXCLUDED_MESSAGE_SPECIES = "sunflower"

SPECIES_PER_LETTER = 3


class FlowerVariant(NamedTuple):
    """A drawable asset identifier split into its parts."""

    species: str
    theme: str

    @property
    def identifier(self) -> str:
        return f"{self.species}-{self.theme}" if self.theme else self.species


def parse_variant(identifier: str) -> FlowerVariant:
    """Split ``rose-pastel`` into ``FlowerVariant('rose', 'pastel')``."""
    species, _, theme = identifier.partition("-")
    return FlowerVariant(species, theme)


def build_species_variants(catalog: Iterable[str]) -> Dict[str, List[str]]:
    """
    Group a flat variant catalog by species.

    Insertion order of both species and variants follows the catalog.
    """
    table: Dict[str, List[str]] = {}
    for identifier in catalog:
        table.setdefault(parse_variant(identifier).species, []).append(identifier)
    return table


def flatten_line_species(line_species: Sequence[Sequence[str]]) -> List[str]:
    """De-duplicated species across all line palettes, first-seen order."""
    return list(dict.fromkeys(species for palette in line_species for species in palette))


def assign_species_to_points(
    points: Sequence[SpawnPoint],
    mask_result: TextMaskResult,
    enabled_species: Sequence[str],
    line_species: Sequence[Sequence[str]],
) -> List[SpawnPoint]:
    """
    Assign a species to every spawn point.

    Each letter gets a fixed local palette of up to SPECIES_PER_LETTER
    species, chosen once from its line palette starting at the letter's
    position within the line. Successive points of the letter cycle through
    that palette, so three consecutive points differ whenever the effective
    pool has at least three species.

    Args:
        points: Spawn points in generation order
        mask_result: Mask the points came from (for letter metadata)
        enabled_species: Species allowed anywhere; empty means DEFAULT_SPECIES
        line_species: Palette per text line

    Returns:
        New points with ``species`` set; inputs are not modified
    """
    base_pool = list(enabled_species) or list(DEFAULT_SPECIES)
    sanitized = [s for s in base_pool if s != EXCLUDED_MESSAGE_SPECIES]
    fallback_pool = sanitized or base_pool
    if not fallback_pool:
        return list(points)

    letter_counters: Dict[int, int] = {}
    letter_palettes: Dict[int, List[str]] = {}
    assigned: List[SpawnPoint] = []

    for idx, point in enumerate(points):
        counter = letter_counters.get(point.letter_index, 0)
        letter_counters[point.letter_index] = counter + 1

        palette = letter_palettes.get(point.letter_index)
        if palette is None:
            palette = _letter_palette(
                mask_result, point.letter_index, idx, fallback_pool, line_species
            )
            letter_palettes[point.letter_index] = palette

        assigned.append(point.with_species(palette[counter % len(palette)]))

    logger.debug(
        "Assigned species",
        points=len(assigned),
        letters=len(letter_palettes),
        pool=fallback_pool,
    )
    return assigned


def _letter_palette(
    mask_result: TextMaskResult,
    letter_index: int,
    point_index: int,
    fallback_pool: List[str],
    line_species: Sequence[Sequence[str]],
) -> List[str]:
    """Local palette for one letter, fixed on its first point."""
    meta = mask_result.meta_for(letter_index)
    line_list: Sequence[str] = fallback_pool
    if meta is not None and meta.line_index < len(line_species):
        line_list = line_species[meta.line_index]

    active_pool = [
        s for s in line_list
        if s != EXCLUDED_MESSAGE_SPECIES and s in fallback_pool
    ] or fallback_pool

    start = meta.letter_index if meta is not None else point_index
    start %= len(active_pool)

    if len(active_pool) < SPECIES_PER_LETTER:
        return list(active_pool)
    return [
        active_pool[(start + i) % len(active_pool)]
        for i in range(SPECIES_PER_LETTER)
    ]


def summarize_species(
    variants: Iterable[str],
    species_of=parse_variant,
) -> Dict[str, int]:
    """Count variants per species, in first-seen order."""
    counts: Dict[str, int] = {}
    for variant in variants:
        species = species_of(variant).species
        counts[species] = counts.get(species, 0) + 1
    return counts


def variants_for(
    species_variants: Mapping[str, Sequence[str]],
    species: Optional[str],
    fallback_species: str = "rose",
) -> Sequence[str]:
    """Variants for a species, or the fallback species' variants."""
    variants = species_variants.get(species or fallback_species)
    if not variants:
        variants = species_variants.get(fallback_species, ())
    return variants
