"""Tests for species assignment and the variant catalog."""

import pytest

from py_garden.config.flower_catalog import FLOWER_CATALOG
from py_garden.core.spawn_points import MaskBounds, generate_flower_positions_from_mask
from py_garden.core.species import (
    DEFAULT_SPECIES, FlowerVariant, assign_species_to_points, build_species_variants,
    flatten_line_species, parse_variant, summarize_species, variants_for,
)
from py_garden.core.text_mask import TextMaskOptions, build_text_mask


def _points_by_letter(points):
    grouped = {}
    for point in points:
        grouped.setdefault(point.letter_index, []).append(point.species)
    return grouped


@pytest.fixture
def message():
    mask = build_text_mask(["LOVE U", "FOREVER"], TextMaskOptions(char_spacing=4))
    points = generate_flower_positions_from_mask(mask, MaskBounds(80, 80, seed=1337), 1.5)
    return mask, points


class TestVariantCatalog:
    """Test parsing variant identifiers."""

    def test_parse_variant(self):
        """Test splitting on the first separator."""
        assert parse_variant("rose-pastel") == FlowerVariant("rose", "pastel")
        assert parse_variant("lily-deep-blue") == FlowerVariant("lily", "deep-blue")
        assert parse_variant("tulip") == FlowerVariant("tulip", "")

    def test_identifier_round_trip(self):
        """Test rebuilding the identifier."""
        assert parse_variant("peony-sunset").identifier == "peony-sunset"
        assert FlowerVariant("tulip", "").identifier == "tulip"

    def test_build_species_variants(self):
        """Test grouping preserves catalog order."""
        table = build_species_variants(["rose-a", "lily-a", "rose-b"])
        assert table == {"rose": ["rose-a", "rose-b"], "lily": ["lily-a"]}

    def test_default_catalog_covers_default_species(self):
        """Test the shipped catalog has variants for every default species."""
        table = build_species_variants(FLOWER_CATALOG)
        assert set(table) == set(DEFAULT_SPECIES)
        assert all(table[species] for species in DEFAULT_SPECIES)

    def test_variants_for_fallback(self):
        """Test missing species fall back to rose variants."""
        table = {"rose": ["rose-a"], "lily": ["lily-a"]}
        assert variants_for(table, "lily") == ["lily-a"]
        assert variants_for(table, "orchid") == ["rose-a"]
        assert variants_for(table, None) == ["rose-a"]
        assert variants_for({}, "lily") == ()

    def test_summarize_species(self):
        """Test counting variants per species."""
        counts = summarize_species(["rose-a", "lily-a", "rose-b"])
        assert counts == {"rose": 2, "lily": 1}
        assert list(counts) == ["rose", "lily"]

    def test_flatten_line_species(self):
        """Test de-duplication keeps first-seen order."""
        assert flatten_line_species([["a", "b"], ["b", "c"], []]) == ["a", "b", "c"]

    def test_flatten_line_species_repeats_across_lines(self):
        """Test a species repeated in later lines keeps its first position."""
        line_species = [["tulip", "rose"], ["rose", "lily", "tulip"], ["daisy", "lily"]]
        assert flatten_line_species(line_species) == ["tulip", "rose", "lily", "daisy"]


class TestAssignSpecies:
    """Test species assignment to message points."""

    def test_every_point_gets_species(self, message):
        """Test that all points are annotated and order is preserved."""
        mask, points = message
        assigned = assign_species_to_points(points, mask, ["rose", "lily", "tulip"], [])

        assert len(assigned) == len(points)
        assert all(point.species for point in assigned)
        assert [(p.row, p.col, p.x, p.y) for p in assigned] == [(p.row, p.col, p.x, p.y) for p in points]
        assert all(point.species is None for point in points)

    def test_letter_local_variety(self, message):
        """Test no three consecutive points of a letter share a species."""
        mask, points = message
        line_species = [["peony", "lily", "forgetmenot", "rose"], ["forgetmenot", "rose", "tulip"]]
        assigned = assign_species_to_points(
            points, mask, flatten_line_species(line_species), line_species
        )

        for species in _points_by_letter(assigned).values():
            for i in range(len(species) - 2):
                assert len(set(species[i:i + 3])) == 3

    def test_local_palette_rotation(self, message):
        """Test each letter cycles a three-species window starting at its position."""
        mask, points = message
        line_species = [["peony", "lily", "forgetmenot", "rose"], ["forgetmenot", "rose", "tulip"]]
        assigned = assign_species_to_points(
            points, mask, flatten_line_species(line_species), line_species
        )

        for letter_index, species in _points_by_letter(assigned).items():
            meta = mask.letter_meta[letter_index]
            pool = line_species[meta.line_index]
            start = meta.letter_index % len(pool)
            window = [pool[(start + i) % len(pool)] for i in range(3)]
            assert species == [window[i % 3] for i in range(len(species))]

    def test_line_palette_respected(self, message):
        """Test letters only use species from their line's palette."""
        mask, points = message
        line_species = [["peony", "lily", "rose"], ["tulip", "forgetmenot", "rose"]]
        assigned = assign_species_to_points(
            points, mask, flatten_line_species(line_species), line_species
        )

        for point in assigned:
            assert point.species in line_species[point.line_index]

    def test_sunflower_filtered(self, message):
        """Test sunflower is never used while alternatives exist."""
        mask, points = message
        line_species = [["sunflower", "rose"], ["sunflower"]]
        assigned = assign_species_to_points(
            points, mask, ["sunflower", "rose", "lily"], line_species
        )

        assert all(point.species != "sunflower" for point in assigned)
        # Line 1 filters to nothing and falls back to the enabled pool
        assert {p.species for p in assigned if p.line_index == 1} <= {"rose", "lily"}

    def test_sunflower_only_pool(self, message):
        """Test sunflower is used when it is the only species."""
        mask, points = message
        assigned = assign_species_to_points(points, mask, ["sunflower"], [["sunflower"]])
        assert {point.species for point in assigned} == {"sunflower"}

    def test_empty_pool_uses_defaults(self, message):
        """Test an empty enabled pool falls back to the default species."""
        mask, points = message
        assigned = assign_species_to_points(points, mask, [], [])

        species = {point.species for point in assigned}
        assert species <= set(DEFAULT_SPECIES) - {"sunflower"}
        assert len(species) >= 3

    def test_unknown_line_species_filtered(self, message):
        """Test line species outside the enabled pool are ignored."""
        mask, points = message
        assigned = assign_species_to_points(
            points, mask, ["rose", "lily"], [["orchid", "rose"], ["orchid"]]
        )

        assert {p.species for p in assigned if p.line_index == 0} == {"rose"}
        assert {p.species for p in assigned if p.line_index == 1} <= {"rose", "lily"}

    def test_small_pool_repeats(self, message):
        """Test pools smaller than three simply alternate."""
        mask, points = message
        assigned = assign_species_to_points(points, mask, ["rose", "lily"], [])

        for species in _points_by_letter(assigned).values():
            for i in range(len(species) - 1):
                assert species[i] != species[i + 1]

    def test_deterministic(self, message):
        """Test repeated assignment is identical."""
        mask, points = message
        args = (points, mask, ["rose", "lily", "tulip"], [["rose", "lily", "tulip"]])
        assert assign_species_to_points(*args) == assign_species_to_points(*args)

    def test_no_points(self):
        """Test assigning to nothing returns nothing."""
        assert assign_species_to_points([], build_text_mask(["A"]), [], []) == []
