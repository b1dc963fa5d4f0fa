"""
Bitmap font rasterization for hidden garden messages.

Text lines are stamped through a small fixed-height pixel font into a
boolean occupancy grid. A parallel grid records which logical letter owns
each lit cell so later stages can colour letters independently.
"""

import numpy as np
from typing import List, Mapping, Optional, Sequence
from dataclasses import dataclass, field
import structlog

logger = structlog.get_logger()

NO_LETTER = -1

# Glyphs are 6 columns x 7 rows; every glyph must share the same size.
PIXEL_FONT: Mapping[str, Sequence[str]] = {
    " ": ("000000", "000000", "000000", "000000", "000000", "000000", "000000"),
    "A": ("001100", "010010", "100001", "111111", "100001", "100001", "100001"),
    "B": ("111110", "100001", "111110", "100001", "100001", "100001", "111110"),
    "C": ("001111", "010000", "100000", "100000", "100000", "010000", "001111"),
    "E": ("111111", "100000", "111110", "100000", "100000", "100000", "111111"),
    "F": ("111111", "100000", "111110", "100000", "100000", "100000", "100000"),
    "H": ("100001", "100001", "111111", "100001", "100001", "100001", "100001"),
    "L": ("100000", "100000", "100000", "100000", "100000", "100000", "111111"),
    "O": ("011110", "100001", "100001", "100001", "100001", "100001", "011110"),
    "R": ("111110", "100001", "111110", "101000", "100100", "100010", "100001"),
    "U": ("100001", "100001", "100001", "100001", "100001", "100001", "011110"),
    "V": ("100001", "100001", "100001", "100001", "010010", "010010", "001100"),
    "Y": ("100001", "010010", "001100", "001100", "001100", "001100", "001100"),
    "♥": ("010010", "111111", "111111", "111111", "011110", "001100", "000000"),
}


@dataclass
class TextMaskOptions:
    """Spacing and magnification for mask rasterization."""

    char_spacing: int = 2
    line_spacing: int = 2
    pixel_scale_x: int = 1
    pixel_scale_y: int = 1


@dataclass(frozen=True)
class LetterMeta:
    """Where a rendered letter came from."""

    line_index: int
    letter_index: int  # position within its line, spaces included
    char: str


@dataclass
class TextMaskResult:
    """Rasterized text: occupancy grid plus letter ownership."""

    mask: np.ndarray        # bool, rows x cols
    letter_map: np.ndarray  # int32, global letter index or NO_LETTER
    letters: List[str] = field(default_factory=list)
    letter_meta: List[LetterMeta] = field(default_factory=list)

    @property
    def rows(self) -> int:
        return int(self.mask.shape[0])

    @property
    def cols(self) -> int:
        return int(self.mask.shape[1]) if self.mask.ndim == 2 else 0

    def meta_for(self, letter_index: int) -> Optional[LetterMeta]:
        """Metadata for a global letter index, or None when out of range."""
        if 0 <= letter_index < len(self.letter_meta):
            return self.letter_meta[letter_index]
        return None


def glyph_size(font: Mapping[str, Sequence[str]]) -> tuple:
    """
    Return (width, height) of the glyphs in a font.

    Measured from the first non-space glyph, falling back to the space glyph.
    """
    sample_key = next((key for key in font if key.strip()), " ")
    sample = font.get(sample_key) or font.get(" ") or ()
    width = len(sample[0]) if sample else 0
    return width, len(sample)


def build_text_mask(
    lines: Sequence[str],
    options: Optional[TextMaskOptions] = None,
    font: Mapping[str, Sequence[str]] = PIXEL_FONT,
) -> TextMaskResult:
    """
    Rasterize text lines into a boolean mask.

    Lines are upper-cased and centered horizontally within the widest line.
    Spaces advance the cursor without consuming a letter index; characters
    missing from the font are drawn as blanks but still count as letters.

    Args:
        lines: Text lines, top to bottom
        options: Spacing and pixel scale; defaults to TextMaskOptions()
        font: Glyph table mapping characters to rows of '0'/'1' strings

    Returns:
        TextMaskResult with mask, letter map and letter metadata
    """
    options = options or TextMaskOptions()
    char_spacing = options.char_spacing
    line_spacing = options.line_spacing
    scale_x = max(1, int(options.pixel_scale_x))
    scale_y = max(1, int(options.pixel_scale_y))

    if not lines:
        return TextMaskResult(
            mask=np.zeros((0, 0), dtype=bool),
            letter_map=np.full((0, 0), NO_LETTER, dtype=np.int32),
        )

    base_width, base_height = glyph_size(font)
    scaled_width = base_width * scale_x
    scaled_height = base_height * scale_y
    blank = font.get(" ", ())

    normalized = [line.upper() for line in lines]
    max_line_length = max(max(len(line), 1) for line in normalized)
    cols = max(max_line_length * (scaled_width + char_spacing) - char_spacing, 0)
    rows = max(
        len(normalized) * scaled_height + max(len(normalized) - 1, 0) * line_spacing,
        0,
    )

    mask = np.zeros((rows, cols), dtype=bool)
    letter_map = np.full((rows, cols), NO_LETTER, dtype=np.int32)
    letters: List[str] = []
    letter_meta: List[LetterMeta] = []
    letter_counter = 0

    for line_index, line in enumerate(normalized):
        start_row = line_index * (scaled_height + line_spacing)
        line_width = max(len(line), 1) * (scaled_width + char_spacing) - char_spacing
        col_cursor = (cols - line_width) // 2

        for char_position, ch in enumerate(line):
            glyph = font.get(ch, blank)
            if ch == " ":
                current_index = NO_LETTER
            else:
                current_index = letter_counter
                letter_counter += 1
                letters.append(ch)
                letter_meta.append(LetterMeta(line_index, char_position, ch))

            for r in range(base_height):
                glyph_row = glyph[r] if r < len(glyph) else ""
                for c in range(min(base_width, len(glyph_row))):
                    if glyph_row[c] != "1":
                        continue
                    row0 = start_row + r * scale_y
                    col0 = col_cursor + c * scale_x
                    # Stamp the scaled pixel, clipped to the canvas
                    row_slice = slice(max(row0, 0), min(row0 + scale_y, rows))
                    col_slice = slice(max(col0, 0), min(col0 + scale_x, cols))
                    mask[row_slice, col_slice] = True
                    letter_map[row_slice, col_slice] = current_index

            col_cursor += scaled_width + char_spacing

    logger.debug(
        "Built text mask",
        lines=len(normalized),
        rows=rows,
        cols=cols,
        letters=len(letters),
        lit_cells=int(mask.sum()),
    )

    return TextMaskResult(
        mask=mask, letter_map=letter_map, letters=letters, letter_meta=letter_meta
    )


def render_mask_ascii(result: TextMaskResult, on: str = "#", off: str = ".") -> str:
    """Render a mask as text, one line per row."""
    return "\n".join(
        "".join(on if cell else off for cell in row) for row in result.mask
    )
