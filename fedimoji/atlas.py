"""
Compose accepted glyphs into a single vertical atlas.

Glyph i occupies rows [i * glyph_size, (i + 1) * glyph_size) at column 0.
"""

import logging
from typing import List

from PIL import Image

from .config import GLYPH_SIZE, MAX_CODEPOINT
from .errors import LayoutError
from .pipeline import Glyph, PackLayout

logger = logging.getLogger(__name__)


def compose_atlas(glyphs: List[Glyph], glyph_size: int = GLYPH_SIZE) -> Image.Image:
    """
    Stack glyphs top to bottom on a transparent canvas.

    Raises:
        LayoutError if a glyph is not glyph_size x glyph_size
    """
    height = glyph_size * len(glyphs)
    atlas = Image.new('RGBA', (glyph_size, height), (0, 0, 0, 0))
    logger.debug(f"allocated {glyph_size}x{height} pixel atlas")

    for index, glyph in enumerate(glyphs):
        if glyph.image.size != (glyph_size, glyph_size):
            raise LayoutError(
                f"glyph \"{glyph.name}\" is {glyph.image.width}x{glyph.image.height}, "
                f"expected {glyph_size}x{glyph_size}"
            )
        y = index * glyph_size
        atlas.paste(glyph.image, (0, y))
        logger.debug(f"copied `{glyph.name}` to (0, {y})")

    return atlas


def validate_layout(atlas: Image.Image, layout: PackLayout, glyph_size: int = GLYPH_SIZE):
    """
    Pre-flight checks before writing anything.

    Assertions:
        1. Atlas is exactly one glyph wide
        2. Atlas height is glyph_size times the glyph count
        3. Every glyph carries a Unicode scalar value
    """
    count = len(layout.glyphs)

    if atlas.width != glyph_size:
        raise LayoutError(f"atlas width {atlas.width} != glyph size {glyph_size}")

    if atlas.height != glyph_size * count:
        raise LayoutError(
            f"atlas height {atlas.height} != {glyph_size} x {count} glyphs"
        )

    for glyph in layout.glyphs:
        cp = glyph.codepoint
        if cp is None or not 0 <= cp <= MAX_CODEPOINT or 0xD800 <= cp <= 0xDFFF:
            raise LayoutError(f"glyph \"{glyph.name}\" has invalid codepoint {cp!r}")

    logger.debug(f"  ✓ atlas holds {count} glyphs with valid codepoints")
