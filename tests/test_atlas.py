"""
Tests for atlas composition and layout validation

Run with: pytest tests/test_atlas.py -v
"""

import pytest
from PIL import Image

from fedimoji.atlas import compose_atlas, validate_layout
from fedimoji.errors import LayoutError
from fedimoji.pipeline import Glyph, PackLayout
from conftest import BLUE, GREEN, RED, solid_glyph


def make_layout(*colors):
    glyphs = [
        Glyph(name=f"g{i}", codepoint=0xF0000 + i, image=solid_glyph(color))
        for i, color in enumerate(colors)
    ]
    return PackLayout(glyphs=glyphs)


class TestComposeAtlas:
    """Tests for compose_atlas()"""

    def test_dimensions(self):
        """Atlas is one glyph wide and N glyphs tall"""
        layout = make_layout(RED, GREEN, BLUE)
        atlas = compose_atlas(layout.glyphs)
        assert atlas.size == (64, 192)
        assert atlas.mode == 'RGBA'

    def test_rows_hold_glyphs_in_order(self):
        """Row block [64i, 64(i+1)) holds exactly glyph i"""
        layout = make_layout(RED, GREEN, BLUE)
        atlas = compose_atlas(layout.glyphs)
        for i, glyph in enumerate(layout.glyphs):
            block = atlas.crop((0, i * 64, 64, (i + 1) * 64))
            assert block.tobytes() == glyph.image.tobytes()

    def test_transparent_pixels_preserved(self):
        """Transparent parts of a glyph stay transparent"""
        image = Image.new('RGBA', (64, 64), (0, 0, 0, 0))
        image.paste(Image.new('RGBA', (64, 32), RED), (0, 0))
        atlas = compose_atlas([Glyph(name="half", codepoint=0xF0000, image=image)])
        assert atlas.getpixel((0, 0)) == RED
        assert atlas.getpixel((0, 40)) == (0, 0, 0, 0)

    def test_custom_glyph_size(self):
        glyphs = [Glyph(name="tiny", codepoint=0xF0000, image=solid_glyph(RED, size=16))]
        assert compose_atlas(glyphs, glyph_size=16).size == (16, 16)

    def test_wrong_glyph_size_is_a_bug(self):
        glyphs = [Glyph(name="odd", codepoint=0xF0000, image=solid_glyph(RED, size=32))]
        with pytest.raises(LayoutError, match="odd"):
            compose_atlas(glyphs)


class TestValidateLayout:
    """Tests for validate_layout()"""

    def test_passes(self):
        layout = make_layout(RED, GREEN)
        atlas = compose_atlas(layout.glyphs)
        validate_layout(atlas, layout)

    def test_height_mismatch(self):
        layout = make_layout(RED, GREEN)
        atlas = compose_atlas(layout.glyphs[:1])
        with pytest.raises(LayoutError):
            validate_layout(atlas, layout)

    def test_width_mismatch(self):
        layout = make_layout(RED)
        with pytest.raises(LayoutError):
            validate_layout(Image.new('RGBA', (32, 64)), layout)

    @pytest.mark.parametrize("codepoint", [None, -1, 0xD800, 0x110000])
    def test_invalid_codepoint(self, codepoint):
        layout = make_layout(RED)
        layout.glyphs[0].codepoint = codepoint
        atlas = compose_atlas(layout.glyphs)
        with pytest.raises(LayoutError):
            validate_layout(atlas, layout)
