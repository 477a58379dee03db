"""
fedimoji - build a bitmap emoji font pack from a directory of PNG files.
"""

from .allocator import CodepointAllocator
from .atlas import compose_atlas, validate_layout
from .config import PackConfig, ProviderConfig, load_config
from .emit import build_font_provider, write_artifacts
from .errors import (
    ArtifactWriteError,
    ConfigError,
    DecodeError,
    ExhaustedError,
    FedimojiError,
    LayoutError,
    NoValidInputError,
    ParseError,
)
from .generate import run
from .loader import discover_images, iter_glyphs, load_glyph, normalize_name
from .mapping import load_mapping
from .pipeline import Diagnostic, Glyph, PackLayout, assign_codepoints

__version__ = "0.1.0"
