"""
Discover, decode and normalize source emoji images.

Only regular files ending in a literal lower-case ".png" are considered
(non-recursive). Each image is scaled to fit a glyph_size x glyph_size box
with a triangle filter, keeping its aspect ratio, and placed at the top-left
of a transparent square canvas so every glyph has the same dimensions.
"""

import os
import logging
from typing import Iterator, List, Optional, Tuple

from PIL import Image

from .config import GLYPH_SIZE
from .errors import DecodeError
from .pipeline import Diagnostic

logger = logging.getLogger(__name__)

PNG_SUFFIX = ".png"


def discover_images(emoji_dir: str, sort: bool = True) -> List[str]:
    """
    List candidate PNG files directly inside emoji_dir.

    Args:
        emoji_dir: Directory to scan
        sort: Order by filename; otherwise keep the OS listing order

    Returns:
        Paths of the candidate files
    """
    with os.scandir(emoji_dir) as entries:
        paths = [
            entry.path for entry in entries
            if entry.is_file() and os.path.splitext(entry.name)[1] == PNG_SUFFIX
        ]

    if sort:
        paths.sort(key=os.path.basename)
    return paths


def decode_filename(filename: str) -> str:
    """Re-decode a filename as UTF-8, replacing undecodable bytes with U+FFFD."""
    return os.fsencode(filename).decode('utf-8', 'replace')


def normalize_name(filename: str) -> str:
    """Lower-case a filename and strip every trailing ".png"."""
    name = decode_filename(filename).lower()
    while name.endswith(PNG_SUFFIX):
        name = name[:-len(PNG_SUFFIX)]
    return name


def fit_size(width: int, height: int, box: int) -> Tuple[int, int]:
    """Largest (w, h) with the same aspect ratio that fits in a box x box square."""
    ratio = min(box / width, box / height)
    return max(1, round(width * ratio)), max(1, round(height * ratio))


def load_glyph(path: str, glyph_size: int = GLYPH_SIZE) -> Image.Image:
    """
    Decode an image and normalize it to a glyph_size square RGBA glyph.

    Raises:
        DecodeError if Pillow cannot read the file
    """
    try:
        with Image.open(path) as img:
            img = img.convert('RGBA')
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(path, e) from e

    size = fit_size(img.width, img.height, glyph_size)
    if img.size != size:
        img = img.resize(size, Image.Resampling.BILINEAR)

    glyph = Image.new('RGBA', (glyph_size, glyph_size), (0, 0, 0, 0))
    glyph.paste(img, (0, 0))
    return glyph


def iter_glyphs(
    emoji_dir: str,
    glyph_size: int = GLYPH_SIZE,
    diagnostics: Optional[List[Diagnostic]] = None,
    sort: bool = True,
) -> Iterator[Tuple[str, Image.Image, str]]:
    """
    Yield (name, glyph, path) for every decodable PNG in emoji_dir.

    Files that fail to decode are logged, appended to diagnostics and skipped.
    """
    for path in discover_images(emoji_dir, sort=sort):
        name = normalize_name(os.path.basename(path))

        try:
            glyph = load_glyph(path, glyph_size)
        except DecodeError as e:
            logger.warning(f"failed to read \"{path}\" (skipping it): {e.reason}")
            if diagnostics is not None:
                diagnostics.append(Diagnostic(name=name, path=path, error=e))
            continue

        logger.debug(f"resized \"{name}\"")
        yield name, glyph, path
