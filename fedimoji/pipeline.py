"""
Codepoint assignment for loaded glyphs.

Each (name, glyph) pair either keeps the codepoint it had in the imported
mapping or receives the next free one from the allocator. Per-item failures
are recorded as diagnostics instead of aborting the run.

Duplicate names are not merged: both glyphs go into the atlas, and the
name -> codepoint mapping keeps whichever one was assigned last.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from PIL import Image

from .allocator import CodepointAllocator
from .errors import ExhaustedError, FedimojiError, NoValidInputError

logger = logging.getLogger(__name__)


@dataclass
class Glyph:
    """An accepted emoji, ready for the atlas"""
    name: str
    codepoint: int
    image: Image.Image
    path: Optional[str] = None


@dataclass
class Diagnostic:
    """A source item that was skipped"""
    name: str
    path: str
    error: FedimojiError


@dataclass
class PackLayout:
    """Result of codepoint assignment"""
    glyphs: List[Glyph] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def chars(self) -> List[int]:
        """Codepoints in atlas order"""
        return [glyph.codepoint for glyph in self.glyphs]

    @property
    def names(self) -> Dict[str, int]:
        """Name -> codepoint mapping; later duplicates win"""
        names = {}
        for glyph in self.glyphs:
            names[glyph.name] = glyph.codepoint
        return names


def assign_codepoints(
    entries: Iterable[Tuple[str, Image.Image, str]],
    imported: Dict[str, int],
    allocator: CodepointAllocator,
    diagnostics: Optional[List[Diagnostic]] = None,
) -> PackLayout:
    """
    Assign a codepoint to every loaded glyph.

    Args:
        entries: (name, glyph, path) tuples in atlas order
        imported: Existing mapping; names found here keep their codepoint
        allocator: Source of fresh codepoints for new names
        diagnostics: Earlier per-item failures (e.g. from the loader) to carry over

    Returns:
        PackLayout with accepted glyphs in input order

    Raises:
        NoValidInputError if no glyph was accepted
    """
    layout = PackLayout(diagnostics=diagnostics if diagnostics is not None else [])

    for name, image, path in entries:
        if name in imported:
            codepoint = imported[name]
            logger.debug(f"using existing mapping for \"{name}\", U+{codepoint:04X}")
        else:
            try:
                codepoint = allocator.allocate()
            except ExhaustedError as e:
                logger.error(f"no remaining codepoints! skipping \"{name}\"")
                layout.diagnostics.append(Diagnostic(name=name, path=path, error=e))
                continue
            logger.debug(f"using new mapping for \"{name}\", U+{codepoint:04X}")

        layout.glyphs.append(Glyph(name=name, codepoint=codepoint, image=image, path=path))

    if not layout.glyphs:
        raise NoValidInputError("no valid emoji provided!")

    return layout
