#!/usr/bin/env python3
"""
Fedimoji Pack Generator

Turns a directory of PNG emoji into a bitmap font pack:
  1. emoji.png     - all glyphs stacked vertically (64px wide)
  2. emoji.json    - bitmap font-provider definition, chars in atlas order
  3. fedimoji.json - name -> codepoint mapping (import it next time)

Architecture:
  Stage 1: load_mapping() - Import existing name -> codepoint mapping
  Stage 2: iter_glyphs() + assign_codepoints() - Load images, allocate codepoints
  Stage 3: compose_atlas() + validate_layout() - Build and check the atlas
  Stage 4: write_artifacts() - Write the three output files

Usage:
  python3 -m fedimoji [--emoji-dir PATH] [--output-dir PATH] [-i fedimoji.json]
  python3 -m fedimoji --config fedimoji.yaml
  python3 -m fedimoji --dry-run    (everything except writing files)
  python3 -m fedimoji -v           (debug logging)
"""

import os
import sys
import logging
import argparse
from dataclasses import dataclass
from typing import Optional

from PIL import Image

from .allocator import CodepointAllocator
from .atlas import compose_atlas, validate_layout
from .config import PackConfig, load_config, validate_config
from .emit import ArtifactPaths, write_artifacts
from .errors import ConfigError, FedimojiError
from .loader import iter_glyphs
from .mapping import load_mapping
from .pipeline import PackLayout, assign_codepoints

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of a generator run"""
    layout: PackLayout
    atlas: Image.Image
    artifacts: Optional[ArtifactPaths] = None


def run(config: PackConfig, dry_run: bool = False) -> RunResult:
    """
    Generate the pack described by config.

    Raises:
        ConfigError if the emoji directory or the import file is missing
        ParseError if the import file is malformed
        NoValidInputError if no emoji could be loaded and assigned
        ArtifactWriteError if writing the output fails
    """
    validate_config(config)

    if not os.path.isdir(config.emoji_dir):
        raise ConfigError(f"emoji directory {config.emoji_dir} does not exist")

    logger.info("[STAGE 1] Importing existing mappings")
    if config.import_path is None:
        logger.info("  no mapping file given, all emoji get new codepoints")
    imported = load_mapping(config.import_path)

    allocator = CodepointAllocator(
        reserved=imported.values(),
        start=config.pua_start,
        end=config.pua_end,
    )
    logger.info(f"  ✓ {allocator.remaining} codepoints available for new emoji")

    logger.info(f"[STAGE 2] Loading emoji from {config.emoji_dir}")
    diagnostics = []
    entries = iter_glyphs(
        config.emoji_dir,
        glyph_size=config.glyph_size,
        diagnostics=diagnostics,
        sort=config.sort_inputs,
    )
    layout = assign_codepoints(entries, imported, allocator, diagnostics)
    reused = sum(1 for glyph in layout.glyphs if glyph.name in imported)
    logger.info(f"  ✓ {len(layout.glyphs)} emoji accepted "
                f"({reused} existing, {len(layout.glyphs) - reused} new)")

    logger.info("[STAGE 3] Composing atlas")
    atlas = compose_atlas(layout.glyphs, config.glyph_size)
    validate_layout(atlas, layout, config.glyph_size)
    logger.info(f"  ✓ {atlas.width}x{atlas.height} atlas")

    result = RunResult(layout=layout, atlas=atlas)

    if dry_run:
        logger.info("dry run, not writing any files")
    else:
        logger.info(f"[STAGE 4] Writing pack to {config.output_dir}")
        result.artifacts = write_artifacts(config.output_dir, atlas, layout, config)

    if layout.diagnostics:
        logger.warning(f"skipped {len(layout.diagnostics)} file(s)")

    logger.info(f"done! generated pack with {len(layout.glyphs)} glyphs")
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fedimoji",
        description="Generate a bitmap emoji font pack from a directory of PNG files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--emoji-dir",
        help="Directory containing emoji images (default: ./emoji)"
    )
    parser.add_argument(
        "--output-dir",
        help="Output directory (default: ./out)"
    )
    parser.add_argument(
        "-i", "--import",
        dest="import_path",
        help="Existing fedimoji.json file, from which existing emoji codepoints will be imported"
    )
    parser.add_argument(
        "-c", "--config",
        help="YAML configuration file"
    )
    parser.add_argument(
        "--no-sort",
        action="store_true",
        help="Keep directory listing order instead of sorting by filename"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run the whole pipeline but do not write any files"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(levelname)s: %(message)s'
    )


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args.config) if args.config else PackConfig()
        config = config.with_overrides(
            emoji_dir=args.emoji_dir,
            output_dir=args.output_dir,
            import_path=args.import_path,
            sort_inputs=False if args.no_sort else None,
        )
        run(config, dry_run=args.dry_run)
    except FedimojiError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
