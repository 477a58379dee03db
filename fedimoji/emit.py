"""
Write the pack artifacts: atlas PNG, font-provider JSON and name mapping.

Codepoints are serialized as one-character strings, which is also what the
mapping importer reads back. All three payloads are encoded in memory before
anything touches the output directory.
"""

import io
import os
import json
import logging
from dataclasses import dataclass
from typing import Dict, List

from PIL import Image

from .config import (
    ATLAS_FILENAME,
    MAPPING_FILENAME,
    PROVIDER_FILENAME,
    PackConfig,
)
from .errors import ArtifactWriteError
from .pipeline import PackLayout

logger = logging.getLogger(__name__)


@dataclass
class ArtifactPaths:
    """Where the artifacts were written"""
    atlas: str
    provider: str
    mapping: str


def build_font_provider(chars: List[int], config: PackConfig) -> dict:
    """Bitmap font-provider definition; chars are listed in atlas order."""
    return {
        "providers": [
            {
                "type": "bitmap",
                "file": config.provider.file,
                "height": config.provider.height,
                "ascent": config.provider.ascent,
                "chars": [chr(cp) for cp in chars],
            }
        ]
    }


def build_name_mapping(names: Dict[str, int]) -> dict:
    return {name: chr(cp) for name, cp in names.items()}


def _dump_json(data) -> bytes:
    return json.dumps(data, indent=2, ensure_ascii=False).encode('utf-8')


def _encode_png(atlas: Image.Image) -> bytes:
    buf = io.BytesIO()
    atlas.save(buf, format='PNG')
    return buf.getvalue()


def write_artifacts(output_dir: str, atlas: Image.Image, layout: PackLayout,
                    config: PackConfig) -> ArtifactPaths:
    """
    Write emoji.png, emoji.json and fedimoji.json into output_dir.

    The directory (and any missing parents) is created first.

    Raises:
        ArtifactWriteError on any filesystem failure
    """
    paths = ArtifactPaths(
        atlas=os.path.join(output_dir, ATLAS_FILENAME),
        provider=os.path.join(output_dir, PROVIDER_FILENAME),
        mapping=os.path.join(output_dir, MAPPING_FILENAME),
    )

    payloads = [
        (paths.atlas, _encode_png(atlas), "atlas"),
        (paths.provider, _dump_json(build_font_provider(layout.chars, config)),
         "font provider definition"),
        (paths.mapping, _dump_json(build_name_mapping(layout.names)),
         "name->codepoint mapping"),
    ]

    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as e:
        raise ArtifactWriteError(f"failed to create output directory {output_dir}: {e}") from e

    for path, data, what in payloads:
        try:
            with open(path, 'wb') as f:
                f.write(data)
        except OSError as e:
            raise ArtifactWriteError(f"failed to write {what} to {path}: {e}") from e
        logger.debug(f"wrote {what} to `{path}`")

    return paths
