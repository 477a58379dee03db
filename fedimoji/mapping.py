"""
Import a previously emitted fedimoji.json name -> codepoint mapping.

Codepoints are stored as one-character JSON strings, the same form the
emitter writes. Plain integers are accepted too so hand-written mappings
work.
"""

import os
import json
import logging
from typing import Dict, Optional

from .config import MAX_CODEPOINT
from .errors import ConfigError, ParseError

logger = logging.getLogger(__name__)


def parse_codepoint(value) -> int:
    """
    Convert a mapping value to a Unicode scalar value.

    Raises:
        ParseError for anything that is not a single non-surrogate character
    """
    if isinstance(value, str):
        if len(value) != 1:
            raise ParseError(f"expected a single character, got {value!r}")
        codepoint = ord(value)
    elif isinstance(value, int) and not isinstance(value, bool):
        codepoint = value
    else:
        raise ParseError(f"expected a character or integer codepoint, got {value!r}")

    if not 0 <= codepoint <= MAX_CODEPOINT or 0xD800 <= codepoint <= 0xDFFF:
        raise ParseError(f"{codepoint:#x} is not a Unicode scalar value")

    return codepoint


def load_mapping(path: Optional[str]) -> Dict[str, int]:
    """
    Load an existing name -> codepoint mapping.

    Names are lower-cased so lookups are case-insensitive; empty names are
    dropped. A path of None yields an empty mapping.

    Raises:
        ConfigError if path is given but the file does not exist or cannot be read
        ParseError if the file is not a JSON object of name -> codepoint
    """
    if path is None:
        return {}

    if not os.path.isfile(path):
        raise ConfigError(f"imported mapping file {path} does not exist")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"imported mapping file {path} is not valid JSON: {e}") from e
    except OSError as e:
        raise ConfigError(f"imported mapping file {path} could not be read: {e}") from e

    if not isinstance(raw, dict):
        raise ParseError(f"imported mapping file {path} must contain a JSON object")

    mapping = {}
    for name, value in raw.items():
        try:
            codepoint = parse_codepoint(value)
        except ParseError as e:
            raise ParseError(f"bad codepoint for \"{name}\" in {path}: {e}") from e
        if name:
            mapping[name.lower()] = codepoint

    logger.info(f"imported {len(mapping)} existing mappings")
    return mapping
