"""
Pack configuration.

Defaults live in PackConfig. An optional YAML file (same approach as the
font tooling's atoms.yaml) can override any of them, and command-line flags
override the file.

Example fedimoji.yaml:

    emoji_dir: ./emoji
    output_dir: ./out
    import: ./out/fedimoji.json
    sort_inputs: true
    glyph_size: 64
    pua:
      start: 0xF0000
      end: 0xFFFFD
    provider:
      file: "fedimoji:font/emoji.png"
      height: 8
      ascent: 8
"""

import os
import logging
from dataclasses import dataclass, field, replace
from typing import Optional

import yaml

from .errors import ConfigError, ParseError

logger = logging.getLogger(__name__)

GLYPH_SIZE = 64
PUA_START = 0xF0000
PUA_END = 0xFFFFD
MAX_CODEPOINT = 0x10FFFF

ATLAS_FILENAME = "emoji.png"
PROVIDER_FILENAME = "emoji.json"
MAPPING_FILENAME = "fedimoji.json"


@dataclass
class ProviderConfig:
    """Bitmap font-provider parameters"""
    file: str = "fedimoji:font/emoji.png"
    height: int = 8
    ascent: int = 8


@dataclass
class PackConfig:
    """Complete generator configuration"""
    emoji_dir: str = "./emoji"
    output_dir: str = "./out"
    import_path: Optional[str] = None
    sort_inputs: bool = True
    glyph_size: int = GLYPH_SIZE
    pua_start: int = PUA_START
    pua_end: int = PUA_END
    provider: ProviderConfig = field(default_factory=ProviderConfig)

    def with_overrides(self, **overrides) -> "PackConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _int_option(section: dict, key: str, default: int, where: str) -> int:
    value = section.get(key, default)
    # bool is an int subclass; `glyph_size: yes` is not a size
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(f"{where}{key} must be an integer, got {value!r}")
    return value


def _str_option(section: dict, key: str, default, where: str):
    value = section.get(key, default)
    if value is not None and not isinstance(value, str):
        raise ParseError(f"{where}{key} must be a string, got {value!r}")
    return value


def _section(config: dict, key: str) -> dict:
    section = config.get(key) or {}
    if not isinstance(section, dict):
        raise ParseError(f"'{key}' must be a mapping, got {type(section).__name__}")
    return section


def validate_config(config: PackConfig) -> PackConfig:
    """
    Check value ranges.

    Raises:
        ParseError if glyph size or PUA range are unusable
    """
    if config.glyph_size < 1:
        raise ParseError(f"glyph_size must be positive, got {config.glyph_size}")

    if not (0 <= config.pua_start <= config.pua_end <= MAX_CODEPOINT):
        raise ParseError(
            f"invalid codepoint range {config.pua_start:#x}-{config.pua_end:#x} "
            f"(must satisfy 0 <= start <= end <= {MAX_CODEPOINT:#x})"
        )

    return config


def load_config(yaml_path: str) -> PackConfig:
    """
    Parse a YAML config file into a PackConfig.

    Returns:
        PackConfig with file values applied over the defaults

    Raises:
        ConfigError if the file does not exist or cannot be read
        ParseError if the YAML is malformed or a value has the wrong type
    """
    logger.info(f"Loading configuration from {yaml_path}")

    if not os.path.isfile(yaml_path):
        raise ConfigError(f"config file {yaml_path} does not exist")

    try:
        with open(yaml_path, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise ParseError(f"config file {yaml_path} is not valid YAML: {e}") from e
    except OSError as e:
        raise ConfigError(f"config file {yaml_path} could not be read: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ParseError(f"config file {yaml_path} must contain a mapping")

    defaults = PackConfig()
    pua = _section(raw, 'pua')
    provider = _section(raw, 'provider')

    sort_inputs = raw.get('sort_inputs', defaults.sort_inputs)
    if not isinstance(sort_inputs, bool):
        raise ParseError(f"sort_inputs must be true or false, got {sort_inputs!r}")

    config = PackConfig(
        emoji_dir=_str_option(raw, 'emoji_dir', defaults.emoji_dir, ''),
        output_dir=_str_option(raw, 'output_dir', defaults.output_dir, ''),
        import_path=_str_option(raw, 'import', None, ''),
        sort_inputs=sort_inputs,
        glyph_size=_int_option(raw, 'glyph_size', defaults.glyph_size, ''),
        pua_start=_int_option(pua, 'start', defaults.pua_start, 'pua.'),
        pua_end=_int_option(pua, 'end', defaults.pua_end, 'pua.'),
        provider=ProviderConfig(
            file=_str_option(provider, 'file', defaults.provider.file, 'provider.'),
            height=_int_option(provider, 'height', defaults.provider.height, 'provider.'),
            ascent=_int_option(provider, 'ascent', defaults.provider.ascent, 'provider.'),
        ),
    )

    logger.info(f"  ✓ glyph size {config.glyph_size}, "
                f"codepoints {config.pua_start:#x}-{config.pua_end:#x}")
    return validate_config(config)
