"""
Pytest configuration for the fedimoji tests.

Provides fixtures that write small solid-colour PNG files into tmp_path.
"""

import os
import sys

import pytest
from PIL import Image


# Add the project root to Python path for imports
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)


def write_png(path, size=(64, 64), color=RED, mode='RGBA'):
    """Write a solid-colour image and return its path as a string"""
    if mode != 'RGBA':
        color = color[:3]
    Image.new(mode, size, color).save(str(path), format='PNG')
    return str(path)


def solid_glyph(color=RED, size=64):
    return Image.new('RGBA', (size, size), color)


@pytest.fixture
def emoji_dir(tmp_path):
    """Empty source directory"""
    path = tmp_path / "emoji"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path):
    """Output directory (not created yet)"""
    return tmp_path / "out"


@pytest.fixture
def make_png(emoji_dir):
    """Factory: make_png("smile.png", size=(100, 100), color=RED)"""
    def _make(filename, size=(64, 64), color=RED, mode='RGBA'):
        return write_png(emoji_dir / filename, size=size, color=color, mode=mode)
    return _make


@pytest.fixture
def write_mapping(tmp_path):
    """Factory writing a fedimoji.json-style mapping file"""
    def _write(text, filename="fedimoji.json"):
        path = tmp_path / filename
        path.write_text(text, encoding='utf-8')
        return str(path)
    return _write
