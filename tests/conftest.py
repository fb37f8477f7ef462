from pathlib import Path
from typing import Callable, Optional, Tuple

import pytest
from PIL import Image


RED = (255, 0, 0)
BLUE = (0, 0, 255)


def solid_image(size: Tuple[int, int], color=RED) -> Image.Image:
    return Image.new('RGBA', size, (*color, 255))


@pytest.fixture
def make_image(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a solid color image to tmp_path and returning its path."""

    def _make(
        name: str,
        size: Tuple[int, int] = (100, 100),
        color=RED,
        format: Optional[str] = None,
    ) -> Path:
        path = tmp_path / name
        image = solid_image(size, color)
        if format == 'JPEG' or path.suffix.lower() in ('.jpg', '.jpeg'):
            image = image.convert('RGB')
        image.save(path, format=format)
        return path

    return _make


@pytest.fixture
def red_png(make_image) -> Path:
    return make_image('red.png', (100, 100), RED)


@pytest.fixture
def wide_png(make_image) -> Path:
    """100x50 blue image."""
    return make_image('wide.png', (100, 50), BLUE)
