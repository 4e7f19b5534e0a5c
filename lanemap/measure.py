"""
Text measurement backends

The layout never measures text itself: a rendering backend supplies a
callable `measure(text, font) -> width in px`. Two backends are provided,
a deterministic monospace estimate and a matplotlib-based measurer.
"""

from __future__ import annotations
from functools import lru_cache
from typing import NamedTuple, Protocol
import logging
import re

from matplotlib.font_manager import FontProperties
from matplotlib.textpath import TextPath

logger = logging.getLogger(__name__)

_FONT_RE = re.compile(r'^\s*(\d+(?:\.\d+)?)px\s+(.+?)\s*$')


class Font(NamedTuple):
    """Font size (px) and family, rendered CSS-style as '15px arial'"""
    size: float
    family: str

    def __str__(self) -> str:
        size = int(self.size) if float(self.size).is_integer() else self.size
        return f"{size}px {self.family}"

    @classmethod
    def parse(cls, text: str) -> 'Font':
        """Parse a '<size>px <family>' string"""
        match = _FONT_RE.match(text)
        if not match:
            raise ValueError(f"Cannot parse font '{text}' (expected e.g. '15px arial')")
        return cls(float(match.group(1)), match.group(2))

    def with_size(self, size: float) -> 'Font':
        return self._replace(size=size)


class TextMeasurer(Protocol):
    """Capability supplied by the rendering surface"""

    def __call__(self, text: str, font: Font) -> float:
        ...


class MonospaceMeasurer:
    """
    Headless width estimate: every character is `char_ratio * font.size` wide

    Deterministic, so it is the default for tests and for layouts computed
    without a real rendering surface.
    """

    def __init__(self, char_ratio: float = 0.6) -> None:
        self.char_ratio = char_ratio

    def __call__(self, text: str, font: Font) -> float:
        return len(str(text)) * font.size * self.char_ratio


class MatplotlibMeasurer:
    """
    Measures text with matplotlib's font machinery

    Widths come from the extents of a TextPath, with the font size in
    points taken as pixels. Families that are not installed fall back to
    matplotlib's default sans-serif font.
    """

    def __init__(self, fallback_family: str = 'DejaVu Sans') -> None:
        self.fallback_family = fallback_family

    def __call__(self, text: str, font: Font) -> float:
        return _text_path_width(str(text), float(font.size), font.family, self.fallback_family)


@lru_cache(maxsize=4096)
def _text_path_width(text: str, size: float, family: str, fallback_family: str) -> float:
    if not text.strip():
        return 0.0
    prop = FontProperties(family=[family, fallback_family], size=size)
    extents = TextPath((0, 0), text, prop=prop).get_extents()
    width = float(extents.width)
    logger.debug(f"Measured '{text}' at {size}px {family}: {width:.2f}px")
    return width
