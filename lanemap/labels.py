"""
Feature label fitting

Shrinks a label until it fits inside its glyph, blanking it when the font
would become unreadably small, and resolves strand-relative alignment.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging

from .config import LabelConfig
from .measure import Font, TextMeasurer
from .types import Strand, TextAlign

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FittedLabel:
    """
    Label geometry relative to the glyph's left edge

    Attributes:
        text: Text to draw ('' when blanked)
        font: Font after shrinking
        align: Absolute alignment ('left', 'center' or 'right')
        anchor_x: Horizontal anchor from the glyph's left edge (px)
    """
    text: str
    font: Font
    align: str
    anchor_x: float

    @property
    def is_blank(self) -> bool:
        return self.text == ''


def resolve_alignment(align: TextAlign, strand: Strand) -> str:
    """Turn 'start'/'end' into 'left'/'right' for the given strand"""
    if align == 'start':
        return 'left' if strand == '+' else 'right'
    if align == 'end':
        return 'right' if strand == '+' else 'left'
    return align


def fit_label(
    text: str,
    pixel_length: float,
    font: Font,
    align: TextAlign,
    strand: Strand,
    measure: TextMeasurer,
    config: Optional[LabelConfig] = None
) -> FittedLabel:
    """
    Fit a label inside a glyph

    The font shrinks one pixel at a time while the free space left by the
    text is below `min_clearance`. Once the size reaches `min_font_size`
    the label is blanked.

    Args:
        text: Label text
        pixel_length: Glyph length (px)
        font: Requested font
        align: 'left', 'center', 'right', 'start' or 'end'
        strand: Feature strand (for start/end)
        measure: Text width capability of the rendering surface
        config: Padding and size limits

    Returns:
        FittedLabel
    """
    config = config or LabelConfig()
    align = resolve_alignment(align, strand)

    if align == 'left':
        anchor_x = config.padding
    elif align == 'right':
        anchor_x = pixel_length - config.padding
    else:
        align = 'center'
        anchor_x = pixel_length / 2

    if not text:
        return FittedLabel('', font, align, anchor_x)

    size = font.size
    width = measure(text, font)
    while pixel_length - width < config.min_clearance:
        size -= 1
        if size <= config.min_font_size:
            logger.debug(f"Label '{text}' does not fit in {pixel_length:.1f}px, blanked")
            return FittedLabel('', font.with_size(size), align, anchor_x)
        width = measure(text, font.with_size(size))

    return FittedLabel(text, font.with_size(size), align, anchor_x)
