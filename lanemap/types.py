"""
Type definitions for lanemap

Common types used throughout the package for type checking and documentation.
"""

from __future__ import annotations
from typing import TypedDict, Literal, List, Dict, Any

# Type aliases
Strand = Literal['+', '-']
"""Strand of a feature"""

DrawStyle = Literal['expand', 'collapse', 'line']
"""How a track is rendered: one row per lane, one merged row, or a coverage curve"""

SliceMode = Literal['inclusive', 'exclusive', 'strict']
"""Inclusion policy for region slicing"""

TickKind = Literal['major', 'half', 'minor']
"""Scale gridline kind; 'half' is the minor tick halfway between two majors"""

TextAlign = Literal['left', 'center', 'right', 'start', 'end']
"""Label alignment; 'start'/'end' are relative to the feature strand"""

DRAW_STYLES = ('expand', 'collapse', 'line')
SLICE_MODES = ('inclusive', 'exclusive', 'strict')
STRANDS = ('+', '-')


# Structured data types

class FeatureDescriptor(TypedDict, total=False):
    """
    Plain-data description of a feature as supplied by an external collaborator

    position, length, strand and type are required in practice; the rest are
    optional. Children positions are relative to the parent.
    """
    position: int
    length: int
    strand: Strand
    type: str
    kind: str  # 'rect', 'arrow', 'block_arrow', 'line', 'spliced'
    name: str
    children: List['FeatureDescriptor']
    styleOverrides: Dict[str, Any]
